"""
Field normalizers - repair the loosely formatted values models return.

Every function here is pure and idempotent on its own output, so
clean_data() can safely be applied to an already-cleaned analysis.
"""

import re
from typing import Optional

from appscout.models.app_schema import AppAnalysis

NOT_AVAILABLE = "N/A"

DEFAULT_REVIEW_SUMMARY = "No review summary could be generated."
DEFAULT_AUTHENTICITY = "Authenticity check could not be completed."
DEFAULT_BACKGROUND = "Developer background information unavailable."

# ============================================================================
# RATINGS
# ============================================================================

_DECIMAL_RATING = re.compile(r"(?<!\d)(?<!\d\.)([0-5]\.\d)")
_BARE_RATING = re.compile(r"^[0-5](\.\d)?$")
_INTEGER_RATING = re.compile(r"^[1-5]$")
_LOOSE_RATING = re.compile(r"(?<!\d)(?<!\d\.)([0-5])(?!\d)(?:\.(\d))?")


def _one_decimal(value: str) -> str:
    return f"{float(value):.1f}"


def normalize_rating(raw: Optional[str], fallback: Optional[str] = None) -> str:
    """
    Reduce a rating to 'd.d' in [0.0, 5.0] or 'N/A'.

    Precedence:
        1. A one-decimal value found anywhere in raw ("Rated 4.7 stars")
        2. The fallback, if it is itself a bare rating ("4" or "4.3")
        3. raw as a bare integer 1-5 ("3" -> "3.0")
        4. 'N/A'
    """
    raw = (raw or "").strip()

    for match in _DECIMAL_RATING.finditer(raw):
        if float(match.group(1)) <= 5.0:
            return match.group(1)

    if fallback and fallback != NOT_AVAILABLE and _BARE_RATING.match(fallback.strip()):
        if float(fallback) <= 5.0:
            return _one_decimal(fallback)

    if _INTEGER_RATING.match(raw):
        return raw + ".0"

    return NOT_AVAILABLE


def normalize_search_rating(raw: Optional[str]) -> str:
    """Lightweight rating cleanup for search results (no fallback available)."""
    match = _LOOSE_RATING.search(raw or "")
    if not match:
        return NOT_AVAILABLE

    value = match.group(0)
    if float(value) > 5.0:
        return NOT_AVAILABLE
    return _one_decimal(value)


# ============================================================================
# DOWNLOADS
# ============================================================================

_DOWNLOAD_NOISE = re.compile(r"downloads|over|approx|more than|installations|installs", re.IGNORECASE)
_MAGNITUDE_WORDS = (
    (re.compile(r"million", re.IGNORECASE), "M"),
    (re.compile(r"billion", re.IGNORECASE), "B"),
    (re.compile(r"thousand", re.IGNORECASE), "k"),
)
_DOWNLOAD_COUNT = re.compile(
    r"(\d{1,3}(,\d{3})+(\+)?)"      # 1,000,000+
    r"|(\d+(\.\d+)?\s*[MBK]\+?)"    # 10M+, 1.5 B
    r"|(\d+\+)"                     # 500+
    r"|(\d{3,}\+?)",                # 5000
    re.IGNORECASE,
)


def normalize_downloads(raw: Optional[str]) -> str:
    """Reduce a download count to a compact magnitude token such as '10M+' or 'N/A'."""
    if not raw or raw == NOT_AVAILABLE:
        return NOT_AVAILABLE

    value = _DOWNLOAD_NOISE.sub("", raw).strip()
    for pattern, letter in _MAGNITUDE_WORDS:
        value = pattern.sub(letter, value)

    match = _DOWNLOAD_COUNT.search(value)
    if match:
        return re.sub(r"\s", "", match.group(0).upper())
    return NOT_AVAILABLE


# ============================================================================
# DATES
# ============================================================================

_DATE = re.compile(
    r"([A-Za-z]{3,}\s\d{1,2},\s\d{4})"   # January 5, 2023
    r"|(\d{4}-\d{2}-\d{2})"              # 2023-01-05
    r"|(\d{1,2}\s[A-Za-z]{3,}\s\d{4})",  # 5 January 2023
)


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """Return the first recognizable date in raw, verbatim, or None."""
    if not raw:
        return None
    match = _DATE.search(raw)
    return match.group(0) if match else None


# ============================================================================
# WHOLE ANALYSIS
# ============================================================================

def fill_defaults(analysis: AppAnalysis) -> AppAnalysis:
    """Replace empty free-text fields with fixed fallback sentences."""
    return analysis.model_copy(update={
        "review_summary": analysis.review_summary or DEFAULT_REVIEW_SUMMARY,
        "authenticity": analysis.authenticity or DEFAULT_AUTHENTICITY,
        "background": analysis.background or DEFAULT_BACKGROUND,
    })


def clean_data(analysis: AppAnalysis, fallback_rating: Optional[str] = None) -> AppAnalysis:
    """Apply every field normalizer to a freshly extracted analysis."""
    filled = fill_defaults(analysis)
    return filled.model_copy(update={
        "rating": normalize_rating(analysis.rating, fallback_rating),
        "downloads": normalize_downloads(analysis.downloads),
        "last_updated": normalize_date(analysis.last_updated),
    })
