"""Pydantic models for app search, analysis and chat."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


def _as_text(value: Any) -> str:
    """Coerce a loosely typed JSON value into text ('' for null)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


# ============================================================================
# SEARCH
# ============================================================================

class SearchResult(BaseModel):
    """A real app found by the search service."""
    name: str
    developer: str = ""
    description: str = ""
    rating: str = "N/A"

    model_config = ConfigDict(frozen=True)

    @field_validator("name", "developer", "description", "rating", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


# ============================================================================
# ANALYSIS
# ============================================================================

class AppAnalysis(BaseModel):
    """Trust and quality analysis of a single app."""
    review_summary: str = Field(default="", alias="reviewSummary")
    authenticity: str = ""
    background: str = ""
    rating: str = "N/A"
    downloads: str = "N/A"
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    grounding_urls: List[str] = Field(default_factory=list, alias="groundingUrls")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("review_summary", "authenticity", "background", "rating", "downloads", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("last_updated", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        text = _as_text(value)
        return text or None

    @field_validator("grounding_urls")
    @classmethod
    def _dedupe_urls(cls, urls: List[str]) -> List[str]:
        return list(dict.fromkeys(u for u in urls if u))

    @classmethod
    def from_raw(cls, data: Dict[str, Any]) -> "AppAnalysis":
        """Build from an extracted JSON object, ignoring unknown keys."""
        known = {
            key: data[key]
            for key in ("reviewSummary", "review_summary", "authenticity", "background",
                        "rating", "downloads", "lastUpdated", "last_updated")
            if key in data
        }
        return cls.model_validate(known)


# ============================================================================
# CHAT
# ============================================================================

class ChatMessage(BaseModel):
    """One turn of a conversation about an app."""
    role: Literal["user", "model"]
    content: str

    model_config = ConfigDict(frozen=True)
