"""Text processing utilities - pull JSON out of free-form model output."""

import re
import json
import logging
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

_LABELED_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")

_CLOSERS = {"{": "}", "[": "]"}


def extract_fenced_block(text: str) -> str:
    """Return the interior of the first ```json fence, else of any fence, else the text."""
    match = _LABELED_FENCE.search(text) or _ANY_FENCE.search(text)
    if match and match.group(1):
        return match.group(1)
    return text


def find_json_span(text: str) -> Optional[Tuple[int, int]]:
    """
    Locate the outermost JSON value in text.

    Starts at whichever of '{' or '[' comes first and scans forward,
    tracking nesting depth and skipping over string literals, until the
    opening bracket is closed.

    Returns:
        (start, end) slice bounds, or None if no bracket is found or the
        value is never closed.
    """
    first_object = text.find("{")
    first_array = text.find("[")

    if first_object != -1 and (first_array == -1 or first_object < first_array):
        start = first_object
    elif first_array != -1:
        start = first_array
    else:
        return None

    stack = []
    in_string = False
    escaped = False

    for pos in range(start, len(text)):
        ch = text[pos]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack.pop() != ch:
                return None
            if not stack:
                return start, pos + 1

    return None


def extract_json(text: str, expected_type: Optional[type] = None) -> Any:
    """
    Best-effort extraction of the first JSON object or array in text.

    Handles markdown fences and prose before/after the value. Never raises:
    anything that cannot be parsed comes back as None.

    Args:
        text: Raw model output
        expected_type: If given (dict or list), values of any other type are rejected

    Returns:
        The parsed value, or None
    """
    if not isinstance(text, str) or not text.strip():
        return None

    working = extract_fenced_block(text.strip())

    span = find_json_span(working)
    if span is None:
        logger.warning(f"JSON extraction failed: no balanced object or array in {len(working)} chars")
        return None

    try:
        parsed = json.loads(working[span[0]:span[1]])
    except (ValueError, RecursionError) as e:
        logger.warning(f"JSON extraction failed: {e}")
        return None

    if expected_type is not None and not isinstance(parsed, expected_type):
        logger.warning(
            f"JSON extraction failed: expected {expected_type.__name__}, got {type(parsed).__name__}"
        )
        return None

    return parsed
