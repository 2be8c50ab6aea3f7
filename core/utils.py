# core/utils.py

from datetime import datetime, timezone
from typing import Any


def is_blank(value: Any) -> bool:
    """None, empty strings and whitespace-only strings are blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def blank_to_none(data: dict) -> dict:
    """
    Sanitize dictionary data:
    - Empty / whitespace strings → None
    - Other strings are stripped
    - Everything else kept as-is

    Unlike a numeric-coercing sanitizer this keeps phone numbers and
    pincodes as text.
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
        else:
            clean[k] = v

    return clean


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
