"""Defensive readers for the open Part.attributes mapping.

Missing, empty or malformed values come back as None (or an empty list) so
callers can treat them as "unknown" without raising.
"""
from typing import Any, List, Mapping, Optional

from schemas import Part


def _get(part: Optional[Part], key: str) -> Any:
    if part is None:
        return None
    attrs = part.attributes
    if not isinstance(attrs, Mapping):
        return None
    return attrs.get(key)


def attr_str(part: Optional[Part], key: str) -> Optional[str]:
    value = _get(part, key)
    if value is None or isinstance(value, (list, tuple, dict)):
        return None
    text = str(value).strip()
    return text if text else None


def attr_number(part: Optional[Part], key: str) -> Optional[float]:
    value = _get(part, key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def attr_list(part: Optional[Part], key: str) -> Optional[List[str]]:
    """Return a list attribute as strings.

    Comma separated strings are split, matching how spreadsheet rows store
    lists. Returns None when the key is absent.
    """
    value = _get(part, key)
    if value is None:
        return None
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if item is not None]
    return None
