"""Shared validators for Pydantic config models."""

from typing import Any


def normalize_string_list(value: Any) -> list[str]:
    """Normalize a string list to stripped, lowercased, non-empty entries.

    Handles None, single strings (comma separated), and lists.

    Args:
        value: Input value (None, str, or list[str])

    Returns:
        List of lowercased strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, list | tuple | set | frozenset):
        return [s.strip().lower() for s in value if isinstance(s, str) and s.strip()]
    return []


__all__ = ["normalize_string_list"]
