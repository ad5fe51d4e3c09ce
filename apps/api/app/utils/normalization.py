"""Normalization helpers for search input."""

from typing import Optional


def normalize_search_text(value: Optional[str]) -> Optional[str]:
    """Trim and lowercase free-text search input; blank input becomes None."""
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


def escape_like_string(value: str, escape_char: str = "\\") -> str:
    """Escape LIKE wildcards so user input matches literally (use with escape="\\")."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )
