"""Tests for search input normalization helpers."""

from app.utils.normalization import escape_like_string, normalize_search_text


def test_normalize_search_text():
    assert normalize_search_text("  Oak School ") == "oak school"
    assert normalize_search_text("   ") is None
    assert normalize_search_text(None) is None


def test_escape_like_string():
    assert escape_like_string("100%") == "100\\%"
    assert escape_like_string("a_b") == "a\\_b"
    assert escape_like_string("back\\slash") == "back\\\\slash"
    assert escape_like_string("plain") == "plain"
