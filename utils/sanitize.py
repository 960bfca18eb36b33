"""
Module: sanitize.py
Description:
    Input clean-up helpers applied before user text reaches Supabase.
    They bound length, strip invisible characters and keep LIKE patterns literal.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

import re
from urllib.parse import urlparse

_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")

COMMENT_MAX_LENGTH = 5000
SEARCH_MAX_LENGTH = 200


def sanitize_input(value: str, max_length: int = 10000) -> str:
    """Trim, cap length, and drop NUL bytes and zero-width characters."""
    if not isinstance(value, str):
        return ""
    cleaned = value.strip()[:max_length]
    cleaned = cleaned.replace("\0", "")
    return _ZERO_WIDTH.sub("", cleaned)


def sanitize_comment(content: str) -> str:
    return sanitize_input(content, COMMENT_MAX_LENGTH)


def sanitize_search_query(query: str) -> str:
    return sanitize_input(query, SEARCH_MAX_LENGTH)


def is_valid_url(url: str) -> bool:
    parsed = urlparse(url or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards (PostgREST also reads `*` as one) so user text is matched literally."""
    return (
        value.replace("\\", "\\\\")
        .replace("%", r"\%")
        .replace("_", r"\_")
        .replace("*", r"\*")
    )
