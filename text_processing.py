"""
Query Text Processing for Law and News Search.

Turns raw user input into a safe query string and a list of
normalized search terms for matching and highlighting.
"""

import re


# ─── Sanitization ────────────────────────────────────────────────────────────

# Maximum length of a sanitized query
MAX_QUERY_LENGTH = 200

# Characters stripped from queries: HTML brackets, braces, square brackets, quotes
_UNSAFE_CHARS = re.compile(r"""[<>{}\[\]'"]""")

_WHITESPACE = re.compile(r"\s+")


def sanitize_query(query, max_length: int = MAX_QUERY_LENGTH) -> str:
    """
    Remove unsafe characters from a query and bound its length.

    Non-string input (None, numbers, ...) yields an empty string.
    The result never starts or ends with whitespace, so
    sanitizing twice gives the same string as sanitizing once.

    Args:
        query: Raw query as typed by the user.
        max_length: Maximum number of characters to keep.

    Returns:
        Sanitized query string.
    """
    if not isinstance(query, str) or not query:
        return ""

    cleaned = _UNSAFE_CHARS.sub("", query).strip()
    return cleaned[:max_length].rstrip()


# ─── Tokenization ────────────────────────────────────────────────────────────

def extract_terms(query) -> list[str]:
    """
    Split a query into lowercase search terms.

    Terms are separated by runs of whitespace; empty tokens are dropped.
    Order is preserved and duplicates are kept.
    """
    if not isinstance(query, str):
        return []
    return [term for term in _WHITESPACE.split(query.lower().strip()) if term]
