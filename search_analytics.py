"""
Search Analytics: Result and Highlight Statistics.

Summaries shown alongside search results: how many records matched,
and how many of the query terms were actually highlighted.
"""

from dataclasses import dataclass


# ─── Search Statistics ───────────────────────────────────────────────────────

@dataclass
class SearchStats:
    """Summary of a filtered result list."""

    total: int = 0
    matching: int = 0
    has_query: bool = False
    query: str = ""
    percentage: int = 0

    @property
    def is_filtered(self) -> bool:
        return self.matching != self.total

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "matching": self.matching,
            "has_query": self.has_query,
            "query": self.query,
            "percentage": self.percentage,
        }


def get_search_stats(original, filtered, query) -> SearchStats:
    """
    Compare a filtered list against the full list.

    Args:
        original: All records.
        filtered: Records left after filtering.
        query: The query used for filtering.

    Returns:
        SearchStats with counts and the rounded match percentage.
    """
    total = len(original) if isinstance(original, (list, tuple)) else 0
    matching = len(filtered) if isinstance(filtered, (list, tuple)) else 0
    query = query if isinstance(query, str) else ""

    return SearchStats(
        total=total,
        matching=matching,
        has_query=bool(query.strip()),
        query=query,
        # round half up, matching the percentages shown in the UI
        percentage=int(matching * 100 / total + 0.5) if total else 0,
    )


# ─── Highlight Statistics ────────────────────────────────────────────────────

@dataclass
class HighlightStats:
    """Summary of the highlighting applied to one text."""

    total_segments: int = 0
    highlighted_segments: int = 0
    unique_highlighted_terms: int = 0
    search_terms_found: int = 0
    has_highlights: bool = False


def get_highlight_stats(segments, search_terms) -> HighlightStats:
    """
    Count highlighted segments and which search terms they cover.

    A search term counts as found when some highlighted segment is
    tagged with it, compared case-insensitively.
    """
    segments = list(segments or [])
    highlighted = [s for s in segments if s.highlighted]
    tagged = {s.term.lower() for s in highlighted if s.term}

    if isinstance(search_terms, str):
        search_terms = [search_terms]
    found = sum(
        1 for term in (search_terms or [])
        if isinstance(term, str) and term.lower() in tagged
    )

    return HighlightStats(
        total_segments=len(segments),
        highlighted_segments=len(highlighted),
        unique_highlighted_terms=len({s.term for s in highlighted}),
        search_terms_found=found,
        has_highlights=bool(highlighted),
    )
