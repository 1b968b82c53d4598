"""
Search Term Highlighting.

Locates search terms inside a text and splits the text into
highlighted and plain segments for rendering.

Two match strategies are available:
  - SUBSTRING: plain substring scan, no regular expressions
  - WHOLE_WORD: word-boundary regex matching

Overlaps are resolved by position: the match that starts first wins,
and for equal starts the term listed first wins. Later matches that
overlap an accepted one are dropped.
"""

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ─── Types ───────────────────────────────────────────────────────────────────

class MatchStrategy(Enum):
    """How a term is located inside a text."""

    SUBSTRING = "substring"
    WHOLE_WORD = "whole_word"


@dataclass(frozen=True)
class Match:
    """A half-open range [start, end) of a term occurrence."""

    start: int
    end: int
    term: str


@dataclass(frozen=True)
class Segment:
    """A contiguous slice of text, highlighted or plain."""

    text: str
    highlighted: bool = False
    term: Optional[str] = None


@dataclass
class SearchOptions:
    """Options for matching and highlighting."""

    case_sensitive: bool = False
    whole_words: bool = False
    max_highlights: int = 100
    min_query_length: int = 0
    debounce_delay: float = 0.3

    def __post_init__(self):
        if self.max_highlights < 0:
            raise ValueError("max_highlights must be non-negative")
        if self.min_query_length < 0:
            raise ValueError("min_query_length must be non-negative")
        if self.debounce_delay < 0:
            raise ValueError("debounce_delay must be non-negative")

    @property
    def strategy(self) -> MatchStrategy:
        return MatchStrategy.WHOLE_WORD if self.whole_words else MatchStrategy.SUBSTRING


# ─── Matching ────────────────────────────────────────────────────────────────

def _fold(text: str) -> str:
    """
    Lowercase text without changing its length.

    Characters whose lowercase form is longer than one character
    (e.g. 'İ') are kept as-is so indices stay aligned with the original.
    """
    folded = text.lower()
    if len(folded) == len(text):
        return folded
    return "".join(
        lower if len(lower) == 1 else ch
        for ch, lower in ((ch, ch.lower()) for ch in text)
    )


def _substring_matches(text: str, term: str, case_sensitive: bool) -> list[Match]:
    haystack = text if case_sensitive else _fold(text)
    needle = term if case_sensitive else _fold(term)

    matches = []
    start = 0
    while True:
        index = haystack.find(needle, start)
        if index == -1:
            break
        matches.append(Match(index, index + len(needle), term))
        start = index + len(needle)
    return matches


def _whole_word_matches(text: str, term: str, case_sensitive: bool) -> list[Match]:
    flags = 0 if case_sensitive else re.IGNORECASE
    pattern = re.compile(r"\b" + re.escape(term) + r"\b", flags)
    return [
        Match(m.start(), m.end(), term)
        for m in pattern.finditer(text)
        if m.end() > m.start()
    ]


_STRATEGIES = {
    MatchStrategy.SUBSTRING: _substring_matches,
    MatchStrategy.WHOLE_WORD: _whole_word_matches,
}


def find_matches(
    text,
    terms,
    strategy: MatchStrategy = MatchStrategy.SUBSTRING,
    case_sensitive: bool = False,
) -> list[Match]:
    """
    Find every occurrence of every term in a text.

    Occurrences of a single term do not overlap each other, but
    occurrences of different terms may; resolving those is left
    to build_segments().

    Args:
        text: Text to scan.
        terms: Search terms, in priority order.
        strategy: SUBSTRING or WHOLE_WORD matching.
        case_sensitive: Match case exactly.

    Returns:
        Matches sorted by start position. Matches with the same start
        keep the order of `terms`.
    """
    if not isinstance(text, str) or not text or not terms:
        return []

    scan = _STRATEGIES[strategy]
    matches: list[Match] = []
    for term in terms:
        if not isinstance(term, str) or not term:
            continue
        matches.extend(scan(text, term, case_sensitive))

    # list.sort is stable: equal starts keep term order
    matches.sort(key=lambda m: m.start)
    return matches


# ─── Segment Building ────────────────────────────────────────────────────────

def build_segments(
    text,
    matches: list[Match],
    max_highlights: Optional[int] = None,
) -> list[Segment]:
    """
    Partition a text into plain and highlighted segments.

    `matches` must be sorted by start. A match starting inside an
    already highlighted region is discarded. At most `max_highlights`
    segments are highlighted; the rest of the text is left plain.

    Concatenating the returned segments always reproduces `text`.
    """
    if not isinstance(text, str):
        text = ""
    if not matches:
        return [Segment(text)]

    segments: list[Segment] = []
    last_index = 0
    highlighted = 0
    length = len(text)

    for match in matches:
        if max_highlights is not None and highlighted >= max_highlights:
            break
        if not 0 <= match.start < match.end <= length:
            continue
        if match.start < last_index:
            continue

        if match.start > last_index:
            segments.append(Segment(text[last_index:match.start]))
        segments.append(Segment(text[match.start:match.end], True, match.term))
        last_index = match.end
        highlighted += 1

    if last_index < length or not segments:
        segments.append(Segment(text[last_index:]))

    return segments


def highlight_text(
    text,
    terms: Union[str, list[str], None],
    options: Optional[SearchOptions] = None,
) -> list[Segment]:
    """
    Highlight search terms in a text.

    Args:
        text: Text to highlight.
        terms: A single term or a list of terms. Blank terms are ignored.
        options: Matching options (defaults: case-insensitive substring,
                 at most 100 highlights).

    Returns:
        Segments covering the whole text.
    """
    options = options or SearchOptions()
    if not isinstance(text, str):
        text = ""

    if isinstance(terms, str):
        terms = [terms]
    valid_terms = [
        term for term in (terms or [])
        if isinstance(term, str) and term.strip()
    ]
    if not text or not valid_terms:
        return [Segment(text)]

    matches = find_matches(
        text,
        valid_terms,
        strategy=options.strategy,
        case_sensitive=options.case_sensitive,
    )
    return build_segments(text, matches, max_highlights=options.max_highlights)


# ─── Rendering ───────────────────────────────────────────────────────────────

def segments_to_html(
    segments: list[Segment],
    tag: str = "mark",
    css_class: Optional[str] = None,
) -> str:
    """Render segments as escaped HTML, wrapping highlights in `tag`."""
    open_tag = f'<{tag} class="{html.escape(css_class)}">' if css_class else f"<{tag}>"
    close_tag = f"</{tag}>"

    parts = []
    for segment in segments:
        escaped = html.escape(segment.text)
        if segment.highlighted:
            parts.append(f"{open_tag}{escaped}{close_tag}")
        else:
            parts.append(escaped)
    return "".join(parts)


# ─── Previews ────────────────────────────────────────────────────────────────

@dataclass
class Preview:
    """A highlighted excerpt of a longer text."""

    text: str
    segments: list[Segment]
    truncated: bool = False
    original_length: int = 0


def highlight_preview(
    text,
    terms: Union[str, list[str], None],
    max_length: int = 200,
    context_length: int = 50,
    separator: str = "...",
    options: Optional[SearchOptions] = None,
) -> Preview:
    """
    Build a short highlighted excerpt around the first match.

    Texts no longer than `max_length` are highlighted whole. Longer
    texts are cut to `context_length` characters on each side of the
    first match; without any match the first `max_length` characters
    are used. `separator` marks each cut.
    """
    options = options or SearchOptions()
    if not isinstance(text, str):
        text = ""

    if len(text) <= max_length:
        return Preview(text, highlight_text(text, terms, options), False, len(text))

    term_list = [terms] if isinstance(terms, str) else list(terms or [])
    term_list = [t for t in term_list if isinstance(t, str) and t.strip()]
    matches = find_matches(
        text, term_list, strategy=options.strategy, case_sensitive=options.case_sensitive
    )

    if not matches:
        excerpt = text[:max_length] + separator
        return Preview(excerpt, [Segment(excerpt)], True, len(text))

    first = matches[0]
    start = max(0, first.start - context_length)
    end = min(len(text), first.end + context_length)

    excerpt = text[start:end]
    if start > 0:
        excerpt = separator + excerpt
    if end < len(text):
        excerpt = excerpt + separator

    return Preview(excerpt, highlight_text(excerpt, term_list, options), True, len(text))
