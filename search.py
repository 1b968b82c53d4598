"""
Law and Article Search.

Substring filtering over the searchable fields of a record, law
lookup/sort/filter helpers, BM25 relevance ordering, and a stateful
search session used by the UI.
"""

import hashlib
import logging
import re
from collections.abc import Mapping
from datetime import date
from typing import Callable, Optional, Sequence

from rank_bm25 import BM25Okapi

from search_analytics import SearchStats, get_search_stats
from text_processing import extract_terms, sanitize_query

logger = logging.getLogger(__name__)


# Searchable fields per record type. Dotted paths walk nested fields.
LAW_SEARCH_FIELDS = ("act", "section", "theory", "keywords", "category")
ARTICLE_SEARCH_FIELDS = ("title", "description", "source.name", "content", "author")


# ─── Field Access ────────────────────────────────────────────────────────────

def _get(record, name: str):
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def field_values(record, path: str) -> list[str]:
    """
    Read the string values of a field from a record.

    Works for model instances and plain dicts. Absent fields, None,
    and non-string values yield an empty list; list fields yield
    their string items.
    """
    value = record
    for name in path.split("."):
        if value is None:
            return []
        value = _get(value, name)

    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


# ─── Record Search ───────────────────────────────────────────────────────────

def record_matches(record, needle: str, fields: Sequence[str]) -> bool:
    """Whether any searchable field of `record` contains `needle` (lowercase)."""
    return any(
        needle in value.lower()
        for path in fields
        for value in field_values(record, path)
    )


def search_records(query, records, fields: Sequence[str]) -> list:
    """
    Filter records whose fields contain the query as a substring.

    The sanitized query is used whole (it is not split into terms)
    and compared case-insensitively. An empty query returns `records`
    itself, unfiltered.

    Args:
        query: Raw user query.
        records: Records to filter (models or dicts).
        fields: Field paths to search.

    Returns:
        Matching records in input order.
    """
    if not isinstance(records, (list, tuple)):
        return []

    needle = sanitize_query(query).lower()
    if not needle:
        return records

    return [record for record in records if record_matches(record, needle, fields)]


def search_laws(query, laws) -> list:
    """Filter laws by act, section, theory, keywords and category."""
    return search_records(query, laws, LAW_SEARCH_FIELDS)


def search_articles(query, articles) -> list:
    """Filter articles by title, description, source, content and author."""
    return search_records(query, articles, ARTICLE_SEARCH_FIELDS)


# ─── Law Helpers ─────────────────────────────────────────────────────────────

def _first(record, path: str) -> str:
    values = field_values(record, path)
    return values[0] if values else ""


def get_laws_by_category(category: str, laws) -> list:
    """Laws whose category equals `category` (case-insensitive)."""
    if not category or not isinstance(laws, (list, tuple)):
        return []
    wanted = category.lower()
    return [law for law in laws if _first(law, "category").lower() == wanted]


def get_unique_categories(laws) -> list[str]:
    """Sorted list of distinct non-empty categories."""
    if not isinstance(laws, (list, tuple)):
        return []
    return sorted({_first(law, "category") for law in laws} - {""})


_SORT_KEYS = {
    "act": lambda law: _first(law, "act").lower(),
    "section": lambda law: _first(law, "section").lower(),
    "category": lambda law: _first(law, "category").lower(),
    "last_updated": lambda law: _get(law, "last_updated") or date.min,
}


def sort_laws(laws, sort_by: str = "act", order: str = "asc") -> list:
    """
    Return a sorted copy of `laws`.

    sort_by is one of 'act', 'section', 'category', 'last_updated';
    unknown values fall back to 'act'. Laws without a date sort as
    the earliest possible date.
    """
    if not isinstance(laws, (list, tuple)):
        return []
    key = _SORT_KEYS.get(sort_by, _SORT_KEYS["act"])
    return sorted(laws, key=key, reverse=(order == "desc"))


def get_law_by_id(law_id: str, laws):
    """Find a law by ID, or None."""
    if not law_id or not isinstance(laws, (list, tuple)):
        return None
    for law in laws:
        if _first(law, "id") == law_id:
            return law
    return None


def get_related_laws(law, laws) -> list:
    """Other laws whose section contains one of `law`'s related sections."""
    if law is None or not isinstance(laws, (list, tuple)):
        return []
    related = field_values(law, "related_sections")
    if not related:
        return []

    law_id = _first(law, "id")
    return [
        other for other in laws
        if _first(other, "id") != law_id
        and any(section in _first(other, "section") for section in related)
    ]


def filter_laws(
    laws,
    category: Optional[str] = None,
    act: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list:
    """Filter laws by exact category, act substring and update-date range."""
    if not isinstance(laws, (list, tuple)):
        return []

    results = list(laws)

    if category:
        wanted = category.lower()
        results = [law for law in results if _first(law, "category").lower() == wanted]

    if act:
        needle = act.lower()
        results = [law for law in results if needle in _first(law, "act").lower()]

    if date_from:
        results = [
            law for law in results
            if _get(law, "last_updated") and _get(law, "last_updated") >= date_from
        ]

    if date_to:
        results = [
            law for law in results
            if _get(law, "last_updated") and _get(law, "last_updated") <= date_to
        ]

    return results


# ─── BM25 Relevance ──────────────────────────────────────────────────────────

class LawIndex:
    """
    BM25 index over laws, used to order search results by relevance.

    BM25 is a bag-of-words ranking function that considers:
    - Term frequency (TF)
    - Inverse document frequency (IDF)
    - Document length normalization

    Ranking never filters; it only orders the laws it is given.
    """

    def __init__(self):
        self.laws = []
        self.bm25 = None
        # object identity -> index position; law IDs may be empty or repeated
        self._positions: dict[int, int] = {}

    def index(self, laws: list):
        """Index laws for relevance ranking."""
        self.laws = list(laws)
        self._positions = {}

        corpus = []
        for position, law in enumerate(self.laws):
            self._positions[id(law)] = position
            text = " ".join(
                value
                for path in LAW_SEARCH_FIELDS
                for value in field_values(law, path)
            )
            corpus.append(self._tokenize(text))

        # BM25Okapi cannot be built from an empty corpus
        self.bm25 = BM25Okapi(corpus) if corpus else None
        logger.debug("Indexed %d laws for relevance ranking", len(self.laws))

    def _tokenize(self, text: str) -> list[str]:
        """Lowercase word tokens longer than two characters."""
        tokens = re.findall(r"\b\w+\b", text.lower())
        return [t for t in tokens if len(t) > 2]

    def scores(self, query: str) -> list[float]:
        """BM25 score of every indexed law, in index order."""
        if not self.bm25:
            return []
        tokens = self._tokenize(" ".join(extract_terms(sanitize_query(query))))
        if not tokens:
            return []
        return [float(score) for score in self.bm25.get_scores(tokens)]

    def rank(self, query: str, laws: Optional[list] = None) -> list:
        """
        Order laws by relevance to `query`, highest first.

        Laws are matched to index entries by identity, not by ID. Laws
        with equal scores (including laws that were never indexed, which
        score 0) keep their input order.
        """
        laws = self.laws if laws is None else laws
        scores = self.scores(query)
        if not scores:
            return list(laws)

        def score(law) -> float:
            position = self._positions.get(id(law))
            return scores[position] if position is not None else 0.0

        return sorted(laws, key=lambda law: -score(law))


# ─── Search Session ──────────────────────────────────────────────────────────

# Fields that tell one record apart from another
_IDENTITY_FIELDS = ("id", "url", "title", "act", "section", "published_at", "publishedAt")


def records_fingerprint(records) -> str:
    """
    Short digest of the identity fields of a record list.

    Two lists holding the same records in the same order share a
    fingerprint; a refreshed news page or another law subset does not.
    """
    if not isinstance(records, (list, tuple)):
        return ""
    digest = hashlib.sha256()
    for record in records:
        for path in _IDENTITY_FIELDS:
            digest.update(_first(record, path).encode("utf-8"))
            digest.update(b"\x1f")
        digest.update(b"\x1e")
    return digest.hexdigest()[:16]


class SearchSession:
    """
    Query state for a searchable list.

    Holds the raw query and derives the sanitized query, filtered
    results, highlight terms and statistics from it. Queries shorter
    than `min_query_length` leave the list unfiltered.

    Usage:
        session = SearchSession(LAWS, search_fn=search_laws)
        session.set_query("identity theft")
        session.results        # filtered laws
        session.search_terms   # ["identity", "theft"]
    """

    def __init__(
        self,
        records: list,
        search_fn: Callable = search_laws,
        min_query_length: int = 0,
        cache=None,
        scope: str = "",
        initial_query: str = "",
    ):
        if min_query_length < 0:
            raise ValueError("min_query_length must be non-negative")
        self.records = records
        self.search_fn = search_fn
        self.min_query_length = min_query_length
        self.cache = cache
        self.scope = scope
        self.query = initial_query

    def set_query(self, query: str):
        self.query = query if isinstance(query, str) else ""

    def clear(self):
        self.query = ""

    @property
    def sanitized_query(self) -> str:
        return sanitize_query(self.query)

    @property
    def has_active_search(self) -> bool:
        sanitized = self.sanitized_query
        return bool(sanitized) and len(sanitized) >= self.min_query_length

    @property
    def results(self) -> list:
        sanitized = self.sanitized_query
        if len(sanitized) < self.min_query_length:
            return self.records
        if self.cache is None or not sanitized:
            return self.search_fn(sanitized, self.records)
        return self.cache.get_or_compute(
            sanitized,
            lambda: self.search_fn(sanitized, self.records),
            scope=self.scope,
            records=records_fingerprint(self.records),
        )

    @property
    def search_terms(self) -> list[str]:
        if not self.has_active_search:
            return []
        return extract_terms(self.sanitized_query)

    @property
    def stats(self) -> SearchStats:
        return get_search_stats(self.records, self.results, self.sanitized_query)
