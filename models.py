"""
Record types for laws and news articles.

Fields missing from source data take empty defaults instead of None,
so search code can read any field without presence checks. Payloads
are checked and converted into these records by validation.py.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


# ─── Laws ────────────────────────────────────────────────────────────────────

@dataclass
class Law:
    """A single section of a cyber law."""

    id: str
    act: str
    section: str
    theory: str
    keywords: list[str] = field(default_factory=list)
    last_updated: Optional[date] = None
    category: Optional[str] = None
    related_sections: list[str] = field(default_factory=list)


# ─── Articles ────────────────────────────────────────────────────────────────

@dataclass
class Source:
    """Publisher of a news article."""

    name: str = ""
    id: Optional[str] = None


@dataclass
class Article:
    """A news article as returned by the news API."""

    title: str
    url: str
    published_at: str = ""
    description: str = ""
    source: Source = field(default_factory=Source)
    content: Optional[str] = None
    author: Optional[str] = None
    url_to_image: Optional[str] = None
    id: str = ""
