"""
News Article Processing.

Deduplication and date ordering of fetched article pages, plus the
article filters used by the updates view.
"""

import logging
from datetime import datetime
from typing import Optional

from search import field_values, search_articles
from time_utils import parse_timestamp

logger = logging.getLogger(__name__)


# Keywords that mark an article as cybersecurity or computing related
CYBERSECURITY_KEYWORDS = (
    "cybersecurity", "cyber security", "cyber attack", "cyber threat",
    "cybercrime", "data breach", "security breach", "malware", "virus",
    "ransomware", "phishing", "hacking", "hacker", "vulnerability",
    "exploit", "zero-day", "zero day", "patch", "firewall", "antivirus",
    "encryption", "decryption", "cryptography", "authentication",
    "authorization", "ddos", "botnet", "trojan", "spyware", "keylogger",
    "social engineering", "penetration testing", "pentest",
    "security audit", "compliance", "gdpr", "hipaa", "pci dss", "nist",
    "iso 27001", "incident response", "digital forensics",
    "threat intelligence", "information security", "infosec",
    "network security", "cloud security", "iot security",
    "endpoint security", "application security", "devsecops", "owasp",
    "cve", "threat actor", "advanced persistent threat", "insider threat",
    "security awareness", "privacy",
)

filter_articles_by_query = search_articles


def _first(record, path: str) -> str:
    values = field_values(record, path)
    return values[0] if values else ""


# ─── Deduplication & Ordering ────────────────────────────────────────────────

def _sort_key(indexed):
    """Valid dates newest first; invalid dates after all valid ones."""
    _, parsed = indexed
    if parsed is None:
        return (1, 0.0)
    return (0, -parsed.timestamp())


def sort_articles_by_date(articles) -> list:
    """
    Return articles ordered newest first.

    Articles with a missing or unparseable publication date go last,
    in their input order. Equal dates keep input order.
    """
    if not isinstance(articles, (list, tuple)):
        return []
    dated = [(article, parse_timestamp(_first(article, "published_at") or
                                       _first(article, "publishedAt")))
             for article in articles]
    dated.sort(key=_sort_key)
    return [article for article, _ in dated]


def deduplicate_and_sort(articles) -> list:
    """
    Drop duplicate articles, then order the rest newest first.

    An article is a duplicate when its URL, or its title after
    lowercasing and trimming, was already seen earlier in the list:
    the first occurrence wins under either key. Empty URLs and empty
    titles are not used as keys, so two articles that both lack a URL
    (or both lack a title) are never duplicates of each other by that
    field alone. A plain seen-set over raw values would treat the
    first empty value as a key and drop every later article missing
    the same field.

    Args:
        articles: Article models or dicts, in fetch order.

    Returns:
        A new list of unique articles sorted by publication date.
    """
    if not isinstance(articles, (list, tuple)):
        return []

    seen_urls: set[str] = set()
    seen_titles: set[str] = set()
    unique = []

    for article in articles:
        url = _first(article, "url")
        title = _first(article, "title").lower().strip()

        if url and url in seen_urls:
            continue
        if title and title in seen_titles:
            continue

        if url:
            seen_urls.add(url)
        if title:
            seen_titles.add(title)
        unique.append(article)

    dropped = len(articles) - len(unique)
    if dropped:
        logger.debug("Dropped %d duplicate articles", dropped)

    return sort_articles_by_date(unique)


def remove_duplicate_articles(articles) -> list:
    """Keep the first article per URL; articles without a URL are dropped."""
    if not isinstance(articles, (list, tuple)):
        return []
    seen: set[str] = set()
    unique = []
    for article in articles:
        url = _first(article, "url")
        if url and url not in seen:
            seen.add(url)
            unique.append(article)
    return unique


# ─── Filters ─────────────────────────────────────────────────────────────────

def filter_by_source(articles, source_name: str) -> list:
    """Articles whose source name contains `source_name` (case-insensitive)."""
    if not isinstance(articles, (list, tuple)):
        return []
    if not isinstance(source_name, str) or not source_name.strip():
        return list(articles)
    needle = source_name.lower().strip()
    return [a for a in articles if needle in _first(a, "source.name").lower()]


def filter_by_date_range(
    articles,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> list:
    """
    Articles published within [start, end], both bounds inclusive.

    Articles with a missing or invalid date are excluded whenever a
    bound is given.
    """
    if not isinstance(articles, (list, tuple)):
        return []
    if start is None and end is None:
        return list(articles)

    start = parse_timestamp(start) if start is not None else None
    end = parse_timestamp(end) if end is not None else None

    results = []
    for article in articles:
        published = parse_timestamp(_first(article, "published_at") or
                                    _first(article, "publishedAt"))
        if published is None:
            continue
        if start and published < start:
            continue
        if end and published > end:
            continue
        results.append(article)
    return results


def is_cybersecurity_article(article) -> bool:
    """Whether title, description or content mention a security keyword."""
    if article is None:
        return False
    content = " ".join(
        _first(article, path) for path in ("title", "description", "content")
    ).lower()
    return any(keyword in content for keyword in CYBERSECURITY_KEYWORDS)


def filter_cybersecurity_articles(articles) -> list:
    if not isinstance(articles, (list, tuple)):
        return []
    return [a for a in articles if is_cybersecurity_article(a)]
