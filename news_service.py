"""
NewsAPI client for cybersecurity news.

Fetches one page of articles, drops malformed and off-topic ones,
and returns them deduplicated and newest first. Every failure is
raised as a NewsAPIError carrying a machine-readable error_type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from config import Settings
from models import Article
from news import deduplicate_and_sort, filter_cybersecurity_articles
from validation import parse_articles

logger = logging.getLogger(__name__)


SEARCH_TERMS = (
    "cybersecurity", "data breach", "malware", "vulnerability", "cyber attack",
    "information security", "ransomware", "phishing", "computer security",
    "network security", "cloud security", "iot security", "endpoint security",
    "zero-day", "exploit", "cybercrime", "hacking", "encryption", "firewall",
    "antivirus", "cyber threat", "digital forensics", "penetration testing",
    "security audit", "compliance", "gdpr", "hipaa", "pci dss", "nist",
    "iso 27001",
)

_PLACEHOLDER_KEYS = {"", "your_newsapi_key_here"}


class NewsAPIError(Exception):
    """A failed news fetch, classified by error_type."""

    def __init__(self, message: str, error_type: str, status: Optional[int] = None):
        super().__init__(message)
        self.error_type = error_type
        self.status = status

    def __repr__(self) -> str:
        return f"NewsAPIError({str(self)!r}, error_type={self.error_type!r}, status={self.status})"


@dataclass
class NewsAPIConfig:
    """Request parameters for the NewsAPI 'everything' endpoint."""

    api_key: str = ""
    base_url: str = "https://newsapi.org/v2/everything"
    search_terms: tuple[str, ...] = field(default=SEARCH_TERMS)
    page_size: int = 50
    sort_by: str = "publishedAt"
    language: str = "en"
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "NewsAPIConfig":
        return cls(
            api_key=settings.news_api_key,
            base_url=settings.news_api_url,
            page_size=settings.news_page_size,
            timeout=settings.request_timeout_seconds,
        )

    @property
    def query(self) -> str:
        return " OR ".join(self.search_terms)


# ─── Payload Handling ────────────────────────────────────────────────────────

_STATUS_ERRORS = {
    401: ("Invalid API key. Please check your NewsAPI configuration.", "authentication"),
    429: ("Rate limit exceeded. Please wait before making more requests.", "rate_limit"),
    500: ("NewsAPI server error. Please try again later.", "server_error"),
}


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload.get("message") if isinstance(payload, dict) else None


def _status_error(response: httpx.Response) -> NewsAPIError:
    status = response.status_code
    if status in _STATUS_ERRORS:
        message, error_type = _STATUS_ERRORS[status]
        return NewsAPIError(message, error_type, status)
    message = _error_message(response)
    if status == 400:
        return NewsAPIError(message or "Invalid request parameters.", "bad_request", status)
    return NewsAPIError(f"API error: {message or 'Unknown error'}", "api_error", status)


# ─── Fetching ────────────────────────────────────────────────────────────────

def fetch_cybersecurity_news(
    page: int = 1,
    config: Optional[NewsAPIConfig] = None,
    client: Optional[httpx.Client] = None,
) -> list[Article]:
    """
    Fetch one page of cybersecurity articles.

    Args:
        page: 1-based page number.
        config: Request configuration (defaults to Settings from the environment).
        client: HTTP client to use; a short-lived one is created if omitted.

    Returns:
        Valid, on-topic articles, deduplicated and newest first.

    Raises:
        NewsAPIError: on missing configuration, HTTP or transport failure,
                      or a payload whose status is not 'ok'.
    """
    config = config or NewsAPIConfig.from_settings(Settings())
    if config.api_key in _PLACEHOLDER_KEYS:
        raise NewsAPIError(
            "NewsAPI key not configured. Set CYBERLAW_NEWS_API_KEY in the environment or .env file.",
            "configuration_error",
        )

    params = {
        "q": config.query,
        "apiKey": config.api_key,
        "pageSize": config.page_size,
        "page": page,
        "sortBy": config.sort_by,
        "language": config.language,
    }

    owns_client = client is None
    client = client or httpx.Client(timeout=config.timeout)
    try:
        response = client.get(config.base_url, params=params)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        error = _status_error(exc.response)
        logger.warning("News request failed with HTTP %s: %s", error.status, error)
        raise error from exc
    except httpx.RequestError as exc:
        logger.warning("News request could not be sent: %s", exc)
        raise NewsAPIError(
            "Unable to connect to NewsAPI. Please check your internet connection.",
            "network_error",
        ) from exc
    except ValueError as exc:
        logger.warning("News response was not valid JSON: %s", exc)
        raise NewsAPIError(
            "An unexpected error occurred while fetching news.", "unknown_error"
        ) from exc
    finally:
        if owns_client:
            client.close()

    if not isinstance(payload, dict) or payload.get("status") != "ok":
        message = payload.get("message") if isinstance(payload, dict) else None
        raise NewsAPIError(message or "API returned error status", "api_error")

    articles, errors = parse_articles(payload.get("articles") or [])
    if errors:
        logger.debug("Page %d: skipped %d invalid articles: %s", page, len(errors), errors[:3])

    return deduplicate_and_sort(filter_cybersecurity_articles(articles))
