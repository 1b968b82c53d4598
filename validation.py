"""
Payload schemas for news articles and law sections.

Raw entries (NewsAPI JSON, the bundled law list) are validated with
pydantic and converted into the record types in models.py. The list
parsers report invalid and duplicate entries instead of raising, so
one bad article never costs the whole page.
"""

import hashlib
from datetime import date
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models import Article, Law, Source
from time_utils import parse_timestamp


def generate_article_id(url) -> str:
    """Stable short identifier derived from an article URL."""
    if not isinstance(url, str) or not url:
        return ""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def describe_errors(exc: ValidationError) -> str:
    """One-line summary of a ValidationError, e.g. 'title: String should have at least 1 character'."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
        for error in exc.errors()
    )


# ─── Articles ────────────────────────────────────────────────────────────────

class SourcePayload(BaseModel):
    """Publisher block of a NewsAPI article."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Publisher name.")
    id: Optional[str] = Field(default=None, description="NewsAPI source identifier.")


class ArticlePayload(BaseModel):
    """A NewsAPI article entry. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    published_at: str = Field(..., alias="publishedAt")
    source: SourcePayload
    url_to_image: Optional[str] = Field(default=None, alias="urlToImage")
    content: Optional[str] = None
    author: Optional[str] = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not _is_http_url(value):
            raise ValueError("must be an HTTP or HTTPS URL")
        return value

    @field_validator("published_at")
    @classmethod
    def _check_published_at(cls, value: str) -> str:
        if parse_timestamp(value) is None:
            raise ValueError("must be an ISO-8601 or RFC 2822 timestamp")
        return value

    @field_validator("url_to_image")
    @classmethod
    def _drop_bad_image_url(cls, value: Optional[str]) -> Optional[str]:
        # only the picture is lost, not the article
        return value if value and _is_http_url(value) else None

    @field_validator("content", "author")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_article(self) -> Article:
        return Article(
            title=self.title,
            url=self.url,
            published_at=self.published_at,
            description=self.description,
            source=Source(name=self.source.name, id=self.source.id),
            content=self.content,
            author=self.author,
            url_to_image=self.url_to_image,
            id=generate_article_id(self.url),
        )


def parse_article(raw) -> Article:
    """
    Validate one article entry and convert it.

    Raises:
        ValidationError: if a required field is missing or malformed.
    """
    return ArticlePayload.model_validate(raw).to_article()


def parse_articles(items) -> tuple[list[Article], list[str]]:
    """
    Validate a list of article entries.

    Returns:
        (articles, error messages). Entries repeating an earlier
        valid entry's URL are reported and left out.
    """
    if not isinstance(items, list):
        return [], ["Articles data must be an array"]

    articles, errors = [], []
    seen_urls: set[str] = set()
    for index, item in enumerate(items):
        try:
            article = parse_article(item)
        except ValidationError as exc:
            errors.append(f"Article at index {index}: {describe_errors(exc)}")
            continue
        if article.url in seen_urls:
            errors.append(f'Duplicate article URL "{article.url}" found at index {index}')
            continue
        seen_urls.add(article.url)
        articles.append(article)
    return articles, errors


# ─── Laws ────────────────────────────────────────────────────────────────────

class LawPayload(BaseModel):
    """A law section entry. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    act: str = Field(..., min_length=1)
    section: str = Field(..., min_length=1)
    theory: str = Field(..., min_length=1)
    keywords: list[str] = Field(default_factory=list)
    last_updated: date = Field(..., alias="lastUpdated")
    category: Optional[str] = Field(default=None, min_length=1)
    related_sections: list[str] = Field(default_factory=list, alias="relatedSections")

    @field_validator("keywords", "related_sections")
    @classmethod
    def _drop_blank_items(cls, value: list[str]) -> list[str]:
        return [item for item in value if item]

    def to_law(self) -> Law:
        return Law(
            id=self.id,
            act=self.act,
            section=self.section,
            theory=self.theory,
            keywords=list(self.keywords),
            last_updated=self.last_updated,
            category=self.category,
            related_sections=list(self.related_sections),
        )


def parse_laws(items) -> tuple[list[Law], list[str]]:
    """Validate a list of law entries, rejecting duplicate IDs."""
    if not isinstance(items, list):
        return [], ["Laws data must be an array"]

    laws, errors = [], []
    used_ids: set[str] = set()
    for index, item in enumerate(items):
        try:
            law = LawPayload.model_validate(item).to_law()
        except ValidationError as exc:
            errors.append(f"Law at index {index}: {describe_errors(exc)}")
            continue
        if law.id in used_ids:
            errors.append(f'Duplicate law ID "{law.id}" found at index {index}')
            continue
        used_ids.add(law.id)
        laws.append(law)
    return laws, errors
