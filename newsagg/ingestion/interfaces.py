"""Interface definitions for feed ingestion."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List
from enum import Enum


class Category(str, Enum):
    """News categories accepted by the API. GENERAL means every source."""
    GENERAL = "general"
    BUSINESS = "business"
    TECHNOLOGY = "technology"
    SPORTS = "sports"
    POLITICS = "politics"


@dataclass(frozen=True)
class Source:
    """A configured news feed."""
    name: str
    url: str
    category: Category
    trusted: bool = True

    def to_dict(self) -> dict:
        """Public view of the source, without its feed URL."""
        return {
            "name": self.name,
            "category": self.category.value,
            "trusted": self.trusted,
        }


@dataclass
class RawFeedItem:
    """One entry from a parsed feed, before normalization."""
    title: str = ""
    link: str = ""
    pub_date: Optional[str] = None  # As published in the feed
    published_at: Optional[datetime] = None
    content: str = ""  # content:encoded, falls back to summary
    snippet: str = ""  # summary as published, may contain markup
    enclosure_url: Optional[str] = None
    enclosure_type: Optional[str] = None


@dataclass(frozen=True)
class Article:
    """A normalized news entry as served by the API."""
    title: str
    link: str
    pub_date: Optional[str]
    published_at: Optional[datetime]
    description: str
    image: Optional[str]
    source: str
    category: Category
    trusted: bool

    @classmethod
    def from_item(cls, item: RawFeedItem, source: Source, image: Optional[str], description: str) -> "Article":
        """Build an article; attribution always comes from the source."""
        return cls(
            title=item.title,
            link=item.link,
            pub_date=item.pub_date,
            published_at=item.published_at,
            description=description,
            image=image,
            source=source.name,
            category=source.category,
            trusted=source.trusted,
        )

    def to_dict(self) -> dict:
        """Convert to the JSON shape served to the front end."""
        return {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "description": self.description,
            "image": self.image,
            "source": self.source,
            "category": self.category.value,
            "trusted": self.trusted,
        }


@dataclass
class ArticleContent:
    """Text extracted from a single article page."""
    title: str
    content: str
    author: str
    published_date: str
    source: str
    accessed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregator: str = "UK-Compliant-News-Aggregator"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "publishedDate": self.published_date,
            "source": self.source,
            "attribution": {
                "originalUrl": self.source,
                "accessedAt": self.accessed_at.isoformat(),
                "aggregator": self.aggregator,
            },
        }


class FetchError(Exception):
    """A network, timeout or parse failure for one source."""

    def __init__(self, source: str, cause: Exception):
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {cause}")


class UntrustedSourceError(Exception):
    """URL does not belong to any configured source."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Content from untrusted source: {url}")


class FetcherInterface:
    """Interface for feed fetching."""

    async def fetch_feed(self, source: Source) -> List[RawFeedItem]:
        """Fetch items from a single feed. Raises FetchError."""
        raise NotImplementedError


class ImageResolverInterface:
    """Interface for image resolution."""

    async def resolve(self, item: RawFeedItem) -> Optional[str]:
        """Return an absolute image URL or None. Never raises."""
        raise NotImplementedError
