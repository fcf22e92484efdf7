"""RSS feed fetcher with bounded timeouts and optional retries."""

import time
from datetime import datetime, timezone
from typing import List, Optional

import feedparser
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential
import structlog

from .http import HttpClient
from .interfaces import FetchError, FetcherInterface, RawFeedItem, Source
from ..config.settings import settings

logger = structlog.get_logger()


class RSSFetcher(FetcherInterface):
    """Fetches one source's feed and parses it into RawFeedItems."""

    def __init__(
        self,
        http: HttpClient,
        timeout: float = None,
        items_per_source: int = None,
        max_attempts: int = None,
    ):
        self.http = http
        self.timeout = timeout or settings.feed_timeout_seconds
        self.items_per_source = items_per_source or settings.items_per_source
        self.max_attempts = max_attempts or settings.fetch_max_attempts

    async def fetch_feed(self, source: Source) -> List[RawFeedItem]:
        """Fetch items from a single feed, capped at items_per_source."""
        start_time = time.time()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                reraise=True,
            ):
                with attempt:
                    content = await self.http.get_text(source.url, self.timeout)
                    items = self.parse(content)

        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.warning(
                "feed_fetch_failed",
                feed=source.name,
                error=str(e) or type(e).__name__,
                time_ms=elapsed_ms
            )
            raise FetchError(source.name, e) from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "feed_fetched",
            feed=source.name,
            items=len(items),
            time_ms=elapsed_ms
        )
        return items

    def parse(self, content: str) -> List[RawFeedItem]:
        """Parse an RSS/Atom document. Raises ValueError if it is unusable."""
        feed = feedparser.parse(content)
        if feed.bozo and not feed.entries:
            raise ValueError(f"unparseable feed: {feed.get('bozo_exception')}")

        return [self._parse_entry(entry) for entry in feed.entries[:self.items_per_source]]

    def _parse_entry(self, entry) -> RawFeedItem:
        """Parse a feed entry into a RawFeedItem."""
        summary = entry.get('summary', '') or ''

        # Prefer content:encoded over the summary
        content = summary
        if entry.get('content'):
            content = entry.content[0].get('value', summary) or summary

        enclosure_url, enclosure_type = None, None
        enclosures = entry.get('enclosures') or []
        if enclosures:
            enclosure_url = enclosures[0].get('href') or enclosures[0].get('url')
            enclosure_type = enclosures[0].get('type')

        return RawFeedItem(
            title=entry.get('title', ''),
            link=entry.get('link', ''),
            pub_date=entry.get('published') or entry.get('updated'),
            published_at=self._parse_date(entry),
            content=content,
            snippet=summary,
            enclosure_url=enclosure_url,
            enclosure_type=enclosure_type,
        )

    @staticmethod
    def _parse_date(entry) -> Optional[datetime]:
        # feedparser normalizes to a UTC struct_time
        for attr in ['published_parsed', 'updated_parsed']:
            parsed = entry.get(attr)
            if parsed:
                try:
                    return datetime(*parsed[:6], tzinfo=timezone.utc)
                except (TypeError, ValueError):
                    pass
        return None
