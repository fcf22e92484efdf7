"""Multi-source news aggregation."""

import asyncio
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
import structlog

from ..config.settings import settings
from ..config.sources import load_sources
from ..ingestion.fetcher import RSSFetcher
from ..ingestion.http import HttpClient
from ..ingestion.images import ImageResolver
from ..ingestion.interfaces import (
    Article, Category, FetchError, FetcherInterface, ImageResolverInterface,
    RawFeedItem, Source,
)

logger = structlog.get_logger()

# Undated items sort after everything else
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

_TAG_PATTERN = re.compile(r"<[^>]*>")


def html_to_text(html: str) -> str:
    if not html:
        return ""
    if "<" not in html:
        return html.strip()
    try:
        return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)
    except ParserRejectedMarkup:
        # html.parser gives up on some broken declarations
        return " ".join(_TAG_PATTERN.sub(" ", html).split())


def sort_key(article: Article) -> datetime:
    return article.published_at or _EARLIEST


class NewsAggregator:
    """Fetches every selected source concurrently and merges the results.

    A source that fails contributes nothing; the rest of the batch is
    unaffected. Nothing is cached between calls.
    """

    def __init__(
        self,
        sources: Sequence[Source] = None,
        http: HttpClient = None,
        fetcher: FetcherInterface = None,
        resolver: ImageResolverInterface = None,
    ):
        self.sources = tuple(sources) if sources is not None else load_sources()
        self.http = http or HttpClient()
        self.fetcher = fetcher or RSSFetcher(self.http)
        self.resolver = resolver or ImageResolver(self.http)

    async def __aenter__(self):
        await self.http.__aenter__()
        return self

    async def __aexit__(self, *args):
        await self.http.__aexit__(*args)

    def select_sources(
        self,
        category: Category = Category.GENERAL,
        source: Optional[str] = None,
    ) -> List[Source]:
        """Sources matching the category (GENERAL keeps all) and, if given,
        whose name contains `source` case-insensitively."""
        category = Category(category)
        selected = list(self.sources)
        if category != Category.GENERAL:
            selected = [s for s in selected if s.category == category]
        if source:
            needle = source.lower()
            selected = [s for s in selected if needle in s.name.lower()]
        return selected

    async def aggregate(
        self,
        category: Category = Category.GENERAL,
        source: Optional[str] = None,
        limit: int = None,
    ) -> List[Article]:
        """Newest-first articles from the selected sources, at most `limit`."""
        limit = settings.default_limit if limit is None else limit
        if not 1 <= limit <= settings.max_limit:
            raise ValueError(f"limit must be between 1 and {settings.max_limit}")

        selected = self.select_sources(category, source)
        results = await asyncio.gather(
            *[self.collect(s) for s in selected], return_exceptions=True
        )

        articles = []
        for feed_source, result in zip(selected, results):
            if isinstance(result, Exception):
                logger.warning("source_failed", source=feed_source.name, error=str(result) or type(result).__name__)
                continue
            articles.extend(result)
        articles.sort(key=sort_key, reverse=True)

        logger.info(
            "news_aggregated",
            sources=len(selected),
            articles=len(articles),
            returned=min(limit, len(articles)),
        )
        return articles[:limit]

    async def collect(self, source: Source) -> List[Article]:
        """All articles for one source; empty if its feed cannot be fetched."""
        try:
            items = await self.fetcher.fetch_feed(source)
        except FetchError as e:
            logger.warning("source_skipped", source=source.name, error=str(e.cause) or type(e.cause).__name__)
            return []

        return list(await asyncio.gather(*[self.build_article(item, source) for item in items]))

    async def build_article(self, item: RawFeedItem, source: Source) -> Article:
        image = await self.resolver.resolve(item)
        description = html_to_text(item.snippet) or html_to_text(item.content)
        return Article.from_item(item, source, image=image, description=description)
