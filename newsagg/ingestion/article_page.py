"""Article page extraction with source attribution."""

from typing import Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup
import structlog

from .http import HttpClient
from .interfaces import ArticleContent, FetchError, Source, UntrustedSourceError
from ..config.settings import settings

logger = structlog.get_logger()


def is_trusted_url(url: str, sources: Sequence[Source]) -> bool:
    """True when the URL's host is a configured feed host or a subdomain of one."""
    hostname = urlparse(url).hostname
    if not hostname:
        return False
    for source in sources:
        host = urlparse(source.url).hostname
        if host and (hostname == host or hostname.endswith("." + host)):
            return True
    return False


class ArticleExtractor:
    """Pulls the readable parts of an article page from a trusted source."""

    def __init__(self, http: HttpClient, sources: Sequence[Source], timeout: float = None):
        self.http = http
        self.sources = sources
        self.timeout = timeout or settings.feed_timeout_seconds

    async def extract(self, url: str) -> ArticleContent:
        """Fetch and parse one article.

        Raises:
            ValueError: url is not an absolute http(s) URL
            UntrustedSourceError: url is not from a configured source
            FetchError: the page could not be retrieved
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Valid URL required")

        if not is_trusted_url(url, self.sources):
            logger.warning("untrusted_article_rejected", url=url)
            raise UntrustedSourceError(url)

        try:
            html = await self.http.get_text(url, self.timeout)
        except Exception as e:
            logger.error("article_fetch_failed", url=url, error=str(e) or type(e).__name__)
            raise FetchError(parsed.netloc, e) from e

        return self.parse(html, url)

    @staticmethod
    def parse(html: str, url: str) -> ArticleContent:
        soup = BeautifulSoup(html, "html.parser")

        h1 = soup.find("h1")
        title = h1.get_text(strip=True) if h1 else ""

        content = " ".join(
            el.get_text(" ", strip=True)
            for el in soup.select("article, .article-content, .story-body")
        ).strip()

        author = " ".join(
            el.get_text(" ", strip=True) for el in soup.select(".byline, .author")
        ).strip()

        published_date = ""
        date_el = soup.select_one("time, .date")
        if date_el is not None:
            published_date = date_el.get("datetime") or date_el.get_text(strip=True)

        return ArticleContent(
            title=title,
            content=content,
            author=author,
            published_date=published_date,
            source=url,
        )
