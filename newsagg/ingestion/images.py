"""Representative image discovery for feed items."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
import structlog

from .http import HttpClient
from .interfaces import ImageResolverInterface, RawFeedItem
from ..config.settings import settings

logger = structlog.get_logger()

IMG_TAG_PATTERN = re.compile(r'<img[^>]+src="([^"]+)"', re.IGNORECASE)

# Tried in order against the article page; first usable match wins
PAGE_IMAGE_SELECTORS = [
    'meta[property="og:image"]',
    'meta[name="twitter:image"]',
    'img[class*="hero"]',
    'img[class*="featured"]',
    'img[class*="main"]',
    'img[class*="article"]',
    'img[class*="story"]',
    '.article img',
    '.story img',
    '.content img',
    'article img',
]


def absolute_image_url(candidate: Optional[str], base: str = "") -> Optional[str]:
    """Resolve a candidate against base; None unless the result is an
    absolute http(s) URL."""
    if not candidate or not candidate.strip():
        return None
    url = urljoin(base, candidate.strip()) if base else candidate.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return url


def find_page_image(html: str) -> Optional[str]:
    """Scan an article page for its lead image."""
    soup = BeautifulSoup(html, "html.parser")

    for selector in PAGE_IMAGE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        src = element.get("content") or element.get("src")
        if src and src.startswith("http"):
            image = absolute_image_url(src)
            if image:
                return image

    return None


class ImageResolver(ImageResolverInterface):
    """Finds an image for a feed item, cheapest signal first.

    1. image/* enclosure
    2. first <img> in the content
    3. first <img> in the snippet
    4. og:image, twitter:image or a prominent <img> on the linked page
    """

    def __init__(
        self,
        http: HttpClient,
        timeout: float = None,
        fetch_pages: bool = None,
    ):
        self.http = http
        self.timeout = timeout or settings.page_timeout_seconds
        self.fetch_pages = settings.resolve_page_images if fetch_pages is None else fetch_pages

    async def resolve(self, item: RawFeedItem) -> Optional[str]:
        try:
            image = self.from_feed(item)
            if image is None and self.fetch_pages and item.link:
                image = await self.from_page(item.link)
            return image
        except Exception as e:
            logger.debug("image_resolution_failed", link=item.link, error=str(e))
            return None

    def from_feed(self, item: RawFeedItem) -> Optional[str]:
        """Steps 1-3: signals already present in the feed item."""
        if item.enclosure_type and item.enclosure_type.lower().startswith("image/"):
            image = absolute_image_url(item.enclosure_url, item.link)
            if image:
                return image

        for text in (item.content, item.snippet):
            if not text:
                continue
            match = IMG_TAG_PATTERN.search(text)
            if match:
                image = absolute_image_url(match.group(1), item.link)
                if image:
                    return image

        return None

    async def from_page(self, link: str) -> Optional[str]:
        """Step 4: fetch the article page and scan it."""
        try:
            html = await self.http.get_text(link, self.timeout)
        except Exception as e:
            logger.debug("image_page_fetch_failed", link=link, error=str(e) or type(e).__name__)
            return None
        return find_page_image(html)
