"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
<channel>
<title>{title}</title>
<link>https://example.com/</link>
<description>Test feed</description>
{items}
</channel>
</rss>"""

ITEM_TEMPLATE = """<item>
<title>{title}</title>
<link>{link}</link>
<pubDate>{pub_date}</pubDate>
<description>{description}</description>
</item>"""


def make_rss(items, title="Test Feed"):
    """Build an RSS document from (title, link, pubDate) tuples."""
    body = "\n".join(
        ITEM_TEMPLATE.format(title=t, link=l, pub_date=d, description=f"About {t}")
        for t, l, d in items
    )
    return RSS_TEMPLATE.format(title=title, items=body)


class FakeHttp:
    """Stands in for HttpClient: serves canned bodies by URL.

    A value that is an Exception instance is raised instead of returned;
    unknown URLs raise ConnectionError.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def get_text(self, url, timeout):
        self.calls.append((url, timeout))
        body = self.responses.get(url)
        if body is None:
            raise ConnectionError(f"no route to {url}")
        if isinstance(body, Exception):
            raise body
        return body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def fake_http():
    """Provide an empty FakeHttp; tests fill in responses."""
    return FakeHttp()


@pytest.fixture
def sample_sources():
    """Provide a small source table."""
    from newsagg.ingestion.interfaces import Category, Source
    return (
        Source(name="BBC News", url="http://feeds.bbci.co.uk/news/rss.xml", category=Category.GENERAL),
        Source(name="The Guardian", url="https://www.theguardian.com/uk/rss", category=Category.GENERAL),
        Source(name="Financial Times", url="https://www.ft.com/rss/home/uk", category=Category.BUSINESS),
    )


@pytest.fixture
def sample_item():
    """Provide a RawFeedItem with no image signals."""
    from newsagg.ingestion.interfaces import RawFeedItem
    return RawFeedItem(
        title="Budget announced",
        link="https://www.bbc.co.uk/news/business-1",
        pub_date="Tue, 14 Oct 2025 09:00:00 GMT",
        published_at=datetime(2025, 10, 14, 9, 0, tzinfo=timezone.utc),
        content="The chancellor has announced the budget.",
        snippet="The chancellor has announced the budget.",
    )


@pytest.fixture
def no_image_resolver():
    """Resolver stub that never finds an image."""
    resolver = AsyncMock()
    resolver.resolve = AsyncMock(return_value=None)
    return resolver


@pytest.fixture
def rss():
    """Provide the RSS document builder."""
    return make_rss
