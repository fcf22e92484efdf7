"""News source table and JSON override loader."""

import json
from pathlib import Path
from typing import Tuple

import structlog

from ..ingestion.interfaces import Category, Source
from .settings import settings

logger = structlog.get_logger()

# UK-focused, reputable sources
DEFAULT_SOURCES: Tuple[Source, ...] = (
    Source(
        name="BBC News",
        url="http://feeds.bbci.co.uk/news/rss.xml",
        category=Category.GENERAL,
    ),
    Source(
        name="The Guardian",
        url="https://www.theguardian.com/uk/rss",
        category=Category.GENERAL,
    ),
    Source(
        name="Sky News",
        url="http://feeds.skynews.com/feeds/rss/uk.xml",
        category=Category.GENERAL,
    ),
    Source(
        name="Financial Times",
        url="https://www.ft.com/rss/home/uk",
        category=Category.BUSINESS,
    ),
    Source(
        name="Reuters UK",
        url="https://feeds.reuters.com/reuters/UKdomesticNews",
        category=Category.GENERAL,
    ),
)


def load_sources(config_path: str = None) -> Tuple[Source, ...]:
    """Load the source table.

    Falls back to DEFAULT_SOURCES when no file is configured. A configured
    file that is missing or malformed is an error: the process should not
    start with a silently different source list.
    """
    if config_path is None:
        config_path = settings.sources_file
    if config_path is None:
        return DEFAULT_SOURCES

    with open(Path(config_path)) as f:
        data = json.load(f)

    sources = []
    for source_data in data.get("sources", []):
        sources.append(Source(
            name=source_data["name"],
            url=source_data["url"],
            category=Category(source_data.get("category", "general")),
            trusted=bool(source_data.get("trusted", True)),
        ))

    logger.info("sources_loaded", path=str(config_path), count=len(sources))
    return tuple(sources)
