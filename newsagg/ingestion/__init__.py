"""Data ingestion - fetching feeds, article pages and images."""

from .interfaces import (
    Article, ArticleContent, Category, FetchError, FetcherInterface,
    ImageResolverInterface, RawFeedItem, Source, UntrustedSourceError,
)
from .http import HttpClient
from .fetcher import RSSFetcher
from .images import ImageResolver
from .article_page import ArticleExtractor

__all__ = [
    "Article", "ArticleContent", "Category", "FetchError", "FetcherInterface",
    "ImageResolverInterface", "RawFeedItem", "Source", "UntrustedSourceError",
    "HttpClient", "RSSFetcher", "ImageResolver", "ArticleExtractor",
]
