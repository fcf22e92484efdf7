"""REST API serving aggregated UK news."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from ..config.logging import configure_logging
from ..config.settings import settings
from ..ingestion.article_page import ArticleExtractor
from ..ingestion.interfaces import Category, FetchError, UntrustedSourceError
from ..pipeline.aggregator import NewsAggregator

logger = structlog.get_logger()

NEWS_COMPLIANCE = {
    "gdpr": True,
    "dataProcessing": "Minimal data collection for service provision",
    "retention": "No personal data stored",
}

SOURCES_COMPLIANCE = {
    "gdpr": True,
    "dataProtection": "Sources verified for content quality and reliability",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    async with NewsAggregator() as aggregator:
        app.state.aggregator = aggregator
        app.state.extractor = ArticleExtractor(aggregator.http, aggregator.sources)
        logger.info("api_started", sources=len(aggregator.sources))
        yield
    logger.info("api_stopped")


def get_aggregator(request: Request) -> NewsAggregator:
    return request.app.state.aggregator


def get_extractor(request: Request) -> ArticleExtractor:
    return request.app.state.extractor


def validation_error(details: list) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request parameters", "details": details},
    )


app = FastAPI(title="UK News Aggregator", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": str(err["loc"][-1]) if err.get("loc") else None, "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return validation_error(details)


# ===== HEALTH CHECK ENDPOINT =====
@app.get("/health")
async def health_check(aggregator: NewsAggregator = Depends(get_aggregator)):
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sources": len(aggregator.sources),
    }


# ===== NEWS =====
@app.get("/api/news")
async def get_news(
    request: Request,
    category: Category = Query(Category.GENERAL, description="News category"),
    source: Optional[str] = Query(None, max_length=100, description="Source name filter"),
    limit: int = Query(settings.default_limit, ge=1, le=settings.max_limit),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    """Latest articles across the selected sources, newest first."""
    source = source.strip() if source else None
    try:
        selected = aggregator.select_sources(category, source)
        articles = await aggregator.aggregate(category=category, source=source, limit=limit)
    except Exception as e:
        logger.error("news_request_failed", error=str(e), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch news", "message": "Please try again later"},
        )

    logger.info(
        "news_request_processed",
        articles=len(articles),
        category=category.value,
        client=request.client.host if request.client else None,
    )

    return {
        "articles": [a.to_dict() for a in articles],
        "total": len(articles),
        "sources": [s.name for s in selected],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "compliance": NEWS_COMPLIANCE,
    }


@app.get("/api/news/sources")
async def get_sources(aggregator: NewsAggregator = Depends(get_aggregator)):
    """Configured sources, without their feed URLs."""
    return {
        "sources": [s.to_dict() for s in aggregator.sources],
        "total": len(aggregator.sources),
        "compliance": SOURCES_COMPLIANCE,
    }


@app.get("/api/news/article")
async def get_article(
    url: str = Query(..., description="Article URL from a configured source"),
    extractor: ArticleExtractor = Depends(get_extractor),
):
    """Readable content of one article, with attribution."""
    try:
        article = await extractor.extract(url)
    except ValueError as e:
        return validation_error([{"field": "url", "message": str(e)}])
    except UntrustedSourceError:
        return JSONResponse(
            status_code=403,
            content={
                "error": "Content from untrusted sources not allowed",
                "message": "Only content from verified news sources is accessible",
            },
        )
    except FetchError:
        return JSONResponse(
            status_code=502,
            content={"error": "Failed to fetch article content", "message": "Please try again later"},
        )

    return article.to_dict()
