"""
API route definitions.

This module defines the HTTP endpoints for the researcher search service:
- GET  /                - Service descriptor
- GET  /api/health      - Liveness (JSON)
- GET  /health          - Liveness (plain text)
- GET  /api/env-check   - Which configuration keys are set
- GET  /api/index-info  - Summary of the Qdrant collection
- POST /api/search      - Recommend researchers for a research topic
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from researcher_finder import __version__
from researcher_finder.core.config import Settings
from researcher_finder.core.schemas import ErrorResponse, SearchRequest, ServiceInfo
from researcher_finder.retrieval.pipeline import RetrievalPipeline
from researcher_finder.vectorstore.client import describe_collection, get_qdrant_client

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_QUERY_MESSAGES = {
    "ja": "リクエストボディに 'query' が含まれていません。",
    "en": "Missing 'query' in request body.",
}


def missing_query_message(language: str = "ja") -> str:
    return MISSING_QUERY_MESSAGES.get(language, MISSING_QUERY_MESSAGES["ja"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> RetrievalPipeline:
    """Get or lazily create the application's pipeline."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = RetrievalPipeline(request.app.state.settings)
        request.app.state.pipeline = pipeline
    return pipeline


@router.get("/", response_model=ServiceInfo)
async def root():
    """Service descriptor."""
    return ServiceInfo(
        service="Researcher Finder API",
        version=__version__,
        endpoints={
            "search": "POST /api/search",
            "health": "GET /api/health",
            "env_check": "GET /api/env-check",
            "index_info": "GET /api/index-info",
        },
    )


@router.get("/api/health")
async def health(settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "index": settings.QDRANT_COLLECTION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", response_class=PlainTextResponse)
async def health_plain():
    return "OK"


@router.get("/api/env-check")
async def env_check(settings: Settings = Depends(get_settings)):
    """Report SET/MISSING for each service key; values are never returned."""
    return settings.env_status()


@router.get("/api/index-info")
async def index_info(settings: Settings = Depends(get_settings)):
    """Summary of the configured Qdrant collection (debugging aid)."""
    try:
        client = get_qdrant_client(settings)
        return await asyncio.to_thread(
            describe_collection, client, settings.QDRANT_COLLECTION
        )
    except Exception as e:
        logger.error(f"Failed to get index info: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to get index info"})


@router.post("/api/search")
async def search(
    body: Optional[SearchRequest] = Body(default=None),
    pipeline: RetrievalPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    """
    Recommend researchers for a research topic.

    Returns a JSON array of researchers (possibly empty). A missing or
    blank query is rejected with 400 before any external call is made.
    """
    body = body or SearchRequest()
    if not body.query or not body.query.strip():
        raise HTTPException(status_code=400, detail=missing_query_message(body.language))

    try:
        return await pipeline.search(body)
    except Exception as e:
        logger.exception(f"Search failed for query {body.query!r}")
        error = ErrorResponse(
            error="Internal server error.",
            details=None if settings.is_production else str(e),
        )
        return JSONResponse(status_code=500, content=error.model_dump(exclude_none=True))
