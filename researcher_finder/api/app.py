"""
FastAPI application definition.

This module creates and configures the FastAPI application instance,
including logging, middleware, exception handlers, and router
registration.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from researcher_finder import __version__
from researcher_finder.api.routes import missing_query_message, router
from researcher_finder.core.config import Settings
from researcher_finder.core.exceptions import ConfigurationMissing

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        content = {"error": "Not Found", "path": request.url.path}
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are reported like a missing query
    body = exc.body if isinstance(exc.body, dict) else {}
    language = body.get("language") if body.get("language") in ("ja", "en") else "ja"
    logger.info(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": missing_query_message(language)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings; read from the environment if omitted

    Raises:
        ConfigurationMissing: In strict startup mode, if required keys are absent
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)

    missing = settings.missing_required()
    if missing:
        if settings.is_strict:
            logger.error(f"Missing required configuration: {', '.join(missing)}")
            raise ConfigurationMissing(missing)
        logger.warning(
            f"Missing configuration ({', '.join(missing)}), stub behaviour will be used"
        )

    app = FastAPI(
        title="Researcher Finder API",
        description="API for recommending researchers by research topic",
        version=__version__,
    )
    app.state.settings = settings
    app.state.pipeline = None

    # CORS middleware for frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register API routes
    app.include_router(router)

    logger.info(f"Using index: {settings.QDRANT_COLLECTION}")
    return app
