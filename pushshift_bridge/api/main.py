"""
FastAPI application for the Pushshift bridge.

This module initializes and configures the FastAPI application that serves
the search endpoint.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from pushshift_bridge.api.endpoints import search
from pushshift_bridge.api.responses import PrettyJSONResponse
from pushshift_bridge.config.settings import BridgeConfig, get_settings
from pushshift_bridge.core.errors import MethodNotAllowed
from pushshift_bridge.core.pipeline import SearchPipeline
from pushshift_bridge.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
SEARCH_PATH = API_PREFIX + search.SEARCH_ROUTE


def create_app(pipeline: Optional[SearchPipeline] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        pipeline: Prebuilt pipeline (tests). When omitted, one is built from
            settings at startup.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager for startup and shutdown events.

        Builds the search pipeline from settings on startup and closes its
        upstream HTTP client on shutdown.
        """
        setup_logging()
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

        missing = settings.missing_secrets()
        if missing:
            # Keep serving: every search call will answer 500 naming the variable
            logger.error(f"Missing configuration: {', '.join(missing)}")

        if getattr(app.state, "pipeline", None) is None:
            app.state.pipeline = SearchPipeline(BridgeConfig.from_settings(settings))

        yield

        logger.info("Shutting down application")
        await app.state.pipeline.aclose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Authenticated search bridge in front of a Pushshift-style provider.",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {"name": "search", "description": "Pushshift search"},
            {"name": "health", "description": "Health check and monitoring"},
        ],
    )
    app.state.pipeline = pipeline

    app.include_router(search.router, prefix=API_PREFIX, tags=["search"])

    @app.exception_handler(StarletteHTTPException)
    async def search_method_not_allowed(request: Request, exc: StarletteHTTPException):
        # Verbs outside the route's method list are rejected by the router before
        # the pipeline runs; give them the same JSON body as the pipeline's 405
        if exc.status_code == 405 and request.url.path == SEARCH_PATH:
            error = MethodNotAllowed()
            return PrettyJSONResponse(content=error.to_response().to_json_body(), status_code=error.status_code)
        return await http_exception_handler(request, exc)

    @app.get("/health", tags=["health"], summary="Health Check")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Service status, version, timestamp and whether the required
            secrets are configured (never their values).
        """
        missing = settings.missing_secrets()
        return {
            "status": "healthy" if not missing else "misconfigured",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "bridge_url_configured": "PUSHSHIFT_BRIDGE_URL" not in missing,
            "api_key_configured": "PUSHSHIFT_MCP_KEY" not in missing,
        }

    return app


# Create the application instance
app = create_app()
