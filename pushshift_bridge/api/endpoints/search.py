"""
Pushshift search endpoint.

The route accepts every verb and hands the call to the SearchPipeline, so a
wrong verb gets the pipeline's JSON 405 rather than the framework default.
"""

import logging

from fastapi import APIRouter, Depends, Request

from pushshift_bridge.api.responses import PrettyJSONResponse
from pushshift_bridge.config.settings import BridgeConfig
from pushshift_bridge.core.pipeline import SearchPipeline

router = APIRouter()
logger = logging.getLogger(__name__)

SEARCH_ROUTE = "/pushshift-bridge"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# Dependency to get the process-wide pipeline instance
async def get_pipeline(request: Request) -> SearchPipeline:
    """Get the pipeline built at startup, building one on first use if startup did not."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        logger.info("No pipeline on app state, building one from settings")
        pipeline = SearchPipeline(BridgeConfig.from_settings())
        request.app.state.pipeline = pipeline
    return pipeline


@router.api_route(
    SEARCH_ROUTE,
    methods=ALL_METHODS,
    response_class=PrettyJSONResponse,
    summary="Search Pushshift",
    description="Authenticated search forwarded to the upstream Pushshift bridge.",
)
async def pushshift_search(
    request: Request,
    pipeline: SearchPipeline = Depends(get_pipeline),
) -> PrettyJSONResponse:
    """
    Search comments through the upstream bridge.

    Body: ``{"subreddit": str, "query": str, "size"?: int, "before"?: int, "after"?: int}``
    with the ``x-mcp-key`` header. Responds ``{"ok": true, "count": n, "comments": [...]}``
    or ``{"error": ...}`` with status 400, 401, 405, 500 or 502.
    """
    result = await pipeline.handle(request.method, request.headers, request.body)
    return PrettyJSONResponse(content=result.payload, status_code=result.status_code)
