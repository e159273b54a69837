"""
HTTP client for the upstream Pushshift bridge.

Sends one POST per validated search request and classifies the outcome:
parsed JSON on success, ``UpstreamError`` on a non-success status. Anything
else (transport failure, unparsable success body) propagates to the
pipeline's catch-all.
"""

import logging
from typing import Any, Optional

import httpx

from pushshift_bridge.config.settings import BridgeConfig
from pushshift_bridge.core.errors import ServerMisconfigured, UpstreamError
from pushshift_bridge.models.dtos import SearchRequest

logger = logging.getLogger(__name__)


class UpstreamBridge:
    """
    Async client for the configured upstream bridge.

    There is no retry logic and no timeout unless the deployment configures
    one. The underlying ``httpx.AsyncClient`` can be injected (tests, shared
    app client) or is created on first use.
    """

    def __init__(self, config: BridgeConfig, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the upstream bridge.

        Args:
            config: Pipeline configuration holding the bridge URL
            client: Optional preconfigured HTTP client
        """
        self.config = config
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"content-type": "application/json"},
                timeout=httpx.Timeout(self.config.timeout_seconds),
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this bridge created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def search(self, request: SearchRequest) -> Any:
        """
        Forward a search request and return the upstream JSON payload.

        Args:
            request: Validated search request

        Returns:
            Parsed upstream JSON, untrusted and unshaped

        Raises:
            UpstreamError: upstream answered with a non-2xx status
            httpx.HTTPError: the call itself failed
            ValueError: the success body is not JSON
        """
        if not self.config.bridge_url:
            raise ServerMisconfigured("PUSHSHIFT_BRIDGE_URL")

        logger.debug(f"Forwarding search for r/{request.subreddit} (size={request.size}) upstream")
        response = await self.client.post(
            self.config.bridge_url,
            json=request.to_upstream_body(),
            follow_redirects=True,
        )

        if not response.is_success:
            detail = self._read_detail(response)
            logger.warning(f"Upstream bridge returned {response.status_code}")
            raise UpstreamError(response.status_code, detail)

        return response.json()

    def _read_detail(self, response: httpx.Response) -> str:
        """First ``detail_limit`` characters of the upstream body, or '' if unreadable."""
        try:
            text = response.text
        except (UnicodeDecodeError, LookupError, httpx.HTTPError):
            text = ""
        return text[: self.config.detail_limit]
