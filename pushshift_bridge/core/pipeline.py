"""
Search pipeline orchestration.

Runs the stages in a fixed order for each inbound call:
Authenticator -> RequestValidator -> UpstreamBridge -> normaliser.
The first stage to fail ends the call with its error response.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from pushshift_bridge.config.settings import BridgeConfig
from pushshift_bridge.core.authenticator import Authenticator
from pushshift_bridge.core.errors import BridgeError, UnexpectedError
from pushshift_bridge.core.normalizer import normalise_payload
from pushshift_bridge.core.request_validator import RequestValidator
from pushshift_bridge.core.upstream_bridge import UpstreamBridge
from pushshift_bridge.models.dtos import SearchResponse

logger = logging.getLogger(__name__)

BodyReader = Callable[[], Awaitable[Union[bytes, str]]]


@dataclass(frozen=True)
class PipelineResult:
    """Final status code and JSON body for one call."""

    status_code: int
    payload: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class SearchPipeline:
    """
    Stateless request handler composed from the four pipeline stages.

    One instance serves every call; nothing is stored between calls apart
    from the read-only configuration and the upstream HTTP client.
    """

    def __init__(
        self,
        config: BridgeConfig,
        authenticator: Optional[Authenticator] = None,
        validator: Optional[RequestValidator] = None,
        bridge: Optional[UpstreamBridge] = None,
    ):
        self.config = config
        self.authenticator = authenticator or Authenticator(config)
        self.validator = validator or RequestValidator()
        self.bridge = bridge or UpstreamBridge(config)

    async def aclose(self) -> None:
        await self.bridge.aclose()

    async def handle(
        self,
        method: str,
        headers: Mapping[str, str],
        body: Union[bytes, str, BodyReader],
    ) -> PipelineResult:
        """
        Process one inbound call.

        Args:
            method: HTTP verb of the inbound call
            headers: Inbound headers
            body: Raw body, or an async callable returning it. A callable is
                only awaited once authentication has passed.

        Returns:
            PipelineResult with status 200 on success or the error kind's status.
        """
        try:
            self.authenticator.authenticate(method, headers)

            raw_body = await body() if callable(body) else body
            request = self.validator.validate(raw_body)

            payload = await self.bridge.search(request)
            comments = normalise_payload(payload)

            logger.info(
                f"Search r/{request.subreddit} size={request.size} returned {len(comments)} comments"
            )
            response = SearchResponse(count=len(comments), comments=comments)
            return PipelineResult(200, response.model_dump())

        except BridgeError as e:
            if e.status_code >= 500:
                logger.error(f"Search failed with {e.status_code}: {e.message}")
            else:
                logger.warning(f"Search rejected with {e.status_code}: {e.message}")
            return PipelineResult(e.status_code, e.to_response().to_json_body())

        except Exception as e:
            logger.exception(f"Unexpected error handling search: {e}")
            error = UnexpectedError.from_exception(e)
            return PipelineResult(error.status_code, error.to_response().to_json_body())
