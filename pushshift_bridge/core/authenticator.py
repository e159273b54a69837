"""Method and shared-secret checks that run before any other work."""

import hmac
import logging
from typing import Mapping, Optional

from pushshift_bridge.config.settings import BridgeConfig
from pushshift_bridge.core.errors import MethodNotAllowed, ServerMisconfigured, Unauthorized

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-mcp-key"
ALLOWED_METHOD = "POST"


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # Starlette headers are already case-insensitive; plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


class Authenticator:
    """
    Decides whether a call may proceed.

    Checks run in a fixed order: verb, deployment secrets, caller credential.
    A missing secret is a server fault (500) and is reported before the
    caller's credential is looked at.
    """

    def __init__(self, config: BridgeConfig):
        self.config = config

    def authenticate(self, method: str, headers: Mapping[str, str]) -> None:
        """
        Raise the matching rejection, or return None to let the call through.

        Raises:
            MethodNotAllowed: method is not POST
            ServerMisconfigured: bridge URL or API key is not configured
            Unauthorized: x-mcp-key header missing or mismatched
        """
        if method.upper() != ALLOWED_METHOD:
            raise MethodNotAllowed()

        if not self.config.bridge_url:
            logger.error("PUSHSHIFT_BRIDGE_URL is not configured")
            raise ServerMisconfigured("PUSHSHIFT_BRIDGE_URL")

        if not self.config.api_key:
            logger.error("PUSHSHIFT_MCP_KEY is not configured")
            raise ServerMisconfigured("PUSHSHIFT_MCP_KEY")

        supplied = _get_header(headers, AUTH_HEADER)
        if not supplied or not hmac.compare_digest(
            supplied.encode("utf-8"), self.config.api_key.encode("utf-8")
        ):
            raise Unauthorized()
