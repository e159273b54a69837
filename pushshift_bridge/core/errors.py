"""
Error taxonomy for the search pipeline.

Every terminal rejection is a ``BridgeError`` subclass carrying the HTTP status
it maps to. Stages raise them; ``SearchPipeline.handle`` renders them.
"""

from typing import List, Optional

from pushshift_bridge.models.dtos import ErrorResponse, ValidationIssue


class BridgeError(Exception):
    """Base class for all terminal pipeline rejections."""

    status_code: int = 500
    default_message: str = "Unexpected server error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message)


class MethodNotAllowed(BridgeError):
    """Caller used a verb other than POST."""

    status_code = 405
    default_message = "Method not allowed. Use POST."


class ServerMisconfigured(BridgeError):
    """A required secret is missing from the deployment."""

    status_code = 500
    default_message = "Server is not configured."

    def __init__(self, setting_name: str):
        self.setting_name = setting_name
        super().__init__(f"{setting_name} is not configured on the server.")


class Unauthorized(BridgeError):
    """The x-mcp-key header is missing or does not match."""

    status_code = 401
    default_message = "Unauthorised."


class MalformedBody(BridgeError):
    """The request body is not valid JSON."""

    status_code = 400
    default_message = "Request body must be valid JSON."


class InvalidRequest(BridgeError):
    """The body parsed but does not match the search request schema."""

    status_code = 400
    default_message = "Invalid request body."

    def __init__(self, issues: List[ValidationIssue], message: Optional[str] = None):
        self.issues = issues
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, issues=self.issues)


class UpstreamError(BridgeError):
    """The upstream bridge answered with a non-success status."""

    status_code = 502
    default_message = "Upstream Pushshift bridge error."

    def __init__(self, upstream_status: int, detail: str = ""):
        self.upstream_status = upstream_status
        self.detail = detail
        super().__init__()

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, status=self.upstream_status, detail=self.detail)


class UnexpectedError(BridgeError):
    """Catch-all for failures no other kind describes."""

    status_code = 500
    default_message = "Unexpected server error."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or "Unknown error"
        super().__init__()

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, detail=self.detail)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnexpectedError":
        return cls(str(exc) or None)
