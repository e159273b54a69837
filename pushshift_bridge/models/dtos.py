"""
Pydantic Data Transfer Objects (DTOs) for the Pushshift bridge.

These models are used for inbound request validation and for the response
shapes returned to the calling agent.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated


def _require_json_number(value: Any) -> Any:
    """Reject anything that is not a JSON number before pydantic's int coercion runs."""
    # bool is a subclass of int, and lax mode would happily turn "5" into 5
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("int_type", "Input should be a valid integer")
    return value


JsonInt = Annotated[int, BeforeValidator(_require_json_number)]
OptionalJsonInt = Annotated[Optional[int], BeforeValidator(_require_json_number)]


class SearchRequest(BaseModel):
    """
    Validated search request forwarded to the upstream Pushshift bridge.

    Once constructed every field satisfies its bounds, so nothing downstream
    re-checks them. Unknown keys in the inbound body are dropped.
    """
    subreddit: str = Field(..., min_length=1, description="Subreddit name, e.g. 'movies'")
    query: str = Field(..., min_length=1, description="Search keywords")
    size: JsonInt = Field(50, ge=1, le=500, description="Maximum number of results")
    # unix timestamps (seconds). Absent is valid, explicit null is not.
    before: OptionalJsonInt = Field(None, description="Only results created before this time")
    after: OptionalJsonInt = Field(None, description="Only results created after this time")

    model_config = ConfigDict(frozen=True, extra="ignore")

    def to_upstream_body(self) -> dict:
        """Body sent to the upstream bridge; absent time bounds are left out."""
        return self.model_dump(exclude_none=True)


class ValidationIssue(BaseModel):
    """
    One schema violation in an inbound body.
    """
    path: List[Union[str, int]]
    code: str
    message: str


class NormalisedComment(BaseModel):
    """
    Shape we return to the agent for every upstream item.

    ``None`` marks a value the upstream did not supply (or supplied with the
    wrong type); it is serialised as JSON null and the key is never dropped.
    """
    id: str
    author: Optional[str] = None
    body: str
    score: Optional[Union[int, float]] = None
    created_utc: Optional[Union[int, float]] = None
    permalink: Optional[str] = None
    subreddit: Optional[str] = None


class SearchResponse(BaseModel):
    """
    Successful search response.
    """
    ok: Literal[True] = True
    count: int
    comments: List[NormalisedComment]


class ErrorResponse(BaseModel):
    """
    Error body. Only the diagnostic fields relevant to the error kind are set.
    """
    error: str
    issues: Optional[List[ValidationIssue]] = None
    status: Optional[int] = None
    detail: Optional[str] = None

    def to_json_body(self) -> dict:
        return self.model_dump(exclude_none=True)
