"""Parsing and schema validation of inbound search bodies."""

import json
import logging
from typing import Any, List, Union

from pydantic import ValidationError

from pushshift_bridge.core.errors import InvalidRequest, MalformedBody
from pushshift_bridge.models.dtos import SearchRequest, ValidationIssue

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON even though json.loads accepts them
    raise ValueError(f"Invalid JSON constant: {name}")


def issues_from_error(error: ValidationError) -> List[ValidationIssue]:
    """
    Flatten a pydantic ValidationError into field path + reason entries.

    Args:
        error: Error raised by ``SearchRequest.model_validate``

    Returns:
        One ValidationIssue per failing field, in pydantic's reporting order.
    """
    return [
        ValidationIssue(path=list(item["loc"]), code=item["type"], message=item["msg"])
        for item in error.errors()
    ]


class RequestValidator:
    """Turns a raw request body into a SearchRequest or a terminal rejection."""

    def parse(self, raw_body: Union[bytes, str]) -> Any:
        try:
            return json.loads(raw_body, parse_constant=_reject_constant)
        except (ValueError, TypeError, RecursionError):
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors;
            # RecursionError comes from pathologically nested arrays/objects
            raise MalformedBody()

    def validate(self, raw_body: Union[bytes, str]) -> SearchRequest:
        """
        Parse and validate an inbound body.

        Raises:
            MalformedBody: body is not valid JSON
            InvalidRequest: body is JSON but fails the schema
        """
        data = self.parse(raw_body)
        try:
            return SearchRequest.model_validate(data)
        except ValidationError as e:
            issues = issues_from_error(e)
            fields = ", ".join(".".join(str(p) for p in issue.path) or "<body>" for issue in issues)
            logger.warning(f"Rejected search request, failing fields: {fields}")
            raise InvalidRequest(issues)
