from .dtos import (
    ErrorResponse,
    NormalisedComment,
    SearchRequest,
    SearchResponse,
    ValidationIssue,
)

__all__ = [
    "ErrorResponse",
    "NormalisedComment",
    "SearchRequest",
    "SearchResponse",
    "ValidationIssue",
]
