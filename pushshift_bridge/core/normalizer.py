"""
Normalisation of upstream search payloads into NormalisedComment records.

Upstream providers disagree on where the item list lives and on which fields
each item carries, so every lookup here has a fallback. Nothing in this module
raises on bad upstream data.
"""

import json
import math
from typing import Any, Dict, List, Optional, Union

from pushshift_bridge.models.dtos import NormalisedComment

# Checked in this order; the first key holding a non-null value wins
CONTAINER_KEYS = ("comments", "data", "results")

Number = Union[int, float]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _as_text(value: Any) -> str:
    """Render a JSON value as text the way it appeared on the wire."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _optional_text(item: Dict[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    if value is None:
        return None
    return _as_text(value)


def _first_present(item: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _first_number(item: Dict[str, Any], *keys: str) -> Optional[Number]:
    for key in keys:
        value = item.get(key)
        if _is_number(value):
            return value
    return None


def extract_items(payload: Any) -> List[Any]:
    """
    Find the item list in an upstream payload.

    Supports ``{"comments": [...]}``, ``{"data": [...]}`` and
    ``{"results": [...]}``. Anything else yields an empty list.
    """
    if not isinstance(payload, dict):
        return []
    for key in CONTAINER_KEYS:
        value = payload.get(key)
        if value is not None:
            return value if isinstance(value, list) else []
    return []


def normalise_comment(item: Any) -> NormalisedComment:
    """
    Map one upstream item to a NormalisedComment.

    Args:
        item: Upstream item; non-dict values are treated as an empty item

    Returns:
        NormalisedComment with every field set or explicitly None
    """
    if not isinstance(item, dict):
        item = {}

    raw_id = item.get("id")
    body = _first_present(item, "body", "selftext")
    return NormalisedComment(
        id="" if raw_id is None else _as_text(raw_id),
        author=_optional_text(item, "author"),
        body="" if body is None else _as_text(body),
        score=_first_number(item, "score"),
        created_utc=_first_number(item, "created_utc", "created"),
        permalink=_optional_text(item, "permalink"),
        subreddit=_optional_text(item, "subreddit"),
    )


def normalise_payload(payload: Any) -> List[NormalisedComment]:
    """Normalise every item of an upstream payload, preserving upstream order."""
    return [normalise_comment(item) for item in extract_items(payload)]
