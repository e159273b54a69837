import json
import os
import sys
from typing import Any, Callable, List

import httpx
import pytest

# Add project root to path so the package imports without installation
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, project_root)

from pushshift_bridge.config.settings import BridgeConfig, get_settings

BRIDGE_URL = "https://bridge.example.test/search"
API_KEY = "test-mcp-key"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bridge_config() -> BridgeConfig:
    return BridgeConfig(bridge_url=BRIDGE_URL, api_key=API_KEY)


@pytest.fixture
def auth_headers() -> dict:
    return {"x-mcp-key": API_KEY}


@pytest.fixture
def upstream_calls() -> List[httpx.Request]:
    """Requests seen by the mock upstream, in order."""
    return []


@pytest.fixture
def make_upstream(upstream_calls) -> Callable[..., httpx.AsyncClient]:
    """
    Build an httpx.AsyncClient whose transport answers with a canned response.

    ``json_body`` is serialised; ``content`` is sent verbatim; ``exc`` is raised
    instead of answering.
    """
    def _factory(status_code: int = 200, json_body: Any = None, content: Any = None, exc: Exception = None):
        def handler(request: httpx.Request) -> httpx.Response:
            upstream_calls.append(request)
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, content=json.dumps(json_body).encode("utf-8"),
                                  headers={"content-type": "application/json"})

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory
