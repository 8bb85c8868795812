"""
Shared test fixtures

- memory_store: a fresh in-process cache
- make_context: builds a ServiceContext whose HTTP client talks to fake origins
- origin: helper building an httpx.MockTransport handler from a URL map
"""

import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import httpx
import pytest

# Make the backend modules importable
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from cache import MemoryStore, CacheStore
from context import ServiceContext


PAGE_URL = "https://alice.example/"


def origin(pages: Dict[str, httpx.Response], calls: Optional[list] = None) -> Callable:
    """
    Build a MockTransport handler serving the given responses by URL.

    Unknown URLs answer 404. Every requested URL is appended to calls.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        response = pages.get(url)
        if response is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    return handler


def html_page(body: str, headers: Optional[dict] = None) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"Content-Type": "text/html; charset=utf-8", **(headers or {})},
        content=body.encode("utf-8"),
    )


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def make_context(memory_store):
    """
    Factory fixture:

    ```python
    ctx = make_context({"https://alice.example/": html_page("...")})
    ```
    """
    def factory(
        pages: Dict[str, httpx.Response],
        calls: Optional[list] = None,
        store: Optional[CacheStore] = None,
    ) -> ServiceContext:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(origin(pages, calls)),
            follow_redirects=True,
        )
        return ServiceContext(cache=store if store is not None else memory_store, http_client=client)

    return factory
