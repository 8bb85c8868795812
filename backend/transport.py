"""
Outbound HTTP

Thin wrapper over httpx.AsyncClient used by every resource service.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    """Body and headers of a fetched resource."""
    body: bytes
    headers: httpx.Headers
    url: str                         # Final URL, after redirects


def with_default_scheme(link: str) -> str:
    """Prefix scheme-less links with http://."""
    if urlsplit(link).scheme:
        return link
    return "http://" + link.lstrip("/")


async def fetch(client: httpx.AsyncClient, link: str) -> FetchedPage:
    """
    Fetch a URL.

    Raises:
        TransportError: if the origin is unreachable or the status is not 2xx
    """
    url = with_default_scheme(link)
    try:
        logger.info(f"[Fetch] GET {url[:80]}")
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise TransportError(url, f"HTTP {e.response.status_code}", e.response.status_code) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(url, str(e) or type(e).__name__) from e

    return FetchedPage(
        body=response.content,
        headers=response.headers,
        url=str(response.url),
    )
