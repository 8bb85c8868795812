"""
Cacheability Policy
缓存策略

Decides whether a fetched resource may be cached, and until when,
from the HTTP response headers of the origin server.

Rules:
- No Cache-Control at all: cacheable for DEFAULT_CACHE_WINDOW
- Cache-Control without "public": never cached
- "public" with max-age: cacheable for max-age seconds
- "public" without max-age: cacheable until the Expires header
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

import httpx

DEFAULT_CACHE_WINDOW = timedelta(hours=24)

# Largest delta-seconds a cache must honour (RFC 9111 section 1.2.2)
MAX_AGE_LIMIT = 2147483648

# RFC 1123 date as sent in Expires / Last-Modified headers
HTTP_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"

HeadersLike = Union[httpx.Headers, Mapping[str, str], Sequence[Tuple[str, str]]]


@dataclass(frozen=True)
class CacheabilityDecision:
    """
    Whether a response may be cached and when it expires.

    expires_at is only meaningful when cacheable is True. A cacheable
    decision may still carry expires_at=None (an unparsable Expires header),
    in which case nothing must be written to the cache.
    """
    cacheable: bool
    expires_at: Optional[datetime] = None


NOT_CACHEABLE = CacheabilityDecision(cacheable=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_http_date(moment: datetime) -> str:
    """Format an aware datetime as an RFC 1123 HTTP date."""
    return moment.astimezone(timezone.utc).strftime(HTTP_DATE_FORMAT)


def parse_http_date(value: str) -> Optional[datetime]:
    """Parse an RFC 1123 HTTP date, returning None when it is malformed."""
    try:
        parsed = datetime.strptime(value.strip(), HTTP_DATE_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def decide(headers: HeadersLike, now: Optional[datetime] = None) -> CacheabilityDecision:
    """
    Derive a cacheability decision from response headers.

    Args:
        headers: Origin response headers (httpx.Headers, a mapping or (name, value) pairs)
        now: Reference time, defaults to the current UTC time

    Returns:
        CacheabilityDecision
    """
    now = now or _utcnow()
    headers = httpx.Headers(headers)

    if "cache-control" not in headers:
        return CacheabilityDecision(cacheable=True, expires_at=now + DEFAULT_CACHE_WINDOW)

    directives = [
        d.strip().lower()
        for d in headers.get_list("cache-control", split_commas=True)
    ]
    if "public" not in directives:
        return NOT_CACHEABLE

    for directive in directives:
        if directive.startswith("max-age="):
            try:
                seconds = int(directive[len("max-age="):])
            except ValueError:
                return NOT_CACHEABLE
            seconds = min(max(seconds, 0), MAX_AGE_LIMIT)
            return CacheabilityDecision(cacheable=True, expires_at=now + timedelta(seconds=seconds))

    # An unparsable (or missing) Expires yields a cacheable decision with
    # no expiry at all; callers must not store such results.
    expires_at = parse_http_date(headers.get("expires", ""))
    return CacheabilityDecision(cacheable=True, expires_at=expires_at)


def combine(a: CacheabilityDecision, b: CacheabilityDecision) -> CacheabilityDecision:
    """
    Merge two decisions into the more conservative one.

    The result is cacheable only when both inputs are, and expires at the
    earlier of the two expiry instants. An unknown expiry on either side
    makes the combined expiry unknown, so the result never outlives a part.
    """
    if not (a.cacheable and b.cacheable):
        return NOT_CACHEABLE

    if a.expires_at is None or b.expires_at is None:
        return CacheabilityDecision(cacheable=True, expires_at=None)
    return a if a.expires_at <= b.expires_at else b


def response_headers(decision: CacheabilityDecision) -> Dict[str, str]:
    """
    Client-facing cache headers for a decision.

    Returns the Cache-Control/Expires pair for a cacheable decision with a
    known expiry, and an empty dict otherwise.
    """
    if not decision.cacheable or decision.expires_at is None:
        return {}
    return {
        "Cache-Control": "public",
        "Expires": format_http_date(decision.expires_at),
    }
