"""Exceptions raised while fetching and parsing remote pages."""

from typing import Optional


class GlueError(Exception):
    """Base exception for page fetching and extraction errors."""


class TransportError(GlueError):
    """Raised when the origin is unreachable or answers with a non-2xx status."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(GlueError):
    """Raised when a fetched document cannot be parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Failed to parse {url}: {reason}")
