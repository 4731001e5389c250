"""Exception hierarchy for MaximumSats upstream calls."""

from __future__ import annotations


class MaximumSatsAPIError(Exception):
    """Base exception for upstream API operations."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamUnreachableError(MaximumSatsAPIError):
    """Network/DNS failure or request timeout."""


class MalformedUpstreamResponseError(MaximumSatsAPIError):
    """Body is not JSON, or a challenge body is missing its invoice fields."""
