"""Shared handler step: one upstream call, rendered as text."""

from typing import Any

from maximumsats_mcp.api.client import MaximumSatsAPI
from maximumsats_mcp.api.exceptions import MaximumSatsAPIError
from maximumsats_mcp.api.models import HttpMethod
from maximumsats_mcp.utils.formatters import format_adapter_result, format_upstream_error


async def relay(
    api: MaximumSatsAPI,
    endpoint: str,
    method: HttpMethod,
    payload: dict[str, Any] | None = None,
    payment_hash: str | None = None,
) -> str:
    """Execute one upstream call and render the outcome.

    Adapter failures come back as text; the host only understands tool
    results.
    """
    try:
        outcome = await api.execute(endpoint, method, payload, payment_hash)
    except MaximumSatsAPIError as e:
        return format_upstream_error(e)
    return format_adapter_result(outcome)
