"""Utility functions for formatting tool responses."""

import json
from typing import Any

from maximumsats_mcp.api.exceptions import (
    MalformedUpstreamResponseError,
    MaximumSatsAPIError,
)
from maximumsats_mcp.api.models import AdapterResult, Challenge, UpstreamResult
from maximumsats_mcp.utils.constants import DEFAULT_IMAGE_MODEL


def format_json(data: Any) -> str:
    """Pretty-print a JSON value with two-space indent."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_challenge(challenge: Challenge) -> str:
    """Render a payment challenge as retry instructions."""
    return (
        f"Payment required: {challenge.price_sats} sats\n\n"
        f"Lightning invoice: {challenge.payment_request}\n\n"
        f"After paying, retry with payment_hash: {challenge.payment_hash}"
    )


def format_image(image: str, model: str | None) -> str:
    """Summarize a generated image without inlining the base64 payload."""
    return (
        f"Image generated. Base64 PNG ({len(image)} chars). "
        f"Model: {model or DEFAULT_IMAGE_MODEL}"
    )


def format_result(result: UpstreamResult) -> str:
    """Render a successful upstream response."""
    if result.image:
        return format_image(result.image, result.model)
    if result.result:
        return result.result
    return format_json(result.data)


def format_adapter_result(outcome: AdapterResult) -> str:
    """Render either side of the adapter's tagged union."""
    if isinstance(outcome, Challenge):
        return format_challenge(outcome)
    return format_result(outcome)


def format_upstream_error(error: MaximumSatsAPIError) -> str:
    """Render an adapter failure as a tool result the agent can react to."""
    if isinstance(error, MalformedUpstreamResponseError):
        return f"Upstream returned an invalid response: {error}"
    return f"Upstream request failed: {error}"
