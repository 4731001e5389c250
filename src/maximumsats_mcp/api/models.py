"""Pydantic models for MaximumSats upstream responses.

Upstream bodies are loosely typed JSON. ``decode_upstream`` turns one into
an explicit ``Challenge | UpstreamResult`` so callers never probe optional
fields themselves.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from maximumsats_mcp.api.exceptions import MalformedUpstreamResponseError


class Challenge(BaseModel):
    """L402 payment challenge: pay ``payment_request``, then retry with ``payment_hash``.

    Accepts both the POST-style keys (``price_sats``/``payment_request``)
    and the free-tier GET keys (``amount_sats``/``invoice``).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    price_sats: int = Field(gt=0, validation_alias=AliasChoices("price_sats", "amount_sats"))
    payment_request: str = Field(
        min_length=1, validation_alias=AliasChoices("payment_request", "invoice")
    )
    payment_hash: str = Field(min_length=1)


class UpstreamResult(BaseModel):
    """Successful upstream response, kept as raw JSON plus convenience fields."""

    model_config = ConfigDict(frozen=True)

    data: Any = None
    result: str | None = None
    image: str | None = None
    model: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpstreamResult:
        """Wrap a raw JSON value, lifting ``result``/``image``/``model`` when they are strings."""
        fields: dict[str, str] = {}
        if isinstance(data, dict):
            for key in ("result", "image", "model"):
                value = data.get(key)
                if isinstance(value, str):
                    fields[key] = value
        return cls(data=data, **fields)


AdapterResult = Union[Challenge, UpstreamResult]

HttpMethod = Literal["GET", "POST"]


def _l402_block(data: dict[str, Any]) -> dict[str, Any] | None:
    protocols = data.get("protocols")
    if isinstance(protocols, dict) and isinstance(protocols.get("l402"), dict):
        return protocols["l402"]
    return None


def _is_free_tier_challenge(data: dict[str, Any]) -> bool:
    message = data.get("message")
    if isinstance(data.get("result"), str) or isinstance(data.get("image"), str):
        return False
    return (
        isinstance(message, str)
        and "Pay" in message
        and all(key in data for key in ("invoice", "payment_hash", "amount_sats"))
    )


def _parse_challenge(fields: dict[str, Any]) -> Challenge:
    try:
        return Challenge.model_validate(fields)
    except ValidationError as e:
        raise MalformedUpstreamResponseError(
            f"Payment challenge is missing invoice details: {e.error_count()} invalid field(s)"
        ) from e


def decode_upstream(data: Any, method: HttpMethod = "POST") -> AdapterResult:
    """Classify a decoded JSON body as a payment challenge or an opaque result.

    Args:
        data: The parsed JSON body
        method: Method of the request; the free-tier quota message only
            arrives on GET lookups

    Returns:
        ``Challenge`` when the body asks for payment, else ``UpstreamResult``

    Raises:
        MalformedUpstreamResponseError: If the body carries a challenge
            marker but not a usable invoice, hash and price
    """
    if not isinstance(data, dict):
        return UpstreamResult.from_json(data)

    l402 = _l402_block(data)
    if l402 is not None or data.get("status") == "payment_required":
        return _parse_challenge(l402 if l402 is not None else data)

    if method == "GET" and _is_free_tier_challenge(data):
        return _parse_challenge(data)

    return UpstreamResult.from_json(data)
