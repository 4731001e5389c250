"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from maximumsats_mcp.api.client import MaximumSatsAPI
from maximumsats_mcp.server import default_tools
from maximumsats_mcp.tools.registry import ToolRegistry

SAMPLE_PUBKEY = "82341f882b6eabcd2ba7f1ef90aad961cf074af15b9ef44a09f9d2a8fbfbe6a2"
OTHER_PUBKEY = "3bf0c63fcb93463407af97a5e5ee64fa883d107ef9e558472c4eb9aaaefa459d"
SAMPLE_INVOICE = "lnbc210n1pjq8zq3pp5xyz"
SAMPLE_HASH = "a" * 64


def challenge_body(price_sats: int = 21, payment_hash: str = SAMPLE_HASH) -> dict[str, Any]:
    """POST-style L402 challenge as the paid endpoints return it."""
    return {
        "status": "payment_required",
        "protocols": {
            "l402": {
                "price_sats": price_sats,
                "payment_request": SAMPLE_INVOICE,
                "payment_hash": payment_hash,
            }
        },
    }


class StubUpstream:
    """Programmable upstream that records every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)

    @classmethod
    def returning(cls, body: Any, status_code: int = 200) -> "StubUpstream":
        return cls(lambda request: httpx.Response(status_code, json=body))


class PaywallUpstream(StubUpstream):
    """Upstream that challenges until it sees the hash it issued."""

    def __init__(self, price_sats: int = 21, result: dict[str, Any] | None = None) -> None:
        super().__init__(self._respond)
        self.price_sats = price_sats
        self.result = result or {"result": "Bitcoin is a peer-to-peer electronic cash system."}

    def _respond(self, request: httpx.Request) -> httpx.Response:
        auth = request.headers.get("authorization")
        body = json.loads(request.content) if request.content else {}
        if auth == f"L402 {SAMPLE_HASH}" or body.get("payment_hash") == SAMPLE_HASH:
            return httpx.Response(200, json=self.result)
        return httpx.Response(402, json=challenge_body(self.price_sats))


def make_api(upstream: StubUpstream) -> MaximumSatsAPI:
    return MaximumSatsAPI("https://maximumsats.test", timeout=5.0, transport=upstream.transport)


def make_registry(upstream: StubUpstream) -> ToolRegistry:
    return ToolRegistry(default_tools(), make_api(upstream))


@pytest.fixture
def paywall() -> PaywallUpstream:
    return PaywallUpstream()


@pytest.fixture
def paywall_registry(paywall: PaywallUpstream) -> ToolRegistry:
    return make_registry(paywall)
