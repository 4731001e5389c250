"""Tests for tool registration, argument validation and dispatch."""

from unittest.mock import AsyncMock

import pytest

from conftest import SAMPLE_PUBKEY, StubUpstream, make_api, make_registry
from maximumsats_mcp.server import default_tools
from maximumsats_mcp.tools.registry import (
    InvalidArgumentsError,
    NoArgs,
    ToolRegistry,
    ToolSpec,
    UnknownToolError,
)

CATALOG = {
    "ask_bitcoin": ["prompt"],
    "generate_image": ["prompt"],
    "retry_with_payment": ["payment_hash", "endpoint", "prompt"],
    "wot_score": ["pubkey"],
    "wot_top": [],
    "wot_report": ["pubkey"],
    "nostr_summary": ["pubkey"],
    "ln_analysis": ["query"],
    "wot_sybil_check": ["pubkey"],
    "wot_trust_path": ["from_pubkey", "to_pubkey"],
    "wot_network_health": [],
    "wot_follow_quality": ["pubkey"],
    "wot_trust_circle": ["pubkey"],
    "wot_anomalies": ["pubkey"],
    "wot_predict_link": ["source", "target"],
    "wot_compare_providers": ["pubkey"],
    "wot_influence": ["pubkey", "other"],
}


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream.returning({"score": 87})


@pytest.fixture
def registry(upstream: StubUpstream) -> ToolRegistry:
    return make_registry(upstream)


class TestListTools:
    def test_catalog_complete(self, registry: ToolRegistry) -> None:
        names = [tool["name"] for tool in registry.list_tools()]
        assert sorted(names) == sorted(CATALOG)

    @pytest.mark.parametrize("name,required", sorted(CATALOG.items()))
    def test_required_fields(self, registry: ToolRegistry, name: str, required: list[str]) -> None:
        tool = next(t for t in registry.list_tools() if t["name"] == name)
        assert sorted(tool["schema"].get("required", [])) == sorted(required)
        assert tool["schema"]["type"] == "object"
        assert tool["description"]

    def test_paid_tools_accept_payment_hash(self, registry: ToolRegistry) -> None:
        tools = {t["name"]: t for t in registry.list_tools()}
        for name in ("ask_bitcoin", "generate_image", "wot_report", "nostr_summary", "ln_analysis"):
            assert "payment_hash" in tools[name]["schema"]["properties"]

    def test_prices_in_descriptions(self, registry: ToolRegistry) -> None:
        tools = {t["name"]: t["description"] for t in registry.list_tools()}
        assert "21 sats" in tools["ask_bitcoin"]
        assert "100 sats" in tools["generate_image"]
        assert "100 sats" in tools["wot_report"]
        assert "50 sats" in tools["nostr_summary"]
        assert "75 sats" in tools["ln_analysis"]


class TestValidation:
    @pytest.mark.asyncio
    async def test_wot_score_missing_pubkey(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(InvalidArgumentsError, match="pubkey") as exc_info:
            await registry.call_tool("wot_score", {})
        assert exc_info.value.errors[0]["type"] == "missing"
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_wrong_type(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(InvalidArgumentsError):
            await registry.call_tool("ask_bitcoin", {"prompt": 42})
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_empty_prompt(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(InvalidArgumentsError):
            await registry.call_tool("ask_bitcoin", {"prompt": "   "})
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_pubkey_must_be_hex(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(InvalidArgumentsError):
            await registry.call_tool("wot_score", {"pubkey": "npub1notahexkey"})
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_unexpected_argument(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(InvalidArgumentsError, match="limit"):
            await registry.call_tool("wot_top", {"limit": 10})
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_retry_rejects_unknown_endpoint(
        self, registry: ToolRegistry, upstream: StubUpstream
    ) -> None:
        with pytest.raises(InvalidArgumentsError, match="endpoint"):
            await registry.call_tool(
                "retry_with_payment",
                {"payment_hash": "abc", "endpoint": "/admin", "prompt": "q"},
            )
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_pubkey_whitespace_stripped(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        await registry.call_tool("wot_score", {"pubkey": f"  {SAMPLE_PUBKEY}\n"})
        assert upstream.last.url.params["pubkey"] == SAMPLE_PUBKEY


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry: ToolRegistry, upstream: StubUpstream) -> None:
        with pytest.raises(UnknownToolError, match="no_such_tool"):
            await registry.call_tool("no_such_tool", {})
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_handler_receives_validated_model(self, upstream: StubUpstream) -> None:
        handler = AsyncMock(return_value="done")
        spec = ToolSpec(name="noop", description="No-op", args_model=NoArgs, handler=handler)
        api = make_api(upstream)
        registry = ToolRegistry([spec], api)

        assert await registry.call_tool("noop") == "done"
        handler.assert_awaited_once_with(api, NoArgs())

    def test_duplicate_names_rejected(self, upstream: StubUpstream) -> None:
        tools = default_tools()
        with pytest.raises(ValueError, match="Duplicate tool name: ask_bitcoin"):
            ToolRegistry([*tools, tools[0]], make_api(upstream))

    def test_contains_and_len(self, registry: ToolRegistry) -> None:
        assert "wot_top" in registry
        assert "nope" not in registry
        assert len(registry) == len(CATALOG)
