"""Nostr Web-of-Trust lookups (free, or metered by payment hash / IP)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from maximumsats_mcp.api.client import MaximumSatsAPI
from maximumsats_mcp.tools.registry import HexPubkey, NoArgs, PaymentHash, ToolArgs, ToolSpec
from maximumsats_mcp.tools.relay import relay
from maximumsats_mcp.utils.constants import (
    WOT_ANOMALIES_PATH,
    WOT_COMPARE_PROVIDERS_PATH,
    WOT_FOLLOW_QUALITY_PATH,
    WOT_INFLUENCE_PATH,
    WOT_NETWORK_HEALTH_PATH,
    WOT_PREDICT_LINK_PATH,
    WOT_SCORE_PATH,
    WOT_SYBIL_PATH,
    WOT_TOP_PATH,
    WOT_TRUST_CIRCLE_PATH,
    WOT_TRUST_PATH_PATH,
)


class MeteredArgs(ToolArgs):
    payment_hash: PaymentHash = None


class PubkeyLookupArgs(MeteredArgs):
    pubkey: HexPubkey


class TrustPathArgs(MeteredArgs):
    from_pubkey: HexPubkey
    to_pubkey: HexPubkey


class PredictLinkArgs(MeteredArgs):
    source: HexPubkey
    target: HexPubkey


class InfluenceArgs(MeteredArgs):
    pubkey: HexPubkey
    other: HexPubkey
    action: Literal["follow", "unfollow"] = Field(
        "follow", description="Simulate pubkey following or unfollowing other"
    )


async def _lookup(
    api: MaximumSatsAPI, path: str, args: MeteredArgs, **params: Any
) -> str:
    return await relay(api, path, "GET", params, args.payment_hash)


async def wot_top_tool(api: MaximumSatsAPI, args: NoArgs) -> str:
    return await relay(api, WOT_TOP_PATH, "GET")


async def wot_score_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_SCORE_PATH, args, pubkey=args.pubkey)


async def wot_sybil_check_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_SYBIL_PATH, args, pubkey=args.pubkey)


async def wot_trust_path_tool(api: MaximumSatsAPI, args: TrustPathArgs) -> str:
    return await _lookup(
        api, WOT_TRUST_PATH_PATH, args, **{"from": args.from_pubkey, "to": args.to_pubkey}
    )


async def wot_network_health_tool(api: MaximumSatsAPI, args: MeteredArgs) -> str:
    return await _lookup(api, WOT_NETWORK_HEALTH_PATH, args)


async def wot_follow_quality_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_FOLLOW_QUALITY_PATH, args, pubkey=args.pubkey)


async def wot_trust_circle_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_TRUST_CIRCLE_PATH, args, pubkey=args.pubkey)


async def wot_anomalies_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_ANOMALIES_PATH, args, pubkey=args.pubkey)


async def wot_predict_link_tool(api: MaximumSatsAPI, args: PredictLinkArgs) -> str:
    return await _lookup(
        api, WOT_PREDICT_LINK_PATH, args, source=args.source, target=args.target
    )


async def wot_compare_providers_tool(api: MaximumSatsAPI, args: PubkeyLookupArgs) -> str:
    return await _lookup(api, WOT_COMPARE_PROVIDERS_PATH, args, pubkey=args.pubkey)


async def wot_influence_tool(api: MaximumSatsAPI, args: InfluenceArgs) -> str:
    return await _lookup(
        api,
        WOT_INFLUENCE_PATH,
        args,
        pubkey=args.pubkey,
        other=args.other,
        action=args.action,
    )


_METERED = (
    "Free within the daily quota; once exhausted the response carries a Lightning "
    "invoice, and calling again with payment_hash after paying continues."
)

WOT_TOOLS: list[ToolSpec] = [
    ToolSpec(
        name="wot_score",
        description=f"Look up a Nostr pubkey's Web of Trust score. {_METERED}",
        args_model=PubkeyLookupArgs,
        handler=wot_score_tool,
    ),
    ToolSpec(
        name="wot_top",
        description=(
            "Get the top 100 Nostr accounts by Web of Trust score. "
            "Free, no payment required."
        ),
        args_model=NoArgs,
        handler=wot_top_tool,
    ),
    ToolSpec(
        name="wot_sybil_check",
        description=(
            "Estimate how likely a Nostr pubkey is to be a sybil (fake or bot) "
            f"account from its follow graph. {_METERED}"
        ),
        args_model=PubkeyLookupArgs,
        handler=wot_sybil_check_tool,
    ),
    ToolSpec(
        name="wot_trust_path",
        description=(
            "Find the shortest trust path between two Nostr pubkeys through the "
            f"follow graph. {_METERED}"
        ),
        args_model=TrustPathArgs,
        handler=wot_trust_path_tool,
    ),
    ToolSpec(
        name="wot_network_health",
        description=(
            "Get aggregate health metrics for the Nostr Web of Trust graph "
            f"(size, density, clustering). {_METERED}"
        ),
        args_model=MeteredArgs,
        handler=wot_network_health_tool,
    ),
    ToolSpec(
        name="wot_follow_quality",
        description=(
            f"Rate the quality of the accounts a Nostr pubkey follows. {_METERED}"
        ),
        args_model=PubkeyLookupArgs,
        handler=wot_follow_quality_tool,
    ),
    ToolSpec(
        name="wot_trust_circle",
        description=(
            "List the mutual-trust circle around a Nostr pubkey (accounts that "
            f"follow each other). {_METERED}"
        ),
        args_model=PubkeyLookupArgs,
        handler=wot_trust_circle_tool,
    ),
    ToolSpec(
        name="wot_anomalies",
        description=(
            "Detect anomalous follow behaviour for a Nostr pubkey (follow spikes, "
            f"bought followers). {_METERED}"
        ),
        args_model=PubkeyLookupArgs,
        handler=wot_anomalies_tool,
    ),
    ToolSpec(
        name="wot_predict_link",
        description=(
            "Predict how likely the source pubkey is to follow the target pubkey. "
            f"{_METERED}"
        ),
        args_model=PredictLinkArgs,
        handler=wot_predict_link_tool,
    ),
    ToolSpec(
        name="wot_compare_providers",
        description=(
            "Compare a Nostr pubkey's trust score across Web of Trust providers. "
            f"{_METERED}"
        ),
        args_model=PubkeyLookupArgs,
        handler=wot_compare_providers_tool,
    ),
    ToolSpec(
        name="wot_influence",
        description=(
            "Simulate how a follow or unfollow between two pubkeys would shift "
            f"trust scores across the network. {_METERED}"
        ),
        args_model=InfluenceArgs,
        handler=wot_influence_tool,
    ),
]
