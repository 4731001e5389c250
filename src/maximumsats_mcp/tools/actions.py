"""Paid AI actions: Bitcoin Q&A, image generation, Lightning and Nostr analysis."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from maximumsats_mcp.api.client import MaximumSatsAPI
from maximumsats_mcp.tools.registry import (
    HexPubkey,
    NonEmptyStr,
    PaymentHash,
    ToolArgs,
    ToolSpec,
)
from maximumsats_mcp.tools.relay import relay
from maximumsats_mcp.utils.constants import (
    DVM,
    IMAGEGEN,
    LN_ANALYSIS,
    NOSTR_SUMMARY,
    PAID_ENDPOINTS,
    WOT_REPORT,
    PaidEndpoint,
)


class PromptArgs(ToolArgs):
    prompt: NonEmptyStr = Field(description="Your question or prompt")
    payment_hash: PaymentHash = None


class ImagePromptArgs(ToolArgs):
    prompt: NonEmptyStr = Field(description="Description of the image to generate")
    payment_hash: PaymentHash = None


class PubkeyArgs(ToolArgs):
    pubkey: HexPubkey
    payment_hash: PaymentHash = None


class LnAnalysisArgs(ToolArgs):
    query: NonEmptyStr = Field(description="What to analyze about the Lightning Network")
    payment_hash: PaymentHash = None


class RetryArgs(ToolArgs):
    payment_hash: NonEmptyStr = Field(description="The payment_hash from the 402 response")
    endpoint: Literal[
        "/api/dvm", "/api/imagegen", "/api/wot-report", "/api/nostr-summary", "/api/ln-analysis"
    ] = Field(description="The API endpoint to retry (e.g. /api/dvm, /api/imagegen)")
    prompt: NonEmptyStr = Field(
        description="The original prompt (the pubkey for /api/wot-report and /api/nostr-summary)"
    )


async def _paid(
    api: MaximumSatsAPI, endpoint: PaidEndpoint, value: str, payment_hash: str | None
) -> str:
    return await relay(api, endpoint.path, "POST", {endpoint.payload_key: value}, payment_hash)


async def ask_bitcoin_tool(api: MaximumSatsAPI, args: PromptArgs) -> str:
    """Ask a Bitcoin/Lightning question (POST /api/dvm)."""
    return await _paid(api, DVM, args.prompt, args.payment_hash)


async def generate_image_tool(api: MaximumSatsAPI, args: ImagePromptArgs) -> str:
    """Generate an image (POST /api/imagegen)."""
    return await _paid(api, IMAGEGEN, args.prompt, args.payment_hash)


async def wot_report_tool(api: MaximumSatsAPI, args: PubkeyArgs) -> str:
    """Detailed Web-of-Trust report (POST /api/wot-report)."""
    return await _paid(api, WOT_REPORT, args.pubkey, args.payment_hash)


async def nostr_summary_tool(api: MaximumSatsAPI, args: PubkeyArgs) -> str:
    """AI summary of a Nostr profile (POST /api/nostr-summary)."""
    return await _paid(api, NOSTR_SUMMARY, args.pubkey, args.payment_hash)


async def ln_analysis_tool(api: MaximumSatsAPI, args: LnAnalysisArgs) -> str:
    """Lightning Network analysis (POST /api/ln-analysis); the query is sent as ``prompt``."""
    return await _paid(api, LN_ANALYSIS, args.query, args.payment_hash)


async def retry_with_payment_tool(api: MaximumSatsAPI, args: RetryArgs) -> str:
    """Re-issue a paid action with proof of payment.

    Kept for callers of the two-step flow; every paid tool also accepts
    ``payment_hash`` directly.
    """
    return await _paid(api, PAID_ENDPOINTS[args.endpoint], args.prompt, args.payment_hash)


def _price(endpoint: PaidEndpoint) -> str:
    return f"Costs {int(endpoint.price)} sats via Lightning L402"


_RETRY_HINT = (
    "If payment is required, pay the returned invoice and call again "
    "with the same arguments plus payment_hash."
)

ACTION_TOOLS: list[ToolSpec] = [
    ToolSpec(
        name="ask_bitcoin",
        description=(
            "Ask a question about Bitcoin, Lightning Network, or cryptocurrency. "
            f"Powered by Llama 3.3 70B. {_price(DVM)}. {_RETRY_HINT}"
        ),
        args_model=PromptArgs,
        handler=ask_bitcoin_tool,
    ),
    ToolSpec(
        name="generate_image",
        description=(
            "Generate an image from a text prompt using FLUX.1 Schnell (12B). "
            f"{_price(IMAGEGEN)}. {_RETRY_HINT}"
        ),
        args_model=ImagePromptArgs,
        handler=generate_image_tool,
    ),
    ToolSpec(
        name="retry_with_payment",
        description=(
            "Complete an L402 request after paying the Lightning invoice. Pass the "
            "payment_hash from the original request and the endpoint to retry."
        ),
        args_model=RetryArgs,
        handler=retry_with_payment_tool,
    ),
    ToolSpec(
        name="wot_report",
        description=(
            "Get a detailed Web of Trust analysis report for a Nostr pubkey. "
            f"{_price(WOT_REPORT)}. {_RETRY_HINT}"
        ),
        args_model=PubkeyArgs,
        handler=wot_report_tool,
    ),
    ToolSpec(
        name="nostr_summary",
        description=(
            "Get an AI-powered summary of a Nostr profile with activity and reputation "
            f"analysis. {_price(NOSTR_SUMMARY)}. {_RETRY_HINT}"
        ),
        args_model=PubkeyArgs,
        handler=nostr_summary_tool,
    ),
    ToolSpec(
        name="ln_analysis",
        description=(
            "Get an AI-powered Lightning Network analysis with real-time data. "
            f"{_price(LN_ANALYSIS)}. {_RETRY_HINT}"
        ),
        args_model=LnAnalysisArgs,
        handler=ln_analysis_tool,
    ),
]
