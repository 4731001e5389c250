"""Constants for the MaximumSats MCP server."""

from dataclasses import dataclass
from enum import IntEnum


API_BASE = "https://maximumsats.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_IMAGE_MODEL = "flux-1-schnell"


class ToolPrice(IntEnum):
    """Advertised price of each paid action (satoshis per call)."""

    ASK_BITCOIN = 21
    NOSTR_SUMMARY = 50
    LN_ANALYSIS = 75
    GENERATE_IMAGE = 100
    WOT_REPORT = 100


@dataclass(frozen=True)
class PaidEndpoint:
    """A POST endpoint gated by an L402 challenge."""

    path: str
    price: ToolPrice
    payload_key: str  # body field carrying the caller's input


DVM = PaidEndpoint("/api/dvm", ToolPrice.ASK_BITCOIN, "prompt")
IMAGEGEN = PaidEndpoint("/api/imagegen", ToolPrice.GENERATE_IMAGE, "prompt")
WOT_REPORT = PaidEndpoint("/api/wot-report", ToolPrice.WOT_REPORT, "pubkey")
NOSTR_SUMMARY = PaidEndpoint("/api/nostr-summary", ToolPrice.NOSTR_SUMMARY, "pubkey")
LN_ANALYSIS = PaidEndpoint("/api/ln-analysis", ToolPrice.LN_ANALYSIS, "prompt")

PAID_ENDPOINTS: dict[str, PaidEndpoint] = {
    e.path: e for e in (DVM, IMAGEGEN, WOT_REPORT, NOSTR_SUMMARY, LN_ANALYSIS)
}


# Free / metered Web-of-Trust lookups (GET)
WOT_TOP_PATH = "/wot"
WOT_SCORE_PATH = "/wot/score"
WOT_SYBIL_PATH = "/wot/sybil"
WOT_TRUST_PATH_PATH = "/wot/trust-path"
WOT_NETWORK_HEALTH_PATH = "/wot/network-health"
WOT_FOLLOW_QUALITY_PATH = "/wot/follow-quality"
WOT_TRUST_CIRCLE_PATH = "/wot/trust-circle"
WOT_ANOMALIES_PATH = "/wot/anomalies"
WOT_PREDICT_LINK_PATH = "/wot/predict-link"
WOT_COMPARE_PROVIDERS_PATH = "/wot/compare-providers"
WOT_INFLUENCE_PATH = "/wot/influence"
