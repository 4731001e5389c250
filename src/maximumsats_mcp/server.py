"""MaximumSats MCP server using FastMCP."""

import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from maximumsats_mcp import __version__
from maximumsats_mcp.api.client import MaximumSatsAPI
from maximumsats_mcp.config import Settings, get_settings
from maximumsats_mcp.tools.actions import ACTION_TOOLS
from maximumsats_mcp.tools.registry import ToolRegistry, ToolRegistryError, ToolSpec
from maximumsats_mcp.tools.wot import WOT_TOOLS

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "MaximumSats MCP Server: pay-per-call Bitcoin AI, image generation and "
    "Nostr Web of Trust analytics over Lightning L402.\n\n"
    "## Paying for a call\n\n"
    "1. Call a paid tool (ask_bitcoin, generate_image, wot_report, nostr_summary, "
    "ln_analysis) without payment_hash.\n"
    "2. The response reads 'Payment required: N sats' and includes a Lightning "
    "invoice and a payment_hash.\n"
    "3. Pay the invoice with any Lightning wallet.\n"
    "4. Call the same tool again with the same arguments plus payment_hash.\n\n"
    "`retry_with_payment(payment_hash, endpoint, prompt)` does the same for "
    "clients built against the older two-step flow.\n\n"
    "## Free and metered lookups\n\n"
    "wot_* lookups are free within a daily quota. When the quota is exhausted "
    "they answer with an invoice in the same format; pay and repeat the call "
    "with payment_hash.\n\n"
    "Invoices expire upstream. If a retry answers with a fresh invoice, the "
    "previous one was not accepted."
)


def default_tools() -> list[ToolSpec]:
    """The full tool catalog, in advertised order."""
    return [*ACTION_TOOLS, *WOT_TOOLS]


class RegistryTool(Tool):
    """FastMCP tool that dispatches through a ToolRegistry.

    The registry validates arguments itself, so the advertised schema is
    the argument model's JSON schema and ``run`` receives raw arguments.
    """

    _registry: ToolRegistry = PrivateAttr()

    @classmethod
    def from_spec(cls, registry: ToolRegistry, spec: ToolSpec) -> "RegistryTool":
        tool = cls(name=spec.name, description=spec.description, parameters=spec.schema())
        tool._registry = registry
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            text = await self._registry.call_tool(self.name, arguments)
        except ToolRegistryError as e:
            raise ToolError(str(e)) from e
        return ToolResult(content=[TextContent(type="text", text=text)])


def create_server(
    settings: Settings | None = None,
    api: MaximumSatsAPI | None = None,
    tools: list[ToolSpec] | None = None,
) -> FastMCP:
    """Build the MCP server with every tool registered.

    Args:
        settings: Server settings (loaded from the environment if omitted)
        api: Upstream client (built from settings if omitted)
        tools: Tool descriptors (the full catalog if omitted)

    Returns:
        A FastMCP server ready to run
    """
    if api is None:
        settings = settings or get_settings()
        api = MaximumSatsAPI(settings.api_base_url, settings.request_timeout_seconds)
    registry = ToolRegistry(default_tools() if tools is None else tools, api)

    mcp = FastMCP("maximumsats", version=__version__, instructions=INSTRUCTIONS)
    for spec in registry.specs:
        mcp.add_tool(RegistryTool.from_spec(registry, spec))
    logger.info("Registered %d tools against %s", len(registry), api.base_url)
    return mcp


def main() -> None:
    """Main entry point for the server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    create_server(settings).run()


if __name__ == "__main__":
    main()
