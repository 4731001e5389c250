"""Basic usage example for the MaximumSats MCP server."""

import asyncio

from fastmcp import Client

from maximumsats_mcp.server import create_server


async def main() -> None:
    """Demonstrate the L402 flow through the MCP tools."""
    async with Client(create_server()) as client:
        # List all tools
        print("\n=== Tools ===")
        for tool in await client.list_tools():
            print(f"{tool.name}: {tool.description}")

        # Free lookup
        print("\n=== Top Web of Trust accounts ===")
        result = await client.call_tool("wot_top", {})
        print(result.content[0].text[:500])

        # Paid action: the first call answers with an invoice
        print("\n=== Ask Bitcoin ===")
        result = await client.call_tool("ask_bitcoin", {"prompt": "What is a Lightning channel?"})
        text = result.content[0].text
        print(text)

        if text.startswith("Payment required"):
            payment_hash = text.rsplit("payment_hash: ", 1)[1]
            input("\nPay the invoice with your wallet, then press Enter...")
            result = await client.call_tool(
                "ask_bitcoin",
                {"prompt": "What is a Lightning channel?", "payment_hash": payment_hash},
            )
            print(result.content[0].text)


if __name__ == "__main__":
    asyncio.run(main())
