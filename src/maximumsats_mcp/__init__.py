"""MaximumSats MCP server: L402-paid Bitcoin, image and Nostr Web-of-Trust tools."""

__version__ = "1.1.0"
