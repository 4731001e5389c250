"""Tool descriptors and the dispatcher that validates and runs them."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from maximumsats_mcp.api.client import MaximumSatsAPI

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------

HexPubkey = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^[0-9a-fA-F]{64}$"),
    Field(description="Nostr public key in hex format (64 characters)"),
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

PaymentHash = Annotated[
    NonEmptyStr | None,
    Field(description="payment_hash from a previous 'Payment required' response, after paying"),
]


class ToolArgs(BaseModel):
    """Base for tool argument models: strict about unknown fields."""

    model_config = ConfigDict(extra="forbid")


class NoArgs(ToolArgs):
    """Arguments for tools that take none."""


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ToolRegistryError(Exception):
    """Base exception for tool dispatch failures."""


class UnknownToolError(ToolRegistryError):
    """No tool registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(ToolRegistryError):
    """Arguments failed schema validation; the handler was not called."""

    def __init__(self, name: str, errors: list[dict[str, Any]]) -> None:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '(arguments)'}: {err['msg']}"
            for err in errors
        )
        super().__init__(f"Invalid arguments for {name}: {details}")
        self.name = name
        self.errors = errors


# ---------------------------------------------------------------------------
# Descriptor and registry
# ---------------------------------------------------------------------------

ToolHandler = Callable[[MaximumSatsAPI, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    """One invocable tool: name, description, argument model and handler."""

    name: str
    description: str
    args_model: type[ToolArgs]
    handler: ToolHandler

    def schema(self) -> dict[str, Any]:
        """JSON schema of the tool's arguments."""
        schema = self.args_model.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return schema


class ToolRegistry:
    """Static set of tools bound to one API client.

    Built once at startup from an explicit list of descriptors.
    """

    def __init__(self, tools: Iterable[ToolSpec], api: MaximumSatsAPI) -> None:
        self.api = api
        self._tools: dict[str, ToolSpec] = {}
        for spec in tools:
            if spec.name in self._tools:
                raise ValueError(f"Duplicate tool name: {spec.name}")
            self._tools[spec.name] = spec

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe every tool for the host: name, description and argument schema."""
        return [
            {"name": spec.name, "description": spec.description, "schema": spec.schema()}
            for spec in self._tools.values()
        ]

    def validate(self, name: str, arguments: dict[str, Any] | None) -> ToolArgs:
        """Validate raw arguments against the named tool's schema.

        Raises:
            UnknownToolError: If no tool has this name
            InvalidArgumentsError: If the arguments do not match the schema
        """
        spec = self.get(name)
        try:
            return spec.args_model.model_validate(arguments or {})
        except ValidationError as e:
            logger.info("Rejected call to %s: %d invalid argument(s)", name, e.error_count())
            raise InvalidArgumentsError(
                name, e.errors(include_url=False, include_context=False, include_input=False)
            ) from e

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        """Validate arguments, then run the tool's handler.

        Args:
            name: Registered tool name
            arguments: Raw arguments from the host

        Returns:
            The handler's text result
        """
        args = self.validate(name, arguments)
        logger.debug("Dispatching %s", name)
        return await self._tools[name].handler(self.api, args)
