"""MaximumSats L402 API client using httpx."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from maximumsats_mcp.api.exceptions import (
    MalformedUpstreamResponseError,
    UpstreamUnreachableError,
)
from maximumsats_mcp.api.models import AdapterResult, Challenge, HttpMethod, decode_upstream
from maximumsats_mcp.utils.constants import API_BASE, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class MaximumSatsAPI:
    """L402-aware client for the MaximumSats API.

    Holds configuration only. Every call opens its own HTTP client and
    closes it before returning, so concurrent tool calls share nothing.
    """

    def __init__(
        self,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the MaximumSats API client.

        Args:
            base_url: Base URL for the MaximumSats API
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject a mock here)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: HttpMethod,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make exactly one HTTP request and return the decoded JSON body.

        HTTP error statuses are not raised: a 402 carries the challenge body.
        ``timeout`` caps the whole exchange, not just each httpx phase.

        Raises:
            UpstreamUnreachableError: If the transport fails or times out
            MalformedUpstreamResponseError: If the body is not valid JSON
        """
        logger.debug("%s %s%s", method, self.base_url, endpoint)
        try:
            async with self._client() as client:
                response = await asyncio.wait_for(
                    client.request(
                        method,
                        endpoint,
                        json=json_data,
                        params=params,
                        headers=headers,
                    ),
                    timeout=self.timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("Upstream timeout after %.1fs: %s %s", self.timeout, method, endpoint)
            raise UpstreamUnreachableError(f"Request timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            logger.warning("Upstream unreachable: %s %s (%s)", method, endpoint, e)
            raise UpstreamUnreachableError(f"Request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(
                f"HTTP {response.status_code}: body is not valid JSON",
                status_code=response.status_code,
            ) from e

    async def execute(
        self,
        endpoint: str,
        method: HttpMethod,
        payload: dict[str, Any] | None = None,
        payment_hash: str | None = None,
    ) -> AdapterResult:
        """Perform one upstream call and classify its outcome.

        POST sends ``payload`` as the JSON body; GET sends it as query
        parameters. A ``payment_hash`` travels as a body field and an
        ``Authorization: L402`` header on POST, and as a query parameter
        on GET.

        Args:
            endpoint: Upstream path (e.g. "/api/dvm")
            method: "POST" for paid actions, "GET" for lookups
            payload: Body fields or query parameters
            payment_hash: Proof of payment from a previous challenge

        Returns:
            ``Challenge`` or ``UpstreamResult``
        """
        payload = dict(payload or {})
        if method == "POST":
            headers = {"Content-Type": "application/json"}
            if payment_hash:
                headers["Authorization"] = f"L402 {payment_hash}"
                payload["payment_hash"] = payment_hash
            data = await self._request("POST", endpoint, json_data=payload, headers=headers)
        else:
            params = {k: v for k, v in payload.items() if v is not None}
            if payment_hash:
                params["payment_hash"] = payment_hash
            data = await self._request("GET", endpoint, params=params or None)

        outcome = decode_upstream(data, method)
        if isinstance(outcome, Challenge):
            logger.info(
                "Payment required for %s: %d sats (hash %s)",
                endpoint,
                outcome.price_sats,
                outcome.payment_hash,
            )
        return outcome

    async def post(
        self, endpoint: str, body: dict[str, Any], payment_hash: str | None = None
    ) -> AdapterResult:
        """POST a paid action."""
        return await self.execute(endpoint, "POST", body, payment_hash)

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        payment_hash: str | None = None,
    ) -> AdapterResult:
        """GET a free or metered lookup."""
        return await self.execute(endpoint, "GET", params, payment_hash)
