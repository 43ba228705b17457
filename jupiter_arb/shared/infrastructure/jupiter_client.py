"""
Jupiter Swap API Client
=======================
Quote Gateway and swap-transaction construction against the Jupiter
v6 HTTP API (base URL from Settings.API_BASE_URL).

    quote()            GET  {base}/quote  -> QuoteResponse   (QuoteError)
    swap_transaction() POST {base}/swap   -> unsigned tx bytes (BuildError)

Every failure surfaces as a single exception type per call; the caller
does not distinguish network errors from "no route".
"""

import base64
import binascii
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from config.settings import Settings
from jupiter_arb.shared.execution.errors import BuildError, QuoteError
from jupiter_arb.shared.execution.models import QuoteRequest, QuoteResponse
from jupiter_arb.shared.system.logging import Logger


class JupiterClient:
    """
    Thin async client over one pooled httpx.AsyncClient.
    Calls are made one at a time by the cycle controller.
    """

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or Settings.API_BASE_URL).rstrip("/")
        api_key = Settings.JUPITER_API_KEY if api_key is None else api_key

        headers = {"Accept": "application/json"}
        if api_key:
            headers["x-api-key"] = api_key

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout or Settings.HTTP_TIMEOUT_S,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "JupiterClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            return str(body.get("error") or body.get("message") or body)[:200]
        return str(body)[:200]

    # =========================================================================
    # QUOTE GATEWAY
    # =========================================================================

    async def quote(self, request: QuoteRequest) -> QuoteResponse:
        """Fetch a quote for one leg."""
        try:
            resp = await self._client.get("/quote", params=request.to_params())
        except httpx.HTTPError as e:
            raise QuoteError(f"Quote request failed: {e}") from e

        if resp.status_code != 200:
            raise QuoteError(f"Jupiter quote HTTP {resp.status_code}: {self._error_message(resp)}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise QuoteError(f"Undecodable quote response: {e}") from e

        if not isinstance(payload, dict):
            raise QuoteError("Unexpected quote payload shape")
        if payload.get("error"):
            raise QuoteError(f"Jupiter quote error: {payload['error']}")

        try:
            quote = QuoteResponse.from_api(payload)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise QuoteError(f"Malformed quote payload: {e}") from e

        if quote.out_amount == 0:
            raise QuoteError("No viable route (zero output)")

        Logger.debug(
            f"[QUOTE] {request.input_mint[:4]}->{request.output_mint[:4]} "
            f"{quote.in_amount} -> {quote.out_amount} via {','.join(quote.route_labels)}"
        )
        return quote

    # =========================================================================
    # SWAP CONSTRUCTION
    # =========================================================================

    def _swap_payload(self, quote: QuoteResponse, user_public_key: str) -> Dict[str, Any]:
        return {
            "quoteResponse": quote.raw,
            "userPublicKey": user_public_key,
            "wrapAndUnwrapSol": True,
            "dynamicComputeUnitLimit": True,
        }

    async def swap_transaction(self, quote: QuoteResponse, user_public_key: str) -> bytes:
        """Request the unsigned swap transaction for a quote; returns raw bincode bytes."""
        try:
            resp = await self._client.post("/swap", json=self._swap_payload(quote, user_public_key))
        except httpx.HTTPError as e:
            raise BuildError(f"Swap request failed: {e}") from e

        if resp.status_code != 200:
            raise BuildError(f"Jupiter swap HTTP {resp.status_code}: {self._error_message(resp)}")

        try:
            swap_data = resp.json()
        except ValueError as e:
            raise BuildError(f"Undecodable swap response: {e}") from e

        swap_transaction = swap_data.get("swapTransaction") if isinstance(swap_data, dict) else None
        if not swap_transaction:
            raise BuildError("No swap transaction returned")

        try:
            return base64.b64decode(swap_transaction, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BuildError(f"swapTransaction is not valid base64: {e}") from e
