"""
PayPal Orders v2 adapter over httpx.

Notes on the REST surface:
- Access tokens come from ``POST /v1/oauth2/token`` with HTTP basic auth
  (client id / secret) and ``grant_type=client_credentials``; a failed grant
  still answers with a JSON body carrying ``error_description``.
- Every Orders call carries ``Authorization: Bearer <token>``.
- The create-order body is handed back verbatim so the JS button can read the
  order id from it.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from application.dtos.payments import GatewayOrder, TokenResponse
from application.ports.payment_gateway import TokenProvider
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import GatewayCommunicationError


API_SANDBOX_BASE = "api-m.sandbox.paypal.com"
API_LIVE_BASE = "api.paypal.com"

TOKEN_URL = "/v1/oauth2/token"
POST_ORDER_CREATE_URL = "/v2/checkout/orders"
GET_ORDER_URL = "/v2/checkout/orders/{order_id}"
POST_ORDER_CAPTURE_URL = "/v2/checkout/orders/{order_id}/capture"


def api_base_url(mode: str = "sandbox") -> str:
    host = API_SANDBOX_BASE if mode == "sandbox" else API_LIVE_BASE
    return f"https://{host}"


class PayPalTokenProvider(BasePaymentClient):
    """Client-credentials grant; the first token is cached for the client's lifetime."""

    provider = "paypal"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        mode: str = "sandbox",
        timeouts: Optional[dict[str, float]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(base_url=api_base_url(mode), timeouts=timeouts, http_client=http_client)
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token: Optional[str] = None
        self._token_lock = asyncio.Lock()

    async def get_access_token(self) -> str:
        if self._access_token is None:
            async with self._token_lock:
                if self._access_token is None:
                    self._access_token = await self._fetch_token()
        return self._access_token

    async def _fetch_token(self) -> str:
        response = await self._request(
            "POST",
            TOKEN_URL,
            raise_for_status=False,
            auth=(self._client_id, self._client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise GatewayCommunicationError(
                "PayPal token endpoint returned an unreadable body, check PayPal configuration",
                provider=self.provider,
                provider_code=str(response.status_code),
            ) from exc

        if not token.access_token:
            raise GatewayCommunicationError(
                f"{token.error_description or 'no access_token in response'} check PayPal configuration",
                provider=self.provider,
                provider_code=str(response.status_code),
                error_description=token.error_description,
            )
        self._log("paypal_token_acquired", expires_in=token.expires_in)
        return token.access_token


class PayPalClient(BasePaymentClient):
    """GatewayClient implementation for the Orders v2 API."""

    provider = "paypal"

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        mode: str = "sandbox",
        timeouts: Optional[dict[str, float]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(base_url=api_base_url(mode), timeouts=timeouts, http_client=http_client)
        self.mode = mode
        self.token_provider = token_provider

    async def _headers(self) -> dict[str, str]:
        token = await self.token_provider.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    async def create_order(self, payload: dict[str, Any]) -> str:
        response = await self._request(
            "POST",
            POST_ORDER_CREATE_URL,
            headers=await self._headers(),
            json=payload,
        )
        return response.text

    async def get_order(self, order_id: str) -> GatewayOrder:
        response = await self._request(
            "GET",
            GET_ORDER_URL.format(order_id=quote(order_id, safe="")),
            headers=await self._headers(),
        )
        return self._parse(response, GatewayOrder)

    async def capture_order(self, order_id: str) -> GatewayOrder:
        response = await self._request(
            "POST",
            POST_ORDER_CAPTURE_URL.format(order_id=quote(order_id, safe="")),
            headers=await self._headers(),
        )
        return self._parse(response, GatewayOrder)

    async def aclose(self) -> None:
        await super().aclose()
        close = getattr(self.token_provider, "aclose", None)
        if callable(close):
            await close()
