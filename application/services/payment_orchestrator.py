"""
PayPal Smart Payment Button checkout orchestration.

Composes the order builder, authorization handler and capture executor behind
the payment-method capability set. Gateway adapters are provided by
infrastructure and injected from the composition root, keeping dependencies
one-way.

Authorized data is kept per checkout attempt, keyed by gateway order id, so one
orchestrator can serve several attempts without leaking payer data between
them. The entry is dropped once its capture clears, or on ``release``.
Capture carries no idempotency key: callers must not capture the same order
id twice concurrently.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from application.dtos.payments import StartPaymentResponse
from application.ports.payment_gateway import GatewayClient
from application.services.authorization_handler import AuthorizationHandler
from application.services.capture_executor import CaptureExecutor
from core.logging_config import checkout_context, get_logger
from core.settings import PayPalOptions
from domain.common.exceptions import ResponseFormatError, StateError
from domain.payment.entity import AuthorizationCallback, AuthorizedData, CaptureStrategy, PaymentStatus, Price
from domain.payment.order_builder import OrderRequestBuilder


logger = get_logger(__name__)

SDK_BASE_URL = "https://www.paypal.com/sdk/js"


class PaymentOrchestrator:
    name = "PayPalSmartButton"

    def __init__(
        self,
        gateway: GatewayClient,
        options: PayPalOptions,
        *,
        default_currency: str = "EUR",
    ) -> None:
        self.gateway = gateway
        self.options = options
        self.default_currency = default_currency
        self._authorized: dict[str, AuthorizedData] = {}

        self.order_builder = OrderRequestBuilder(options.application_context)
        self.capture_executor = CaptureExecutor(gateway)
        self.authorization_handler = AuthorizationHandler(
            gateway,
            self.capture_executor,
            options.capture_strategy,
            self._authorized,
        )

    @property
    def capture_strategy(self) -> CaptureStrategy:
        return self.authorization_handler.strategy

    async def start_payment(self, price: Price, fields: Mapping[str, Any]) -> StartPaymentResponse:
        """Create the gateway order and return its body for the JS button."""
        payload = self.order_builder.build(price, fields)
        reference = payload["purchase_units"][0]["custom_id"]

        with checkout_context(merchant_reference=reference):
            logger.info(
                "paypal_order_create_request",
                currency=price.currency,
                amount=payload["purchase_units"][0]["amount"]["value"],
            )
            result = await self.gateway.create_order(payload)
            body = self._as_json_object(result)
            logger.info("paypal_order_created", order_id=body.get("id"), gateway_status=body.get("status"))

        return StartPaymentResponse(
            order_id=body.get("id"),
            status=body.get("status"),
            merchant_reference=reference,
            json_body=result if isinstance(result, str) else json.dumps(body),
        )

    @staticmethod
    def _as_json_object(result: Any) -> dict[str, Any]:
        if isinstance(result, Mapping):
            return dict(result)
        if isinstance(result, (str, bytes)):
            try:
                decoded = json.loads(result)
            except ValueError:
                decoded = None
            if isinstance(decoded, dict):
                return decoded
        raise ResponseFormatError("The created order is neither an object nor JSON")

    async def handle_response(self, callback: Union[AuthorizationCallback, Mapping[str, Any]]) -> PaymentStatus:
        """Verify the JS callback against the gateway and apply the capture strategy."""
        order_id = callback.order_id if isinstance(callback, AuthorizationCallback) else callback.get("orderID")
        with checkout_context(order_id=order_id):
            status = await self.authorization_handler.handle(callback)
            logger.info("paypal_payment_status", status=status.kind.value, merchant_reference=status.merchant_reference)
            return self._settle(status)

    async def execute_debit(
        self,
        order_id: str,
        price: Optional[Price] = None,
        reference: Optional[str] = None,
    ) -> PaymentStatus:
        """Capture an order authorized earlier under the manual strategy.

        ``reference`` is accepted for the capability contract only; the gateway
        decides the reference funds are captured under.
        """
        with checkout_context(order_id=order_id):
            status = await self.capture_executor.capture(self._authorized.get(order_id), price)
            return self._settle(status)

    async def execute_credit(self, price: Price, reference: str, transaction_id: str) -> PaymentStatus:
        raise NotImplementedError("credit is not implemented for PayPal smart button payments")

    def get_authorized_data(self, order_id: str) -> AuthorizedData:
        try:
            return self._authorized[order_id]
        except KeyError:
            raise StateError("no authorized data for order", order_id=order_id) from None

    def _settle(self, status: PaymentStatus) -> PaymentStatus:
        # a cleared capture ends the attempt; anything else stays retryable
        if status.is_cleared:
            self.release(status.gateway_order_id)
        return status

    def release(self, order_id: str) -> None:
        """End the checkout attempt for ``order_id``."""
        self._authorized.pop(order_id, None)

    def build_sdk_link(self, currency: Optional[str] = None) -> str:
        query = urlencode({
            "client-id": self.options.client_id,
            "currency": (currency or self.default_currency).upper(),
        })
        return f"{SDK_BASE_URL}?{query}"

    async def aclose(self) -> None:
        close = getattr(self.gateway, "aclose", None)
        if callable(close):
            await close()
