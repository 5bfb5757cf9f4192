"""
Authorization callback handling.

The JS button's ``onApprove`` data is only trusted for the order id and payer
id; everything else is read back from the gateway order before any status is
produced.
"""
from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Union

from application.ports.payment_gateway import GatewayClient
from application.services.capture_executor import CaptureExecutor
from core.logging_config import get_logger
from domain.common.exceptions import ConfigurationError
from domain.common.fields import require_fields
from domain.payment.entity import (
    AuthorizationCallback,
    AuthorizedData,
    CaptureStrategy,
    PaymentStatus,
)
from domain.payment.status_mapper import StatusMapper


logger = get_logger(__name__)

REQUIRED_CALLBACK_FIELDS = ("orderID", "payerID")


def parse_callback(callback: Union[AuthorizationCallback, Mapping[str, Any]]) -> AuthorizationCallback:
    if isinstance(callback, AuthorizationCallback):
        callback = {"orderID": callback.order_id, "payerID": callback.payer_id}
    values = require_fields(callback, REQUIRED_CALLBACK_FIELDS)
    return AuthorizationCallback(order_id=str(values["orderID"]), payer_id=str(values["payerID"]))


def _coerce_strategy(strategy: Union[CaptureStrategy, str]) -> CaptureStrategy:
    try:
        return CaptureStrategy(strategy)
    except ValueError:
        raise ConfigurationError(f"Unknown capture strategy '{strategy}'") from None


class AuthorizationHandler:
    def __init__(
        self,
        gateway: GatewayClient,
        capture_executor: CaptureExecutor,
        strategy: Union[CaptureStrategy, str],
        authorized_store: MutableMapping[str, AuthorizedData],
    ) -> None:
        self.gateway = gateway
        self.capture_executor = capture_executor
        self.strategy = _coerce_strategy(strategy)
        self.authorized_store = authorized_store

    async def handle(self, callback: Union[AuthorizationCallback, Mapping[str, Any]]) -> PaymentStatus:
        parsed = parse_callback(callback)
        order = await self.gateway.get_order(parsed.order_id)

        authorized = AuthorizedData(
            order_id=parsed.order_id,
            payer_id=parsed.payer_id,
            payer_email=order.payer.email_address,
            payer_given_name=order.payer.name.given_name,
            payer_surname=order.payer.name.surname,
        )
        self.authorized_store[parsed.order_id] = authorized
        logger.info(
            "paypal_callback_verified",
            order_id=parsed.order_id,
            gateway_status=order.status,
            strategy=self.strategy.value,
        )

        if self.strategy == CaptureStrategy.MANUAL:
            return PaymentStatus(
                merchant_reference=order.custom_id,
                gateway_order_id=parsed.order_id,
                note="",
                kind=StatusMapper.map_order_status(order.status),
            )
        if self.strategy == CaptureStrategy.AUTOMATIC:
            return await self.capture_executor.capture(authorized)
        raise ConfigurationError(f"Unknown capture strategy '{self.strategy}'")
