"""
Capture of a previously authorized PayPal order.
"""
from __future__ import annotations

from typing import Optional

from application.ports.payment_gateway import GatewayClient
from core.logging_config import get_logger
from domain.common.exceptions import ResponseFormatError, StateError, UnsupportedOperationError
from domain.payment.entity import AuthorizedData, PaymentStatus, PaymentStatusKind, Price
from domain.payment.status_mapper import StatusMapper


logger = get_logger(__name__)


class CaptureExecutor:
    def __init__(self, gateway: GatewayClient) -> None:
        self.gateway = gateway

    async def capture(
        self,
        authorized_data: Optional[AuthorizedData],
        price: Optional[Price] = None,
    ) -> PaymentStatus:
        """Capture the full authorized amount.

        The merchant reference comes from the capture sub-record: that is the
        tag the funds were actually captured under.
        """
        if price is not None:
            raise UnsupportedOperationError(
                "Setting other price than defined in Order not supported by paypal api",
                operation="capture_override_amount",
            )
        if authorized_data is None or not authorized_data.order_id:
            raise StateError("capture attempted without prior authorization")

        order_id = authorized_data.order_id
        logger.info("paypal_capture_request", order_id=order_id)
        result = await self.gateway.capture_order(order_id)

        kind = StatusMapper.map_capture_status(result.status)
        capture = result.first_capture
        if kind == PaymentStatusKind.CLEARED and capture is None:
            raise ResponseFormatError(
                "completed capture response carries no capture record",
                details={"order_id": order_id},
            )

        extra = {}
        if kind == PaymentStatusKind.CLEARED:
            extra["transactionId"] = capture.id

        status = PaymentStatus(
            merchant_reference=capture.custom_id if capture is not None else result.custom_id,
            gateway_order_id=order_id,
            note="",
            kind=kind,
            extra=extra,
        )
        logger.info(
            "paypal_capture_result",
            order_id=order_id,
            gateway_status=result.status,
            status=status.kind.value,
            transaction_id=extra.get("transactionId"),
        )
        return status
