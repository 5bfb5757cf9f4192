"""
网关状态 → 内部状态映射

映射是粗粒度的：待审核、需付款人操作、拒绝等中间状态统一归为 ``cancelled``。
"""
from __future__ import annotations

from typing import Optional

from domain.payment.entity import PaymentStatusKind
from shared.codes.payment_codes import PROVIDER_STATUS_TO_INTERNAL, STATUS_CANCELLED


class StatusMapper:
    """PayPal 订单/扣款状态字符串的纯映射"""

    ORDER_TABLE = "paypal.order"
    CAPTURE_TABLE = "paypal.capture"

    @staticmethod
    def _map(table: str, provider_status: Optional[str]) -> PaymentStatusKind:
        mapping = PROVIDER_STATUS_TO_INTERNAL.get(table, {})
        return PaymentStatusKind(mapping.get(provider_status or "", STATUS_CANCELLED))

    @classmethod
    def map_order_status(cls, provider_status: Optional[str]) -> PaymentStatusKind:
        return cls._map(cls.ORDER_TABLE, provider_status)

    @classmethod
    def map_capture_status(cls, provider_status: Optional[str]) -> PaymentStatusKind:
        return cls._map(cls.CAPTURE_TABLE, provider_status)


map_order_status = StatusMapper.map_order_status
map_capture_status = StatusMapper.map_capture_status
