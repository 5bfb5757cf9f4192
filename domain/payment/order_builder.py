"""
PayPal Orders v2 下单请求体构建
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from domain.common.fields import require_fields
from domain.payment.entity import PaymentOrder, Price


REQUIRED_ORDER_FIELDS = ("return_url", "cancel_url", "description", "internalPaymentId")

_TWO_PLACES = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """金额固定格式化为两位小数"""
    return str(Decimal(amount).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class OrderRequestBuilder:
    """根据金额与商户字段构建 CAPTURE 意图的订单请求体

    ``application_context``（配送偏好、用户操作）在构造时固定；
    每次调用的 ``return_url``/``cancel_url`` 覆盖合并到其上。
    """

    def __init__(self, application_context: Optional[Mapping[str, str]] = None) -> None:
        self._application_context = dict(application_context or {})

    @property
    def application_context(self) -> dict[str, str]:
        return dict(self._application_context)

    def build_order(self, price: Price, fields: Mapping[str, Any]) -> PaymentOrder:
        values = require_fields(fields, REQUIRED_ORDER_FIELDS)

        context = dict(self._application_context)
        if values["return_url"]:
            context["return_url"] = values["return_url"]
        if values["cancel_url"]:
            context["cancel_url"] = values["cancel_url"]

        return PaymentOrder(
            internal_payment_id=str(values["internalPaymentId"]),
            description=str(values["description"]),
            currency_code=price.currency,
            gross_amount=format_amount(price.gross_amount),
            return_url=values["return_url"],
            cancel_url=values["cancel_url"],
            application_context=context,
        )

    def build(self, price: Price, fields: Mapping[str, Any]) -> dict[str, Any]:
        return self.build_order(price, fields).to_payload()
