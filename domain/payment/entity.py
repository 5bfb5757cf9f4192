"""
支付领域值对象 - 金额、订单、授权数据与支付状态
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from domain.common.exceptions import DomainValidationException
from shared.codes.payment_codes import STATUS_AUTHORIZED, STATUS_CANCELLED, STATUS_CLEARED


# 金额上限（不含），保证两位小数格式化始终在默认 Decimal 精度内完成
MAX_GROSS_AMOUNT = Decimal("1E+18")


class CaptureStrategy(str, Enum):
    """授权后是否立即扣款"""
    MANUAL = "manual"             # 仅授权，稍后手动扣款
    AUTOMATIC = "automatic"       # 授权后立即扣款


class PaymentStatusKind(str, Enum):
    """内部支付状态"""
    AUTHORIZED = STATUS_AUTHORIZED
    CLEARED = STATUS_CLEARED
    CANCELLED = STATUS_CANCELLED


@dataclass(frozen=True)
class Price:
    gross_amount: Decimal
    currency: str  # ISO-4217

    def __post_init__(self):
        try:
            amount = Decimal(str(self.gross_amount))
        except InvalidOperation:
            raise DomainValidationException(
                f"Invalid gross amount: {self.gross_amount}",
                field="gross_amount",
            )
        if not amount.is_finite() or abs(amount) >= MAX_GROSS_AMOUNT:
            raise DomainValidationException(
                f"Invalid gross amount: {self.gross_amount}",
                field="gross_amount",
            )
        currency = (self.currency or "").upper()
        if len(currency) != 3 or not currency.isalpha():
            raise DomainValidationException(
                f"Invalid currency code: {self.currency}",
                field="currency",
            )
        object.__setattr__(self, "gross_amount", amount)
        object.__setattr__(self, "currency", currency)


@dataclass(frozen=True)
class PaymentOrder:
    """
    待提交网关的结账订单

    业务规则：
    1. 每次结账尝试构建一次
    2. 提交后不再修改
    """

    internal_payment_id: str
    description: str
    currency_code: str
    gross_amount: str  # 固定两位小数
    return_url: str
    cancel_url: str
    application_context: dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "intent": "CAPTURE",
            "application_context": dict(self.application_context),
            "purchase_units": [
                {
                    "custom_id": self.internal_payment_id,
                    "description": self.description,
                    "amount": {
                        "currency_code": self.currency_code,
                        "value": self.gross_amount,
                    },
                },
            ],
        }


@dataclass(frozen=True)
class AuthorizationCallback:
    order_id: str
    payer_id: str


@dataclass(frozen=True)
class AuthorizedData:
    """付款人身份，只取自网关订单查询结果，不信任客户端输入"""

    order_id: str
    payer_id: str
    payer_email: Optional[str] = None
    payer_given_name: Optional[str] = None
    payer_surname: Optional[str] = None


@dataclass(frozen=True)
class PaymentStatus:
    """返回给商户订单系统的唯一结果"""

    merchant_reference: Optional[str]
    gateway_order_id: str
    note: str
    kind: PaymentStatusKind
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_cleared(self) -> bool:
        return self.kind == PaymentStatusKind.CLEARED
