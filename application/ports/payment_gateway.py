"""
Payment gateway ports (application/ports) exposing replaceable protocols.

Application depends on these Protocols; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from application.dtos.payments import GatewayOrder, StartPaymentResponse
from domain.payment.entity import PaymentStatus, Price


@runtime_checkable
class TokenProvider(Protocol):
    """OAuth client-credentials token source."""

    async def get_access_token(self) -> str: ...


@runtime_checkable
class GatewayClient(Protocol):
    """Orders API transport.

    Implementations should be async and side-effect free beyond IO.
    """

    provider: str

    async def create_order(self, payload: dict[str, Any]) -> str | dict[str, Any]: ...

    async def get_order(self, order_id: str) -> GatewayOrder: ...

    async def capture_order(self, order_id: str) -> GatewayOrder: ...


@runtime_checkable
class PaymentMethod(Protocol):
    """Capability set offered by one checkout variant per gateway.

    Configuration is passed to the implementation's constructor.
    """

    name: str

    async def start_payment(self, price: Price, fields: Mapping[str, Any]) -> StartPaymentResponse: ...

    async def handle_response(self, callback: Mapping[str, Any]) -> PaymentStatus: ...

    async def execute_debit(
        self,
        order_id: str,
        price: Optional[Price] = None,
        reference: Optional[str] = None,
    ) -> PaymentStatus: ...

    async def execute_credit(self, price: Price, reference: str, transaction_id: str) -> PaymentStatus: ...
