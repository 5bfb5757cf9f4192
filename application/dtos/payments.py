"""
Payment DTOs (Pydantic v2) used at application boundaries.

Gateway bodies are deserialized once into these schemas; adapters turn
validation failures into ResponseFormatError.
"""
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    error: Optional[str] = None
    error_description: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PayerName(BaseModel):
    given_name: Optional[str] = None
    surname: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class Payer(BaseModel):
    payer_id: Optional[str] = None
    email_address: Optional[str] = None
    name: PayerName = Field(default_factory=PayerName)

    model_config = ConfigDict(extra="ignore")


class CaptureRecord(BaseModel):
    id: str
    status: Optional[str] = None
    custom_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PurchaseUnitPayments(BaseModel):
    captures: list[CaptureRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class PurchaseUnit(BaseModel):
    reference_id: Optional[str] = None
    custom_id: Optional[str] = None
    description: Optional[str] = None
    payments: Optional[PurchaseUnitPayments] = None

    model_config = ConfigDict(extra="ignore")


class GatewayOrder(BaseModel):
    """GET /v2/checkout/orders/{id} and POST .../capture bodies."""

    id: Optional[str] = None
    status: str
    payer: Payer = Field(default_factory=Payer)
    purchase_units: list[PurchaseUnit] = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")

    @property
    def custom_id(self) -> Optional[str]:
        return self.purchase_units[0].custom_id

    @property
    def first_capture(self) -> Optional[CaptureRecord]:
        payments = self.purchase_units[0].payments
        if payments is None or not payments.captures:
            return None
        return payments.captures[0]


class StartPaymentResponse(BaseModel):
    """Result of creating a gateway order, handed to the browser-side button."""

    order_id: Optional[str] = None
    status: Optional[str] = None
    merchant_reference: str
    json_body: str
