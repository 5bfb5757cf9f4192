"""
Payment-related settings using pydantic-settings v2 with nested env keys.

``PaymentSettings`` only carries raw values; ``resolve_paypal_options`` turns
them into a validated ``PayPalOptions`` (defaults, allowed value sets,
non-empty required keys) or raises ConfigurationError listing every violation.
"""
from __future__ import annotations

from typing import Any, Literal, Mapping, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from domain.common.exceptions import ConfigurationError
from domain.payment.entity import CaptureStrategy


class PaymentTimeouts(BaseModel):
    connect: float = 1.0
    read: float = 3.0
    write: float = 3.0
    total: float = 5.0


class PayPalSettings(BaseModel):
    mode: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    shipping_preference: Optional[str] = None
    user_action: Optional[str] = None
    capture_strategy: Optional[str] = None


class PayPalOptions(BaseModel):
    """Validated smart-button configuration, built once at startup."""

    mode: Literal["sandbox", "production"] = "sandbox"
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    shipping_preference: Literal["GET_FROM_FILE", "NO_SHIPPING", "SET_PROVIDED_ADDRESS"] = "NO_SHIPPING"
    user_action: Literal["CONTINUE", "PAY_NOW"] = "PAY_NOW"
    capture_strategy: CaptureStrategy = CaptureStrategy.AUTOMATIC

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def application_context(self) -> dict[str, str]:
        return {
            "shipping_preference": self.shipping_preference,
            "user_action": self.user_action,
        }


def resolve_paypal_options(raw: Mapping[str, Any]) -> PayPalOptions:
    """Validate raw PayPal options; absent keys take their defaults."""
    try:
        return PayPalOptions.model_validate(dict(raw))
    except ValidationError as exc:
        violations = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ConfigurationError(
            f"Invalid PayPal configuration: {'; '.join(violations)}",
            violations=violations,
        ) from exc


class PaymentSettings(BaseSettings):
    default_provider: str = Field(default="paypal", validation_alias="PAYMENT__DEFAULT_PROVIDER")
    default_currency: str = Field(default="EUR", validation_alias="PAYMENT__DEFAULT_CURRENCY")
    timeouts: PaymentTimeouts = Field(default_factory=PaymentTimeouts)

    paypal: PayPalSettings = Field(default_factory=PayPalSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    def paypal_options(self) -> PayPalOptions:
        return resolve_paypal_options(self.paypal.model_dump(exclude_none=True))


payment_settings = PaymentSettings()
