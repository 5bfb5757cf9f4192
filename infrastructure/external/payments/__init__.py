"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

from core.settings import PayPalOptions, payment_settings
from application.ports.payment_gateway import GatewayClient


def get_payment_gateway(
    provider: Optional[str] = None,
    *,
    options: Optional[PayPalOptions] = None,
) -> GatewayClient:
    name = (provider or payment_settings.default_provider).lower()
    if name in {"paypal", "pp"}:
        from .paypal_client import PayPalClient, PayPalTokenProvider
        opts = options or payment_settings.paypal_options()
        timeouts = payment_settings.timeouts.model_dump()
        tokens = PayPalTokenProvider(
            opts.client_id,
            opts.client_secret,
            mode=opts.mode,
            timeouts=timeouts,
        )
        return PayPalClient(tokens, mode=opts.mode, timeouts=timeouts)
    raise ValueError(f"Unsupported payment provider: {name}")


def get_checkout_orchestrator(options: Optional[PayPalOptions] = None):
    """Composition root: a PayPal smart-button orchestrator built from settings."""
    from application.services.payment_orchestrator import PaymentOrchestrator
    opts = options or payment_settings.paypal_options()
    return PaymentOrchestrator(
        get_payment_gateway("paypal", options=opts),
        opts,
        default_currency=payment_settings.default_currency,
    )
