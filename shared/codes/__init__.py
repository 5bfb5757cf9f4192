"""
Shared business codes used across layers (Domain/Core/Infrastructure).

This package exposes BusinessCode at `shared.codes` and keeps
payment-specific codes under `shared.codes.payment_codes`.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Parameter errors (1xxxx)
    PARAM_MISSING = 10001
    PARAM_VALIDATION_ERROR = 10003


__all__ = ["BusinessCode"]
