"""
Payment specific codes and provider status mapping.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000
    RESPONSE_FORMAT_ERROR = 60005

    # Checkout lifecycle errors (61xxx)
    CONFIGURATION_ERROR = 61000
    STATE_ERROR = 61001
    UNSUPPORTED_OPERATION = 61002


# Internal status vocabulary handed to the order-management layer
STATUS_AUTHORIZED = "authorized"
STATUS_CLEARED = "cleared"
STATUS_CANCELLED = "cancelled"


# Provider→internal status mapping, one table per call site.
# Anything not listed folds into STATUS_CANCELLED.
PROVIDER_STATUS_TO_INTERNAL = {
    "paypal.order": {
        "APPROVED": STATUS_AUTHORIZED,
    },
    "paypal.capture": {
        "COMPLETED": STATUS_CLEARED,
    },
}
