"""
Exceptions for payment providers mapped to unified BusinessException variants.
"""
from __future__ import annotations

from typing import Optional
from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class GatewayCommunicationError(BusinessException):
    """Transport failure, non-2xx reply, or no usable token/body from the gateway."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        provider_code: str | None = None,
        error_description: str | None = None,
        details: Optional[dict] = None,
    ):
        self.provider = provider
        self.provider_code = provider_code
        self.error_description = error_description
        full_details = {"provider": provider, "provider_code": provider_code}
        if error_description:
            full_details["error_description"] = error_description
        if details:
            full_details.update(details)
        super().__init__(
            code=PaymentCode.PROVIDER_ERROR,
            message=message,
            error_type="GatewayCommunicationError",
            details=full_details,
        )
