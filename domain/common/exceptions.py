"""领域层业务异常定义，供领域与基础设施使用。

核心（core）层仅负责日志与异常映射，领域层不反向依赖核心层。
"""
from __future__ import annotations

from typing import Iterable, Optional
from shared.codes import BusinessCode
from shared.codes.payment_codes import PaymentCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
        message_key: Optional[str] = None,
        format_params: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        self.message_key = message_key
        self.format_params = format_params
        super().__init__(self.message)


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
        message_key: str | None = None,
        format_params: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
            message_key=message_key or "validation.domain",
            format_params=format_params,
        )


class MissingFieldError(BusinessException):
    """一个或多个必填字段缺失或为 null

    ``missing`` 保持调用方给定的字段顺序，消息中列出全部缺失字段。
    """

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message=f"required fields are missing! required: {', '.join(self.missing)}",
            error_type="MissingField",
            details={"missing": self.missing},
            message_key="validation.fields.missing",
            format_params={"fields": ", ".join(self.missing)},
        )


class ConfigurationError(BusinessException):
    """配置无法识别或不合法，不可重试"""

    def __init__(self, message: str, *, violations: Optional[list[str]] = None):
        self.violations = list(violations or [])
        super().__init__(
            code=PaymentCode.CONFIGURATION_ERROR,
            message=message,
            error_type="ConfigurationError",
            details={"violations": self.violations} if self.violations else None,
            message_key="payments.config.invalid",
        )


class StateError(BusinessException):
    def __init__(self, message: str, *, order_id: Optional[str] = None):
        super().__init__(
            code=PaymentCode.STATE_ERROR,
            message=message,
            error_type="StateError",
            details={"order_id": order_id} if order_id else None,
            message_key="payments.state.invalid",
        )


class UnsupportedOperationError(BusinessException):
    def __init__(self, message: str, *, operation: Optional[str] = None):
        super().__init__(
            code=PaymentCode.UNSUPPORTED_OPERATION,
            message=message,
            error_type="UnsupportedOperation",
            details={"operation": operation} if operation else None,
            message_key="payments.operation.unsupported",
        )


class ResponseFormatError(BusinessException):
    """网关响应体无法解析为预期结构"""

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(
            code=PaymentCode.RESPONSE_FORMAT_ERROR,
            message=message,
            error_type="ResponseFormatError",
            details=details,
            message_key="payments.response.malformed",
        )
