"""松散输入（表单数据、JS 回调）的必填字段校验"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from domain.common.exceptions import MissingFieldError


def require_fields(data: Mapping[str, Any], required: Sequence[str]) -> dict[str, Any]:
    """返回 ``data`` 中的必填字段子集

    校验是完整的：所有缺失或为 ``None`` 的字段按 ``required`` 顺序一次性报告。
    """
    missing = [key for key in required if data.get(key) is None]
    if missing:
        raise MissingFieldError(missing)
    return {key: data[key] for key in required}
