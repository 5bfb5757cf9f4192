"""
Base payment client implementing shared concerns: http, error mapping, logging, parsing.

Concrete providers subclass and implement provider-specific endpoints. There
is no retry layer here; every failure surfaces to the caller once.
"""
from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.logging_config import get_logger
from domain.common.exceptions import ResponseFormatError
from infrastructure.external.payments.exceptions import GatewayCommunicationError


logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class BasePaymentClient:
    provider: str = "base"

    def __init__(
        self,
        *,
        base_url: str,
        timeouts: Optional[dict[str, float]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeouts_cfg = timeouts or {"connect": 1.0, "read": 3.0, "write": 3.0, "total": 5.0}
        self._client: Optional[httpx.AsyncClient] = http_client

    @property
    def timeouts(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._timeouts_cfg["connect"],
            read=self._timeouts_cfg["read"],
            write=self._timeouts_cfg["write"],
            timeout=self._timeouts_cfg["total"],
        )

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeouts)
        return self._client

    async def aclose(self) -> None:
        """Close underlying HTTP client if created."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        url = self._url(path)
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            self._log("gateway_transport_error", method=method, path=path, error=str(exc))
            raise GatewayCommunicationError(
                f"{method} {path} failed: {exc}",
                provider=self.provider,
            ) from exc

        self._log("gateway_response", method=method, path=path, status_code=response.status_code)
        if raise_for_status and response.is_error:
            description = self._error_description(response)
            raise GatewayCommunicationError(
                f"{method} {path} returned HTTP {response.status_code}"
                + (f": {description}" if description else ""),
                provider=self.provider,
                provider_code=str(response.status_code),
                error_description=description,
            )
        return response

    @staticmethod
    def _error_description(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return response.text or None
        if isinstance(body, dict):
            return body.get("error_description") or body.get("message") or body.get("error")
        return None

    def _parse(self, response: httpx.Response, model: Type[M]) -> M:
        """Deserialize a body into its typed schema, once, at the boundary."""
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseFormatError(
                f"Unexpected {self.provider} response for {model.__name__}",
                details={"provider": self.provider, "errors": exc.errors(include_url=False)},
            ) from exc

    def _log(self, event: str, **kwargs) -> None:
        logger.info(
            event,
            provider=self.provider,
            **kwargs,
        )
