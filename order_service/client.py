"""
Inventory service client wrapper.

Each remote operation is a concrete method that builds the request, sends it
once over the shared transport and decodes the body, so failures surface to the
caller as ``RemoteCallFailure`` with a cause tag and timing information.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

import anyio
import httpx

from order_service.errors import (
    ConnectTimeout,
    FailureCause,
    RemoteCallFailure,
    ResponseTimeout,
)
from order_service.http_client import ClientTimeoutPolicy, create_inventory_transport
from order_service.settings import Settings

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/api/inventory"


def _require_non_empty(value: str, field_name: str) -> str:
    """Normalize and validate non-empty request arguments."""
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return cleaned


def _require_positive(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{field_name} must be a positive integer.")
    return value


def build_client(base_url: str, timeout_policy: ClientTimeoutPolicy) -> "InventoryClient":
    """Build an inventory client handle; raises ConfigurationError on bad input."""
    return InventoryClient(
        create_inventory_transport(base_url, timeout_policy),
        _deadline_seconds=timeout_policy.call_deadline_seconds,
    )


@dataclass(slots=True)
class InventoryClient:
    """Typed wrapper around the shared AsyncClient."""

    _client: httpx.AsyncClient
    _deadline_seconds: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "InventoryClient":
        """Factory that builds the client from Settings."""
        policy = ClientTimeoutPolicy(
            connect_timeout_ms=settings.connect_timeout_ms,
            response_timeout_ms=settings.response_timeout_ms,
        )
        return build_client(settings.inventory_service_url, policy)

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self._client.aclose()

    async def is_in_stock(self, sku_code: str, quantity: int) -> bool:
        """Ask the inventory service whether ``quantity`` units of ``sku_code`` are available."""
        sku_code_clean = _require_non_empty(sku_code, "sku_code")
        quantity_clean = _require_positive(quantity, "quantity")
        logger.debug(
            "Checking stock",
            extra={"sku_code": sku_code_clean, "quantity": quantity_clean},
        )
        return await self._request(
            "GET",
            INVENTORY_PATH,
            expect=bool,
            params={"skuCode": sku_code_clean, "quantity": quantity_clean},
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        expect: type | None = None,
        **kwargs: Any,
    ) -> Any:
        """Normalized request handler for all outgoing API calls."""
        started = time.perf_counter()

        def _elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 1)

        def _transport_error(
            error_cls: type[RemoteCallFailure],
            cause: FailureCause,
            message: str,
            *,
            exc: Exception,
        ) -> RemoteCallFailure:
            elapsed_ms = _elapsed_ms()
            logger.error(
                message,
                extra={
                    "method": method,
                    "path": path,
                    "cause": cause.value,
                    "elapsed_ms": elapsed_ms,
                },
                exc_info=exc,
            )
            return error_cls(
                message,
                cause=cause,
                method=method,
                path=path,
                elapsed_ms=elapsed_ms,
            )

        try:
            with anyio.fail_after(self._deadline_seconds):
                response = await self._client.request(method, path, **kwargs)
        except (httpx.ConnectTimeout, httpx.PoolTimeout) as exc:
            raise _transport_error(
                ConnectTimeout,
                FailureCause.CONNECT_TIMEOUT,
                f"Inventory API connection timed out ({method} {path}).",
                exc=exc,
            ) from exc
        except httpx.TimeoutException as exc:
            raise _transport_error(
                ResponseTimeout,
                FailureCause.RESPONSE_TIMEOUT,
                f"Inventory API response timed out ({method} {path}).",
                exc=exc,
            ) from exc
        except httpx.ConnectError as exc:
            raise _transport_error(
                RemoteCallFailure,
                FailureCause.CONNECTION_REFUSED,
                f"Inventory API connection refused ({method} {path}): {exc!s}",
                exc=exc,
            ) from exc
        except httpx.RequestError as exc:
            raise _transport_error(
                RemoteCallFailure,
                FailureCause.PROTOCOL_ERROR,
                f"Inventory API request failed ({method} {path}): {exc!s}",
                exc=exc,
            ) from exc
        except TimeoutError as exc:
            raise _transport_error(
                ResponseTimeout,
                FailureCause.RESPONSE_TIMEOUT,
                f"Inventory API call exceeded its {self._deadline_seconds}s deadline ({method} {path}).",
                exc=exc,
            ) from exc

        elapsed_ms = _elapsed_ms()
        if not response.is_success:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            logger.warning(
                "Inventory API responded with error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "elapsed_ms": elapsed_ms,
                    "content": snippet,
                },
            )
            raise RemoteCallFailure(
                f"Inventory API error ({response.status_code}) during {method} {path}: {snippet or 'no body provided.'}",
                cause=FailureCause.HTTP_STATUS,
                method=method,
                path=path,
                elapsed_ms=elapsed_ms,
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as exc:
            logger.error(
                "Inventory API returned invalid JSON",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise RemoteCallFailure(
                f"Inventory API returned invalid JSON during {method} {path}.",
                cause=FailureCause.INVALID_BODY,
                method=method,
                path=path,
                elapsed_ms=elapsed_ms,
                status_code=response.status_code,
            ) from exc

        if expect is not None and not isinstance(data, expect):
            logger.error(
                "Inventory API returned an unexpected body type",
                extra={"method": method, "path": path, "expected": expect.__name__},
            )
            raise RemoteCallFailure(
                f"Inventory API returned {type(data).__name__} during {method} {path}, expected {expect.__name__}.",
                cause=FailureCause.INVALID_BODY,
                method=method,
                path=path,
                elapsed_ms=elapsed_ms,
                status_code=response.status_code,
            )

        return data
