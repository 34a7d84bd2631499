"""HTTP transport factory for talking to the downstream inventory service."""

import logging
from dataclasses import dataclass

import httpx

from order_service.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientTimeoutPolicy:
    """Connect and response timeouts in milliseconds, applied to every call."""

    connect_timeout_ms: int = 3000
    response_timeout_ms: int = 3000

    def __post_init__(self) -> None:
        for field_name in ("connect_timeout_ms", "response_timeout_ms"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{field_name} must be an integer, got {value!r}.")
            if value <= 0:
                raise ConfigurationError(f"{field_name} must be greater than zero, got {value}.")

    def to_httpx_timeout(self) -> httpx.Timeout:
        connect = self.connect_timeout_ms / 1000
        response = self.response_timeout_ms / 1000
        return httpx.Timeout(connect=connect, read=response, write=response, pool=connect)

    @property
    def call_deadline_seconds(self) -> float:
        """Upper bound on a whole call, however slowly the body trickles in."""
        return (self.connect_timeout_ms + self.response_timeout_ms) / 1000


def validate_base_url(base_url: str) -> httpx.URL:
    """Parse ``base_url`` and require an absolute http(s) URL with a host."""
    if not isinstance(base_url, str) or not base_url.strip():
        raise ConfigurationError("Base URL must be a non-empty string.")
    try:
        url = httpx.URL(base_url.strip())
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Base URL {base_url!r} is malformed: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"Base URL {base_url!r} must be an absolute http(s) URL with a host."
        )
    return url


async def _log_request(request: httpx.Request) -> None:
    logger.debug(
        "Sending inventory request",
        extra={"method": request.method, "url": str(request.url)},
    )


async def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "Received inventory response",
        extra={
            "method": response.request.method,
            "url": str(response.request.url),
            "status_code": response.status_code,
        },
    )


def create_inventory_transport(
    base_url: str,
    timeout_policy: ClientTimeoutPolicy,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured for the downstream inventory service.

    The connection pool is shared by every call made through the client, and the
    timeouts cannot be overridden per call.
    """
    url = validate_base_url(base_url)
    if not isinstance(timeout_policy, ClientTimeoutPolicy):
        raise ConfigurationError("timeout_policy must be a ClientTimeoutPolicy.")
    logger.info(
        "Creating inventory HTTP transport",
        extra={
            "base_url": str(url),
            "connect_timeout_ms": timeout_policy.connect_timeout_ms,
            "response_timeout_ms": timeout_policy.response_timeout_ms,
        },
    )
    return httpx.AsyncClient(
        base_url=url,
        timeout=timeout_policy.to_httpx_timeout(),
        transport=transport,
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )
