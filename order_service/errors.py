"""Error taxonomy shared by configuration loading and the inventory client."""

from enum import Enum


class ConfigurationError(ValueError):
    """Raised when configuration values are invalid at construction time."""


class FailureCause(str, Enum):
    """Tags distinguishing why an outbound call failed."""

    CONNECT_TIMEOUT = "connect_timeout"
    RESPONSE_TIMEOUT = "response_timeout"
    CONNECTION_REFUSED = "connection_refused"
    HTTP_STATUS = "http_status"
    PROTOCOL_ERROR = "protocol_error"
    INVALID_BODY = "invalid_body"


class RemoteCallFailure(RuntimeError):
    """An outbound call to the inventory service did not complete successfully."""

    def __init__(
        self,
        message: str,
        *,
        cause: FailureCause,
        method: str,
        path: str,
        elapsed_ms: float,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.method = method
        self.path = path
        self.elapsed_ms = elapsed_ms
        self.status_code = status_code

    @property
    def timed_out(self) -> bool:
        return self.cause in (FailureCause.CONNECT_TIMEOUT, FailureCause.RESPONSE_TIMEOUT)


class ConnectTimeout(RemoteCallFailure):
    """No connection was established within the connect timeout."""


class ResponseTimeout(RemoteCallFailure):
    """Connected, but no response arrived within the response timeout."""
