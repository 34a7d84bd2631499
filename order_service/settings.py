"""Environment-driven configuration for the order service."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from order_service.errors import ConfigurationError

DEFAULT_TIMEOUT_MS = 3000


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip() or str(default)
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer.") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero.")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    inventory_service_url: str
    connect_timeout_ms: int = DEFAULT_TIMEOUT_MS
    response_timeout_ms: int = DEFAULT_TIMEOUT_MS
    http_port: int = 8080

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally.
        """
        load_dotenv()

        inventory_service_url = os.getenv("INVENTORY_URL", "").strip()
        if not inventory_service_url:
            raise ConfigurationError("INVENTORY_URL is required but was not provided.")

        return cls(
            inventory_service_url=inventory_service_url,
            connect_timeout_ms=_positive_int("INVENTORY_CONNECT_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            response_timeout_ms=_positive_int("INVENTORY_RESPONSE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            http_port=_positive_int("HTTP_PORT", 8080),
        )
