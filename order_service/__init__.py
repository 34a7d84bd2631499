"""
Order service package.

Holds the API metadata published through OpenAPI and the typed client used to
call the downstream inventory service.
"""

from order_service.client import InventoryClient, build_client
from order_service.errors import (
    ConfigurationError,
    ConnectTimeout,
    FailureCause,
    RemoteCallFailure,
    ResponseTimeout,
)
from order_service.http_client import ClientTimeoutPolicy
from order_service.metadata import ApiMetadata, build_metadata

__all__ = [
    "ApiMetadata",
    "ClientTimeoutPolicy",
    "ConfigurationError",
    "ConnectTimeout",
    "FailureCause",
    "InventoryClient",
    "RemoteCallFailure",
    "ResponseTimeout",
    "build_client",
    "build_metadata",
]
