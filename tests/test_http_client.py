import httpx
import pytest

from order_service.client import InventoryClient, build_client
from order_service.errors import ConfigurationError
from order_service.http_client import (
    ClientTimeoutPolicy,
    create_inventory_transport,
    validate_base_url,
)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "base_url",
    ["http://localhost:9999", "https://inventory.internal", "http://10.0.0.5:8082/prefix"],
)
async def test_build_client_accepts_valid_configuration(base_url: str) -> None:
    client = build_client(base_url, ClientTimeoutPolicy(connect_timeout_ms=1500, response_timeout_ms=2500))
    assert isinstance(client, InventoryClient)
    await client.aclose()


@pytest.mark.parametrize(
    ("connect_ms", "response_ms"),
    [(0, 3000), (3000, 0), (-1, 3000), (3000, -250)],
)
def test_non_positive_timeouts_raise_configuration_error(connect_ms: int, response_ms: int) -> None:
    with pytest.raises(ConfigurationError):
        build_client(
            "http://localhost:9999",
            ClientTimeoutPolicy(connect_timeout_ms=connect_ms, response_timeout_ms=response_ms),
        )


@pytest.mark.parametrize("value", [1.5, "3000", None, True])
def test_timeouts_must_be_integers(value: object) -> None:
    with pytest.raises(ConfigurationError):
        ClientTimeoutPolicy(connect_timeout_ms=value)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "base_url",
    ["", "   ", "inventory-service", "/api/inventory", "ftp://inventory.internal", "http://"],
)
def test_malformed_base_url_raises_configuration_error(base_url: str) -> None:
    with pytest.raises(ConfigurationError):
        build_client(base_url, ClientTimeoutPolicy())


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        validate_base_url("not a url")


def test_policy_must_be_a_timeout_policy() -> None:
    with pytest.raises(ConfigurationError):
        create_inventory_transport("http://localhost:9999", {"connect_timeout_ms": 3000})  # type: ignore[arg-type]


def test_default_policy_matches_three_second_timeouts() -> None:
    policy = ClientTimeoutPolicy()
    assert policy.connect_timeout_ms == 3000
    assert policy.response_timeout_ms == 3000


@pytest.mark.anyio
async def test_transport_applies_policy_to_every_phase() -> None:
    transport = create_inventory_transport(
        "http://localhost:9999",
        ClientTimeoutPolicy(connect_timeout_ms=1000, response_timeout_ms=4000),
    )
    assert transport.timeout.connect == 1.0
    assert transport.timeout.pool == 1.0
    assert transport.timeout.read == 4.0
    assert transport.timeout.write == 4.0
    assert str(transport.base_url).startswith("http://localhost:9999")
    await transport.aclose()


@pytest.mark.anyio
async def test_transport_logs_requests_and_responses(caplog: pytest.LogCaptureFixture) -> None:
    transport = create_inventory_transport(
        "http://mock.local",
        ClientTimeoutPolicy(),
        transport=httpx.MockTransport(lambda req: httpx.Response(200, json=True)),
    )
    caplog.set_level("DEBUG", logger="order_service.http_client")
    client = InventoryClient(transport)
    assert await client.is_in_stock("iphone_15", 1) is True
    messages = [record.getMessage() for record in caplog.records]
    assert "Sending inventory request" in messages
    assert "Received inventory response" in messages
    await client.aclose()


def test_call_deadline_covers_connect_and_response() -> None:
    policy = ClientTimeoutPolicy(connect_timeout_ms=300, response_timeout_ms=700)
    assert policy.call_deadline_seconds == 1.0
