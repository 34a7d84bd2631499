"""HTTP routes for the order service."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from order_service.client import InventoryClient
from order_service.errors import RemoteCallFailure

logger = logging.getLogger(__name__)


@dataclass
class InventoryDependencies:
    """Runtime dependencies required by the inventory routes."""

    inventory_client: InventoryClient | None = None

    def attach_client(self, client: InventoryClient) -> None:
        self.inventory_client = client

    def detach_client(self) -> None:
        self.inventory_client = None

    def require_client(self) -> InventoryClient:
        if self.inventory_client is None:
            raise RuntimeError("Inventory API client is not initialized.")
        return self.inventory_client


class InventoryAvailability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sku_code: str = Field(alias="skuCode")
    quantity: int
    in_stock: bool = Field(alias="inStock")


def build_router(dependencies: InventoryDependencies) -> APIRouter:
    """Build the router exposing health and inventory availability endpoints."""
    router = APIRouter()

    def _log_route_event(route: str, event: str, **fields: object) -> None:
        logger.info(
            "inventory_route_event",
            extra={"route": route, "event": event, **fields},
        )

    @router.get("/health", tags=["Health"], summary="Liveness probe")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(
        "/api/inventory/availability",
        tags=["Inventory"],
        summary="Check stock for a SKU",
        description="Asks the inventory service whether the requested quantity of a SKU is in stock.",
        response_model=InventoryAvailability,
        response_model_by_alias=True,
        responses={
            502: {"description": "Inventory service failed or returned an error."},
            503: {"description": "Inventory client is not initialized."},
            504: {"description": "Inventory service timed out."},
        },
    )
    async def inventory_availability(
        sku_code: Annotated[str, Query(alias="skuCode", min_length=1, description="SKU to look up.")],
        quantity: Annotated[int, Query(gt=0, description="Units required.")],
    ) -> InventoryAvailability | JSONResponse:
        try:
            client = dependencies.require_client()
        except RuntimeError as exc:
            logger.warning("inventory_availability called before startup")
            return JSONResponse(status_code=503, content={"detail": str(exc)})

        try:
            in_stock = await client.is_in_stock(sku_code, quantity)
        except RemoteCallFailure as exc:
            logger.warning("inventory_availability failed due to API error", exc_info=True)
            _log_route_event(
                "inventory_availability",
                "api_error",
                cause=exc.cause.value,
                elapsed_ms=exc.elapsed_ms,
            )
            return JSONResponse(
                status_code=504 if exc.timed_out else 502,
                content={
                    "detail": str(exc),
                    "cause": exc.cause.value,
                    "status_code": exc.status_code,
                },
            )

        _log_route_event(
            "inventory_availability",
            "success",
            sku_code=sku_code,
            in_stock=in_stock,
        )
        return InventoryAvailability(sku_code=sku_code, quantity=quantity, in_stock=in_stock)

    return router
