"""
Core server bootstrap for the order service.

Builds the FastAPI application, registers the API metadata with the OpenAPI
document and wires the inventory client into the routes.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from order_service.client import InventoryClient
from order_service.metadata import ApiMetadata, build_metadata, register_metadata
from order_service.routes import InventoryDependencies, build_router
from order_service.settings import Settings


class ServerApp:
    """Holds the construct-once resources shared by the HTTP application."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._inventory_client: InventoryClient | None = None
        self._dependencies = InventoryDependencies()
        self._metadata = build_metadata()
        self._app = FastAPI(lifespan=self._lifespan)
        register_metadata(self._app, self._metadata)
        self._app.include_router(build_router(self._dependencies))

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        self._logger.info("Order service accepting requests")
        try:
            yield
        finally:
            # Pooled connections belong to the serving event loop.
            await self._close_client()

    async def _close_client(self) -> None:
        client = self._inventory_client
        if client is None:
            return
        self._inventory_client = None
        self._dependencies.detach_client()
        await client.aclose()

    def startup(self) -> None:
        """Build the inventory client; invalid configuration fails here."""
        self._logger.info("Starting server bootstrap")
        self._inventory_client = InventoryClient.from_settings(self._settings)
        self._dependencies.attach_client(self._inventory_client)

    def shutdown(self) -> None:
        """Release acquired resources."""
        self._logger.info("Shutting down server bootstrap")
        if self._inventory_client is not None:
            asyncio.run(self._close_client())
        self._dependencies.detach_client()

    def serve_forever(self) -> None:
        """Run the HTTP server until interrupted."""
        host = "0.0.0.0"
        port = self._settings.http_port
        self._logger.info("Starting HTTP transport", extra={"host": host, "port": port})
        uvicorn.run(self._app, host=host, port=port)

    @property
    def app(self) -> FastAPI:
        """Expose the configured FastAPI application."""
        return self._app

    @property
    def metadata(self) -> ApiMetadata:
        return self._metadata


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
