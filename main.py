"""Entry point for the order service."""

import logging
import os

from order_service.server import build_server
from order_service.settings import Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Bootstrap and run the HTTP server."""
    _configure_logging()
    logger = logging.getLogger("order-service")
    settings = Settings.load()
    server = build_server(settings)

    try:
        server.startup()
        logger.info(
            "Order service ready at http://localhost:%s/docs",
            settings.http_port,
        )
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested (Ctrl+C).")
    except Exception:
        logger.exception("Server stopped due to an unexpected error.")
        raise
    finally:
        server.shutdown()
        logger.info("Server shutdown complete.")


if __name__ == "__main__":
    main()
