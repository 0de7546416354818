#!/usr/bin/env python3
"""Serve the taxonomy API with uvicorn.

Logfire is configured before the server starts so startup failures are
recorded too. The app itself is built by ``create_app`` inside uvicorn.
"""

import sys

import logfire
import uvicorn

from taxon.config import Settings
from taxon.util.logging import setup_logging
from taxon.util.observability import configure_logfire


def main() -> int:
    """Start the API server."""
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting taxonomy API",
            environment=settings.environment,
            host=settings.host,
            port=settings.port,
        )

        uvicorn.run(
            "taxon.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
