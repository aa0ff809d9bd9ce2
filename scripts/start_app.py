#!/usr/bin/env python3
"""Serve the Inkwell API with uvicorn.

Logging and Logfire are set up here, before the app factory runs, so that
failures while building the container are reported too.
"""

import sys

import logfire
import uvicorn

from inkwell.config import Settings
from inkwell.util.logging import setup_logging
from inkwell.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    reload = settings.environment == "development"
    logfire.info(
        "Serving Inkwell API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
        reload=reload,
    )

    try:
        uvicorn.run(
            "inkwell.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=reload,
            proxy_headers=True,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
