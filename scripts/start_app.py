#!/usr/bin/env python3
"""Start the comments API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from whistle.config import Settings
from whistle.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire before the app factory instruments FastAPI
    configure_logfire(settings)

    try:
        logfire.info("Starting comments API", host=settings.host, port=settings.port)
        uvicorn.run(
            "whistle.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
