#!/usr/bin/env python3
"""Serve the Vouch API under uvicorn.

Refuses to start a deployed environment still on development secrets.
Startup failures are sent to Logfire before the process exits.
"""

import sys
import logfire
import uvicorn

from vouch.config import Settings
from vouch.util.error import ConfigurationError
from vouch.util.logging import setup_logging
from vouch.util.observability import configure_logfire

APP = "vouch.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        settings.ensure_deployable()
    except ConfigurationError as e:
        logfire.error("Refusing to start", setting=e.setting, reason=e.reason)
        return 2

    logfire.info(
        "Serving Vouch API",
        environment=settings.environment,
        base_url=settings.api.base_url,
        git_sha=settings.git_sha,
    )
    try:
        # The live feed keeps sockets open; uvicorn pings them so dead
        # clients release their subscription
        uvicorn.run(
            APP,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            ws_ping_interval=20,
            ws_ping_timeout=20,
            proxy_headers=True,
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
