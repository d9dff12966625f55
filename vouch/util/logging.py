"""Stdlib logging setup.

Our own code logs through Logfire. Third-party libraries (uvicorn,
SQLAlchemy, asyncpg) use stdlib logging; their records are forwarded to
Logfire too so everything ends up in one place.
"""

import logging

import logfire

from vouch.config import Settings

# Quietened unless debug is on
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into Logfire. Call after ``configure_logfire``."""
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level, handlers=[logfire.LogfireLoggingHandler()], force=True
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)
