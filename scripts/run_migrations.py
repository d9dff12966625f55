#!/usr/bin/env python3
"""Apply Alembic migrations before the API starts.

Failures are reported to Logfire and re-raised so the deploy stops
instead of serving against a stale schema.
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from vouch.config import Settings
from vouch.util.logging import setup_logging
from vouch.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Database is at revision", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
