#!/usr/bin/env python3
"""Link legacy recommendations to the request responses they came from.

Recommendations shared before origins were stamped carry no link back to
their request. This finds the matching response for each one and stamps
it. Safe to run more than once.
"""

import asyncio
import sys

import logfire

from vouch.application.usecase.recommendation import (
    BackfillOriginsRequest,
    BackfillOriginsUseCase,
)
from vouch.config import Settings
from vouch.util.di.container import create_container
from vouch.util.observability import configure_logfire


async def run() -> int:
    container = create_container(web=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(BackfillOriginsUseCase)
            result = await use_case.execute(BackfillOriginsRequest())
        return result.stamped
    finally:
        await container.close()


def main() -> int:
    """Run the backfill and log the outcome to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        stamped = asyncio.run(run())
        logfire.info("Origin backfill finished", stamped=stamped)
        return 0
    except Exception as e:
        logfire.error(
            "Origin backfill failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
