"""Observability with Logfire.

Domain services open a span per operation and log outcomes with keyword
attributes::

    with logfire.span("request_service.respond", request_id=str(request_id)):
        ...
        logfire.info("Response appended", request_id=str(request_id), index=index)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from vouch.config import Settings

SERVICE_NAME = "vouch-api"
SERVICE_VERSION = "0.1.0"

# Live feed sockets may authenticate with ?token=<jwt>; keep it out of traces
SCRUB_PATTERNS = ["token"]

# Hit by the load balancer every few seconds
UNTRACED_URLS = "/health"


def should_send(settings: Settings) -> bool:
    """Explicit setting first, then whether a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to send to Logfire; without it output
    goes to the console only.
    """
    send_to_logfire = should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def _connection_attributes(connection, attributes: dict) -> dict:
    # HTTP requests and WebSocket sessions both pass through here
    result = {**attributes}
    result["transport"] = "http" if hasattr(connection, "method") else "websocket"
    result["path"] = connection.url.path
    if connection.client:
        result["client_host"] = connection.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and live feed sessions.

    Headers are not captured: they carry the session cookie.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_connection_attributes,
        excluded_urls=UNTRACED_URLS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries, tagging the SQL with the active span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
