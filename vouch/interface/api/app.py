"""FastAPI application."""

from typing import cast

import logfire
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vouch.config import Settings
from vouch.domain.error import DomainError
from vouch.interface.api.routes import (
    feed,
    flags,
    friends,
    health,
    recommendations,
    requests,
    threads,
    votes,
)
from vouch.interface.error import to_http_exception
from vouch.util.di.container import create_container, setup_di
from vouch.util.observability import SERVICE_VERSION, instrument_fastapi

ROUTERS: tuple[APIRouter, ...] = (
    health.router,
    flags.router,
    friends.router,
    requests.router,
    threads.router,
    recommendations.router,
    votes.router,
    feed.router,
)


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate an unhandled domain error into its HTTP response."""
    # Registered for DomainError only
    http_exc = to_http_exception(cast(DomainError, exc))
    logfire.warn(
        "Request failed with domain error",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=http_exc.status_code,
    )
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"detail": http_exc.detail},
        headers=http_exc.headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API: CORS, tracing, DI container, error mapping and routes.

    Logfire must already be configured (start_app.py does this).
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Vouch API",
        description="Ask your friends, hear back from people you trust",
        version=SERVICE_VERSION,
        debug=settings.debug,
    )
    instrument_fastapi(app_instance)

    # Sessions ride on the auth_token cookie, so credentials must be allowed
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        expose_headers=["Retry-After"],
        max_age=600,
    )

    setup_di(app_instance, create_container())
    app_instance.add_exception_handler(DomainError, handle_domain_error)

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Imported by uvicorn ("vouch.interface.api.app:app")
app = create_app()
