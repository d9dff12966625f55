"""Dependency injection container."""

from typing import Iterable

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from vouch.util.di import Component, select_providers


def create_container(
    mocked: Iterable[Component] = (), web: bool = True
) -> AsyncContainer:
    """Build a container.

    Args:
        mocked: Components to replace with mocks (tests only)
        web: Register the FastAPI integration provider; scripts that run
            outside a request pass False

    Returns:
        Container whose APP scope lives until ``close()``
    """
    providers = select_providers(mocked)
    if web:
        providers.append(FastapiProvider())
    return make_async_container(*providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app.

    Routes resolve ``FromDishka`` dependencies from it, and the live feed
    WebSocket opens its scopes from ``app.state.dishka_container``.
    """
    setup_dishka(container, app)
