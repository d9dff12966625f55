"""Container-backed fixtures for service and use case tests.

Everything is mocked by default: in-memory repositories and an
in-process change feed, so no database is required. Unmocking
``persistence`` needs a reachable Postgres at ``DATABASE__URL``.
"""

import pytest_asyncio

from vouch.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Return a fixture yielding a request-scoped dishka container.

    Each test gets a fresh container, so in-memory state never leaks
    between tests::

        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_ask(unit_env):
            service = await unit_env.get(RequestService)
            ...
    """

    @pytest_asyncio.fixture
    async def _environment():
        container = build_test_container(unmock=unmock or set())
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _environment
