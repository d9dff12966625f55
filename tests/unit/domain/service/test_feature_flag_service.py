"""Unit tests for FeatureFlagService."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from vouch.config import FeatureFlagSettings
from vouch.domain.repository import FeatureFlagRepository
from vouch.domain.service import FeatureFlagCache, FeatureFlagService
from vouch.persistence.repository.inmemory import InMemoryFeatureFlagRepository
from tests.conftest import BASE_TIME
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class FakeClock:
    def __init__(self) -> None:
        self.now = BASE_TIME

    def __call__(self):
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


class FlakyFeatureFlagRepository(InMemoryFeatureFlagRepository):
    def __init__(self) -> None:
        super().__init__()
        self.available = True

    async def find_all(self):
        if not self.available:
            raise OperationalError("SELECT config", {}, Exception("timeout"))
        return await super().find_all()


def build_service(repository, clock=None, **settings) -> FeatureFlagService:
    return FeatureFlagService(
        repository,
        FeatureFlagCache(),
        FeatureFlagSettings(**settings),
        clock=clock or FakeClock(),
    )


class TestSnapshots:
    """Tests for refresh and current."""

    @pytest.mark.asyncio
    async def test_defaults_without_overrides(self, unit_env):
        service = await unit_env.get(FeatureFlagService)

        flags = await service.current()

        assert flags.is_enabled("enable_voting")
        assert not flags.is_enabled("enable_debug_mode")
        assert not flags.is_enabled("no_such_flag")

    @pytest.mark.asyncio
    async def test_overrides_layered_on_defaults(self, unit_env):
        repository = await unit_env.get(FeatureFlagRepository)
        await repository.set("enable_voting", False)
        await repository.set("enable_debug_mode", True)
        service = await unit_env.get(FeatureFlagService)

        flags = await service.refresh()

        assert not flags.is_enabled("enable_voting")
        assert flags.is_enabled("enable_debug_mode")
        assert flags.is_enabled("enable_live_feed")

    @pytest.mark.asyncio
    async def test_snapshot_is_immutable(self, unit_env):
        service = await unit_env.get(FeatureFlagService)
        flags = await service.current()

        with pytest.raises(TypeError):
            flags.flags["enable_voting"] = False

    @pytest.mark.asyncio
    async def test_cached_until_stale(self):
        repository = InMemoryFeatureFlagRepository()
        clock = FakeClock()
        service = build_service(repository, clock, cache_seconds=60)
        first = await service.current()

        await repository.set("enable_voting", False)
        clock.advance(59)
        assert (await service.current()) is first

        clock.advance(1)
        refreshed = await service.current()
        assert not refreshed.is_enabled("enable_voting")
        # The old snapshot was replaced, not mutated
        assert first.is_enabled("enable_voting")

    @pytest.mark.asyncio
    async def test_storage_failure_keeps_last_snapshot(self):
        repository = FlakyFeatureFlagRepository()
        await repository.set("enable_debug_mode", True)
        service = build_service(repository)
        known_good = await service.refresh()

        repository.available = False
        flags = await service.refresh()

        assert flags is known_good
        assert flags.is_enabled("enable_debug_mode")

    @pytest.mark.asyncio
    async def test_storage_failure_before_first_load_uses_defaults(self):
        repository = FlakyFeatureFlagRepository()
        repository.available = False
        service = build_service(repository)

        flags = await service.current()

        assert flags.is_enabled("enable_recommendation_comments")
        assert not flags.is_enabled("enable_debug_mode")
