"""Feature flag domain service.

Flags are read as immutable snapshots. ``refresh`` builds a new snapshot
from the configured defaults overlaid with stored overrides; nothing is
mutated in place. The most recent snapshot is held by a ``FeatureFlagCache``
that lives for the whole application.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

import logfire
from sqlalchemy.exc import SQLAlchemyError

from vouch.config import FeatureFlagSettings
from vouch.domain.model.common import utc_now
from vouch.domain.model.feature_flags import FeatureFlags
from vouch.domain.repository import FeatureFlagRepository

from .base import Service


class FeatureFlagCache:
    """Holder for the latest snapshot, shared across requests."""

    def __init__(self) -> None:
        self.snapshot: Optional[FeatureFlags] = None


class FeatureFlagService(Service):
    """Domain service for feature flag snapshots."""

    def __init__(
        self,
        feature_flag_repository: FeatureFlagRepository,
        cache: FeatureFlagCache,
        settings: FeatureFlagSettings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.feature_flag_repository = feature_flag_repository
        self.cache = cache
        self.settings = settings
        self.clock = clock

    async def refresh(self) -> FeatureFlags:
        """Load a new snapshot.

        If storage cannot be read, the previous snapshot stays current (or
        the defaults, if there is none yet).
        """
        with logfire.span("feature_flag_service.refresh"):
            try:
                overrides = await self.feature_flag_repository.find_all()
            except SQLAlchemyError as e:
                logfire.warn("Feature flags unavailable, keeping last snapshot", error=str(e))
                if self.cache.snapshot is None:
                    self.cache.snapshot = FeatureFlags(
                        flags=dict(self.settings.defaults), fetched_at=self.clock()
                    )
                return self.cache.snapshot

            snapshot = FeatureFlags(
                flags={**self.settings.defaults, **overrides}, fetched_at=self.clock()
            )
            self.cache.snapshot = snapshot
            logfire.info("Feature flags refreshed", flags=dict(snapshot.flags))
            return snapshot

    async def current(self) -> FeatureFlags:
        """Return the cached snapshot, refreshing it once it is stale."""
        snapshot = self.cache.snapshot
        ttl = timedelta(seconds=self.settings.cache_seconds)
        if snapshot is None or self.clock() - snapshot.fetched_at >= ttl:
            return await self.refresh()
        return snapshot

    async def is_enabled(self, name: str) -> bool:
        return (await self.current()).is_enabled(name)
