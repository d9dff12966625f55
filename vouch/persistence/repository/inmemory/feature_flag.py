"""In-memory feature flag repository for testing."""

from vouch.domain.repository.feature_flag import FeatureFlagRepository


class InMemoryFeatureFlagRepository(FeatureFlagRepository):
    """In-memory implementation of FeatureFlagRepository for testing."""

    def __init__(self) -> None:
        self._flags: dict[str, bool] = {}

    async def find_all(self) -> dict[str, bool]:
        return dict(self._flags)

    async def set(self, name: str, enabled: bool) -> None:
        self._flags[name] = enabled
