"""Feature flag repository interface."""

from abc import ABC, abstractmethod


class FeatureFlagRepository(ABC):
    """Stored feature flag overrides."""

    @abstractmethod
    async def find_all(self) -> dict[str, bool]:
        """Load every stored flag override.

        Returns:
            Mapping of flag name to enabled state
        """
        pass

    @abstractmethod
    async def set(self, name: str, enabled: bool) -> None:
        """Store an override for one flag."""
        pass
