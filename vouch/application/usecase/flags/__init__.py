"""Feature flag use cases."""

from .get_flags import GetFeatureFlagsResponse, GetFeatureFlagsUseCase

__all__ = ["GetFeatureFlagsResponse", "GetFeatureFlagsUseCase"]
