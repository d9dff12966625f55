"""Get feature flags use case."""

from datetime import datetime

from pydantic import BaseModel

from vouch.domain.service import FeatureFlagService


class GetFeatureFlagsResponse(BaseModel):
    """Current feature flag snapshot."""

    flags: dict[str, bool]
    fetched_at: datetime


class GetFeatureFlagsUseCase:
    """Use case for reading the feature flag snapshot."""

    def __init__(self, feature_flag_service: FeatureFlagService) -> None:
        self.feature_flag_service = feature_flag_service

    async def execute(self) -> GetFeatureFlagsResponse:
        snapshot = await self.feature_flag_service.current()
        return GetFeatureFlagsResponse(
            flags=dict(snapshot.flags), fetched_at=snapshot.fetched_at
        )
