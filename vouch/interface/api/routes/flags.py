"""Feature flag routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from vouch.application.usecase.flags import (
    GetFeatureFlagsResponse,
    GetFeatureFlagsUseCase,
)

router = APIRouter(tags=["flags"], route_class=DishkaRoute)


@router.get("/flags", response_model=GetFeatureFlagsResponse)
async def get_feature_flags(
    get_flags_use_case: FromDishka[GetFeatureFlagsUseCase],
) -> GetFeatureFlagsResponse:
    """Current feature flag snapshot.

    Public: the client reads it before sign-in to decide what to show.
    """
    return await get_flags_use_case.execute()
