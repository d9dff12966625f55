"""Backfill recommendation origins use case."""

import logfire
from pydantic import BaseModel

from vouch.application.usecase.base import BaseUseCase
from vouch.domain.service import RecommendationService


class BackfillOriginsRequest(BaseModel):
    """Backfill origins request."""

    pass


class BackfillOriginsResponse(BaseModel):
    """Backfill origins response."""

    stamped: int


class BackfillOriginsUseCase(BaseUseCase):
    """One-off migration linking legacy recommendations to their requests."""

    def __init__(self, recommendation_service: RecommendationService) -> None:
        self.recommendation_service = recommendation_service

    async def execute(self, request: BackfillOriginsRequest) -> BackfillOriginsResponse:
        with logfire.span("backfill_origins.execute"):
            stamped = await self.recommendation_service.backfill_origins()
            return BackfillOriginsResponse(stamped=stamped)
