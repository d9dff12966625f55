"""Get votes use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.vote.cast_vote import VoteTallyResponse
from vouch.domain.service import VoteService
from vouch.domain.value import Identity, VotableType


class GetVotesRequest(BaseModel):
    """Get votes request."""

    item_type: VotableType
    item_id: str  # UUID string
    viewer: str | None = None


class GetVotesUseCase:
    """Use case for reading an item's vote tally."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVotesRequest) -> VoteTallyResponse:
        tally = await self.vote_service.tally(
            parse_uuid(request.item_id),
            request.item_type,
            Identity(request.viewer) if request.viewer else None,
        )
        return VoteTallyResponse(
            item_type=request.item_type,
            item_id=request.item_id,
            up=tally.up,
            down=tally.down,
            score=tally.score,
            viewer_vote=tally.viewer_vote,
        )
