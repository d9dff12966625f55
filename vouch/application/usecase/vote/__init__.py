"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteUseCase, VoteTallyResponse
from .get_votes import GetVotesRequest, GetVotesUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteUseCase",
    "GetVotesRequest",
    "GetVotesUseCase",
    "VoteTallyResponse",
]
