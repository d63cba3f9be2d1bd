"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_vote_stats import (
    GetVoteStatsRequest,
    GetVoteStatsResponse,
    GetVoteStatsUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetVoteStatsRequest",
    "GetVoteStatsResponse",
    "GetVoteStatsUseCase",
]
