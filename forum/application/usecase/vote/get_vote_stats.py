"""Get vote stats use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import VoteTallyItem
from forum.domain.service import VoteService
from forum.domain.value import ThreadId


class GetVoteStatsRequest(BaseModel):
    """Get vote stats request."""

    thread_id: str  # UUID string


class GetVoteStatsResponse(BaseModel):
    """Get vote stats response."""

    thread_id: str
    thread: VoteTallyItem
    replies: VoteTallyItem  # Every reply at any depth
    total: VoteTallyItem


class GetVoteStatsUseCase:
    """Use case for tallying a thread's votes."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get vote stats use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetVoteStatsRequest) -> GetVoteStatsResponse:
        """Execute get vote stats flow.

        Raises:
            NotFoundError: If the thread does not exist
        """
        stats = await self.vote_service.get_vote_stats(
            ThreadId(UUID(request.thread_id))
        )
        return GetVoteStatsResponse(
            thread_id=request.thread_id,
            thread=VoteTallyItem.from_tally(stats.thread),
            replies=VoteTallyItem.from_tally(stats.replies),
            total=VoteTallyItem.from_tally(stats.total),
        )
