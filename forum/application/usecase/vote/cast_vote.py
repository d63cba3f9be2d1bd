"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import Authenticated, ReplyId, ThreadId, VotableType, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request.

    `vote_type` stays a plain string so that unknown values reach the
    domain and fail there as an invalid vote.
    """

    thread_id: str  # UUID string
    reply_id: str | None = None  # UUID string; None votes on the thread itself
    requester: Authenticated
    vote_type: str  # 'upvote' or 'downvote'


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    score: int
    delta: int
    user_vote: VoteType | None  # None when the vote was toggled off


class CastVoteUseCase:
    """Use case for voting on a thread or a reply."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Voting the same way twice removes the vote; voting the other way
        flips it.

        Args:
            request: Cast vote request

        Returns:
            New score and the caller's current vote

        Raises:
            InvalidVoteError: If the vote type is not recognized
            NotFoundError: If the thread or reply does not exist
        """
        thread_id = ThreadId(UUID(request.thread_id))

        if request.reply_id is None:
            outcome = await self.vote_service.vote_on_thread(
                thread_id, request.requester, request.vote_type
            )
            votable_type, votable_id = VotableType.THREAD, request.thread_id
        else:
            outcome = await self.vote_service.vote_on_reply(
                thread_id,
                ReplyId(UUID(request.reply_id)),
                request.requester,
                request.vote_type,
            )
            votable_type, votable_id = VotableType.REPLY, request.reply_id

        return CastVoteResponse(
            votable_type=votable_type,
            votable_id=votable_id,
            score=outcome.new_score,
            delta=outcome.delta,
            user_vote=outcome.voter_current_vote,
        )
