"""Vote domain service."""

from dataclasses import dataclass

import logfire

from forum.domain.model.thread import Thread
from forum.domain.model.vote import VoteOutcome, VoteTally
from forum.domain.value import Authenticated, ReplyId, ThreadId, UserId, VoteType

from . import reply_tree
from .base import Service
from .reputation_service import ReputationService
from .thread_service import ThreadService


@dataclass
class VoteStats:
    """Vote tallies of a thread, its replies, and both together."""

    thread: VoteTally
    replies: VoteTally

    @property
    def total(self) -> VoteTally:
        return self.thread + self.replies


class VoteService(Service):
    """Domain service for votes on threads and replies.

    The ledger change is persisted with the thread first; the author's
    reputation is adjusted afterwards, once, with the resulting delta.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        reputation_service: ReputationService,
    ) -> None:
        """Initialize vote service.

        Args:
            thread_service: Thread domain service
            reputation_service: Reputation domain service
        """
        self.thread_service = thread_service
        self.reputation_service = reputation_service

    async def vote_on_thread(
        self, thread_id: ThreadId, voter: Authenticated, vote_type: VoteType | str
    ) -> VoteOutcome:
        """Cast, toggle or flip a vote on a thread.

        Args:
            thread_id: Thread ID
            voter: Authenticated voter
            vote_type: 'upvote' or 'downvote'

        Returns:
            Score delta, new score and the voter's current vote

        Raises:
            InvalidVoteError: If the vote type is not recognized
            NotFoundError: If the thread does not exist
        """
        vote_type = VoteType.parse(vote_type)
        with logfire.span(
            "vote_service.vote_on_thread",
            thread_id=str(thread_id),
            voter_id=str(voter.user_id),
            vote_type=vote_type.value,
        ):

            def apply(thread: Thread) -> tuple[VoteOutcome, UserId]:
                return thread.votes.cast(voter.user_id, vote_type), thread.author_id

            _, (outcome, author_id) = await self.thread_service.mutate(
                thread_id, apply
            )
            await self.reputation_service.adjust(author_id, outcome.delta)

            logfire.info(
                "Thread vote recorded",
                thread_id=str(thread_id),
                delta=outcome.delta,
                score=outcome.new_score,
            )
            return outcome

    async def vote_on_reply(
        self,
        thread_id: ThreadId,
        reply_id: ReplyId,
        voter: Authenticated,
        vote_type: VoteType | str,
    ) -> VoteOutcome:
        """Cast, toggle or flip a vote on a reply at any depth.

        Args:
            thread_id: Thread containing the reply
            reply_id: Reply ID
            voter: Authenticated voter
            vote_type: 'upvote' or 'downvote'

        Returns:
            Score delta, new score and the voter's current vote

        Raises:
            InvalidVoteError: If the vote type is not recognized
            NotFoundError: If the thread or the reply does not exist
        """
        vote_type = VoteType.parse(vote_type)
        with logfire.span(
            "vote_service.vote_on_reply",
            thread_id=str(thread_id),
            reply_id=str(reply_id),
            voter_id=str(voter.user_id),
            vote_type=vote_type.value,
        ):

            def apply(thread: Thread) -> tuple[VoteOutcome, UserId]:
                node = reply_tree.locate(thread.replies, reply_id).node
                return node.votes.cast(voter.user_id, vote_type), node.author_id

            _, (outcome, author_id) = await self.thread_service.mutate(
                thread_id, apply
            )
            await self.reputation_service.adjust(author_id, outcome.delta)

            logfire.info(
                "Reply vote recorded",
                reply_id=str(reply_id),
                delta=outcome.delta,
                score=outcome.new_score,
            )
            return outcome

    async def get_vote_stats(self, thread_id: ThreadId) -> VoteStats:
        """Tally the votes on a thread and on all of its replies.

        Raises:
            NotFoundError: If the thread does not exist
        """
        with logfire.span("vote_service.get_vote_stats", thread_id=str(thread_id)):
            thread = await self.thread_service.get_by_id(thread_id)
            return VoteStats(
                thread=thread.votes.tally(),
                replies=reply_tree.rollup_vote_stats(thread.replies),
            )
