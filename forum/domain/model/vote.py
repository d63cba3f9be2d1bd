"""Vote ledger.

Each votable entity (a thread or a single reply) owns a ledger holding at
most one vote per voter. The ledger computes score deltas but never touches
reputation; callers hand the delta to the reputation service.
"""

from typing import Optional

from pydantic import Field, RootModel, computed_field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VoteType
from forum.domain.value.common import ValueObject


class Vote(DomainModel):
    """A single voter's vote on one entity."""

    voter_id: UserId
    type: VoteType


class VoteTally(ValueObject):
    """Upvote and downvote counts with the derived score."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @computed_field
    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    def __add__(self, other: "VoteTally") -> "VoteTally":
        return VoteTally(
            upvotes=self.upvotes + other.upvotes,
            downvotes=self.downvotes + other.downvotes,
        )


class VoteOutcome(ValueObject):
    """Result of casting a vote.

    Attributes:
        delta: Signed change of the entity's score, to be applied to the
            author's reputation
        new_score: Score after the cast
        voter_current_vote: The voter's vote after the cast (None if toggled off)
    """

    delta: int
    new_score: int
    voter_current_vote: Optional[VoteType] = None


class VoteLedger(RootModel):
    """Ordered one-vote-per-voter ledger."""

    root: list[Vote] = Field(default_factory=list)

    def find(self, voter_id: UserId) -> Optional[Vote]:
        """Return the voter's vote, if any."""
        for vote in self.root:
            if vote.voter_id == voter_id:
                return vote
        return None

    def current_vote(self, voter_id: UserId) -> Optional[VoteType]:
        vote = self.find(voter_id)
        return vote.type if vote else None

    def cast(self, voter_id: UserId, vote_type: VoteType | str) -> VoteOutcome:
        """Cast, toggle off, or flip a voter's vote.

        - No existing vote: append it (+1 up, -1 down)
        - Same type again: remove it (-1 for an upvote, +1 for a downvote)
        - Opposite type: flip in place (+2 down->up, -2 up->down)

        Args:
            voter_id: Voter's user ID
            vote_type: 'upvote' or 'downvote'

        Returns:
            Score delta, new score and the voter's resulting vote

        Raises:
            InvalidVoteError: If vote_type is not recognized
        """
        vote_type = VoteType.parse(vote_type)
        sign = 1 if vote_type == VoteType.UPVOTE else -1

        for index, existing in enumerate(self.root):
            if existing.voter_id != voter_id:
                continue

            if existing.type == vote_type:
                del self.root[index]
                delta = -sign
            else:
                self.root[index] = Vote(voter_id=voter_id, type=vote_type)
                delta = 2 * sign
            break
        else:
            self.root.append(Vote(voter_id=voter_id, type=vote_type))
            delta = sign

        return VoteOutcome(
            delta=delta,
            new_score=self.score,
            voter_current_vote=self.current_vote(voter_id),
        )

    def tally(self) -> VoteTally:
        """Count upvotes and downvotes."""
        upvotes = sum(1 for vote in self.root if vote.type == VoteType.UPVOTE)
        return VoteTally(upvotes=upvotes, downvotes=len(self.root) - upvotes)

    @property
    def score(self) -> int:
        return self.tally().score

    def __len__(self) -> int:
        return len(self.root)
