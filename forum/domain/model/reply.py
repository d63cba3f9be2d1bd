"""Reply node.

Replies are nested inside their thread with unlimited depth. Each node owns
its own vote ledger and the ordered list of its direct children; a reply
never exists outside the thread that contains it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import AggregateModel
from forum.domain.model.vote import VoteLedger
from forum.domain.value import ReplyId, UserId

REPLY_MAX_LENGTH = 5000


class ReplyNode(AggregateModel):
    """A reply and its subtree.

    Threading is managed through:
    - parent_reply_id: Direct parent reply (None for top-level)
    - replies: Direct children, in insertion order
    """

    id: ReplyId
    author_id: UserId
    content: str = Field(min_length=1, max_length=REPLY_MAX_LENGTH)
    votes: VoteLedger = Field(default_factory=VoteLedger)
    parent_reply_id: Optional[ReplyId] = None
    replies: list["ReplyNode"] = Field(default_factory=list)
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def score(self) -> int:
        return self.votes.score
