"""Thread aggregate root.

A thread owns its vote ledger and its whole reply tree. The aggregate is
loaded, mutated and replaced as one unit; `version` guards the replace
against concurrent writers.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import AggregateModel
from forum.domain.model.reply import ReplyNode
from forum.domain.model.vote import VoteLedger
from forum.domain.value import CategoryId, TagId, ThreadId, UserId

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10
CONTENT_MAX_LENGTH = 10000


class Thread(AggregateModel):
    """Thread aggregate root.

    Flags:
    - is_locked: New replies are rejected; votes and edits still work
    - is_pinned: Sorts before unpinned threads in the default listing
    - is_edited: Title or content changed after creation
    """

    id: ThreadId
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH)
    author_id: UserId
    category_id: CategoryId
    tag_ids: list[TagId] = Field(default_factory=list)
    votes: VoteLedger = Field(default_factory=VoteLedger)
    replies: list[ReplyNode] = Field(default_factory=list)
    views: int = Field(default=0, ge=0)
    is_pinned: bool = False
    is_locked: bool = False
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    last_activity: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    version: int = Field(default=1, ge=1)

    @property
    def score(self) -> int:
        return self.votes.score

    def touch(self, now: Optional[datetime] = None) -> None:
        """Record reply activity on the thread."""
        self.last_activity = now or datetime.now()
