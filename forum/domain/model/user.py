"""Forum member.

Accounts are owned by the account service; the forum reads members and
adjusts their reputation as their threads and replies are voted on.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, UserRole
from forum.domain.value.types import Handle


class User(DomainModel):
    """A member; `reputation` never drops below zero."""

    id: UserId
    handle: Handle
    email: str
    role: UserRole = UserRole.USER
    reputation: int = Field(default=0, ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
