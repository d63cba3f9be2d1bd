"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CategoryId,
    ReplyId,
    TagId,
    ThreadId,
    UserId,
)
from forum.domain.value.identity import (
    ANONYMOUS,
    Anonymous,
    Authenticated,
    Identity,
)
from forum.domain.value.types import (
    Handle,
    TagName,
    UserRole,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "ReplyId",
    "CategoryId",
    "TagId",
    # Identity
    "ANONYMOUS",
    "Anonymous",
    "Authenticated",
    "Identity",
    # Types
    "Handle",
    "TagName",
    "UserRole",
    "VotableType",
    "VoteType",
]
