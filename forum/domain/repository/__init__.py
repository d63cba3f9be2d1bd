"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.category import CategoryRepository
from forum.domain.repository.tag import TagRepository, TagSortOrder
from forum.domain.repository.thread import ThreadRepository, ThreadSortOrder
from forum.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "ThreadRepository",
    "ThreadSortOrder",
    "CategoryRepository",
    "TagRepository",
    "TagSortOrder",
]
