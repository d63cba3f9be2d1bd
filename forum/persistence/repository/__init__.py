"""PostgreSQL repository implementations."""

from forum.persistence.repository.category import PostgresCategoryRepository
from forum.persistence.repository.tag import PostgresTagRepository
from forum.persistence.repository.thread import PostgresThreadRepository
from forum.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresThreadRepository",
    "PostgresCategoryRepository",
    "PostgresTagRepository",
]
