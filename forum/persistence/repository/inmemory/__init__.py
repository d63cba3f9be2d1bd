"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .tag import InMemoryTagRepository
from .thread import InMemoryThreadRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryTagRepository",
    "InMemoryThreadRepository",
    "InMemoryUserRepository",
]
