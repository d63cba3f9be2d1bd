"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.user import User
from forum.domain.value import UserId


class UserRepository(ABC):
    """Storage of forum members.

    Members are written by account sync and test seeding; the forum itself
    only changes reputation, through `adjust_reputation`.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, active or not."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert or overwrite a user."""
        pass

    @abstractmethod
    async def adjust_reputation(self, user_id: UserId, delta: int) -> Optional[int]:
        """Atomically add delta to the user's reputation, clamped at 0.

        Concurrent adjustments for the same user must not lose updates.

        Args:
            user_id: The user's unique identifier
            delta: Signed amount to add

        Returns:
            The new reputation, or None if the user does not exist
        """
        pass

    @abstractmethod
    async def search(
        self, query: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> List[User]:
        """Find active users, highest reputation first.

        Args:
            query: Case-insensitive handle substring
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Users ordered by reputation, ties broken by handle
        """
        pass

    @abstractmethod
    async def count(self, query: Optional[str] = None) -> int:
        """Count active users matching the same query as search."""
        pass
