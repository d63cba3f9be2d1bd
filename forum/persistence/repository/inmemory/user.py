"""In-memory user repository for testing."""

from typing import List, Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """Users in a dict; frozen models are swapped, never mutated."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> Optional[int]:
        """Add delta to reputation, clamped at 0."""
        user = self._users.get(user_id)
        if user is None:
            return None
        reputation = max(0, user.reputation + delta)
        self._users[user_id] = user.model_copy(update={"reputation": reputation})
        return reputation

    def _matching(self, query: Optional[str]) -> List[User]:
        needle = query.lower() if query else None
        return [
            user
            for user in self._users.values()
            if user.is_active
            and (needle is None or needle in user.handle.root.lower())
        ]

    async def search(
        self, query: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> List[User]:
        users = sorted(
            self._matching(query), key=lambda u: (-u.reputation, u.handle.root)
        )
        return users[offset : offset + limit]

    async def count(self, query: Optional[str] = None) -> int:
        return len(self._matching(query))
