"""User domain service."""

from dataclasses import dataclass
from typing import Optional

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import ThreadRepository, UserRepository
from forum.domain.value import UserId

from .base import Service

MAX_USER_PAGE_SIZE = 100


@dataclass
class UserProfile:
    """A user with their forum activity."""

    user: User
    thread_count: int
    reply_count: int


class UserService(Service):
    """Looks up forum members.

    Deactivated accounts are indistinguishable from missing ones.
    """

    def __init__(
        self, user_repository: UserRepository, thread_repository: ThreadRepository
    ) -> None:
        self.user_repository = user_repository
        self.thread_repository = thread_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get an active user.

        Raises:
            NotFoundError: If the user is missing or deactivated
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user or not user.is_active:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def get_profile(self, user_id: UserId) -> UserProfile:
        """Get an active user with their thread and reply counts.

        Replies are counted at every nesting depth.

        Raises:
            NotFoundError: If the user is missing or deactivated
        """
        with logfire.span("user_service.get_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            thread_count = await self.thread_repository.count(author_id=user.id)
            reply_count = await self.thread_repository.count_replies_by_author(user.id)
            return UserProfile(
                user=user, thread_count=thread_count, reply_count=reply_count
            )

    async def search_users(
        self, query: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> tuple[list[User], int]:
        """Search active users by handle, highest reputation first.

        Without a query this is the reputation leaderboard.

        Returns:
            The page of users and the total number of matches
        """
        query = query.strip() if query and query.strip() else None
        limit = max(1, min(limit, MAX_USER_PAGE_SIZE))
        offset = max(offset, 0)
        with logfire.span(
            "user_service.search_users", query=query, limit=limit, offset=offset
        ):
            users = await self.user_repository.search(
                query=query, limit=limit, offset=offset
            )
            total = await self.user_repository.count(query=query)
            logfire.info("Users retrieved", count=len(users), total=total)
            return users, total
