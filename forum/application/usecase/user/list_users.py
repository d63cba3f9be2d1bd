"""User listing use cases."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import (
    ThreadSummaryItem,
    thread_summaries,
    viewer_id,
)
from forum.config import ForumSettings
from forum.domain.model import User
from forum.domain.repository import ThreadSortOrder
from forum.domain.service import TagService, ThreadService, UserService
from forum.domain.value import ANONYMOUS, Identity, UserId, UserRole
from forum.domain.value.types import Handle


class UserItem(BaseModel):
    """User in listings."""

    user_id: str
    handle: Handle
    role: UserRole
    reputation: int
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserItem":
        return cls(
            user_id=str(user.id),
            handle=user.handle,
            role=user.role,
            reputation=user.reputation,
            created_at=user.created_at,
        )


class SearchUsersRequest(BaseModel):
    """Search users request."""

    query: str | None = None  # Handle substring
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class SearchUsersResponse(BaseModel):
    """Page of users, highest reputation first."""

    users: list[UserItem]
    total: int
    limit: int
    offset: int


class SearchUsersUseCase:
    """Use case for the member directory and reputation leaderboard."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize search users use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SearchUsersRequest) -> SearchUsersResponse:
        """Execute search users flow."""
        users, total = await self.user_service.search_users(
            query=request.query, limit=request.limit, offset=request.offset
        )
        return SearchUsersResponse(
            users=[UserItem.from_user(user) for user in users],
            total=total,
            limit=request.limit,
            offset=request.offset,
        )


class ListUserThreadsRequest(BaseModel):
    """List user threads request."""

    user_id: str  # UUID string
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    identity: Identity = ANONYMOUS


class ListUserThreadsResponse(BaseModel):
    """Threads a user started, newest first."""

    threads: list[ThreadSummaryItem]
    total: int
    limit: int
    offset: int


class ListUserThreadsUseCase:
    """Use case for listing the threads a user started."""

    def __init__(
        self,
        user_service: UserService,
        thread_service: ThreadService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize list user threads use case.

        Args:
            user_service: User domain service
            thread_service: Thread domain service
            tag_service: Tag domain service
            forum_settings: Forum settings (excerpt length)
        """
        self.user_service = user_service
        self.thread_service = thread_service
        self.tag_service = tag_service
        self.settings = forum_settings

    async def execute(self, request: ListUserThreadsRequest) -> ListUserThreadsResponse:
        """Execute list user threads flow.

        Raises:
            NotFoundError: If the user is missing or deactivated
        """
        with logfire.span("list_user_threads.execute", user_id=request.user_id):
            user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
            threads, total = await self.thread_service.list_threads(
                sort=ThreadSortOrder.NEWEST,
                author_id=user.id,
                limit=request.limit,
                offset=request.offset,
            )
            items = await thread_summaries(
                threads,
                self.tag_service,
                viewer_id(request.identity),
                self.settings.excerpt_length,
            )
            return ListUserThreadsResponse(
                threads=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
