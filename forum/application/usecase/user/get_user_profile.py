"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import UserService
from forum.domain.value import UserId, UserRole
from forum.domain.value.types import Handle


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str  # UUID string


class GetUserProfileResponse(BaseModel):
    """Public user profile; email and credentials are never exposed."""

    user_id: str
    handle: Handle
    role: UserRole
    reputation: int
    thread_count: int
    reply_count: int
    created_at: datetime


class GetUserProfileUseCase:
    """Use case for getting a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        profile = await self.user_service.get_profile(UserId(UUID(request.user_id)))
        user = profile.user
        return GetUserProfileResponse(
            user_id=str(user.id),
            handle=user.handle,
            role=user.role,
            reputation=user.reputation,
            thread_count=profile.thread_count,
            reply_count=profile.reply_count,
            created_at=user.created_at,
        )
