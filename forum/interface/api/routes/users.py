"""User profile routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    ListUserThreadsRequest,
    ListUserThreadsResponse,
    ListUserThreadsUseCase,
    SearchUsersRequest,
    SearchUsersResponse,
    SearchUsersUseCase,
)
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.interface.api.auth import resolve_identity
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("", response_model=SearchUsersResponse)
async def search_users(
    use_case: FromDishka[SearchUsersUseCase],
    q: str | None = Query(default=None, max_length=30),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> SearchUsersResponse:
    """Active users, highest reputation first.

    Args:
        q: Case-insensitive handle substring; omit for the leaderboard
        limit: Page size (1-100)
        offset: Number of users to skip

    Example:
        GET /users?q=ali&limit=10
    """
    return await use_case.execute(
        SearchUsersRequest(query=q, limit=limit, offset=offset)
    )


@router.get("/{user_id}", response_model=GetUserProfileResponse)
async def get_user_profile(
    user_id: UUID,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile, reputation included.

    Example:
        GET /users/123e4567-e89b-12d3-a456-426614174000

        Response:
        {
            "user_id": "123e4567-e89b-12d3-a456-426614174000",
            "handle": "alice",
            "role": "user",
            "reputation": 42,
            "thread_count": 3,
            "reply_count": 17,
            "created_at": "2025-01-15T12:34:56Z"
        }
    """
    try:
        return await get_user_profile_use_case.execute(
            GetUserProfileRequest(user_id=str(user_id))
        )
    except DomainError as e:
        raise to_http_exception(e, "get user profile")


@router.get("/{user_id}/threads", response_model=ListUserThreadsResponse)
async def list_user_threads(
    user_id: UUID,
    use_case: FromDishka[ListUserThreadsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListUserThreadsResponse:
    """Threads the user started, newest first."""
    identity = resolve_identity(jwt_service, auth_token, authorization)
    try:
        return await use_case.execute(
            ListUserThreadsRequest(
                user_id=str(user_id), limit=limit, offset=offset, identity=identity
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "list user threads")
