"""User use cases."""

from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from .list_users import (
    ListUserThreadsRequest,
    ListUserThreadsResponse,
    ListUserThreadsUseCase,
    SearchUsersRequest,
    SearchUsersResponse,
    SearchUsersUseCase,
    UserItem,
)

__all__ = [
    "GetUserProfileRequest",
    "GetUserProfileResponse",
    "GetUserProfileUseCase",
    "ListUserThreadsRequest",
    "ListUserThreadsResponse",
    "ListUserThreadsUseCase",
    "SearchUsersRequest",
    "SearchUsersResponse",
    "SearchUsersUseCase",
    "UserItem",
]
