"""Thread routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.thread import (
    CreateThreadRequest,
    CreateThreadResponse,
    CreateThreadUseCase,
    DeleteThreadRequest,
    DeleteThreadResponse,
    DeleteThreadUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ListThreadsRequest,
    ListThreadsResponse,
    ListThreadsUseCase,
    ModerateThreadRequest,
    ModerateThreadResponse,
    ModerateThreadUseCase,
    ModerationAction,
    UpdateThreadRequest,
    UpdateThreadResponse,
    UpdateThreadUseCase,
)
from forum.domain.error import DomainError
from forum.domain.repository import ThreadSortOrder
from forum.domain.service import JWTService
from forum.interface.api.auth import authenticate, resolve_identity
from forum.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


class CreateThreadAPIRequest(BaseModel):
    """API request for creating a thread."""

    title: str = Field(max_length=500)
    content: str = Field(max_length=20000)
    category_id: UUID
    tags: list[str] = Field(default_factory=list, max_length=20)


class UpdateThreadAPIRequest(BaseModel):
    """API request for editing a thread; omitted fields stay unchanged."""

    title: str | None = Field(default=None, max_length=500)
    content: str | None = Field(default=None, max_length=20000)
    category_id: UUID | None = None
    tags: list[str] | None = Field(default=None, max_length=20)


@router.get("", response_model=ListThreadsResponse)
async def list_threads(
    use_case: FromDishka[ListThreadsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: ThreadSortOrder = ThreadSortOrder.RECENT,
    category_id: UUID | None = None,
    tag_ids: list[UUID] = Query(default=[]),
    search: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListThreadsResponse:
    """List threads.

    Args:
        sort: 'recent' (pinned first), 'popular', 'votes', 'activity' or 'newest'
        category_id: Only threads in this category
        tag_ids: Only threads with any of these tags
        search: Case-insensitive text in title or content
        limit: Page size (1-100)
        offset: Number of threads to skip

    Example:
        GET /threads?sort=votes&tag_ids=...&limit=10
    """
    identity = resolve_identity(jwt_service, auth_token, authorization)
    try:
        return await use_case.execute(
            ListThreadsRequest(
                sort=sort,
                category_id=str(category_id) if category_id else None,
                tag_ids=[str(tag_id) for tag_id in tag_ids],
                search=search,
                limit=limit,
                offset=offset,
                identity=identity,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "list threads")


@router.post(
    "", response_model=CreateThreadResponse, status_code=status.HTTP_201_CREATED
)
async def create_thread(
    request: CreateThreadAPIRequest,
    use_case: FromDishka[CreateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateThreadResponse:
    """Create a thread.

    Requires authentication.

    Raises:
        HTTPException: 401 if anonymous, 400 on invalid content, tags or category
    """
    requester = authenticate(jwt_service, auth_token, authorization, "create threads")
    try:
        return await use_case.execute(
            CreateThreadRequest(
                requester=requester,
                title=request.title,
                content=request.content,
                category_id=str(request.category_id),
                tags=request.tags,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "create thread")
    except Exception as e:
        raise internal_error(e, "create thread")


@router.get("/{thread_id}", response_model=GetThreadResponse)
async def get_thread(
    thread_id: UUID,
    use_case: FromDishka[GetThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetThreadResponse:
    """Get a thread with its full reply tree.

    Counts a view unless the caller is the author.
    """
    identity = resolve_identity(jwt_service, auth_token, authorization)
    try:
        return await use_case.execute(
            GetThreadRequest(thread_id=str(thread_id), identity=identity)
        )
    except DomainError as e:
        raise to_http_exception(e, "get thread")


@router.put("/{thread_id}", response_model=UpdateThreadResponse)
async def update_thread(
    thread_id: UUID,
    request: UpdateThreadAPIRequest,
    use_case: FromDishka[UpdateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateThreadResponse:
    """Edit a thread (author or admin)."""
    requester = authenticate(jwt_service, auth_token, authorization, "edit threads")
    try:
        return await use_case.execute(
            UpdateThreadRequest(
                thread_id=str(thread_id),
                requester=requester,
                title=request.title,
                content=request.content,
                category_id=str(request.category_id) if request.category_id else None,
                tags=request.tags,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "update thread")
    except Exception as e:
        raise internal_error(e, "update thread")


@router.delete("/{thread_id}", response_model=DeleteThreadResponse)
async def delete_thread(
    thread_id: UUID,
    use_case: FromDishka[DeleteThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteThreadResponse:
    """Delete a thread with all of its replies (author or admin)."""
    requester = authenticate(jwt_service, auth_token, authorization, "delete threads")
    try:
        return await use_case.execute(
            DeleteThreadRequest(thread_id=str(thread_id), requester=requester)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete thread")
    except Exception as e:
        raise internal_error(e, "delete thread")


async def _moderate(
    thread_id: UUID,
    action: ModerationAction,
    use_case: ModerateThreadUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> ModerateThreadResponse:
    requester = authenticate(
        jwt_service, auth_token, authorization, f"{action.value} threads"
    )
    with logfire.span(
        "api.moderate_thread", thread_id=str(thread_id), action=action.value
    ):
        try:
            return await use_case.execute(
                ModerateThreadRequest(
                    thread_id=str(thread_id), requester=requester, action=action
                )
            )
        except DomainError as e:
            raise to_http_exception(e, f"{action.value} thread")


@router.post("/{thread_id}/lock", response_model=ModerateThreadResponse)
async def lock_thread(
    thread_id: UUID,
    use_case: FromDishka[ModerateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ModerateThreadResponse:
    """Lock a thread against new replies (moderator or admin)."""
    return await _moderate(
        thread_id, ModerationAction.LOCK, use_case, jwt_service, auth_token, authorization
    )


@router.post("/{thread_id}/unlock", response_model=ModerateThreadResponse)
async def unlock_thread(
    thread_id: UUID,
    use_case: FromDishka[ModerateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ModerateThreadResponse:
    """Unlock a thread (moderator or admin)."""
    return await _moderate(
        thread_id,
        ModerationAction.UNLOCK,
        use_case,
        jwt_service,
        auth_token,
        authorization,
    )


@router.post("/{thread_id}/pin", response_model=ModerateThreadResponse)
async def pin_thread(
    thread_id: UUID,
    use_case: FromDishka[ModerateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ModerateThreadResponse:
    """Pin a thread to the top of recent listings (moderator or admin)."""
    return await _moderate(
        thread_id, ModerationAction.PIN, use_case, jwt_service, auth_token, authorization
    )


@router.post("/{thread_id}/unpin", response_model=ModerateThreadResponse)
async def unpin_thread(
    thread_id: UUID,
    use_case: FromDishka[ModerateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ModerateThreadResponse:
    """Unpin a thread (moderator or admin)."""
    return await _moderate(
        thread_id,
        ModerationAction.UNPIN,
        use_case,
        jwt_service,
        auth_token,
        authorization,
    )
