"""Reply routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from forum.application.usecase.reply import (
    AddReplyRequest,
    AddReplyResponse,
    AddReplyUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    UpdateReplyRequest,
    UpdateReplyResponse,
    UpdateReplyUseCase,
)
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.interface.api.auth import authenticate
from forum.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/replies", tags=["replies"], route_class=DishkaRoute)


class AddReplyAPIRequest(BaseModel):
    """API request for replying to a thread or a reply."""

    content: str = Field(max_length=10000)
    parent_reply_id: UUID | None = None


class UpdateReplyAPIRequest(BaseModel):
    """API request for editing a reply."""

    content: str = Field(max_length=10000)


@router.post(
    "/{thread_id}",
    response_model=AddReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    thread_id: UUID,
    request: AddReplyAPIRequest,
    use_case: FromDishka[AddReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> AddReplyResponse:
    """Reply to a thread, or to a reply at any depth.

    Requires authentication.

    Raises:
        HTTPException: 401 if anonymous, 403 if the thread is locked,
            404 if the thread or parent reply does not exist
    """
    requester = authenticate(jwt_service, auth_token, authorization, "reply")
    try:
        return await use_case.execute(
            AddReplyRequest(
                thread_id=str(thread_id),
                requester=requester,
                content=request.content,
                parent_reply_id=(
                    str(request.parent_reply_id) if request.parent_reply_id else None
                ),
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "add reply")
    except Exception as e:
        raise internal_error(e, "add reply")


@router.put("/{thread_id}/replies/{reply_id}", response_model=UpdateReplyResponse)
async def update_reply(
    thread_id: UUID,
    reply_id: UUID,
    request: UpdateReplyAPIRequest,
    use_case: FromDishka[UpdateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UpdateReplyResponse:
    """Edit a reply (author or admin). Allowed on locked threads."""
    requester = authenticate(jwt_service, auth_token, authorization, "edit replies")
    try:
        return await use_case.execute(
            UpdateReplyRequest(
                thread_id=str(thread_id),
                reply_id=str(reply_id),
                requester=requester,
                content=request.content,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "update reply")
    except Exception as e:
        raise internal_error(e, "update reply")


@router.delete("/{thread_id}/replies/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    thread_id: UUID,
    reply_id: UUID,
    use_case: FromDishka[DeleteReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteReplyResponse:
    """Delete a reply and every reply beneath it (author or admin)."""
    requester = authenticate(jwt_service, auth_token, authorization, "delete replies")
    try:
        return await use_case.execute(
            DeleteReplyRequest(
                thread_id=str(thread_id), reply_id=str(reply_id), requester=requester
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "delete reply")
    except Exception as e:
        raise internal_error(e, "delete reply")
