"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, ConfigDict, Field

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteStatsRequest,
    GetVoteStatsResponse,
    GetVoteStatsUseCase,
)
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.interface.api.auth import authenticate
from forum.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting.

    Casting the same vote twice removes it; the opposite vote flips it.
    The body field is `type`; `vote_type` is accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    vote_type: str = Field(alias="type")  # 'upvote' or 'downvote'


@router.post("/threads/{thread_id}", response_model=CastVoteResponse)
async def vote_on_thread(
    thread_id: UUID,
    request: CastVoteAPIRequest,
    use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Vote on a thread.

    Requires authentication.

    Example:
        POST /votes/threads/{thread_id}
        {"type": "upvote"}

        Response:
        {"votable_type": "thread", "votable_id": "...", "score": 3,
         "delta": 1, "user_vote": "upvote"}
    """
    requester = authenticate(jwt_service, auth_token, authorization, "vote")
    try:
        return await use_case.execute(
            CastVoteRequest(
                thread_id=str(thread_id),
                requester=requester,
                vote_type=request.vote_type,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "vote on thread")
    except Exception as e:
        raise internal_error(e, "vote on thread")


@router.post("/threads/{thread_id}/replies/{reply_id}", response_model=CastVoteResponse)
async def vote_on_reply(
    thread_id: UUID,
    reply_id: UUID,
    request: CastVoteAPIRequest,
    use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Vote on a reply at any depth. Requires authentication."""
    requester = authenticate(jwt_service, auth_token, authorization, "vote")
    try:
        return await use_case.execute(
            CastVoteRequest(
                thread_id=str(thread_id),
                reply_id=str(reply_id),
                requester=requester,
                vote_type=request.vote_type,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "vote on reply")
    except Exception as e:
        raise internal_error(e, "vote on reply")


@router.get("/threads/{thread_id}/stats", response_model=GetVoteStatsResponse)
async def get_vote_stats(
    thread_id: UUID,
    use_case: FromDishka[GetVoteStatsUseCase],
) -> GetVoteStatsResponse:
    """Vote tallies of a thread, its replies, and both together."""
    try:
        return await use_case.execute(GetVoteStatsRequest(thread_id=str(thread_id)))
    except DomainError as e:
        raise to_http_exception(e, "get vote stats")
