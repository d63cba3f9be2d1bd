"""Tag routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query
from pydantic import BaseModel, Field

from forum.application.usecase.common import TagItem
from forum.application.usecase.tag import (
    DeleteTagRequest,
    DeleteTagResponse,
    DeleteTagUseCase,
    GetTagRequest,
    GetTagResponse,
    GetTagUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    MergeTagsRequest,
    MergeTagsResponse,
    MergeTagsUseCase,
    PopularTagsRequest,
    PopularTagsUseCase,
    SuggestTagsRequest,
    SuggestTagsUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from forum.domain.error import DomainError
from forum.domain.repository import TagSortOrder
from forum.domain.service import JWTService
from forum.interface.api.auth import authenticate, resolve_identity
from forum.interface.error import internal_error, to_http_exception

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


class UpdateTagAPIRequest(BaseModel):
    """API request for updating a tag."""

    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=100)
    color: str | None = None


class MergeTagsAPIRequest(BaseModel):
    """API request for merging a tag into another."""

    target_tag_id: UUID


@router.get(
    "",
    response_model=ListTagsResponse,
    summary="List tags",
    description="List tags, optionally filtered by a name substring.",
)
async def list_tags(
    use_case: FromDishka[ListTagsUseCase],
    search: str | None = None,
    sort: TagSortOrder = TagSortOrder.USAGE,
    limit: int = Query(default=50, ge=1, le=100),
) -> ListTagsResponse:
    """List tags.

    Args:
        use_case: List tags use case (injected)
        search: Case-insensitive name substring
        sort: 'usage', 'alphabetical' or 'recent'
        limit: Maximum number of tags to return (1-100)

    Example:
        GET /tags?search=py&sort=alphabetical
    """
    with logfire.span("api.list_tags", search=search, sort=sort.value, limit=limit):
        return await use_case.execute(
            ListTagsRequest(search=search, sort=sort, limit=limit)
        )


@router.get("/popular", response_model=ListTagsResponse)
async def popular_tags(
    use_case: FromDishka[PopularTagsUseCase],
    limit: int = Query(default=20, ge=1, le=100),
) -> ListTagsResponse:
    """Tags in use, most used first."""
    return await use_case.execute(PopularTagsRequest(limit=limit))


@router.get("/suggest/{partial}", response_model=ListTagsResponse)
async def suggest_tags(
    partial: str,
    use_case: FromDishka[SuggestTagsUseCase],
) -> ListTagsResponse:
    """Tags whose name starts with the typed prefix (at least two characters)."""
    return await use_case.execute(SuggestTagsRequest(partial=partial))


@router.get("/{tag_id}", response_model=GetTagResponse)
async def get_tag(
    tag_id: UUID,
    use_case: FromDishka[GetTagUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetTagResponse:
    """Get a tag and its threads, most recently active first.

    Example:
        GET /tags/123e4567-e89b-12d3-a456-426614174000?limit=10
    """
    identity = resolve_identity(jwt_service, auth_token, authorization)
    try:
        return await use_case.execute(
            GetTagRequest(
                tag_id=str(tag_id), limit=limit, offset=offset, identity=identity
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "get tag")


@router.put("/{tag_id}", response_model=TagItem)
async def update_tag(
    tag_id: UUID,
    request: UpdateTagAPIRequest,
    use_case: FromDishka[UpdateTagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> TagItem:
    """Rename or describe a tag (admin only)."""
    requester = authenticate(jwt_service, auth_token, authorization, "update tags")
    try:
        return await use_case.execute(
            UpdateTagRequest(
                tag_id=str(tag_id),
                requester=requester,
                name=request.name,
                description=request.description,
                color=request.color,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "update tag")
    except Exception as e:
        raise internal_error(e, "update tag")


@router.delete("/{tag_id}", response_model=DeleteTagResponse)
async def delete_tag(
    tag_id: UUID,
    use_case: FromDishka[DeleteTagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteTagResponse:
    """Delete an unused tag (admin only)."""
    requester = authenticate(jwt_service, auth_token, authorization, "delete tags")
    try:
        return await use_case.execute(
            DeleteTagRequest(tag_id=str(tag_id), requester=requester)
        )
    except DomainError as e:
        raise to_http_exception(e, "delete tag")
    except Exception as e:
        raise internal_error(e, "delete tag")


@router.post("/{tag_id}/merge", response_model=MergeTagsResponse)
async def merge_tags(
    tag_id: UUID,
    request: MergeTagsAPIRequest,
    use_case: FromDishka[MergeTagsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MergeTagsResponse:
    """Merge this tag into the target tag (admin only).

    Threads tagged with this tag are retagged with the target, and this tag
    is deleted.
    """
    requester = authenticate(jwt_service, auth_token, authorization, "merge tags")
    try:
        return await use_case.execute(
            MergeTagsRequest(
                source_tag_id=str(tag_id),
                target_tag_id=str(request.target_tag_id),
                requester=requester,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "merge tags")
    except Exception as e:
        raise internal_error(e, "merge tags")
