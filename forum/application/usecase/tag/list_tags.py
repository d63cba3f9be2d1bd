"""Tag listing use cases."""

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import TagItem
from forum.domain.repository import TagSortOrder
from forum.domain.service import TagService


class ListTagsRequest(BaseModel):
    """List tags request."""

    search: str | None = None
    sort: TagSortOrder = TagSortOrder.USAGE
    limit: int = Field(default=50, ge=1, le=100)


class ListTagsResponse(BaseModel):
    """Tag list response."""

    tags: list[TagItem]


class ListTagsUseCase:
    """Use case for listing and searching tags."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize list tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow."""
        with logfire.span("list_tags.execute", search=request.search):
            tags = await self.tag_service.list_tags(
                search=request.search, sort=request.sort, limit=request.limit
            )
            return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])


class PopularTagsRequest(BaseModel):
    """Popular tags request."""

    limit: int = Field(default=20, ge=1, le=100)


class PopularTagsUseCase:
    """Use case for listing the most used tags."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize popular tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: PopularTagsRequest) -> ListTagsResponse:
        """Execute popular tags flow."""
        tags = await self.tag_service.get_popular_tags(limit=request.limit)
        return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])


class SuggestTagsRequest(BaseModel):
    """Suggest tags request."""

    partial: str  # Name prefix typed so far


class SuggestTagsUseCase:
    """Use case for autocompleting tag names."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize suggest tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: SuggestTagsRequest) -> ListTagsResponse:
        """Execute suggest tags flow.

        Prefixes shorter than two characters return no suggestions.
        """
        tags = await self.tag_service.suggest_tags(request.partial)
        return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])
