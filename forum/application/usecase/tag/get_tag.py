"""Get tag use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import (
    TagItem,
    ThreadSummaryItem,
    thread_summaries,
    viewer_id,
)
from forum.config import ForumSettings
from forum.domain.repository import ThreadSortOrder
from forum.domain.service import TagService, ThreadService
from forum.domain.value import ANONYMOUS, Identity, TagId


class GetTagRequest(BaseModel):
    """Get tag request."""

    tag_id: str  # UUID string
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    identity: Identity = ANONYMOUS


class GetTagResponse(BaseModel):
    """A tag and a page of its threads, most recently active first."""

    tag: TagItem
    threads: list[ThreadSummaryItem]
    total: int
    limit: int
    offset: int


class GetTagUseCase:
    """Use case for browsing a single tag."""

    def __init__(
        self,
        tag_service: TagService,
        thread_service: ThreadService,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize get tag use case.

        Args:
            tag_service: Tag domain service
            thread_service: Thread domain service
            forum_settings: Forum settings (excerpt length)
        """
        self.tag_service = tag_service
        self.thread_service = thread_service
        self.settings = forum_settings

    async def execute(self, request: GetTagRequest) -> GetTagResponse:
        """Execute get tag flow.

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span("get_tag.execute", tag_id=request.tag_id):
            tag = await self.tag_service.get_tag(TagId(UUID(request.tag_id)))
            threads, total = await self.thread_service.list_threads(
                sort=ThreadSortOrder.ACTIVITY,
                tag_ids=[tag.id],
                limit=request.limit,
                offset=request.offset,
            )
            items = await thread_summaries(
                threads,
                self.tag_service,
                viewer_id(request.identity),
                self.settings.excerpt_length,
            )
            return GetTagResponse(
                tag=TagItem.from_tag(tag),
                threads=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
