"""List threads use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import (
    ThreadSummaryItem,
    thread_summaries,
    viewer_id,
)
from forum.config import ForumSettings
from forum.domain.repository import ThreadSortOrder
from forum.domain.service import TagService, ThreadService
from forum.domain.value import ANONYMOUS, CategoryId, Identity, TagId


class ListThreadsRequest(BaseModel):
    """List threads request."""

    sort: ThreadSortOrder = ThreadSortOrder.RECENT
    category_id: str | None = None  # UUID string
    tag_ids: list[str] = Field(default_factory=list)  # UUID strings, any match
    search: str | None = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    identity: Identity = ANONYMOUS


class ListThreadsResponse(BaseModel):
    """List threads response."""

    threads: list[ThreadSummaryItem]
    total: int
    limit: int
    offset: int


class ListThreadsUseCase:
    """Use case for listing threads with filtering and pagination."""

    def __init__(
        self,
        thread_service: ThreadService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize list threads use case.

        Args:
            thread_service: Thread domain service
            tag_service: Tag domain service
            forum_settings: Forum settings (excerpt length)
        """
        self.thread_service = thread_service
        self.tag_service = tag_service
        self.settings = forum_settings

    async def execute(self, request: ListThreadsRequest) -> ListThreadsResponse:
        """Execute list threads flow.

        Args:
            request: List threads request with filters and pagination

        Returns:
            Page of thread summaries and the total number of matches
        """
        with logfire.span(
            "list_threads.execute",
            sort=request.sort.value,
            category_id=request.category_id,
            limit=request.limit,
            offset=request.offset,
        ):
            threads, total = await self.thread_service.list_threads(
                sort=request.sort,
                category_id=(
                    CategoryId(UUID(request.category_id))
                    if request.category_id
                    else None
                ),
                tag_ids=[TagId(UUID(tag_id)) for tag_id in request.tag_ids],
                search=request.search,
                limit=request.limit,
                offset=request.offset,
            )

            items = await thread_summaries(
                threads,
                self.tag_service,
                viewer_id(request.identity),
                self.settings.excerpt_length,
            )

            logfire.info("Threads listed", count=len(items), total=total)
            return ListThreadsResponse(
                threads=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
