"""Update thread use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import ThreadItem, thread_item
from forum.domain.service import TagService, ThreadService
from forum.domain.value import Authenticated, CategoryId, ThreadId


class UpdateThreadRequest(BaseModel):
    """Update thread request.

    Fields left as None are not changed.
    """

    thread_id: str  # UUID string
    requester: Authenticated  # Must be the author or an admin
    title: str | None = None
    content: str | None = None
    category_id: str | None = None  # UUID string
    tags: list[str] | None = None  # Replaces all tags when given


class UpdateThreadResponse(ThreadItem):
    """Update thread response."""

    pass


class UpdateThreadUseCase:
    """Use case for editing a thread."""

    def __init__(self, thread_service: ThreadService, tag_service: TagService) -> None:
        """Initialize update thread use case.

        Args:
            thread_service: Thread domain service
            tag_service: Tag domain service
        """
        self.thread_service = thread_service
        self.tag_service = tag_service

    async def execute(self, request: UpdateThreadRequest) -> UpdateThreadResponse:
        """Execute update thread flow.

        Args:
            request: Update thread request

        Returns:
            Updated thread

        Raises:
            NotFoundError: If the thread does not exist
            ForbiddenError: If the requester may not edit the thread
            InvalidInputError: If a new value is invalid
        """
        with logfire.span("update_thread.execute", thread_id=request.thread_id):
            thread = await self.thread_service.update_thread(
                thread_id=ThreadId(UUID(request.thread_id)),
                requester=request.requester,
                title=request.title,
                content=request.content,
                category_id=(
                    CategoryId(UUID(request.category_id))
                    if request.category_id
                    else None
                ),
                tags=request.tags,
            )
            tags = await self.tag_service.get_tags_by_ids(thread.tag_ids)

            item = thread_item(
                thread, {tag.id: tag for tag in tags}, request.requester.user_id
            )
            return UpdateThreadResponse(**dict(item))
