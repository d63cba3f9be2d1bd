"""Create thread use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import ThreadItem, thread_item
from forum.domain.service import TagService, ThreadService
from forum.domain.value import Authenticated, CategoryId


class CreateThreadRequest(BaseModel):
    """Create thread request."""

    requester: Authenticated
    title: str
    content: str
    category_id: str  # UUID string
    tags: list[str] = Field(default_factory=list)  # Raw tag names


class CreateThreadResponse(ThreadItem):
    """Create thread response."""

    pass


class CreateThreadUseCase:
    """Use case for creating a new thread."""

    def __init__(self, thread_service: ThreadService, tag_service: TagService) -> None:
        """Initialize create thread use case.

        Args:
            thread_service: Thread domain service
            tag_service: Tag domain service
        """
        self.thread_service = thread_service
        self.tag_service = tag_service

    async def execute(self, request: CreateThreadRequest) -> CreateThreadResponse:
        """Execute create thread flow.

        Args:
            request: Create thread request

        Returns:
            Created thread

        Raises:
            InvalidInputError: If title, content or tags are invalid
            InvalidCategoryError: If the category is missing or inactive
        """
        with logfire.span(
            "create_thread.execute", author_id=str(request.requester.user_id)
        ):
            thread = await self.thread_service.create_thread(
                author=request.requester,
                title=request.title,
                content=request.content,
                category_id=CategoryId(UUID(request.category_id)),
                tags=request.tags,
            )
            tags = await self.tag_service.get_tags_by_ids(thread.tag_ids)

            item = thread_item(
                thread, {tag.id: tag for tag in tags}, request.requester.user_id
            )
            return CreateThreadResponse(**dict(item))
