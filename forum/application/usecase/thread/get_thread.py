"""Get thread use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import ThreadItem, thread_item, viewer_id
from forum.domain.service import TagService, ThreadService
from forum.domain.value import ANONYMOUS, Identity, ThreadId


class GetThreadRequest(BaseModel):
    """Get thread request."""

    thread_id: str  # UUID string
    identity: Identity = ANONYMOUS


class GetThreadResponse(ThreadItem):
    """Get thread response."""

    pass


class GetThreadUseCase:
    """Use case for reading a thread with its whole reply tree."""

    def __init__(self, thread_service: ThreadService, tag_service: TagService) -> None:
        """Initialize get thread use case.

        Args:
            thread_service: Thread domain service
            tag_service: Tag domain service
        """
        self.thread_service = thread_service
        self.tag_service = tag_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Counts a view unless the caller is the thread's author.

        Args:
            request: Get thread request

        Returns:
            Thread with nested replies, scores and the caller's votes

        Raises:
            NotFoundError: If the thread does not exist
        """
        with logfire.span("get_thread.execute", thread_id=request.thread_id):
            thread = await self.thread_service.get_thread(
                ThreadId(UUID(request.thread_id)), request.identity
            )
            tags = await self.tag_service.get_tags_by_ids(thread.tag_ids)

            item = thread_item(
                thread, {tag.id: tag for tag in tags}, viewer_id(request.identity)
            )
            return GetThreadResponse(**dict(item))
