"""Delete thread use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import ThreadService
from forum.domain.value import Authenticated, ThreadId


class DeleteThreadRequest(BaseModel):
    """Delete thread request."""

    thread_id: str  # UUID string
    requester: Authenticated  # Must be the author or an admin


class DeleteThreadResponse(BaseModel):
    """Delete thread response."""

    thread_id: str
    deleted: bool


class DeleteThreadUseCase:
    """Use case for deleting a thread with its replies and votes."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize delete thread use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: DeleteThreadRequest) -> DeleteThreadResponse:
        """Execute delete thread flow.

        Raises:
            NotFoundError: If the thread does not exist
            ForbiddenError: If the requester may not delete the thread
        """
        await self.thread_service.delete_thread(
            ThreadId(UUID(request.thread_id)), request.requester
        )
        return DeleteThreadResponse(thread_id=request.thread_id, deleted=True)
