"""Delete reply use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import ReplyService, reply_tree
from forum.domain.value import Authenticated, ReplyId, ThreadId


class DeleteReplyRequest(BaseModel):
    """Delete reply request."""

    thread_id: str  # UUID string
    reply_id: str  # UUID string
    requester: Authenticated  # Must be the author or an admin


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    thread_id: str
    reply_id: str
    removed_count: int  # The reply plus all of its descendants


class DeleteReplyUseCase:
    """Use case for deleting a reply together with its descendants."""

    def __init__(self, reply_service: ReplyService) -> None:
        """Initialize delete reply use case.

        Args:
            reply_service: Reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        """Execute delete reply flow.

        Raises:
            NotFoundError: If the thread or reply does not exist
            ForbiddenError: If the requester may not delete the reply
        """
        removed = await self.reply_service.delete_reply(
            thread_id=ThreadId(UUID(request.thread_id)),
            reply_id=ReplyId(UUID(request.reply_id)),
            requester=request.requester,
        )
        return DeleteReplyResponse(
            thread_id=request.thread_id,
            reply_id=request.reply_id,
            removed_count=reply_tree.count_nodes([removed]),
        )
