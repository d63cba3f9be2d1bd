"""Update reply use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import ReplyItem, reply_item
from forum.domain.service import ReplyService
from forum.domain.value import Authenticated, ReplyId, ThreadId


class UpdateReplyRequest(BaseModel):
    """Update reply request."""

    thread_id: str  # UUID string
    reply_id: str  # UUID string
    requester: Authenticated  # Must be the author or an admin
    content: str


class UpdateReplyResponse(ReplyItem):
    """Update reply response."""

    thread_id: str


class UpdateReplyUseCase:
    """Use case for editing a reply."""

    def __init__(self, reply_service: ReplyService) -> None:
        """Initialize update reply use case.

        Args:
            reply_service: Reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: UpdateReplyRequest) -> UpdateReplyResponse:
        """Execute update reply flow.

        Raises:
            NotFoundError: If the thread or reply does not exist
            ForbiddenError: If the requester may not edit the reply
            InvalidInputError: If the content is empty or too long
        """
        reply = await self.reply_service.edit_reply(
            thread_id=ThreadId(UUID(request.thread_id)),
            reply_id=ReplyId(UUID(request.reply_id)),
            requester=request.requester,
            content=request.content,
        )
        item = reply_item(reply, request.requester.user_id)
        return UpdateReplyResponse(thread_id=request.thread_id, **dict(item))
