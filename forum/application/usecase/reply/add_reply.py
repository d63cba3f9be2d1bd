"""Add reply use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import ReplyItem, reply_item
from forum.domain.service import ReplyService
from forum.domain.value import Authenticated, ReplyId, ThreadId


class AddReplyRequest(BaseModel):
    """Add reply request."""

    thread_id: str  # UUID string
    requester: Authenticated
    content: str
    parent_reply_id: str | None = None  # UUID string, None for top-level


class AddReplyResponse(ReplyItem):
    """Add reply response."""

    thread_id: str


class AddReplyUseCase:
    """Use case for replying to a thread or to a reply at any depth."""

    def __init__(self, reply_service: ReplyService) -> None:
        """Initialize add reply use case.

        Args:
            reply_service: Reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: AddReplyRequest) -> AddReplyResponse:
        """Execute add reply flow.

        Args:
            request: Add reply request

        Returns:
            Created reply

        Raises:
            NotFoundError: If the thread or the parent reply does not exist
            ThreadLockedError: If the thread is locked
            InvalidInputError: If the content is empty or too long
        """
        with logfire.span(
            "add_reply.execute",
            thread_id=request.thread_id,
            parent_reply_id=request.parent_reply_id,
        ):
            reply = await self.reply_service.add_reply(
                thread_id=ThreadId(UUID(request.thread_id)),
                author=request.requester,
                content=request.content,
                parent_reply_id=(
                    ReplyId(UUID(request.parent_reply_id))
                    if request.parent_reply_id
                    else None
                ),
            )
            item = reply_item(reply, request.requester.user_id)
            return AddReplyResponse(thread_id=request.thread_id, **dict(item))
