"""Reply domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from forum.domain.error import InvalidInputError, ThreadLockedError
from forum.domain.model.reply import REPLY_MAX_LENGTH, ReplyNode
from forum.domain.model.thread import Thread
from forum.domain.value import Authenticated, ReplyId, ThreadId

from . import reply_tree
from .base import Service
from .thread_service import ThreadService


def clean_reply_content(content: str) -> str:
    """Trim reply content and check its length.

    Raises:
        InvalidInputError: If the trimmed content is empty or too long
    """
    content = content.strip()
    if not content:
        raise InvalidInputError("Reply content is required")
    if len(content) > REPLY_MAX_LENGTH:
        raise InvalidInputError(
            f"Reply content must be at most {REPLY_MAX_LENGTH} characters"
        )
    return content


class ReplyService(Service):
    """Domain service for replies nested inside a thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize reply service.

        Args:
            thread_service: Thread domain service, owner of the aggregate
        """
        self.thread_service = thread_service

    async def add_reply(
        self,
        thread_id: ThreadId,
        author: Authenticated,
        content: str,
        parent_reply_id: Optional[ReplyId] = None,
    ) -> ReplyNode:
        """Reply to a thread or to another reply at any depth.

        Args:
            thread_id: Thread being replied to
            author: Authenticated author
            content: Reply text
            parent_reply_id: Reply being answered (None for top-level)

        Returns:
            Created reply

        Raises:
            InvalidInputError: If the content is empty or too long, or the
                reply would be nested deeper than `max_reply_depth`
            NotFoundError: If the thread or the parent reply does not exist
            ThreadLockedError: If the thread is locked
        """
        with logfire.span(
            "reply_service.add_reply",
            thread_id=str(thread_id),
            author_id=str(author.user_id),
            parent_reply_id=str(parent_reply_id) if parent_reply_id else None,
        ):
            max_depth = self.thread_service.settings.max_reply_depth
            content = clean_reply_content(content)
            node = ReplyNode(
                id=ReplyId(uuid4()),
                author_id=author.user_id,
                content=content,
            )

            def apply(thread: Thread) -> ReplyNode:
                if thread.is_locked:
                    logfire.warn("Reply to locked thread", thread_id=str(thread_id))
                    raise ThreadLockedError(str(thread_id))
                handle = reply_tree.insert(thread.replies, parent_reply_id, node)
                if handle.depth >= max_depth:
                    logfire.warn(
                        "Reply nesting limit reached",
                        thread_id=str(thread_id),
                        depth=handle.depth,
                    )
                    raise InvalidInputError(
                        f"Replies can be nested at most {max_depth} levels deep"
                    )
                thread.touch(node.created_at)
                return handle.node

            _, reply = await self.thread_service.mutate(thread_id, apply)
            logfire.info(
                "Reply created", thread_id=str(thread_id), reply_id=str(reply.id)
            )
            return reply

    async def edit_reply(
        self,
        thread_id: ThreadId,
        reply_id: ReplyId,
        requester: Authenticated,
        content: str,
    ) -> ReplyNode:
        """Edit a reply's content.

        Edits are allowed on locked threads.

        Raises:
            InvalidInputError: If the content is empty or too long
            NotFoundError: If the thread or reply does not exist
            ForbiddenError: If the requester is neither the author nor an admin
        """
        with logfire.span(
            "reply_service.edit_reply",
            thread_id=str(thread_id),
            reply_id=str(reply_id),
            requester_id=str(requester.user_id),
        ):
            content = clean_reply_content(content)

            def apply(thread: Thread) -> ReplyNode:
                handle = reply_tree.update_content(
                    thread.replies, reply_id, content, requester
                )
                return handle.node

            _, reply = await self.thread_service.mutate(thread_id, apply)
            logfire.info("Reply updated", reply_id=str(reply_id))
            return reply

    async def delete_reply(
        self,
        thread_id: ThreadId,
        reply_id: ReplyId,
        requester: Authenticated,
    ) -> ReplyNode:
        """Delete a reply and every reply beneath it.

        Returns:
            The removed subtree

        Raises:
            NotFoundError: If the thread or reply does not exist
            ForbiddenError: If the requester is neither the author nor an admin
        """
        with logfire.span(
            "reply_service.delete_reply",
            thread_id=str(thread_id),
            reply_id=str(reply_id),
            requester_id=str(requester.user_id),
        ):

            def apply(thread: Thread) -> ReplyNode:
                return reply_tree.remove(thread.replies, reply_id, requester)

            _, removed = await self.thread_service.mutate(thread_id, apply)
            logfire.info(
                "Reply deleted",
                reply_id=str(reply_id),
                removed=reply_tree.count_nodes([removed]),
            )
            return removed
