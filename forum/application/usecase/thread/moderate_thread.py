"""Moderate thread use case."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.service import ThreadService
from forum.domain.value import Authenticated, ThreadId


class ModerationAction(str, Enum):
    """Moderation actions on a thread."""

    LOCK = "lock"
    UNLOCK = "unlock"
    PIN = "pin"
    UNPIN = "unpin"


class ModerateThreadRequest(BaseModel):
    """Moderate thread request."""

    thread_id: str  # UUID string
    requester: Authenticated  # Must be a moderator or an admin
    action: ModerationAction


class ModerateThreadResponse(BaseModel):
    """Moderate thread response."""

    thread_id: str
    is_locked: bool
    is_pinned: bool


class ModerateThreadUseCase:
    """Use case for locking and pinning threads."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize moderate thread use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: ModerateThreadRequest) -> ModerateThreadResponse:
        """Execute moderation flow.

        Raises:
            ForbiddenError: If the requester is not a moderator or admin
            NotFoundError: If the thread does not exist
        """
        thread_id = ThreadId(UUID(request.thread_id))
        with logfire.span(
            "moderate_thread.execute",
            thread_id=request.thread_id,
            action=request.action.value,
        ):
            if request.action in (ModerationAction.LOCK, ModerationAction.UNLOCK):
                thread = await self.thread_service.set_locked(
                    thread_id,
                    request.requester,
                    locked=request.action == ModerationAction.LOCK,
                )
            else:
                thread = await self.thread_service.set_pinned(
                    thread_id,
                    request.requester,
                    pinned=request.action == ModerationAction.PIN,
                )

            return ModerateThreadResponse(
                thread_id=str(thread.id),
                is_locked=thread.is_locked,
                is_pinned=thread.is_pinned,
            )
