"""Thread use cases."""

from .create_thread import (
    CreateThreadRequest,
    CreateThreadResponse,
    CreateThreadUseCase,
)
from .delete_thread import (
    DeleteThreadRequest,
    DeleteThreadResponse,
    DeleteThreadUseCase,
)
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase
from .list_threads import ListThreadsRequest, ListThreadsResponse, ListThreadsUseCase
from .moderate_thread import (
    ModerateThreadRequest,
    ModerateThreadResponse,
    ModerateThreadUseCase,
    ModerationAction,
)
from .update_thread import (
    UpdateThreadRequest,
    UpdateThreadResponse,
    UpdateThreadUseCase,
)

__all__ = [
    "CreateThreadRequest",
    "CreateThreadResponse",
    "CreateThreadUseCase",
    "DeleteThreadRequest",
    "DeleteThreadResponse",
    "DeleteThreadUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ListThreadsRequest",
    "ListThreadsResponse",
    "ListThreadsUseCase",
    "ModerateThreadRequest",
    "ModerateThreadResponse",
    "ModerateThreadUseCase",
    "ModerationAction",
    "UpdateThreadRequest",
    "UpdateThreadResponse",
    "UpdateThreadUseCase",
]
