"""Reply use cases."""

from .add_reply import AddReplyRequest, AddReplyResponse, AddReplyUseCase
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .update_reply import UpdateReplyRequest, UpdateReplyResponse, UpdateReplyUseCase

__all__ = [
    "AddReplyRequest",
    "AddReplyResponse",
    "AddReplyUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "UpdateReplyRequest",
    "UpdateReplyResponse",
    "UpdateReplyUseCase",
]
