"""Domain services."""

from . import reply_tree
from .base import Service
from .category_service import CategoryService
from .jwt_service import JWTService
from .reply_service import ReplyService
from .reputation_service import ReputationService
from .tag_service import TagService
from .thread_service import ThreadService
from .user_service import UserProfile, UserService
from .vote_service import VoteService, VoteStats

__all__ = [
    "CategoryService",
    "JWTService",
    "ReplyService",
    "ReputationService",
    "Service",
    "TagService",
    "ThreadService",
    "UserProfile",
    "UserService",
    "VoteService",
    "VoteStats",
    "reply_tree",
]
