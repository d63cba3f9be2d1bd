"""Domain model entities for the forum."""

from forum.domain.model.category import Category
from forum.domain.model.reply import ReplyNode
from forum.domain.model.tag import Tag
from forum.domain.model.thread import Thread
from forum.domain.model.user import User
from forum.domain.model.vote import Vote, VoteLedger, VoteOutcome, VoteTally

__all__ = [
    "User",
    "Thread",
    "ReplyNode",
    "Category",
    "Tag",
    "Vote",
    "VoteLedger",
    "VoteOutcome",
    "VoteTally",
]
