"""Builders for domain objects used across tests."""

from uuid import uuid4

from forum.domain.model import Category, ReplyNode, Thread, User
from forum.domain.value import (
    Authenticated,
    CategoryId,
    ReplyId,
    ThreadId,
    UserId,
    UserRole,
)
from forum.domain.value.types import Handle


def make_user(
    handle: str = "alice", role: UserRole = UserRole.USER, reputation: int = 0
) -> User:
    """Build a user with a unique ID and email."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        handle=Handle(handle),
        email=f"{handle}-{user_id.hex[:8]}@example.com",
        role=role,
        reputation=reputation,
    )


def as_identity(user: User) -> Authenticated:
    """Identity of a user making a request."""
    return Authenticated(user_id=user.id, role=user.role)


def make_category(name: str = "General", **kwargs) -> Category:
    return Category(id=CategoryId(uuid4()), name=name, **kwargs)


def make_thread(author_id: UserId, category_id: CategoryId, **kwargs) -> Thread:
    """Build a thread with valid default title and content."""
    defaults = {
        "title": "A thread about testing",
        "content": "Some content that is long enough",
    }
    return Thread(
        id=ThreadId(uuid4()),
        author_id=author_id,
        category_id=category_id,
        **(defaults | kwargs),
    )


def make_reply(author_id: UserId, content: str = "A reply", **kwargs) -> ReplyNode:
    return ReplyNode(id=ReplyId(uuid4()), author_id=author_id, content=content, **kwargs)
