"""Mappers for converting between database rows and domain models.

Domain models are Pydantic models, so rows are mapped by hand instead of
through SQLAlchemy's imperative mapping. The thread's vote ledger and reply
tree are stored as JSON documents and validated back into models on load.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import Category, Tag, Thread, User
from forum.domain.service import reply_tree
from forum.domain.value import (
    CategoryId,
    TagId,
    TagName,
    ThreadId,
    UserId,
    UserRole,
)
from forum.domain.value.types import Handle


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        email=row["email"],
        role=UserRole(row["role"]),
        reputation=row["reputation"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["handle"] = user.handle.root
    data["role"] = user.role.value
    return data


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model."""
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        description=row["description"],
        color=row["color"],
        is_active=row["is_active"],
        thread_count=row["thread_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict."""
    return category.model_dump()


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        description=row["description"],
        usage_count=row["usage_count"],
        color=row["color"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    data = tag.model_dump()
    data["name"] = tag.name.root
    return data


def row_to_thread(row: Dict[str, Any]) -> Thread:
    """Convert database row to Thread aggregate.

    Args:
        row: Database row as dict, with JSONB columns already decoded

    Returns:
        Thread aggregate with its vote ledger and reply tree
    """
    return Thread(
        id=ThreadId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        category_id=CategoryId(_uuid(row["category_id"])),
        tag_ids=[TagId(_uuid(tag_id)) for tag_id in row["tag_ids"] or []],
        votes=row["votes"] or [],
        replies=row["replies"] or [],
        views=row["views"],
        is_pinned=row["is_pinned"],
        is_locked=row["is_locked"],
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        last_activity=row["last_activity"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    """Convert Thread aggregate to database dict.

    The embedded documents are dumped in JSON mode (UUIDs and datetimes as
    strings); score and reply_count are derived from them.
    """
    return {
        "id": thread.id,
        "title": thread.title,
        "content": thread.content,
        "author_id": thread.author_id,
        "category_id": thread.category_id,
        "tag_ids": list(thread.tag_ids),
        "votes": thread.votes.model_dump(mode="json"),
        "replies": [node.model_dump(mode="json") for node in thread.replies],
        "score": thread.votes.score,
        "reply_count": reply_tree.count_nodes(thread.replies),
        "views": thread.views,
        "is_pinned": thread.is_pinned,
        "is_locked": thread.is_locked,
        "is_edited": thread.is_edited,
        "edited_at": thread.edited_at,
        "last_activity": thread.last_activity,
        "created_at": thread.created_at,
        "updated_at": thread.updated_at,
        "version": thread.version,
    }
