"""Response items shared by several use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from forum.domain.model import Category, ReplyNode, Tag, Thread, VoteTally
from forum.domain.service import TagService, reply_tree
from forum.domain.value import Authenticated, Identity, TagId, UserId, VoteType


class VoteTallyItem(BaseModel):
    """Vote counts of a votable entity."""

    upvotes: int
    downvotes: int
    score: int

    @classmethod
    def from_tally(cls, tally: VoteTally) -> "VoteTallyItem":
        return cls(upvotes=tally.upvotes, downvotes=tally.downvotes, score=tally.score)


class TagRef(BaseModel):
    """Tag as shown on a thread."""

    tag_id: str
    name: str
    color: str


class TagItem(TagRef):
    """Tag in tag listings."""

    description: str
    usage_count: int
    created_at: datetime

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagItem":
        return cls(
            tag_id=str(tag.id),
            name=tag.name.root,
            color=tag.color,
            description=tag.description,
            usage_count=tag.usage_count,
            created_at=tag.created_at,
        )


class CategoryItem(BaseModel):
    """Category in responses."""

    category_id: str
    name: str
    description: str
    color: str
    thread_count: int
    created_at: datetime

    @classmethod
    def from_category(cls, category: Category) -> "CategoryItem":
        return cls(
            category_id=str(category.id),
            name=category.name,
            description=category.description,
            color=category.color,
            thread_count=category.thread_count,
            created_at=category.created_at,
        )


class ReplyItem(BaseModel):
    """Reply with its nested replies."""

    reply_id: str
    author_id: str
    content: str
    parent_reply_id: str | None
    score: int
    user_vote: VoteType | None
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime
    replies: list["ReplyItem"] = Field(default_factory=list)


class ThreadSummaryItem(BaseModel):
    """Thread in listings; content is shortened to an excerpt."""

    thread_id: str
    title: str
    content: str
    author_id: str
    category_id: str
    tags: list[TagRef]
    score: int
    user_vote: VoteType | None
    views: int
    reply_count: int
    is_pinned: bool
    is_locked: bool
    is_edited: bool
    edited_at: datetime | None
    last_activity: datetime
    created_at: datetime
    updated_at: datetime


class ThreadItem(ThreadSummaryItem):
    """Full thread with its reply tree."""

    replies: list[ReplyItem]


def viewer_id(identity: Identity) -> Optional[UserId]:
    """User ID of an authenticated caller, None when anonymous."""
    return identity.user_id if isinstance(identity, Authenticated) else None


def reply_item(node: ReplyNode, viewer: Optional[UserId] = None) -> ReplyItem:
    """Build the response item of a reply and its subtree.

    Built with an explicit stack so deep trees never hit the recursion limit.
    """
    built: list[ReplyItem] = []
    stack: list[tuple[ReplyNode, list[ReplyItem]]] = [(node, built)]
    while stack:
        current, siblings = stack.pop()
        item = ReplyItem(
            reply_id=str(current.id),
            author_id=str(current.author_id),
            content=current.content,
            parent_reply_id=(
                str(current.parent_reply_id) if current.parent_reply_id else None
            ),
            score=current.votes.score,
            user_vote=current.votes.current_vote(viewer) if viewer else None,
            is_edited=current.is_edited,
            edited_at=current.edited_at,
            created_at=current.created_at,
        )
        siblings.append(item)
        stack.extend((child, item.replies) for child in reversed(current.replies))
    return built[0]


def excerpt(content: str, length: int) -> str:
    """Shorten content for listings."""
    if len(content) <= length:
        return content
    return content[:length] + "..."


def _tag_refs(thread: Thread, tags: dict[TagId, Tag]) -> list[TagRef]:
    return [
        TagRef(tag_id=str(tag.id), name=tag.name.root, color=tag.color)
        for tag in (tags.get(tag_id) for tag_id in thread.tag_ids)
        if tag is not None
    ]


def thread_summary_item(
    thread: Thread,
    tags: dict[TagId, Tag],
    viewer: Optional[UserId],
    excerpt_length: int,
) -> ThreadSummaryItem:
    """Build the listing item of a thread.

    Args:
        thread: Thread aggregate
        tags: Tags by ID, covering at least the thread's tags
        viewer: Caller's user ID, for their own vote
        excerpt_length: Maximum content length before truncation
    """
    return ThreadSummaryItem(
        thread_id=str(thread.id),
        title=thread.title,
        content=excerpt(thread.content, excerpt_length),
        author_id=str(thread.author_id),
        category_id=str(thread.category_id),
        tags=_tag_refs(thread, tags),
        score=thread.votes.score,
        user_vote=thread.votes.current_vote(viewer) if viewer else None,
        views=thread.views,
        reply_count=reply_tree.count_nodes(thread.replies),
        is_pinned=thread.is_pinned,
        is_locked=thread.is_locked,
        is_edited=thread.is_edited,
        edited_at=thread.edited_at,
        last_activity=thread.last_activity,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )


def thread_item(
    thread: Thread, tags: dict[TagId, Tag], viewer: Optional[UserId]
) -> ThreadItem:
    """Build the full response item of a thread, replies included."""
    return ThreadItem(
        thread_id=str(thread.id),
        title=thread.title,
        content=thread.content,
        author_id=str(thread.author_id),
        category_id=str(thread.category_id),
        tags=_tag_refs(thread, tags),
        score=thread.votes.score,
        user_vote=thread.votes.current_vote(viewer) if viewer else None,
        views=thread.views,
        reply_count=reply_tree.count_nodes(thread.replies),
        is_pinned=thread.is_pinned,
        is_locked=thread.is_locked,
        is_edited=thread.is_edited,
        edited_at=thread.edited_at,
        last_activity=thread.last_activity,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
        replies=[reply_item(node, viewer) for node in thread.replies],
    )


async def thread_summaries(
    threads: list[Thread],
    tag_service: TagService,
    viewer: Optional[UserId],
    excerpt_length: int,
) -> list[ThreadSummaryItem]:
    """Build listing items for a page of threads.

    Every tag on the page is resolved in one query.
    """
    page_tag_ids = list({tag_id for t in threads for tag_id in t.tag_ids})
    tags = {tag.id: tag for tag in await tag_service.get_tags_by_ids(page_tag_ids)}
    return [
        thread_summary_item(thread, tags, viewer, excerpt_length) for thread in threads
    ]
