"""Thread domain service."""

from datetime import datetime
from typing import Callable, Optional, TypeVar
from uuid import uuid4

import logfire

from forum.config import ForumSettings
from forum.domain.error import (
    ConcurrentModificationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from forum.domain.model.thread import (
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    Thread,
)
from forum.domain.repository import ThreadRepository, ThreadSortOrder
from forum.domain.value import (
    Authenticated,
    CategoryId,
    Identity,
    TagId,
    ThreadId,
    UserId,
)

from .base import Service
from .category_service import CategoryService
from .tag_service import TagService

T = TypeVar("T")


def _clean_text(value: str, field: str, min_length: int, max_length: int) -> str:
    """Trim a text field and check its length."""
    value = value.strip()
    if not min_length <= len(value) <= max_length:
        raise InvalidInputError(
            f"{field} must be between {min_length} and {max_length} characters"
        )
    return value


class ThreadService(Service):
    """Domain service for the thread aggregate.

    Every change to a stored thread goes through `mutate`, which reloads
    and retries when another request replaced the thread in between.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        category_service: CategoryService,
        tag_service: TagService,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread repository
            category_service: Category domain service
            tag_service: Tag domain service
            forum_settings: Forum content and listing rules
        """
        self.thread_repository = thread_repository
        self.category_service = category_service
        self.tag_service = tag_service
        self.settings = forum_settings

    async def get_by_id(self, thread_id: ThreadId) -> Thread:
        """Load a thread without counting a view.

        Raises:
            NotFoundError: If the thread does not exist
        """
        thread = await self.thread_repository.find_by_id(thread_id)
        if not thread:
            logfire.warn("Thread not found", thread_id=str(thread_id))
            raise NotFoundError("Thread", str(thread_id))
        return thread

    async def mutate(
        self, thread_id: ThreadId, change: Callable[[Thread], T]
    ) -> tuple[Thread, T]:
        """Apply a change to a thread and replace it as one unit.

        The thread is loaded, `change` mutates it in place, and the result
        is replaced only if no other write happened since the load. On a
        lost race the whole cycle runs again with a fresh copy, so `change`
        must not depend on state outside the thread it receives.

        Args:
            thread_id: Thread to change
            change: Mutates the thread; its return value is passed through

        Returns:
            The stored thread and the value returned by `change`

        Raises:
            NotFoundError: If the thread does not exist
            ConflictError: If every attempt lost a race
            Any error raised by `change`, with nothing persisted
        """
        attempts = self.settings.max_write_retries
        for attempt in range(1, attempts + 1):
            thread = await self.get_by_id(thread_id)
            result = change(thread)
            try:
                saved = await self.thread_repository.replace(thread)
            except ConcurrentModificationError:
                logfire.warn(
                    "Concurrent thread write, retrying",
                    thread_id=str(thread_id),
                    attempt=attempt,
                )
                continue
            return saved, result

        logfire.error(
            "Thread write kept conflicting", thread_id=str(thread_id), attempts=attempts
        )
        raise ConflictError(f"Thread {thread_id} is being modified, try again")

    async def create_thread(
        self,
        author: Authenticated,
        title: str,
        content: str,
        category_id: CategoryId,
        tags: Optional[list[str]] = None,
    ) -> Thread:
        """Create a thread.

        Args:
            author: Authenticated author
            title: Thread title
            content: Thread body
            category_id: Category the thread belongs to
            tags: Raw tag names, resolved case-insensitively or created

        Returns:
            Created thread

        Raises:
            InvalidInputError: If the title, content or tags are invalid
            InvalidCategoryError: If the category is missing or inactive
        """
        with logfire.span(
            "thread_service.create_thread",
            author_id=str(author.user_id),
            category_id=str(category_id),
        ):
            title = _clean_text(title, "Title", TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)
            content = _clean_text(
                content, "Content", CONTENT_MIN_LENGTH, CONTENT_MAX_LENGTH
            )
            self._check_tag_count(tags or [])

            await self.category_service.require_active(category_id)
            resolved = await self.tag_service.ensure_tags(tags or [])
            tag_ids = [tag.id for tag in resolved]

            thread = Thread(
                id=ThreadId(uuid4()),
                title=title,
                content=content,
                author_id=author.user_id,
                category_id=category_id,
                tag_ids=tag_ids,
            )
            saved = await self.thread_repository.save(thread)

            await self.tag_service.increment_usage(tag_ids)
            await self.category_service.increment_thread_count(category_id)

            logfire.info(
                "Thread created",
                thread_id=str(saved.id),
                tags=len(tag_ids),
            )
            return saved

    async def get_thread(self, thread_id: ThreadId, viewer: Identity) -> Thread:
        """Read a thread, counting a view unless the viewer is its author.

        The view counter is bumped atomically outside the versioned replace;
        concurrent views are best effort.

        Raises:
            NotFoundError: If the thread does not exist
        """
        with logfire.span("thread_service.get_thread", thread_id=str(thread_id)):
            thread = await self.get_by_id(thread_id)

            is_author = (
                isinstance(viewer, Authenticated) and viewer.user_id == thread.author_id
            )
            if not is_author:
                await self.thread_repository.increment_views(thread_id)
                thread.views += 1

            return thread

    async def list_threads(
        self,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        category_id: Optional[CategoryId] = None,
        tag_ids: Optional[list[TagId]] = None,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> tuple[list[Thread], int]:
        """List threads with filters and pagination.

        Args:
            sort: Sort order
            category_id: Only threads in this category
            tag_ids: Only threads referencing any of these tags
            search: Case-insensitive substring of title or content
            author_id: Only threads started by this user
            limit: Page size (clamped to the configured maximum)
            offset: Number of threads to skip

        Returns:
            The page of threads and the total number of matches
        """
        limit = min(limit or self.settings.default_page_size, self.settings.max_page_size)
        offset = max(offset, 0)
        search = search.strip() if search and search.strip() else None

        with logfire.span(
            "thread_service.list_threads",
            sort=sort.value,
            category_id=str(category_id) if category_id else None,
            search=search,
            limit=limit,
            offset=offset,
        ):
            threads = await self.thread_repository.find_all(
                sort=sort,
                category_id=category_id,
                tag_ids=tag_ids or None,
                search=search,
                author_id=author_id,
                limit=limit,
                offset=offset,
            )
            total = await self.thread_repository.count(
                category_id=category_id,
                tag_ids=tag_ids or None,
                search=search,
                author_id=author_id,
            )
            logfire.info("Threads retrieved", count=len(threads), total=total)
            return threads, total

    async def update_thread(
        self,
        thread_id: ThreadId,
        requester: Authenticated,
        title: Optional[str] = None,
        content: Optional[str] = None,
        category_id: Optional[CategoryId] = None,
        tags: Optional[list[str]] = None,
    ) -> Thread:
        """Edit a thread.

        Moving the thread to another category moves one count between the
        categories. Supplying tags replaces the thread's tags and their
        usage counters.
        Tags created for an edit that then fails are removed again.

        Raises:
            NotFoundError: If the thread does not exist
            ForbiddenError: If the requester is neither the author nor an admin
            InvalidInputError: If a new value is invalid
            InvalidCategoryError: If the new category is missing or inactive
        """
        with logfire.span(
            "thread_service.update_thread",
            thread_id=str(thread_id),
            requester_id=str(requester.user_id),
        ):
            current = await self.get_by_id(thread_id)
            self._authorize(current, requester, "edit")

            if title is not None:
                title = _clean_text(title, "Title", TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)
            if content is not None:
                content = _clean_text(
                    content, "Content", CONTENT_MIN_LENGTH, CONTENT_MAX_LENGTH
                )
            if category_id is not None and category_id != current.category_id:
                await self.category_service.require_active(category_id)

            new_tag_ids: Optional[list[TagId]] = None
            if tags is not None:
                self._check_tag_count(tags)
                new_tag_ids = [
                    tag.id for tag in await self.tag_service.ensure_tags(tags)
                ]

            def apply(thread: Thread) -> tuple[CategoryId, list[TagId]]:
                self._authorize(thread, requester, "edit")
                previous = (thread.category_id, list(thread.tag_ids))
                now = datetime.now()
                if title is not None:
                    thread.title = title
                if content is not None:
                    thread.content = content
                if category_id is not None:
                    thread.category_id = category_id
                if new_tag_ids is not None:
                    thread.tag_ids = new_tag_ids
                thread.is_edited = True
                thread.edited_at = now
                thread.updated_at = now
                return previous

            try:
                saved, (old_category_id, old_tag_ids) = await self.mutate(
                    thread_id, apply
                )
            except DomainError:
                if new_tag_ids is not None:
                    await self.tag_service.discard_unused(new_tag_ids)
                raise

            if saved.category_id != old_category_id:
                await self.category_service.decrement_thread_count(old_category_id)
                await self.category_service.increment_thread_count(saved.category_id)
            if new_tag_ids is not None:
                await self.tag_service.decrement_usage(old_tag_ids)
                await self.tag_service.increment_usage(new_tag_ids)

            logfire.info("Thread updated", thread_id=str(thread_id))
            return saved

    async def delete_thread(self, thread_id: ThreadId, requester: Authenticated) -> None:
        """Delete a thread with its replies and votes.

        Raises:
            NotFoundError: If the thread does not exist
            ForbiddenError: If the requester is neither the author nor an admin
        """
        with logfire.span(
            "thread_service.delete_thread",
            thread_id=str(thread_id),
            requester_id=str(requester.user_id),
        ):
            thread = await self.get_by_id(thread_id)
            self._authorize(thread, requester, "delete")

            if not await self.thread_repository.delete(thread_id):
                raise NotFoundError("Thread", str(thread_id))

            await self.category_service.decrement_thread_count(thread.category_id)
            await self.tag_service.decrement_usage(thread.tag_ids)
            logfire.info("Thread deleted", thread_id=str(thread_id))

    async def set_locked(
        self, thread_id: ThreadId, requester: Authenticated, locked: bool
    ) -> Thread:
        """Lock or unlock a thread (moderators and admins only)."""
        with logfire.span(
            "thread_service.set_locked", thread_id=str(thread_id), locked=locked
        ):
            self._require_moderator(requester)

            def apply(thread: Thread) -> None:
                thread.is_locked = locked

            saved, _ = await self.mutate(thread_id, apply)
            logfire.info("Thread lock changed", thread_id=str(thread_id), locked=locked)
            return saved

    async def set_pinned(
        self, thread_id: ThreadId, requester: Authenticated, pinned: bool
    ) -> Thread:
        """Pin or unpin a thread (moderators and admins only)."""
        with logfire.span(
            "thread_service.set_pinned", thread_id=str(thread_id), pinned=pinned
        ):
            self._require_moderator(requester)

            def apply(thread: Thread) -> None:
                thread.is_pinned = pinned

            saved, _ = await self.mutate(thread_id, apply)
            logfire.info("Thread pin changed", thread_id=str(thread_id), pinned=pinned)
            return saved

    def _check_tag_count(self, tags: list[str]) -> None:
        names = self.tag_service.normalize_names(tags)
        if len(names) > self.settings.max_tags_per_thread:
            raise InvalidInputError(
                f"A thread can have at most {self.settings.max_tags_per_thread} tags"
            )

    @staticmethod
    def _authorize(thread: Thread, requester: Authenticated, action: str) -> None:
        if not requester.owns_or_admin(thread.author_id):
            logfire.warn(
                f"Unauthorized thread {action}",
                thread_id=str(thread.id),
                requester_id=str(requester.user_id),
            )
            raise ForbiddenError(f"Not authorized to {action} this thread")

    @staticmethod
    def _require_moderator(requester: Authenticated) -> None:
        if not requester.is_moderator:
            raise ForbiddenError("Moderator access required")
