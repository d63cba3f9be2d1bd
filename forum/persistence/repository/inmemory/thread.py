"""In-memory implementation of Thread repository for testing."""

from copy import deepcopy
from typing import List, Optional

from forum.domain.error import ConcurrentModificationError, NotFoundError
from forum.domain.model import Thread
from forum.domain.repository.thread import ThreadRepository, ThreadSortOrder
from forum.domain.service import reply_tree
from forum.domain.value import CategoryId, TagId, ThreadId, UserId


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing.

    Threads are deep-copied in and out, so callers mutating a loaded
    aggregate never touch the stored document, as with a real database.
    """

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._threads: dict[ThreadId, Thread] = {}

    def _matching(
        self,
        category_id: Optional[CategoryId],
        tag_ids: Optional[List[TagId]],
        search: Optional[str],
        author_id: Optional[UserId] = None,
    ) -> list[Thread]:
        threads = list(self._threads.values())
        if author_id:
            threads = [t for t in threads if t.author_id == author_id]
        if category_id:
            threads = [t for t in threads if t.category_id == category_id]
        if tag_ids:
            wanted = set(tag_ids)
            threads = [t for t in threads if wanted.intersection(t.tag_ids)]
        if search:
            term = search.lower()
            threads = [
                t
                for t in threads
                if term in t.title.lower() or term in t.content.lower()
            ]
        return threads

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        thread = self._threads.get(thread_id)
        return deepcopy(thread) if thread else None

    async def find_all(
        self,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        category_id: Optional[CategoryId] = None,
        tag_ids: Optional[List[TagId]] = None,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Thread]:
        """Find threads with filtering and pagination."""
        threads = self._matching(category_id, tag_ids, search, author_id)

        if sort == ThreadSortOrder.POPULAR:
            threads.sort(key=lambda t: (t.views, t.created_at), reverse=True)
        elif sort == ThreadSortOrder.VOTES:
            threads.sort(key=lambda t: (t.score, t.created_at), reverse=True)
        elif sort == ThreadSortOrder.ACTIVITY:
            threads.sort(key=lambda t: t.last_activity, reverse=True)
        elif sort == ThreadSortOrder.NEWEST:
            threads.sort(key=lambda t: t.created_at, reverse=True)
        else:
            threads.sort(key=lambda t: (t.is_pinned, t.last_activity), reverse=True)

        return [deepcopy(t) for t in threads[offset : offset + limit]]

    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        tag_ids: Optional[List[TagId]] = None,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count threads matching the given filters."""
        return len(self._matching(category_id, tag_ids, search, author_id))

    async def save(self, thread: Thread) -> Thread:
        """Insert a new thread."""
        self._threads[thread.id] = deepcopy(thread)
        return thread

    async def replace(self, thread: Thread) -> Thread:
        """Replace the stored thread if its version is unchanged."""
        stored = self._threads.get(thread.id)
        if stored is None:
            raise NotFoundError("Thread", str(thread.id))
        if stored.version != thread.version:
            raise ConcurrentModificationError("Thread", str(thread.id), thread.version)

        thread.version += 1
        thread.views = stored.views
        self._threads[thread.id] = deepcopy(thread)
        return thread

    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete a thread."""
        return self._threads.pop(thread_id, None) is not None

    async def increment_views(self, thread_id: ThreadId) -> None:
        """Add one view."""
        thread = self._threads.get(thread_id)
        if thread:
            thread.views += 1

    async def replace_tag(self, source_id: TagId, target_id: TagId) -> int:
        """Repoint source tag references to the target tag."""
        updated = 0
        for thread in self._threads.values():
            if source_id not in thread.tag_ids:
                continue
            tag_ids = [t for t in thread.tag_ids if t != source_id]
            if target_id not in tag_ids:
                tag_ids.append(target_id)
            thread.tag_ids = tag_ids
            thread.version += 1
            updated += 1
        return updated

    async def count_replies_by_author(self, author_id: UserId) -> int:
        """Count replies by a user across every thread's reply tree."""
        return sum(
            1
            for thread in self._threads.values()
            for node in reply_tree.iter_nodes(thread.replies)
            if node.author_id == author_id
        )
