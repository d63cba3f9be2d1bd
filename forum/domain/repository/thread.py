"""Thread repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from forum.domain.model.thread import Thread
from forum.domain.value import CategoryId, TagId, ThreadId, UserId


class ThreadSortOrder(str, Enum):
    """Sort order for thread listings."""

    RECENT = "recent"  # Pinned first, then last_activity DESC
    POPULAR = "popular"  # views DESC, created_at DESC
    VOTES = "votes"  # score DESC, created_at DESC
    ACTIVITY = "activity"  # last_activity DESC, pinned or not
    NEWEST = "newest"  # created_at DESC


class ThreadRepository(ABC):
    """Repository for the Thread aggregate.

    A thread is stored as one document together with its reply tree and
    vote ledgers. Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
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
        """Find threads with filtering and pagination.

        Args:
            sort: Sort order
            category_id: Only threads in this category
            tag_ids: Only threads referencing any of these tags
            search: Case-insensitive substring of title or content
            author_id: Only threads started by this user
            limit: Maximum number of threads to return
            offset: Number of threads to skip

        Returns:
            List of threads
        """
        pass

    @abstractmethod
    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        tag_ids: Optional[List[TagId]] = None,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count threads matching the same filters as find_all.

        Returns:
            Number of matching threads
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Insert a new thread.

        Args:
            thread: The thread to insert

        Returns:
            The saved thread
        """
        pass

    @abstractmethod
    async def replace(self, thread: Thread) -> Thread:
        """Replace a stored thread if nobody else wrote it since it was loaded.

        The write only happens when the stored version equals
        `thread.version`; on success the version is bumped on both the
        stored document and the passed thread. The view counter is never
        overwritten.

        Args:
            thread: The mutated thread, as loaded plus changes

        Returns:
            The replaced thread with its new version

        Raises:
            NotFoundError: If the thread no longer exists
            ConcurrentModificationError: If the stored version differs
        """
        pass

    @abstractmethod
    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete a thread with its reply tree and votes.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            True if a thread was deleted
        """
        pass

    @abstractmethod
    async def increment_views(self, thread_id: ThreadId) -> None:
        """Atomically add one view to a thread.

        Args:
            thread_id: The thread's unique identifier
        """
        pass

    @abstractmethod
    async def replace_tag(self, source_id: TagId, target_id: TagId) -> int:
        """Repoint every thread referencing source_id to target_id.

        Threads already referencing target_id end up with a single reference.

        Args:
            source_id: Tag being merged away
            target_id: Tag that survives

        Returns:
            Number of threads updated
        """
        pass

    @abstractmethod
    async def count_replies_by_author(self, author_id: UserId) -> int:
        """Count replies written by a user, at any depth, across all threads.

        Args:
            author_id: The author's user ID

        Returns:
            Number of replies
        """
        pass
