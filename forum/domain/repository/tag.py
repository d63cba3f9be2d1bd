"""Tag repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from forum.domain.model.tag import Tag
from forum.domain.value import TagId, TagName


class TagSortOrder(str, Enum):
    """Sort order for tag listings."""

    USAGE = "usage"  # usage_count DESC, name ASC
    ALPHABETICAL = "alphabetical"  # name ASC
    RECENT = "recent"  # created_at DESC


class TagRepository(ABC):
    """Repository interface for Tag entities."""

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Args:
            tag: Tag to save

        Returns:
            Saved tag
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID.

        Args:
            tag_id: Tag identifier

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query.

        Args:
            tag_ids: Tag identifiers

        Returns:
            Found tags (may be fewer than requested)
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by normalized name.

        Args:
            name: Tag name

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        sort: TagSortOrder = TagSortOrder.USAGE,
        limit: int = 50,
    ) -> list[Tag]:
        """Find tags.

        Args:
            search: Case-insensitive substring of the name
            sort: Sort order
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def find_popular(self, limit: int = 20) -> list[Tag]:
        """Find tags in use, most used first.

        Args:
            limit: Maximum number of tags to return

        Returns:
            Tags with usage_count > 0
        """
        pass

    @abstractmethod
    async def find_by_prefix(self, prefix: str, limit: int = 10) -> list[Tag]:
        """Find tags whose name starts with prefix, most used first.

        Args:
            prefix: Normalized name prefix
            limit: Maximum number of tags to return

        Returns:
            Matching tags
        """
        pass

    @abstractmethod
    async def increment_usage(self, tag_id: TagId, amount: int = 1) -> None:
        """Atomically add to a tag's usage counter.

        Args:
            tag_id: Tag identifier
            amount: Amount to add
        """
        pass

    @abstractmethod
    async def decrement_usage(self, tag_id: TagId) -> None:
        """Atomically subtract one from the usage counter (minimum 0).

        Args:
            tag_id: Tag identifier
        """
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> bool:
        """Delete a tag.

        Args:
            tag_id: Tag identifier

        Returns:
            True if a tag was deleted
        """
        pass
