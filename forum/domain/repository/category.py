"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.category import Category
from forum.domain.value import CategoryId


class CategoryRepository(ABC):
    """Repository interface for Category entities."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID.

        Args:
            category_id: Category identifier

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by name, ignoring case.

        Args:
            name: Category name

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, include_inactive: bool = False) -> list[Category]:
        """Find all categories ordered by name.

        Args:
            include_inactive: Whether to include deactivated categories

        Returns:
            List of categories
        """
        pass

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Save or update a category.

        Args:
            category: Category to save

        Returns:
            Saved category
        """
        pass

    @abstractmethod
    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category.

        Args:
            category_id: Category identifier

        Returns:
            True if a category was deleted
        """
        pass

    @abstractmethod
    async def increment_thread_count(self, category_id: CategoryId) -> None:
        """Atomically add one to the category's thread counter.

        Args:
            category_id: Category identifier
        """
        pass

    @abstractmethod
    async def decrement_thread_count(self, category_id: CategoryId) -> None:
        """Atomically subtract one from the thread counter (minimum 0).

        Args:
            category_id: Category identifier
        """
        pass
