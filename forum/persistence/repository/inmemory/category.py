"""In-memory implementation of Category repository for testing."""

from copy import deepcopy
from typing import Optional

from forum.domain.model.category import Category
from forum.domain.repository.category import CategoryRepository
from forum.domain.value import CategoryId


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._categories: dict[CategoryId, Category] = {}

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        category = self._categories.get(category_id)
        return deepcopy(category) if category else None

    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by name, ignoring case."""
        wanted = name.strip().lower()
        for category in self._categories.values():
            if category.name.lower() == wanted:
                return deepcopy(category)
        return None

    async def find_all(self, include_inactive: bool = False) -> list[Category]:
        """Find categories ordered by name."""
        categories = [
            c for c in self._categories.values() if include_inactive or c.is_active
        ]
        categories.sort(key=lambda c: c.name)
        return [deepcopy(c) for c in categories]

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        self._categories[category.id] = deepcopy(category)
        return deepcopy(category)

    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category."""
        return self._categories.pop(category_id, None) is not None

    async def increment_thread_count(self, category_id: CategoryId) -> None:
        """Add one to the thread counter."""
        category = self._categories.get(category_id)
        if category:
            self._categories[category_id] = category.model_copy(
                update={"thread_count": category.thread_count + 1}
            )

    async def decrement_thread_count(self, category_id: CategoryId) -> None:
        """Subtract one from the thread counter (minimum 0)."""
        category = self._categories.get(category_id)
        if category:
            self._categories[category_id] = category.model_copy(
                update={"thread_count": max(0, category.thread_count - 1)}
            )
