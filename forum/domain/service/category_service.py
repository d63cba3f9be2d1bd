"""Category domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from forum.domain.error import ConflictError, InvalidCategoryError, NotFoundError
from forum.domain.model.category import DEFAULT_CATEGORY_COLOR, Category
from forum.domain.repository import CategoryRepository
from forum.domain.value import CategoryId

from .base import Service


class CategoryService(Service):
    """Domain service for category operations."""

    def __init__(self, category_repository: CategoryRepository) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
        """
        self.category_repository = category_repository

    async def list_categories(self) -> list[Category]:
        """List active categories ordered by name."""
        with logfire.span("category_service.list_categories"):
            categories = await self.category_repository.find_all()
            logfire.info("Categories retrieved", count=len(categories))
            return categories

    async def get_category(self, category_id: CategoryId) -> Category:
        """Get an active category.

        Args:
            category_id: Category ID

        Returns:
            Category

        Raises:
            NotFoundError: If the category is missing or inactive
        """
        with logfire.span(
            "category_service.get_category", category_id=str(category_id)
        ):
            category = await self.category_repository.find_by_id(category_id)
            if not category or not category.is_active:
                logfire.warn("Category not found", category_id=str(category_id))
                raise NotFoundError("Category", str(category_id))
            return category

    async def require_active(self, category_id: CategoryId) -> Category:
        """Validate that a thread may be placed in a category.

        Raises:
            InvalidCategoryError: If the category is missing or inactive
        """
        category = await self.category_repository.find_by_id(category_id)
        if not category or not category.is_active:
            logfire.warn("Invalid category for thread", category_id=str(category_id))
            raise InvalidCategoryError(str(category_id))
        return category

    async def create_category(
        self,
        name: str,
        description: str = "",
        color: Optional[str] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name, unique ignoring case
            description: Optional description
            color: Display color (defaults to the standard blue)

        Returns:
            Created category

        Raises:
            ConflictError: If a category with this name exists
        """
        name = name.strip()
        with logfire.span("category_service.create_category", name=name):
            existing = await self.category_repository.find_by_name(name)
            if existing:
                logfire.warn("Duplicate category name", name=name)
                raise ConflictError(f"Category already exists: {name}")

            category = Category(
                id=CategoryId(uuid4()),
                name=name,
                description=description.strip(),
                color=color or DEFAULT_CATEGORY_COLOR,
            )
            saved = await self.category_repository.save(category)
            logfire.info("Category created", category_id=str(saved.id), name=name)
            return saved

    async def update_category(
        self,
        category_id: CategoryId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Rename or restyle a category.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If the new name belongs to another category
        """
        with logfire.span(
            "category_service.update_category", category_id=str(category_id)
        ):
            category = await self.category_repository.find_by_id(category_id)
            if not category:
                raise NotFoundError("Category", str(category_id))

            update: dict[str, object] = {"updated_at": datetime.now()}
            if name is not None:
                name = name.strip()
                existing = await self.category_repository.find_by_name(name)
                if existing and existing.id != category_id:
                    logfire.warn("Duplicate category name", name=name)
                    raise ConflictError(f"Category already exists: {name}")
                update["name"] = name
            if description is not None:
                update["description"] = description.strip()
            if color is not None:
                update["color"] = color

            # Revalidate through the constructor; model_copy skips validation
            updated = Category.model_validate(category.model_dump() | update)
            saved = await self.category_repository.save(updated)
            logfire.info("Category updated", category_id=str(category_id))
            return saved

    async def delete_category(self, category_id: CategoryId) -> None:
        """Delete a category that no thread uses.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If threads still reference the category
        """
        with logfire.span(
            "category_service.delete_category", category_id=str(category_id)
        ):
            category = await self.category_repository.find_by_id(category_id)
            if not category:
                raise NotFoundError("Category", str(category_id))
            if category.thread_count > 0:
                logfire.warn(
                    "Cannot delete category with threads",
                    category_id=str(category_id),
                    thread_count=category.thread_count,
                )
                raise ConflictError(
                    f"Category has {category.thread_count} thread(s) and cannot be deleted"
                )

            await self.category_repository.delete(category_id)
            logfire.info("Category deleted", category_id=str(category_id))

    async def increment_thread_count(self, category_id: CategoryId) -> None:
        """Atomically add one thread to the category's counter."""
        with logfire.span(
            "category_service.increment_thread_count", category_id=str(category_id)
        ):
            await self.category_repository.increment_thread_count(category_id)

    async def decrement_thread_count(self, category_id: CategoryId) -> None:
        """Atomically remove one thread from the category's counter (minimum 0)."""
        with logfire.span(
            "category_service.decrement_thread_count", category_id=str(category_id)
        ):
            await self.category_repository.decrement_thread_count(category_id)
