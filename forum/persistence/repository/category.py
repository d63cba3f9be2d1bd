"""PostgreSQL implementation of Category repository."""

from typing import Optional

from sqlalchemy import case, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Category
from forum.domain.repository import CategoryRepository
from forum.domain.value import CategoryId
from forum.persistence.mappers import category_to_dict, row_to_category
from forum.persistence.tables import categories_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by name, ignoring case."""
        stmt = select(categories_table).where(
            func.lower(categories_table.c.name) == name.strip().lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_all(self, include_inactive: bool = False) -> list[Category]:
        """Find categories ordered by name."""
        stmt = select(categories_table).order_by(categories_table.c.name)
        if not include_inactive:
            stmt = stmt.where(categories_table.c.is_active.is_(True))

        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        category_dict = category_to_dict(category)

        existing = await self.find_by_id(category.id)

        if existing:
            stmt = (
                update(categories_table)
                .where(categories_table.c.id == category.id)
                .values(**category_dict)
            )
        else:
            stmt = insert(categories_table).values(**category_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return category

    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category."""
        stmt = delete(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_thread_count(self, category_id: CategoryId) -> None:
        """Atomically add one to the thread counter."""
        stmt = (
            update(categories_table)
            .where(categories_table.c.id == category_id)
            .values(thread_count=categories_table.c.thread_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_thread_count(self, category_id: CategoryId) -> None:
        """Atomically subtract one from the thread counter (minimum 0)."""
        count = categories_table.c.thread_count
        stmt = (
            update(categories_table)
            .where(categories_table.c.id == category_id)
            .values(thread_count=case((count > 0, count - 1), else_=0))
        )
        await self.session.execute(stmt)
        await self.session.flush()
