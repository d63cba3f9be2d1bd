"""PostgreSQL implementation of Tag repository."""

from typing import Optional

from sqlalchemy import case, delete, desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Tag
from forum.domain.repository import TagRepository, TagSortOrder
from forum.domain.value import TagId, TagName
from forum.persistence.mappers import row_to_tag, tag_to_dict
from forum.persistence.repository.thread import LIKE_ESCAPE, escape_like
from forum.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        tag_dict = tag_to_dict(tag)

        # Try to find existing tag
        existing = await self.find_by_id(tag.id)

        if existing:
            stmt = (
                update(tags_table).where(tags_table.c.id == tag.id).values(**tag_dict)
            )
        else:
            stmt = insert(tags_table).values(**tag_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query."""
        if not tag_ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by normalized name."""
        stmt = select(tags_table).where(tags_table.c.name == name.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(
        self,
        search: Optional[str] = None,
        sort: TagSortOrder = TagSortOrder.USAGE,
        limit: int = 50,
    ) -> list[Tag]:
        """Find tags, optionally filtered by a name substring."""
        stmt = select(tags_table).limit(limit)

        if search:
            stmt = stmt.where(
                tags_table.c.name.ilike(
                    f"%{escape_like(search.strip())}%", escape=LIKE_ESCAPE
                )
            )

        # Order by requested field
        if sort == TagSortOrder.ALPHABETICAL:
            stmt = stmt.order_by(tags_table.c.name)
        elif sort == TagSortOrder.RECENT:
            stmt = stmt.order_by(desc(tags_table.c.created_at))
        else:
            stmt = stmt.order_by(desc(tags_table.c.usage_count), tags_table.c.name)

        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_popular(self, limit: int = 20) -> list[Tag]:
        """Find tags in use, most used first."""
        stmt = (
            select(tags_table)
            .where(tags_table.c.usage_count > 0)
            .order_by(desc(tags_table.c.usage_count), tags_table.c.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_prefix(self, prefix: str, limit: int = 10) -> list[Tag]:
        """Find tags whose name starts with prefix."""
        stmt = (
            select(tags_table)
            .where(
                tags_table.c.name.like(f"{escape_like(prefix)}%", escape=LIKE_ESCAPE)
            )
            .order_by(desc(tags_table.c.usage_count), tags_table.c.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def increment_usage(self, tag_id: TagId, amount: int = 1) -> None:
        """Atomically add to the usage counter."""
        stmt = (
            update(tags_table)
            .where(tags_table.c.id == tag_id)
            .values(usage_count=tags_table.c.usage_count + amount)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_usage(self, tag_id: TagId) -> None:
        """Atomically subtract one from the usage counter (minimum 0)."""
        count = tags_table.c.usage_count
        stmt = (
            update(tags_table)
            .where(tags_table.c.id == tag_id)
            .values(usage_count=case((count > 0, count - 1), else_=0))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, tag_id: TagId) -> bool:
        """Delete a tag."""
        stmt = delete(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
