"""PostgreSQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import ColumnElement, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.repository.thread import LIKE_ESCAPE, escape_like
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """Users in the `users` table; reputation changes are single UPDATEs."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Upsert a user by ID."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> Optional[int]:
        """Add delta in one statement so concurrent votes never lose updates.

        Returns:
            New reputation, or None if no such user
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(reputation=func.greatest(users_table.c.reputation + delta, 0))
            .returning(users_table.c.reputation)
        )
        result = await self.session.execute(stmt)
        reputation = result.scalar_one_or_none()
        await self.session.flush()
        return reputation

    @staticmethod
    def _filters(query: Optional[str]) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [users_table.c.is_active.is_(True)]
        if query:
            conditions.append(
                users_table.c.handle.ilike(
                    f"%{escape_like(query)}%", escape=LIKE_ESCAPE
                )
            )
        return conditions

    async def search(
        self, query: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> List[User]:
        """Active users by reputation, handle as tiebreaker."""
        stmt = (
            select(users_table)
            .where(*self._filters(query))
            .order_by(desc(users_table.c.reputation), users_table.c.handle)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self, query: Optional[str] = None) -> int:
        """Count active users matching the handle query."""
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(*self._filters(query))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
