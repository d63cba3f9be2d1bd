"""PostgreSQL implementation of Thread repository."""

from typing import List, Optional

import logfire
from sqlalchemy import (
    ColumnElement,
    Text,
    and_,
    cast,
    delete,
    desc,
    func,
    insert,
    literal_column,
    or_,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConcurrentModificationError, NotFoundError
from forum.domain.model import Thread
from forum.domain.repository.thread import ThreadRepository, ThreadSortOrder
from forum.domain.value import CategoryId, TagId, ThreadId, UserId
from forum.persistence.mappers import row_to_thread, thread_to_dict
from forum.persistence.tables import threads_table

LIKE_ESCAPE = "\\"

# Objects at any depth of a reply forest written by $author_id. Strict mode
# keeps .** from visiting a node twice; non-objects fail the filter silently.
REPLIES_BY_AUTHOR = literal_column(
    "'strict $.** ? (@.author_id == $author_id)'::jsonpath"
)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository.

    Each thread is one row; its vote ledger and reply tree live in JSONB
    columns and are written back whole on every replace.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _filters(
        category_id: Optional[CategoryId],
        tag_ids: Optional[List[TagId]],
        search: Optional[str],
        author_id: Optional[UserId] = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if author_id:
            conditions.append(threads_table.c.author_id == author_id)
        if category_id:
            conditions.append(threads_table.c.category_id == category_id)
        if tag_ids:
            conditions.append(threads_table.c.tag_ids.overlap(list(tag_ids)))
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    threads_table.c.title.ilike(pattern, escape=LIKE_ESCAPE),
                    threads_table.c.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return conditions

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        stmt = select(threads_table).where(threads_table.c.id == thread_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_thread(dict(row)) if row else None

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
        with logfire.span(
            "thread_repository.find_all",
            sort=sort.value,
            category_id=str(category_id) if category_id else None,
            search=search,
            limit=limit,
            offset=offset,
        ):
            stmt = select(threads_table).where(
                *self._filters(category_id, tag_ids, search, author_id)
            )

            # Sort order
            if sort == ThreadSortOrder.POPULAR:
                stmt = stmt.order_by(
                    desc(threads_table.c.views), desc(threads_table.c.created_at)
                )
            elif sort == ThreadSortOrder.VOTES:
                stmt = stmt.order_by(
                    desc(threads_table.c.score), desc(threads_table.c.created_at)
                )
            elif sort == ThreadSortOrder.ACTIVITY:
                stmt = stmt.order_by(desc(threads_table.c.last_activity))
            elif sort == ThreadSortOrder.NEWEST:
                stmt = stmt.order_by(desc(threads_table.c.created_at))
            else:
                stmt = stmt.order_by(
                    desc(threads_table.c.is_pinned),
                    desc(threads_table.c.last_activity),
                )

            # Pagination
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            threads = [row_to_thread(dict(row)) for row in result.mappings().all()]
            logfire.info("Found threads", count=len(threads))
            return threads

    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        tag_ids: Optional[List[TagId]] = None,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count threads matching the given filters."""
        stmt = (
            select(func.count())
            .select_from(threads_table)
            .where(*self._filters(category_id, tag_ids, search, author_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, thread: Thread) -> Thread:
        """Insert a new thread."""
        stmt = insert(threads_table).values(**thread_to_dict(thread))
        await self.session.execute(stmt)
        await self.session.flush()
        return thread

    async def replace(self, thread: Thread) -> Thread:
        """Replace the stored document if its version is unchanged."""
        with logfire.span(
            "thread_repository.replace",
            thread_id=str(thread.id),
            version=thread.version,
        ):
            values = thread_to_dict(thread)
            # Views are bumped atomically elsewhere and never written back
            for column in ("id", "views", "created_at"):
                values.pop(column)
            values["version"] = thread.version + 1

            stmt = (
                update(threads_table)
                .where(
                    and_(
                        threads_table.c.id == thread.id,
                        threads_table.c.version == thread.version,
                    )
                )
                .values(**values)
                .returning(threads_table.c.views)
            )
            result = await self.session.execute(stmt)
            row = result.first()

            if row is None:
                exists = await self.session.execute(
                    select(threads_table.c.id).where(threads_table.c.id == thread.id)
                )
                if exists.first() is None:
                    raise NotFoundError("Thread", str(thread.id))
                raise ConcurrentModificationError(
                    "Thread", str(thread.id), thread.version
                )

            await self.session.flush()
            thread.version += 1
            thread.views = row.views
            return thread

    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete a thread with its embedded replies and votes."""
        stmt = delete(threads_table).where(threads_table.c.id == thread_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_views(self, thread_id: ThreadId) -> None:
        """Atomically add one view."""
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(views=threads_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def replace_tag(self, source_id: TagId, target_id: TagId) -> int:
        """Repoint source tag references to the target tag."""
        with logfire.span(
            "thread_repository.replace_tag",
            source_id=str(source_id),
            target_id=str(target_id),
        ):
            tag_ids = threads_table.c.tag_ids
            has_source = tag_ids.contains([source_id])
            has_target = tag_ids.contains([target_id])
            bump = threads_table.c.version + 1

            # Threads with only the source: swap it for the target
            swap = (
                update(threads_table)
                .where(has_source, ~has_target)
                .values(
                    tag_ids=func.array_append(
                        func.array_remove(tag_ids, source_id), target_id
                    ),
                    version=bump,
                )
            )
            # Threads with both: drop the source
            drop = (
                update(threads_table)
                .where(has_source, has_target)
                .values(tag_ids=func.array_remove(tag_ids, source_id), version=bump)
            )

            swapped = await self.session.execute(swap)
            dropped = await self.session.execute(drop)
            await self.session.flush()

            updated = swapped.rowcount + dropped.rowcount
            logfire.info("Threads repointed", count=updated)
            return updated

    async def count_replies_by_author(self, author_id: UserId) -> int:
        """Count reply nodes by a user inside every thread's JSONB forest."""
        matches = func.jsonb_path_query_array(
            threads_table.c.replies,
            REPLIES_BY_AUTHOR,
            func.jsonb_build_object("author_id", cast(str(author_id), Text)),
        )
        stmt = select(func.coalesce(func.sum(func.jsonb_array_length(matches)), 0))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
