"""Unit tests for InMemoryThreadRepository."""

from uuid import uuid4

import pytest

from forum.domain.error import ConcurrentModificationError, NotFoundError
from forum.domain.repository import ThreadSortOrder
from forum.domain.value import CategoryId, TagId
from forum.persistence.repository.inmemory import InMemoryThreadRepository
from tests.factories import make_thread, make_user


@pytest.fixture
def repo():
    return InMemoryThreadRepository()


@pytest.fixture
def author_id():
    return make_user().id


class TestReplace:
    """Tests for the versioned replace."""

    @pytest.mark.asyncio
    async def test_replace_bumps_version(self, repo, author_id):
        thread = await repo.save(make_thread(author_id, CategoryId(uuid4())))
        loaded = await repo.find_by_id(thread.id)
        loaded.title = "Renamed thread"

        saved = await repo.replace(loaded)

        assert saved.version == 2
        assert (await repo.find_by_id(thread.id)).title == "Renamed thread"

    @pytest.mark.asyncio
    async def test_stale_copy_rejected(self, repo, author_id):
        thread = await repo.save(make_thread(author_id, CategoryId(uuid4())))
        winner = await repo.find_by_id(thread.id)
        loser = await repo.find_by_id(thread.id)
        winner.is_pinned = True
        loser.is_locked = True
        await repo.replace(winner)

        with pytest.raises(ConcurrentModificationError):
            await repo.replace(loser)

        stored = await repo.find_by_id(thread.id)
        assert stored.is_pinned is True
        assert stored.is_locked is False

    @pytest.mark.asyncio
    async def test_replace_keeps_counted_views(self, repo, author_id):
        thread = await repo.save(make_thread(author_id, CategoryId(uuid4())))
        loaded = await repo.find_by_id(thread.id)
        await repo.increment_views(thread.id)
        await repo.increment_views(thread.id)

        saved = await repo.replace(loaded)

        assert saved.views == 2

    @pytest.mark.asyncio
    async def test_replace_missing_thread(self, repo, author_id):
        with pytest.raises(NotFoundError):
            await repo.replace(make_thread(author_id, CategoryId(uuid4())))

    @pytest.mark.asyncio
    async def test_loaded_copy_is_detached(self, repo, author_id):
        thread = await repo.save(make_thread(author_id, CategoryId(uuid4())))
        loaded = await repo.find_by_id(thread.id)

        loaded.votes.cast(author_id, "upvote")

        assert (await repo.find_by_id(thread.id)).score == 0


class TestQueries:
    """Tests for find_all, count and replace_tag."""

    @pytest.mark.asyncio
    async def test_popular_sorts_by_views(self, repo, author_id):
        quiet = await repo.save(make_thread(author_id, CategoryId(uuid4())))
        busy = await repo.save(make_thread(author_id, CategoryId(uuid4()), views=10))

        threads = await repo.find_all(sort=ThreadSortOrder.POPULAR)

        assert [t.id for t in threads] == [busy.id, quiet.id]

    @pytest.mark.asyncio
    async def test_search_matches_content(self, repo, author_id):
        await repo.save(
            make_thread(
                author_id, CategoryId(uuid4()), content="Discussing ASYNCIO pitfalls"
            )
        )
        await repo.save(make_thread(author_id, CategoryId(uuid4())))

        assert await repo.count(search="asyncio") == 1

    @pytest.mark.asyncio
    async def test_replace_tag_without_duplicates(self, repo, author_id):
        source, target = TagId(uuid4()), TagId(uuid4())
        thread = await repo.save(
            make_thread(author_id, CategoryId(uuid4()), tag_ids=[source, target])
        )

        updated = await repo.replace_tag(source, target)

        assert updated == 1
        stored = await repo.find_by_id(thread.id)
        assert stored.tag_ids == [target]
        assert stored.version == 2
