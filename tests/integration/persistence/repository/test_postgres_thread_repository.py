"""Integration tests for the PostgreSQL repositories.

These tests assume a PostgreSQL server is reachable with the settings
loaded from environment variables and migrated to the latest revision.
"""

from datetime import datetime
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConcurrentModificationError
from forum.domain.model import Tag
from forum.domain.repository import (
    CategoryRepository,
    TagRepository,
    ThreadRepository,
    ThreadSortOrder,
    UserRepository,
)
from forum.domain.service import reply_tree
from forum.domain.value import TagId, TagName, UserId
from tests.factories import make_category, make_reply, make_thread, make_user
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE threads, tags, categories, users CASCADE")
    )
    await session.commit()
    yield


@pytest_asyncio.fixture
async def seeded(integration_env):
    """A stored author and category."""
    user_repo = await integration_env.get(UserRepository)
    category_repo = await integration_env.get(CategoryRepository)
    author = await user_repo.save(make_user("author", reputation=1))
    category = await category_repo.save(make_category("General"))
    return author, category


class TestThreadRepositoryIntegration:
    """Integration tests for PostgresThreadRepository."""

    @pytest.mark.asyncio
    async def test_reply_tree_and_votes_round_trip(self, integration_env, seeded):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        author, category = seeded
        thread = make_thread(author.id, category.id)
        top = make_reply(author.id, content="Top")
        child = make_reply(author.id, content="Child", parent_reply_id=top.id)
        child.votes.cast(author.id, "downvote")
        top.replies.append(child)
        thread.replies.append(top)
        thread.votes.cast(author.id, "upvote")

        # Act
        await thread_repo.save(thread)
        loaded = await thread_repo.find_by_id(thread.id)

        # Assert
        assert loaded.score == 1
        assert loaded.replies[0].replies[0].id == child.id
        assert loaded.replies[0].replies[0].votes.score == -1
        assert loaded.version == 1

    @pytest.mark.asyncio
    async def test_stale_replace_rejected(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        author, category = seeded
        thread = await thread_repo.save(make_thread(author.id, category.id))
        first = await thread_repo.find_by_id(thread.id)
        second = await thread_repo.find_by_id(thread.id)
        first.is_pinned = True

        saved = await thread_repo.replace(first)

        assert saved.version == 2
        with pytest.raises(ConcurrentModificationError):
            await thread_repo.replace(second)

    @pytest.mark.asyncio
    async def test_search_escapes_wildcards(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        author, category = seeded
        await thread_repo.save(
            make_thread(author.id, category.id, title="100% test coverage")
        )
        await thread_repo.save(make_thread(author.id, category.id, title="100 tests"))

        assert await thread_repo.count(search="100%") == 1

    @pytest.mark.asyncio
    async def test_votes_sort_uses_denormalized_score(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        author, category = seeded
        low = await thread_repo.save(make_thread(author.id, category.id))
        high = make_thread(author.id, category.id)
        high.votes.cast(author.id, "upvote")
        await thread_repo.save(high)

        threads = await thread_repo.find_all(sort=ThreadSortOrder.VOTES)

        assert [t.id for t in threads] == [high.id, low.id]

    @pytest.mark.asyncio
    async def test_count_by_author(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        user_repo = await integration_env.get(UserRepository)
        author, category = seeded
        other = await user_repo.save(make_user("other"))
        await thread_repo.save(make_thread(author.id, category.id))
        await thread_repo.save(make_thread(author.id, category.id))
        await thread_repo.save(make_thread(other.id, category.id))

        assert await thread_repo.count(author_id=author.id) == 2
        assert await thread_repo.count(author_id=other.id) == 1

    @pytest.mark.asyncio
    async def test_count_replies_by_author_at_every_depth(self, integration_env, seeded):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        user_repo = await integration_env.get(UserRepository)
        author, category = seeded
        other = await user_repo.save(make_user("other"))
        first = make_thread(author.id, category.id)
        top = make_reply(other.id, "Top level")
        reply_tree.insert(first.replies, None, top)
        nested = make_reply(author.id, "Nested")
        reply_tree.insert(first.replies, top.id, nested)
        reply_tree.insert(first.replies, nested.id, make_reply(other.id, "Deeper"))
        second = make_thread(author.id, category.id)
        # Votes by the user inside the tree must not count as replies
        vote_target = make_reply(author.id, "Voted on")
        vote_target.votes.cast(other.id, "upvote")
        reply_tree.insert(second.replies, None, vote_target)
        await thread_repo.save(first)
        await thread_repo.save(second)

        # Act / Assert
        assert await thread_repo.count_replies_by_author(author.id) == 2
        assert await thread_repo.count_replies_by_author(other.id) == 2
        assert await thread_repo.count_replies_by_author(UserId(uuid4())) == 0

    @pytest.mark.asyncio
    async def test_author_threads_newest_first(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        user_repo = await integration_env.get(UserRepository)
        author, category = seeded
        other = await user_repo.save(make_user("other"))
        older = await thread_repo.save(
            make_thread(author.id, category.id, created_at=datetime(2025, 1, 1))
        )
        newer = await thread_repo.save(
            make_thread(author.id, category.id, created_at=datetime(2025, 2, 1))
        )
        await thread_repo.save(make_thread(other.id, category.id))

        threads = await thread_repo.find_all(
            sort=ThreadSortOrder.NEWEST, author_id=author.id
        )

        assert [t.id for t in threads] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_activity_sort_ignores_pinning(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        author, category = seeded
        pinned = await thread_repo.save(
            make_thread(
                author.id,
                category.id,
                is_pinned=True,
                last_activity=datetime(2025, 1, 1),
            )
        )
        active = await thread_repo.save(
            make_thread(author.id, category.id, last_activity=datetime(2025, 3, 1))
        )

        threads = await thread_repo.find_all(sort=ThreadSortOrder.ACTIVITY)

        assert [t.id for t in threads] == [active.id, pinned.id]

    @pytest.mark.asyncio
    async def test_replace_tag(self, integration_env, seeded):
        thread_repo = await integration_env.get(ThreadRepository)
        tag_repo = await integration_env.get(TagRepository)
        author, category = seeded
        source = await tag_repo.save(Tag(id=TagId(uuid4()), name=TagName("js")))
        target = await tag_repo.save(Tag(id=TagId(uuid4()), name=TagName("javascript")))
        thread = await thread_repo.save(
            make_thread(author.id, category.id, tag_ids=[source.id, target.id])
        )

        updated = await thread_repo.replace_tag(source.id, target.id)

        assert updated == 1
        assert (await thread_repo.find_by_id(thread.id)).tag_ids == [target.id]


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_reputation_clamped_at_zero(self, integration_env, seeded):
        user_repo = await integration_env.get(UserRepository)
        author, _ = seeded

        assert await user_repo.adjust_reputation(author.id, -5) == 0
        assert await user_repo.adjust_reputation(author.id, 3) == 3

    @pytest.mark.asyncio
    async def test_search_ranks_active_users_by_reputation(
        self, integration_env, seeded
    ):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(make_user("alice", reputation=5))
        await user_repo.save(make_user("malice", reputation=9))
        await user_repo.save(
            make_user("alicia", reputation=50).model_copy(update={"is_active": False})
        )
        await user_repo.save(make_user("bob", reputation=7))

        # Act
        users = await user_repo.search(query="ALI")

        # Assert
        assert [u.handle.root for u in users] == ["malice", "alice"]
        assert await user_repo.count(query="ALI") == 2
        assert await user_repo.count() == 4

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, integration_env, seeded):
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(make_user("under_score"))
        await user_repo.save(make_user("underxscore"))

        users = await user_repo.search(query="r_s")

        assert [u.handle.root for u in users] == ["under_score"]
