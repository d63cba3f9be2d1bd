"""Unit tests for the user use cases."""

from datetime import datetime
from uuid import uuid4

import pytest

from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    ListUserThreadsRequest,
    ListUserThreadsUseCase,
    SearchUsersRequest,
    SearchUsersUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.repository import ThreadRepository, UserRepository
from forum.domain.service import reply_tree
from tests.factories import make_category, make_reply, make_thread, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestGetUserProfile:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_hides_email(self, unit_env):
        use_case = await unit_env.get(GetUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("carol", reputation=42))

        response = await use_case.execute(GetUserProfileRequest(user_id=str(user.id)))

        assert response.handle.root == "carol"
        assert response.reputation == 42
        assert response.thread_count == 0
        assert "email" not in response.model_dump()

    @pytest.mark.asyncio
    async def test_deactivated_user_not_found(self, unit_env):
        use_case = await unit_env.get(GetUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("gone").model_copy(update={"is_active": False}))

        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserProfileRequest(user_id=str(user.id)))

    @pytest.mark.asyncio
    async def test_unknown_user_not_found(self, unit_env):
        use_case = await unit_env.get(GetUserProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserProfileRequest(user_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_profile_counts_own_threads(self, unit_env):
        use_case = await unit_env.get(GetUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author = await user_repo.save(make_user("dave"))
        other = await user_repo.save(make_user("erin"))
        category = make_category()
        for _ in range(2):
            await thread_repo.save(make_thread(author.id, category.id))
        await thread_repo.save(make_thread(other.id, category.id))

        response = await use_case.execute(GetUserProfileRequest(user_id=str(author.id)))

        assert response.thread_count == 2

    @pytest.mark.asyncio
    async def test_profile_counts_replies_at_every_depth(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author = await user_repo.save(make_user("frank"))
        other = await user_repo.save(make_user("grace"))
        thread = make_thread(other.id, make_category().id)
        top = make_reply(author.id, "Top level")
        reply_tree.insert(thread.replies, None, top)
        middle = make_reply(other.id, "Middle")
        reply_tree.insert(thread.replies, top.id, middle)
        reply_tree.insert(thread.replies, middle.id, make_reply(author.id, "Deep"))
        await thread_repo.save(thread)

        # Act
        response = await use_case.execute(GetUserProfileRequest(user_id=str(author.id)))

        # Assert
        assert response.thread_count == 0
        assert response.reply_count == 2


class TestSearchUsers:
    """Tests for SearchUsersUseCase."""

    @pytest.mark.asyncio
    async def test_leaderboard_orders_by_reputation(self, unit_env):
        use_case = await unit_env.get(SearchUsersUseCase)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("low", reputation=1))
        await user_repo.save(make_user("high", reputation=30))
        await user_repo.save(make_user("mid", reputation=7))
        await user_repo.save(
            make_user("ghost", reputation=99).model_copy(update={"is_active": False})
        )

        response = await use_case.execute(SearchUsersRequest())

        assert [u.handle.root for u in response.users] == ["high", "mid", "low"]
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_search_matches_handle_substring(self, unit_env):
        use_case = await unit_env.get(SearchUsersUseCase)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("alice", reputation=2))
        await user_repo.save(make_user("malice", reputation=2))
        await user_repo.save(make_user("bob", reputation=5))

        response = await use_case.execute(
            SearchUsersRequest(query="  ALIC ", limit=1, offset=1)
        )

        # Equal reputation falls back to handle order
        assert [u.handle.root for u in response.users] == ["malice"]
        assert response.total == 2
        assert "email" not in response.users[0].model_dump()


class TestListUserThreads:
    """Tests for ListUserThreadsUseCase."""

    @pytest.mark.asyncio
    async def test_threads_newest_first(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListUserThreadsUseCase)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author = await user_repo.save(make_user("hank"))
        other = await user_repo.save(make_user("ivy"))
        category = make_category()
        older = await thread_repo.save(
            make_thread(author.id, category.id, created_at=datetime(2025, 1, 1))
        )
        newer = await thread_repo.save(
            make_thread(
                author.id,
                category.id,
                created_at=datetime(2025, 2, 1),
                last_activity=datetime(2025, 2, 1),
            )
        )
        await thread_repo.save(make_thread(other.id, category.id))

        # Act
        response = await use_case.execute(
            ListUserThreadsRequest(user_id=str(author.id))
        )

        # Assert
        assert [t.thread_id for t in response.threads] == [str(newer.id), str(older.id)]
        assert response.total == 2

    @pytest.mark.asyncio
    async def test_unknown_user_not_found(self, unit_env):
        use_case = await unit_env.get(ListUserThreadsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(ListUserThreadsRequest(user_id=str(uuid4())))
