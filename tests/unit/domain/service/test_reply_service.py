"""Unit tests for ReplyService."""

from uuid import uuid4

import pytest

from forum.domain.error import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ThreadLockedError,
)
from forum.domain.repository import ThreadRepository
from forum.domain.service import ReplyService, reply_tree
from forum.config import ForumSettings
from forum.domain.value import CategoryId, ReplyId, ThreadId, UserRole
from tests.factories import as_identity, make_thread, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _stored_thread(unit_env, **kwargs):
    thread_repo = await unit_env.get(ThreadRepository)
    return await thread_repo.save(
        make_thread(make_user("author").id, CategoryId(uuid4()), **kwargs)
    )


class TestAddReply:
    """Tests for add_reply."""

    @pytest.mark.asyncio
    async def test_top_level_reply_updates_activity(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))

        # Act
        reply = await reply_service.add_reply(thread.id, author, "  First!  ")

        # Assert
        assert reply.content == "First!"
        assert reply.parent_reply_id is None
        saved = await thread_repo.find_by_id(thread.id)
        assert [r.id for r in saved.replies] == [reply.id]
        assert saved.last_activity == reply.created_at
        assert saved.version == 2

    @pytest.mark.asyncio
    async def test_nested_replies_at_any_depth(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))

        parent_id = None
        created = []
        for depth in range(5):
            reply = await reply_service.add_reply(
                thread.id, author, f"Reply at depth {depth}", parent_id
            )
            created.append(reply.id)
            parent_id = reply.id

        saved = await thread_repo.find_by_id(thread.id)
        assert [n.id for n in reply_tree.iter_nodes(saved.replies)] == created
        assert reply_tree.locate(saved.replies, created[-1]).depth == 4

    @pytest.mark.asyncio
    async def test_locked_thread_rejects_replies(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await _stored_thread(unit_env, is_locked=True)

        with pytest.raises(ThreadLockedError):
            await reply_service.add_reply(
                thread.id, as_identity(make_user("replier")), "Too late"
            )

        saved = await thread_repo.find_by_id(thread.id)
        assert saved.replies == []
        assert saved.version == 1

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread = await _stored_thread(unit_env)

        with pytest.raises(NotFoundError):
            await reply_service.add_reply(
                thread.id,
                as_identity(make_user("replier")),
                "Orphan",
                ReplyId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_missing_thread_raises_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.add_reply(
                ThreadId(uuid4()), as_identity(make_user("replier")), "Hello"
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "    ", "x" * 5001])
    async def test_invalid_content_rejected(self, unit_env, content):
        reply_service = await unit_env.get(ReplyService)
        thread = await _stored_thread(unit_env)

        with pytest.raises(InvalidInputError):
            await reply_service.add_reply(
                thread.id, as_identity(make_user("replier")), content
            )


    @pytest.mark.asyncio
    async def test_reply_beyond_nesting_limit_rejected(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        reply_service.thread_service.settings = ForumSettings(max_reply_depth=3)
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))
        parent_id = None
        for depth in range(3):
            reply = await reply_service.add_reply(
                thread.id, author, f"Reply at depth {depth}", parent_id
            )
            parent_id = reply.id

        # Act
        with pytest.raises(InvalidInputError, match="at most 3 levels"):
            await reply_service.add_reply(thread.id, author, "One too deep", parent_id)

        # Assert
        saved = await thread_repo.find_by_id(thread.id)
        assert reply_tree.count_nodes(saved.replies) == 3
        assert saved.version == 4

    @pytest.mark.asyncio
    async def test_chain_at_default_nesting_limit(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        limit = ForumSettings().max_reply_depth
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))

        parent_id = None
        for depth in range(limit):
            reply = await reply_service.add_reply(
                thread.id, author, f"Depth {depth}", parent_id
            )
            parent_id = reply.id

        with pytest.raises(InvalidInputError):
            await reply_service.add_reply(thread.id, author, "Too deep", parent_id)
        saved = await thread_repo.find_by_id(thread.id)
        assert reply_tree.locate(saved.replies, parent_id).depth == limit - 1


class TestEditReply:
    """Tests for edit_reply."""

    @pytest.mark.asyncio
    async def test_edit_allowed_on_locked_thread(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))
        reply = await reply_service.add_reply(thread.id, author, "Original")
        stored = await thread_repo.find_by_id(thread.id)
        stored.is_locked = True
        await thread_repo.replace(stored)

        # Act
        edited = await reply_service.edit_reply(thread.id, reply.id, author, "Fixed typo")

        # Assert
        assert edited.content == "Fixed typo"
        assert edited.is_edited is True
        assert edited.edited_at is not None

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread = await _stored_thread(unit_env)
        reply = await reply_service.add_reply(
            thread.id, as_identity(make_user("replier")), "Mine"
        )

        with pytest.raises(ForbiddenError):
            await reply_service.edit_reply(
                thread.id, reply.id, as_identity(make_user("other")), "Yours now"
            )


class TestDeleteReply:
    """Tests for delete_reply."""

    @pytest.mark.asyncio
    async def test_delete_removes_subtree(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await _stored_thread(unit_env)
        author = as_identity(make_user("replier"))
        a = await reply_service.add_reply(thread.id, author, "A")
        b = await reply_service.add_reply(thread.id, author, "B", a.id)
        await reply_service.add_reply(thread.id, author, "C", b.id)
        sibling = await reply_service.add_reply(thread.id, author, "D")

        # Act
        removed = await reply_service.delete_reply(thread.id, a.id, author)

        # Assert
        assert reply_tree.count_nodes([removed]) == 3
        saved = await thread_repo.find_by_id(thread.id)
        assert [r.id for r in saved.replies] == [sibling.id]

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_reply(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread = await _stored_thread(unit_env)
        reply = await reply_service.add_reply(
            thread.id, as_identity(make_user("replier")), "Spam"
        )
        admin = as_identity(make_user("admin", role=UserRole.ADMIN))

        removed = await reply_service.delete_reply(thread.id, reply.id, admin)

        assert removed.id == reply.id

    @pytest.mark.asyncio
    async def test_moderator_cannot_delete_others_reply(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        thread = await _stored_thread(unit_env)
        reply = await reply_service.add_reply(
            thread.id, as_identity(make_user("replier")), "Opinion"
        )
        moderator = as_identity(make_user("mod", role=UserRole.MODERATOR))

        with pytest.raises(ForbiddenError):
            await reply_service.delete_reply(thread.id, reply.id, moderator)
