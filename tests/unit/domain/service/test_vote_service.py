"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from forum.domain.error import InvalidVoteError, NotFoundError
from forum.domain.repository import ThreadRepository, UserRepository
from forum.domain.service import ReplyService, VoteService, reply_tree
from forum.domain.value import CategoryId, ReplyId, ThreadId, VoteType
from tests.factories import as_identity, make_reply, make_thread, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _seed(unit_env, author_reputation: int = 0):
    """Store an author and one of their threads."""
    user_repo = await unit_env.get(UserRepository)
    thread_repo = await unit_env.get(ThreadRepository)
    author = await user_repo.save(make_user("author", reputation=author_reputation))
    thread = await thread_repo.save(make_thread(author.id, CategoryId(uuid4())))
    return author, thread


class TestVoteOnThread:
    """Tests for vote_on_thread."""

    @pytest.mark.asyncio
    async def test_upvote_raises_score_and_reputation(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author, thread = await _seed(unit_env)
        voter = as_identity(make_user("voter"))

        # Act
        outcome = await vote_service.vote_on_thread(thread.id, voter, "upvote")

        # Assert
        assert outcome.delta == 1
        assert outcome.new_score == 1
        assert outcome.voter_current_vote == VoteType.UPVOTE
        assert (await thread_repo.find_by_id(thread.id)).score == 1
        assert (await user_repo.find_by_id(author.id)).reputation == 1

    @pytest.mark.asyncio
    async def test_second_identical_vote_toggles_off(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        author, thread = await _seed(unit_env, author_reputation=5)
        voter = as_identity(make_user("voter"))

        await vote_service.vote_on_thread(thread.id, voter, VoteType.UPVOTE)
        outcome = await vote_service.vote_on_thread(thread.id, voter, VoteType.UPVOTE)

        assert outcome.delta == -1
        assert outcome.new_score == 0
        assert outcome.voter_current_vote is None
        assert (await user_repo.find_by_id(author.id)).reputation == 5

    @pytest.mark.asyncio
    async def test_flip_moves_score_and_reputation_by_two(self, unit_env):
        """Two upvotes, one flips to a downvote: score 2 -> 0, reputation 10 -> 8."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author, thread = await _seed(unit_env, author_reputation=10)
        first = as_identity(make_user("first"))
        second = make_user("second")
        stored = await thread_repo.find_by_id(thread.id)
        stored.votes.cast(first.user_id, VoteType.UPVOTE)
        stored.votes.cast(second.id, VoteType.UPVOTE)
        await thread_repo.replace(stored)

        # Act
        outcome = await vote_service.vote_on_thread(thread.id, first, "downvote")

        # Assert
        assert outcome.delta == -2
        assert outcome.new_score == 0
        assert outcome.voter_current_vote == VoteType.DOWNVOTE
        saved = await thread_repo.find_by_id(thread.id)
        assert len(saved.votes) == 2
        assert (await user_repo.find_by_id(author.id)).reputation == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "base, upvotes, downvotes",
        [(0, 3, 0), (5, 2, 4), (2, 0, 5), (1, 4, 4), (0, 0, 3)],
    )
    async def test_reputation_follows_distinct_voters(
        self, unit_env, base, upvotes, downvotes
    ):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author, thread = await _seed(unit_env, author_reputation=base)
        # Upvotes land first so the zero floor can only be hit at the end
        casts = [VoteType.UPVOTE] * upvotes + [VoteType.DOWNVOTE] * downvotes

        # Act
        for i, vote_type in enumerate(casts):
            voter = as_identity(make_user(f"voter{i}"))
            await vote_service.vote_on_thread(thread.id, voter, vote_type)

        # Assert
        assert (await thread_repo.find_by_id(thread.id)).score == upvotes - downvotes
        reputation = (await user_repo.find_by_id(author.id)).reputation
        assert reputation == max(0, base + upvotes - downvotes)

    @pytest.mark.asyncio
    async def test_reputation_never_drops_below_zero(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        author, thread = await _seed(unit_env, author_reputation=0)

        outcome = await vote_service.vote_on_thread(
            thread.id, as_identity(make_user("critic")), "downvote"
        )

        assert outcome.new_score == -1
        assert (await user_repo.find_by_id(author.id)).reputation == 0

    @pytest.mark.asyncio
    async def test_vote_succeeds_when_author_is_gone(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread(make_user().id, CategoryId(uuid4())))

        outcome = await vote_service.vote_on_thread(
            thread.id, as_identity(make_user("voter")), "upvote"
        )

        assert outcome.new_score == 1

    @pytest.mark.asyncio
    async def test_invalid_vote_type_rejected_before_any_write(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        thread_repo = await unit_env.get(ThreadRepository)
        _, thread = await _seed(unit_env)

        with pytest.raises(InvalidVoteError):
            await vote_service.vote_on_thread(
                thread.id, as_identity(make_user("voter")), "sideways"
            )

        assert (await thread_repo.find_by_id(thread.id)).version == 1

    @pytest.mark.asyncio
    async def test_missing_thread_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.vote_on_thread(
                ThreadId(uuid4()), as_identity(make_user("voter")), "upvote"
            )


class TestVoteOnReply:
    """Tests for vote_on_reply."""

    @pytest.mark.asyncio
    async def test_vote_on_nested_reply_credits_reply_author(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        thread_author, thread = await _seed(unit_env, author_reputation=3)
        reply_author = await user_repo.save(make_user("replier", reputation=3))
        parent = make_reply(thread_author.id)
        child = make_reply(reply_author.id, content="Nested answer")
        parent.replies.append(child)
        stored = await thread_repo.find_by_id(thread.id)
        stored.replies.append(parent)
        await thread_repo.replace(stored)

        # Act
        outcome = await vote_service.vote_on_reply(
            thread.id, child.id, as_identity(make_user("voter")), "upvote"
        )

        # Assert
        assert outcome.new_score == 1
        assert (await user_repo.find_by_id(reply_author.id)).reputation == 4
        assert (await user_repo.find_by_id(thread_author.id)).reputation == 3
        saved = await thread_repo.find_by_id(thread.id)
        assert saved.replies[0].replies[0].votes.score == 1
        assert saved.votes.score == 0

    @pytest.mark.asyncio
    async def test_missing_reply_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        _, thread = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.vote_on_reply(
                thread.id, ReplyId(uuid4()), as_identity(make_user("voter")), "upvote"
            )


class TestGetVoteStats:
    """Tests for get_vote_stats."""

    @pytest.mark.asyncio
    async def test_stats_cover_thread_and_every_reply(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        thread_repo = await unit_env.get(ThreadRepository)
        _, thread = await _seed(unit_env)
        voters = [make_user(f"voter{i}").id for i in range(3)]
        top = make_reply(voters[0])
        nested = make_reply(voters[1])
        top.replies.append(nested)
        stored = await thread_repo.find_by_id(thread.id)
        stored.votes.cast(voters[0], "upvote")
        stored.votes.cast(voters[1], "upvote")
        top.votes.cast(voters[2], "downvote")
        nested.votes.cast(voters[0], "upvote")
        nested.votes.cast(voters[2], "upvote")
        stored.replies.append(top)
        await thread_repo.replace(stored)

        # Act
        stats = await vote_service.get_vote_stats(thread.id)

        # Assert
        assert (stats.thread.upvotes, stats.thread.downvotes) == (2, 0)
        assert (stats.replies.upvotes, stats.replies.downvotes) == (2, 1)
        assert stats.total.score == 3

    @pytest.mark.asyncio
    async def test_deleted_reply_votes_leave_the_stats(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        reply_service = await unit_env.get(ReplyService)
        thread_repo = await unit_env.get(ThreadRepository)
        author, thread = await _seed(unit_env)
        replies = [make_reply(author.id, content=f"Reply {name}") for name in "ABC"]
        stored = await thread_repo.find_by_id(thread.id)
        for node in replies:
            reply_tree.insert(stored.replies, None, node)
        await thread_repo.replace(stored)
        first, second = (as_identity(make_user(h)) for h in ("first", "second"))
        a, b, c = replies
        await vote_service.vote_on_reply(thread.id, a.id, first, "upvote")
        for voter in (first, second):
            await vote_service.vote_on_reply(thread.id, b.id, voter, "upvote")
        await vote_service.vote_on_reply(thread.id, c.id, second, "downvote")
        before = await vote_service.get_vote_stats(thread.id)

        # Act
        await reply_service.delete_reply(thread.id, b.id, as_identity(author))
        stats = await vote_service.get_vote_stats(thread.id)

        # Assert
        assert (before.replies.upvotes, before.replies.downvotes) == (3, 1)
        assert (stats.replies.upvotes, stats.replies.downvotes) == (1, 1)
        assert stats.replies.score == 0
        saved = await thread_repo.find_by_id(thread.id)
        assert reply_tree.rollup_vote_stats(saved.replies) == stats.replies
