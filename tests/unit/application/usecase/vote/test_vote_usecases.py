"""Unit tests for the vote use cases."""

from uuid import uuid4

import pytest

from forum.application.usecase.reply import AddReplyRequest, AddReplyUseCase
from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetVoteStatsRequest,
    GetVoteStatsUseCase,
)
from forum.domain.error import InvalidVoteError, NotFoundError
from forum.domain.repository import ThreadRepository, UserRepository
from forum.domain.value import CategoryId, VotableType, VoteType
from tests.factories import as_identity, make_thread, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_thread_vote_cycle(self, unit_env):
        """Up, flip down, then toggle off."""
        # Arrange
        cast_vote = await unit_env.get(CastVoteUseCase)
        user_repo = await unit_env.get(UserRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        author = await user_repo.save(make_user("author", reputation=10))
        thread = await thread_repo.save(make_thread(author.id, CategoryId(uuid4())))
        voter = as_identity(make_user("voter"))

        def request(vote_type: str) -> CastVoteRequest:
            return CastVoteRequest(
                thread_id=str(thread.id), requester=voter, vote_type=vote_type
            )

        # Act
        up = await cast_vote.execute(request("upvote"))
        down = await cast_vote.execute(request("downvote"))
        off = await cast_vote.execute(request("downvote"))

        # Assert
        assert (up.score, up.delta, up.user_vote) == (1, 1, VoteType.UPVOTE)
        assert (down.score, down.delta, down.user_vote) == (-1, -2, VoteType.DOWNVOTE)
        assert (off.score, off.delta, off.user_vote) == (0, 1, None)
        assert up.votable_type == VotableType.THREAD
        assert (await user_repo.find_by_id(author.id)).reputation == 10

    @pytest.mark.asyncio
    async def test_reply_vote(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        add_reply = await unit_env.get(AddReplyUseCase)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread(make_user().id, CategoryId(uuid4())))
        reply = await add_reply.execute(
            AddReplyRequest(
                thread_id=str(thread.id),
                requester=as_identity(make_user("replier")),
                content="Vote for me",
            )
        )

        response = await cast_vote.execute(
            CastVoteRequest(
                thread_id=str(thread.id),
                reply_id=reply.reply_id,
                requester=as_identity(make_user("voter")),
                vote_type="upvote",
            )
        )

        assert response.votable_type == VotableType.REPLY
        assert response.votable_id == reply.reply_id
        assert response.score == 1

    @pytest.mark.asyncio
    async def test_unknown_vote_type_rejected(self, unit_env):
        cast_vote = await unit_env.get(CastVoteUseCase)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread(make_user().id, CategoryId(uuid4())))

        with pytest.raises(InvalidVoteError):
            await cast_vote.execute(
                CastVoteRequest(
                    thread_id=str(thread.id),
                    requester=as_identity(make_user("voter")),
                    vote_type="meh",
                )
            )


class TestGetVoteStatsUseCase:
    """Tests for GetVoteStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats_for_thread_without_votes(self, unit_env):
        get_stats = await unit_env.get(GetVoteStatsUseCase)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread(make_user().id, CategoryId(uuid4())))

        response = await get_stats.execute(GetVoteStatsRequest(thread_id=str(thread.id)))

        assert response.thread_id == str(thread.id)
        assert response.total.score == 0
        assert response.replies.upvotes == 0

    @pytest.mark.asyncio
    async def test_missing_thread_not_found(self, unit_env):
        get_stats = await unit_env.get(GetVoteStatsUseCase)

        with pytest.raises(NotFoundError):
            await get_stats.execute(GetVoteStatsRequest(thread_id=str(uuid4())))
