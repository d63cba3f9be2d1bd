"""Unit tests for reply tree navigation."""

from uuid import uuid4

import pytest

from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.service import reply_tree
from forum.domain.value import (
    Authenticated,
    ReplyId,
    UserId,
    UserRole,
    VoteType,
)
from tests.factories import make_reply


@pytest.fixture
def author():
    return Authenticated(user_id=UserId(uuid4()))


@pytest.fixture
def chain(author):
    """Tree with A -> B -> C plus a second top-level reply D."""
    tree = []
    a = make_reply(author.user_id, "A")
    b = make_reply(author.user_id, "B")
    c = make_reply(author.user_id, "C")
    d = make_reply(author.user_id, "D")
    reply_tree.insert(tree, None, a)
    reply_tree.insert(tree, a.id, b)
    reply_tree.insert(tree, b.id, c)
    reply_tree.insert(tree, None, d)
    return tree, a, b, c, d


class TestLocate:
    """Tests for locate."""

    def test_locate_deep_reply(self, chain):
        """Should find a reply at any depth with its position."""
        tree, a, b, c, _ = chain

        handle = reply_tree.locate(tree, c.id)

        assert handle.node is c
        assert handle.depth == 2
        assert handle.parent is b
        assert handle.siblings is b.replies
        assert handle.siblings[handle.index] is c

    def test_locate_missing_raises_not_found(self, chain):
        tree = chain[0]

        with pytest.raises(NotFoundError):
            reply_tree.locate(tree, ReplyId(uuid4()))

    def test_locate_in_empty_tree_raises_not_found(self):
        with pytest.raises(NotFoundError):
            reply_tree.locate([], ReplyId(uuid4()))

    def test_deep_chain_does_not_hit_recursion_limit(self, author):
        """Traversal should handle trees deeper than the recursion limit."""
        tree = []
        parent_id = None
        for _ in range(3000):
            node = make_reply(author.user_id)
            reply_tree.insert(tree, parent_id, node)
            parent_id = node.id

        handle = reply_tree.locate(tree, parent_id)

        assert handle.depth == 2999
        assert reply_tree.count_nodes(tree) == 3000


class TestInsert:
    """Tests for insert."""

    def test_insert_top_level(self, author):
        tree = []
        node = make_reply(author.user_id)

        handle = reply_tree.insert(tree, None, node)

        assert tree == [node]
        assert node.parent_reply_id is None
        assert handle.depth == 0

    def test_insert_sets_parent_and_appends_in_order(self, chain, author):
        """Children are kept in insertion order."""
        tree, a, b, _, _ = chain
        e = make_reply(author.user_id, "E")

        handle = reply_tree.insert(tree, a.id, e)

        assert a.replies == [b, e]
        assert e.parent_reply_id == a.id
        assert handle.depth == 1
        assert handle.index == 1

    def test_insert_under_missing_parent_leaves_tree_unchanged(self, chain, author):
        tree, a, b, c, d = chain
        before = [node.model_dump() for node in tree]
        orphan = make_reply(author.user_id)

        with pytest.raises(NotFoundError):
            reply_tree.insert(tree, ReplyId(uuid4()), orphan)

        assert [node.model_dump() for node in tree] == before
        assert reply_tree.count_nodes(tree) == 4


class TestUpdateContent:
    """Tests for update_content."""

    def test_author_can_edit(self, chain, author):
        tree, _, b, _, _ = chain

        handle = reply_tree.update_content(tree, b.id, "Edited", author)

        assert handle.node.content == "Edited"
        assert b.is_edited is True
        assert b.edited_at is not None

    def test_admin_can_edit_others_reply(self, chain):
        tree, _, b, _, _ = chain
        admin = Authenticated(user_id=UserId(uuid4()), role=UserRole.ADMIN)

        reply_tree.update_content(tree, b.id, "Moderated", admin)

        assert b.content == "Moderated"

    def test_other_user_cannot_edit(self, chain):
        tree, _, b, _, _ = chain
        stranger = Authenticated(user_id=UserId(uuid4()))

        with pytest.raises(ForbiddenError):
            reply_tree.update_content(tree, b.id, "Hijacked", stranger)

        assert b.content == "B"
        assert b.is_edited is False

    def test_moderator_is_not_admin_for_edits(self, chain):
        tree, _, b, _, _ = chain
        moderator = Authenticated(user_id=UserId(uuid4()), role=UserRole.MODERATOR)

        with pytest.raises(ForbiddenError):
            reply_tree.update_content(tree, b.id, "Nope", moderator)


class TestRemove:
    """Tests for remove."""

    def test_remove_takes_descendants_along(self, chain, author):
        """Deleting B in A -> B -> C should leave only A (and D)."""
        tree, a, b, c, d = chain

        removed = reply_tree.remove(tree, b.id, author)

        assert removed is b
        assert reply_tree.count_nodes([removed]) == 2
        assert a.replies == []
        assert [node.id for node in reply_tree.iter_nodes(tree)] == [a.id, d.id]
        with pytest.raises(NotFoundError):
            reply_tree.locate(tree, c.id)

    def test_remove_top_level(self, chain, author):
        tree, a, _, _, d = chain

        reply_tree.remove(tree, a.id, author)

        assert tree == [d]

    def test_remove_forbidden_for_other_user(self, chain):
        tree = chain[0]
        stranger = Authenticated(user_id=UserId(uuid4()))

        with pytest.raises(ForbiddenError):
            reply_tree.remove(tree, chain[2].id, stranger)

        assert reply_tree.count_nodes(tree) == 4

    def test_remove_missing_raises_not_found(self, chain, author):
        with pytest.raises(NotFoundError):
            reply_tree.remove(chain[0], ReplyId(uuid4()), author)


class TestTraversal:
    """Tests for iteration and vote rollup."""

    def test_iter_nodes_is_pre_order(self, chain):
        tree, a, b, c, d = chain

        assert [node.content for node in reply_tree.iter_nodes(tree)] == [
            "A",
            "B",
            "C",
            "D",
        ]

    def test_rollup_vote_stats_sums_every_node(self, chain):
        tree, a, _, c, d = chain
        a.votes.cast(UserId(uuid4()), VoteType.UPVOTE)
        c.votes.cast(UserId(uuid4()), VoteType.UPVOTE)
        c.votes.cast(UserId(uuid4()), VoteType.DOWNVOTE)
        d.votes.cast(UserId(uuid4()), VoteType.DOWNVOTE)

        tally = reply_tree.rollup_vote_stats(tree)

        assert tally.upvotes == 2
        assert tally.downvotes == 2
        assert tally.score == 0
