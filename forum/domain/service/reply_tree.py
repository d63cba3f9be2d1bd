"""Reply tree navigation.

Stateless operations over a reply forest (the ordered list of top-level
replies of a thread). Traversal is iterative with an explicit stack, so
arbitrarily deep threads cannot exhaust the interpreter's recursion limit.

Sibling order is insertion order and is never changed here.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.model.reply import ReplyNode
from forum.domain.model.vote import VoteTally
from forum.domain.value import Authenticated, ReplyId


@dataclass
class NodeHandle:
    """Position of a reply inside its tree.

    `siblings` is the list that holds the node (the root list or the
    parent's `replies`), so `siblings[index] is node`.
    """

    node: ReplyNode
    siblings: list[ReplyNode]
    index: int
    depth: int
    parent: Optional[ReplyNode] = None


def _walk(tree: list[ReplyNode]) -> Iterator[NodeHandle]:
    """Pre-order depth-first traversal yielding a handle per node."""
    stack = [(tree, index, 0, None) for index in reversed(range(len(tree)))]
    while stack:
        siblings, index, depth, parent = stack.pop()
        node = siblings[index]
        yield NodeHandle(
            node=node, siblings=siblings, index=index, depth=depth, parent=parent
        )
        children = node.replies
        stack.extend(
            (children, child_index, depth + 1, node)
            for child_index in reversed(range(len(children)))
        )


def iter_nodes(tree: list[ReplyNode]) -> Iterator[ReplyNode]:
    """Yield every reply in the tree, parents before their children."""
    for handle in _walk(tree):
        yield handle.node


def count_nodes(tree: list[ReplyNode]) -> int:
    """Count every reply in the tree, at any depth."""
    return sum(1 for _ in _walk(tree))


def locate(tree: list[ReplyNode], reply_id: ReplyId) -> NodeHandle:
    """Find a reply anywhere in the tree.

    Args:
        tree: Top-level replies
        reply_id: Reply to find

    Returns:
        Handle of the reply

    Raises:
        NotFoundError: If no reply in the tree has this ID
    """
    for handle in _walk(tree):
        if handle.node.id == reply_id:
            return handle
    raise NotFoundError("Reply", str(reply_id))


def insert(
    tree: list[ReplyNode], parent_id: Optional[ReplyId], node: ReplyNode
) -> NodeHandle:
    """Append a reply at the root or under a parent reply.

    The parent is resolved before anything is modified, so a missing
    parent leaves the tree untouched.

    Args:
        tree: Top-level replies
        parent_id: Parent reply, or None for a top-level reply
        node: Reply to insert

    Returns:
        Handle of the inserted reply

    Raises:
        NotFoundError: If parent_id is given but not in the tree
    """
    if parent_id is None:
        siblings, depth, parent = tree, 0, None
    else:
        parent_handle = locate(tree, parent_id)
        parent = parent_handle.node
        siblings, depth = parent.replies, parent_handle.depth + 1

    node.parent_reply_id = parent_id
    siblings.append(node)
    return NodeHandle(
        node=node,
        siblings=siblings,
        index=len(siblings) - 1,
        depth=depth,
        parent=parent,
    )


def _authorize(node: ReplyNode, requester: Authenticated, action: str) -> None:
    if not requester.owns_or_admin(node.author_id):
        raise ForbiddenError(f"Not authorized to {action} this reply")


def update_content(
    tree: list[ReplyNode],
    reply_id: ReplyId,
    content: str,
    requester: Authenticated,
    now: Optional[datetime] = None,
) -> NodeHandle:
    """Replace a reply's content in place.

    Args:
        tree: Top-level replies
        reply_id: Reply to edit
        content: New content
        requester: Caller; must be the author or an admin
        now: Edit timestamp (defaults to now)

    Returns:
        Handle of the edited reply

    Raises:
        NotFoundError: If the reply is not in the tree
        ForbiddenError: If the requester may not edit the reply
    """
    handle = locate(tree, reply_id)
    _authorize(handle.node, requester, "edit")

    handle.node.content = content
    handle.node.is_edited = True
    handle.node.edited_at = now or datetime.now()
    return handle


def remove(
    tree: list[ReplyNode], reply_id: ReplyId, requester: Authenticated
) -> ReplyNode:
    """Detach a reply together with all of its descendants.

    Children are never re-parented.

    Args:
        tree: Top-level replies
        reply_id: Reply to delete
        requester: Caller; must be the author or an admin

    Returns:
        The detached subtree

    Raises:
        NotFoundError: If the reply is not in the tree
        ForbiddenError: If the requester may not delete the reply
    """
    handle = locate(tree, reply_id)
    _authorize(handle.node, requester, "delete")

    return handle.siblings.pop(handle.index)


def rollup_vote_stats(tree: list[ReplyNode]) -> VoteTally:
    """Sum the vote tallies of every reply in the tree."""
    total = VoteTally()
    for node in iter_nodes(tree):
        total = total + node.votes.tally()
    return total
