"""Assemble enriched comments into a threaded forest.

Nodes live in a flat arena (a list sorted by creation time) and refer to
each other by integer position, so building never recurses and never
follows a parent link more than once.
"""

from collections.abc import Iterable

import logfire

from whistle.domain.error import MalformedGraph
from whistle.domain.model import CommentForest, EnrichedComment
from whistle.domain.value import CommentId, PostId, UserId

ROOT = -1

_UNVISITED = 0
_ON_PATH = 1
_DONE = 2


def build_comment_forest(
    post_id: PostId,
    items: Iterable[EnrichedComment],
    viewer_id: UserId | None = None,
) -> CommentForest:
    """Build the forest for one post from enriched, reply-less comments.

    Roots and every reply list are ordered by (created_at, id). A comment
    whose parent is missing from the input is a root. Self-references and
    cycles are repaired by promoting the affected comments to root, and
    later duplicates of an id are dropped. Repairs are logged as
    MalformedGraph and listed on the returned forest.

    Args:
        post_id: Post the comments belong to
        items: Enriched comments, in any order
        viewer_id: Viewer the enrichment was done for

    Returns:
        Immutable comment forest
    """
    arena = sorted(items, key=lambda item: item.comment.sort_key)

    position: dict[CommentId, int] = {}
    nodes: list[EnrichedComment] = []
    duplicates: list[CommentId] = []
    for item in arena:
        if item.id in position:
            duplicates.append(item.id)
            continue
        position[item.id] = len(nodes)
        nodes.append(item)

    parents = [ROOT] * len(nodes)
    self_parented: list[int] = []
    for index, node in enumerate(nodes):
        parent_id = node.comment.parent_id
        if parent_id is None:
            continue
        parent = position.get(parent_id, ROOT)
        if parent == index:
            self_parented.append(index)
            continue
        parents[index] = parent

    cyclic = _break_cycles(parents)

    roots: list[int] = []
    children: list[list[int]] = [[] for _ in nodes]
    for index, parent in enumerate(parents):
        if parent == ROOT:
            roots.append(index)
        else:
            children[parent].append(index)

    built = _materialize(nodes, roots, children)

    repaired = sorted(set(self_parented) | set(cyclic))
    repaired_ids = tuple(nodes[index].id for index in repaired)
    _report(
        post_id,
        duplicates=duplicates,
        self_parented=[nodes[index].id for index in self_parented],
        cyclic=[nodes[index].id for index in sorted(cyclic)],
    )

    return CommentForest(
        post_id=post_id,
        viewer_id=viewer_id,
        roots=tuple(built[index] for index in roots),
        repaired_ids=repaired_ids,
    )


def _break_cycles(parents: list[int]) -> list[int]:
    """Promote every node on a parent cycle to root, in place.

    Each node is walked at most once, so the total work is bounded by the
    number of nodes.

    Returns:
        Positions of the promoted nodes
    """
    state = [_UNVISITED] * len(parents)
    promoted: list[int] = []

    for start in range(len(parents)):
        if state[start] != _UNVISITED:
            continue

        path: list[int] = []
        on_path: dict[int, int] = {}
        current = start
        while current != ROOT and state[current] == _UNVISITED:
            state[current] = _ON_PATH
            on_path[current] = len(path)
            path.append(current)
            current = parents[current]

        if current != ROOT and state[current] == _ON_PATH:
            cycle = path[on_path[current]:]
            for member in cycle:
                parents[member] = ROOT
            promoted.extend(cycle)

        for member in path:
            state[member] = _DONE

    return promoted


def _materialize(
    nodes: list[EnrichedComment],
    roots: list[int],
    children: list[list[int]],
) -> list[EnrichedComment]:
    # Pre-order from the roots; reversed, every child precedes its parent
    order: list[int] = []
    stack = list(reversed(roots))
    while stack:
        index = stack.pop()
        order.append(index)
        stack.extend(reversed(children[index]))

    built: list[EnrichedComment] = list(nodes)
    for index in reversed(order):
        replies = tuple(built[child] for child in children[index])
        built[index] = nodes[index].model_copy(update={"replies": replies})
    return built


def _report(
    post_id: PostId,
    duplicates: list[CommentId],
    self_parented: list[CommentId],
    cyclic: list[CommentId],
) -> None:
    for ids, reason in (
        (duplicates, "duplicate"),
        (self_parented, "self-reference"),
        (cyclic, "cycle"),
    ):
        if not ids:
            continue
        condition = MalformedGraph(str(post_id), (str(i) for i in ids), reason)
        logfire.warn(
            "Malformed comment graph repaired",
            post_id=str(post_id),
            reason=condition.reason,
            comment_ids=condition.comment_ids,
            detail=str(condition),
        )
