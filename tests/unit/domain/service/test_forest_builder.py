"""Unit tests for build_comment_forest."""

import random
from uuid import uuid4

from whistle.domain.model import CommentForest
from whistle.domain.service import build_comment_forest
from whistle.domain.value import PostId, UserId
from tests.conftest import cid, enrich, make_comment


def _ids(nodes) -> list:
    return [node.id for node in nodes]


def _shape(forest: CommentForest) -> list:
    """Pre-order list of (id, reply ids) for structural comparison."""
    return [(node.id, _ids(node.replies)) for node in forest.walk()]


class TestScenario:
    """Tests for the reference orphan scenario."""

    def test_orphan_sorts_before_older_root_and_reply_nests(self):
        """Rows 1 (t10), 2 (parent 1, t20), 3 (parent 99, t5) give [3, 1]."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), at=10),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=20),
            make_comment(post_id, comment_id=cid(3), parent_id=cid(99), at=5),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert _ids(forest.roots) == [cid(3), cid(1)]
        assert _ids(forest.roots[1].replies) == [cid(2)]
        assert forest.roots[0].replies == ()
        assert forest.repaired_ids == ()


class TestOrdering:
    """Tests for root and sibling ordering."""

    def test_null_parents_are_roots_in_creation_order(self):
        """Comments without a parent are roots, oldest first."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), at=30),
            make_comment(post_id, comment_id=cid(2), at=10),
            make_comment(post_id, comment_id=cid(3), at=20),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert _ids(forest.roots) == [cid(2), cid(3), cid(1)]

    def test_equal_timestamps_are_ordered_by_id(self):
        """Siblings created at the same instant are ordered by ID."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), at=0),
            make_comment(post_id, comment_id=cid(7), parent_id=cid(1), at=5),
            make_comment(post_id, comment_id=cid(4), parent_id=cid(1), at=5),
            make_comment(post_id, comment_id=cid(5), parent_id=cid(1), at=5),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in reversed(rows)])

        # Assert
        assert _ids(forest.roots[0].replies) == [cid(4), cid(5), cid(7)]

    def test_input_order_does_not_matter(self):
        """Shuffled input builds the same forest."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), at=0),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=1),
            make_comment(post_id, comment_id=cid(3), parent_id=cid(2), at=2),
            make_comment(post_id, comment_id=cid(4), at=3),
            make_comment(post_id, comment_id=cid(5), parent_id=cid(1), at=4),
        ]
        shuffled = rows[:]
        random.Random(7).shuffle(shuffled)

        # Act
        ordered = build_comment_forest(post_id, [enrich(row) for row in rows])
        scrambled = build_comment_forest(post_id, [enrich(row) for row in shuffled])

        # Assert
        assert _shape(ordered) == _shape(scrambled)


class TestCompleteness:
    """Tests that every row appears exactly once."""

    def test_random_acyclic_rows_are_all_placed_under_their_parent(self):
        """Forest IDs equal row IDs and each reply sits under its parent."""
        # Arrange
        rng = random.Random(42)
        post_id = PostId(uuid4())
        rows = []
        for n in range(300):
            parent = rng.choice(rows).id if rows and rng.random() < 0.7 else None
            rows.append(
                make_comment(
                    post_id, comment_id=cid(n + 1), parent_id=parent, at=n
                )
            )

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        seen = [node.id for node in forest.walk()]
        assert len(seen) == len(rows)
        assert set(seen) == {row.id for row in rows}
        assert forest.total == len(rows)

        for node in forest.walk():
            for reply in node.replies:
                assert reply.comment.parent_id == node.id
            keys = [reply.comment.sort_key for reply in node.replies]
            assert keys == sorted(keys)
        root_keys = [root.comment.sort_key for root in forest.roots]
        assert root_keys == sorted(root_keys)

    def test_building_twice_yields_identical_forests(self):
        """Building from the same rows is deterministic."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), at=0),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=1),
            make_comment(post_id, comment_id=cid(3), parent_id=cid(3), at=2),
        ]
        items = [enrich(row) for row in rows]

        # Act
        first = build_comment_forest(post_id, items)
        second = build_comment_forest(post_id, items)

        # Assert
        assert first.roots == second.roots
        assert first.repaired_ids == second.repaired_ids

    def test_empty_input_gives_empty_forest(self):
        """No rows means no roots."""
        # Arrange
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())

        # Act
        forest = build_comment_forest(post_id, [], viewer_id)

        # Assert
        assert forest.roots == ()
        assert forest.total == 0
        assert forest.viewer_id == viewer_id
        assert forest.post_id == post_id

    def test_duplicate_ids_are_kept_once(self):
        """A repeated row appears only once in the forest."""
        # Arrange
        post_id = PostId(uuid4())
        row = make_comment(post_id, comment_id=cid(1), at=0)

        # Act
        forest = build_comment_forest(post_id, [enrich(row), enrich(row)])

        # Assert
        assert _ids(forest.roots) == [cid(1)]
        assert forest.total == 1

    def test_deep_chain_builds_without_recursion(self):
        """A thread thousands of replies deep is built iteratively."""
        # Arrange
        post_id = PostId(uuid4())
        depth = 5000
        rows = [make_comment(post_id, comment_id=cid(1), at=0)]
        for n in range(2, depth + 1):
            rows.append(
                make_comment(post_id, comment_id=cid(n), parent_id=cid(n - 1), at=n)
            )

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert len(forest.roots) == 1
        assert forest.total == depth
        assert [node.id for node in forest.walk()][-1] == cid(depth)


class TestRepairs:
    """Tests for malformed parent links."""

    def test_self_parent_becomes_root(self):
        """A comment that is its own parent is promoted to root."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), parent_id=cid(1), at=0),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=1),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert _ids(forest.roots) == [cid(1)]
        assert _ids(forest.roots[0].replies) == [cid(2)]
        assert forest.repaired_ids == (cid(1),)

    def test_two_cycle_puts_both_comments_at_root(self):
        """Two comments pointing at each other both become roots."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), parent_id=cid(2), at=0),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=1),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert _ids(forest.roots) == [cid(1), cid(2)]
        assert forest.roots[0].replies == ()
        assert forest.roots[1].replies == ()
        assert set(forest.repaired_ids) == {cid(1), cid(2)}

    def test_cycle_members_become_roots_and_keep_their_tail(self):
        """Cycle members are promoted; comments hanging off them stay nested."""
        # Arrange
        post_id = PostId(uuid4())
        rows = [
            make_comment(post_id, comment_id=cid(1), parent_id=cid(3), at=0),
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=1),
            make_comment(post_id, comment_id=cid(3), parent_id=cid(2), at=2),
            make_comment(post_id, comment_id=cid(4), parent_id=cid(2), at=3),
            make_comment(post_id, comment_id=cid(5), at=4),
        ]

        # Act
        forest = build_comment_forest(post_id, [enrich(row) for row in rows])

        # Assert
        assert _ids(forest.roots) == [cid(1), cid(2), cid(3), cid(5)]
        assert _ids(forest.roots[1].replies) == [cid(4)]
        assert set(forest.repaired_ids) == {cid(1), cid(2), cid(3)}
        assert forest.total == len(rows)
