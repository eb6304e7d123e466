"""Unit tests for CommentForestService."""

import asyncio
from uuid import uuid4

import pytest

from whistle.config import CommentSettings
from whistle.domain.error import StorageUnavailable
from whistle.domain.model import Boost, CommentVote, Profile
from whistle.domain.service import (
    CommentForestCache,
    CommentForestService,
    EnrichmentService,
)
from whistle.domain.value import AppRole, BoostId, PostId, UserId, VoteDirection
from whistle.persistence.repository.inmemory import (
    InMemoryForestReader,
    InMemoryRoleRepository,
)
from tests.conftest import cid, make_comment
from tests.doubles import (
    CountingBoostRepository,
    CountingCommentRepository,
    CountingProfileRepository,
    CountingVoteRepository,
)


class ForestFixture:
    """Forest service wired to counting repositories."""

    def __init__(self) -> None:
        settings = CommentSettings()
        self.comments = CountingCommentRepository()
        self.profiles = CountingProfileRepository()
        self.votes = CountingVoteRepository()
        self.boosts = CountingBoostRepository()
        self.roles = InMemoryRoleRepository()
        self.cache = CommentForestCache(settings)
        reader = InMemoryForestReader(
            comment_repository=self.comments,
            vote_repository=self.votes,
            role_repository=self.roles,
        )
        self.service = CommentForestService(
            enrichment_service=EnrichmentService(
                profile_repository=self.profiles,
                boost_repository=self.boosts,
                forest_reader=reader,
                settings=settings,
            ),
            forest_reader=reader,
            forest_cache=self.cache,
        )


@pytest.fixture
def forest():
    return ForestFixture()


class TestGetForest:
    """Tests for assembling forests through the service."""

    @pytest.mark.asyncio
    async def test_orphan_sorts_before_older_root(self, forest):
        """A reply to a missing parent is a root, ordered by its own time."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(make_comment(post_id, comment_id=cid(1), at=10))
        await forest.comments.save(
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=20)
        )
        await forest.comments.save(
            make_comment(post_id, comment_id=cid(3), parent_id=cid(99), at=5)
        )

        # Act
        result = await forest.service.get_forest(post_id)

        # Assert
        assert [root.id for root in result.roots] == [cid(3), cid(1)]
        assert [reply.id for reply in result.roots[1].replies] == [cid(2)]
        assert result.roots[0].replies == ()
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_forest_carries_authors_and_viewer_votes(self, forest):
        """Every node has its author summary and the viewer's vote."""
        # Arrange
        post_id = PostId(uuid4())
        author_id = UserId(uuid4())
        viewer_id = UserId(uuid4())
        await forest.profiles.save(
            Profile(user_id=author_id, username="ada", display_name="Ada")
        )
        comment = await forest.comments.save(make_comment(post_id, author_id=author_id))
        await forest.votes.upsert(
            CommentVote(
                comment_id=comment.id, user_id=viewer_id, direction=VoteDirection.UP
            )
        )

        # Act
        result = await forest.service.get_forest(post_id, viewer_id)

        # Assert
        (node,) = result.roots
        assert node.author.display_name == "Ada"
        assert node.viewer_vote == VoteDirection.UP
        assert result.viewer_id == viewer_id

    @pytest.mark.asyncio
    async def test_replies_to_removed_comment_become_roots(self, forest):
        """Hidden parents leave their replies at the top level."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(
            make_comment(post_id, comment_id=cid(1), at=1, is_removed=True)
        )
        await forest.comments.save(
            make_comment(post_id, comment_id=cid(2), parent_id=cid(1), at=2)
        )

        # Act
        result = await forest.service.get_forest(post_id)

        # Assert
        assert [root.id for root in result.roots] == [cid(2)]

    @pytest.mark.asyncio
    async def test_post_without_comments(self, forest):
        """A post with no comments yields an empty forest."""
        # Act
        result = await forest.service.get_forest(PostId(uuid4()))

        # Assert
        assert result.roots == ()
        assert forest.profiles.calls == []


class TestVisibility:
    """Tests for which rows each viewer is given."""

    @pytest.mark.asyncio
    async def test_removed_comments_hidden_from_anonymous(self, forest):
        """Anonymous readers only see active comments."""
        # Arrange
        post_id = PostId(uuid4())
        active = await forest.comments.save(make_comment(post_id, at=1))
        await forest.comments.save(make_comment(post_id, at=2, is_removed=True))

        # Act
        result = await forest.service.get_forest(post_id)

        # Assert
        assert [node.id for node in result.walk()] == [active.id]

    @pytest.mark.asyncio
    async def test_author_sees_own_removed_comment(self, forest):
        """Authors still see what they removed, but not other removals."""
        # Arrange
        post_id = PostId(uuid4())
        author_id = UserId(uuid4())
        own = await forest.comments.save(
            make_comment(post_id, author_id=author_id, at=1, is_removed=True)
        )
        await forest.comments.save(make_comment(post_id, at=2, is_removed=True))

        # Act
        result = await forest.service.get_forest(post_id, author_id)

        # Assert
        assert [node.id for node in result.walk()] == [own.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [AppRole.MODERATOR, AppRole.ADMIN])
    async def test_moderator_sees_every_comment(self, forest, role):
        """Moderators and admins see removed comments too."""
        # Arrange
        post_id = PostId(uuid4())
        moderator_id = UserId(uuid4())
        await forest.roles.grant(moderator_id, role)
        for n in range(3):
            await forest.comments.save(
                make_comment(post_id, at=n, is_removed=n % 2 == 0)
            )

        # Act
        result = await forest.service.get_forest(post_id, moderator_id)

        # Assert
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_granted_role_applies_to_next_read(self, forest):
        """A new moderator sees removed comments without an invalidation."""
        # Arrange
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())
        await forest.comments.save(make_comment(post_id, at=1))
        await forest.comments.save(make_comment(post_id, at=2, is_removed=True))
        before = await forest.service.get_forest(post_id, viewer_id)

        # Act
        await forest.roles.grant(viewer_id, AppRole.MODERATOR)
        after = await forest.service.get_forest(post_id, viewer_id)

        # Assert
        assert before.total == 1
        assert after.total == 2
        assert forest.comments.fetches == 2

    @pytest.mark.asyncio
    async def test_repeat_read_with_same_roles_is_cached(self, forest):
        """Unchanged roles keep hitting the cached forest."""
        # Arrange
        post_id = PostId(uuid4())
        moderator_id = UserId(uuid4())
        await forest.roles.grant(moderator_id, AppRole.MODERATOR)
        await forest.comments.save(make_comment(post_id))

        # Act
        first = await forest.service.get_forest(post_id, moderator_id)
        second = await forest.service.get_forest(post_id, moderator_id)

        # Assert
        assert second is first
        assert forest.comments.fetches == 1

    @pytest.mark.asyncio
    async def test_boosted_comment_shows_amount(self, forest):
        """Boost amounts reach the forest nodes."""
        # Arrange
        post_id = PostId(uuid4())
        boost = await forest.boosts.save(
            Boost(
                id=BoostId(uuid4()),
                post_id=post_id,
                user_id=UserId(uuid4()),
                amount_cents=2500,
                currency="eur",
            )
        )
        await forest.comments.save(make_comment(post_id, boost_id=boost.id))

        # Act
        result = await forest.service.get_forest(post_id)

        # Assert
        (node,) = result.roots
        assert (node.boost_amount_cents, node.boost_currency) == (2500, "eur")


class TestCaching:
    """Tests for cached and coalesced reads."""

    @pytest.mark.asyncio
    async def test_concurrent_reads_fetch_and_enrich_once(self, forest):
        """Simultaneous readers share one fetch and one enrichment."""
        # Arrange
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())
        for n in range(5):
            await forest.comments.save(make_comment(post_id, at=n))
        forest.comments.gate = asyncio.Event()

        # Act
        readers = [
            asyncio.create_task(forest.service.get_forest(post_id, viewer_id))
            for _ in range(25)
        ]
        await asyncio.sleep(0)
        forest.comments.gate.set()
        results = await asyncio.gather(*readers)

        # Assert
        assert forest.comments.fetches == 1
        assert len(forest.profiles.calls) == 1
        assert len(forest.votes.calls) == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    async def test_storage_failure_propagates_and_is_not_cached(self, forest):
        """An unreachable store is an error, never an empty forest."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(make_comment(post_id))
        forest.comments.fail_with = StorageUnavailable("comment fetch", "timeout")

        # Act & Assert
        with pytest.raises(StorageUnavailable):
            await forest.service.get_forest(post_id)
        assert len(forest.cache) == 0

        forest.comments.fail_with = None
        result = await forest.service.get_forest(post_id)
        assert result.total == 1
        assert forest.comments.fetches == 2

    @pytest.mark.asyncio
    async def test_enrichment_failure_aborts_build(self, forest):
        """A failed profile lookup fails the read."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(make_comment(post_id))
        forest.profiles.fail = True

        # Act & Assert
        with pytest.raises(StorageUnavailable):
            await forest.service.get_forest(post_id)
        assert len(forest.cache) == 0

    @pytest.mark.asyncio
    async def test_invalidate_makes_next_read_fresh(self, forest):
        """After invalidation a new comment shows up."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(make_comment(post_id, at=1))
        before = await forest.service.get_forest(post_id)
        await forest.comments.save(make_comment(post_id, at=2))

        # Act
        cached = await forest.service.get_forest(post_id)
        forest.service.invalidate(post_id)
        after = await forest.service.get_forest(post_id)

        # Assert
        assert cached is before
        assert before.total == 1
        assert after.total == 2

    @pytest.mark.asyncio
    async def test_comment_count_is_cached(self, forest):
        """The count is read once until invalidated."""
        # Arrange
        post_id = PostId(uuid4())
        await forest.comments.save(make_comment(post_id))
        first = await forest.service.get_comment_count(post_id)
        await forest.comments.save(make_comment(post_id))

        # Act
        cached = await forest.service.get_comment_count(post_id)
        forest.service.invalidate(post_id)
        fresh = await forest.service.get_comment_count(post_id)

        # Assert
        assert (first, cached, fresh) == (1, 1, 2)

    @pytest.mark.asyncio
    async def test_removed_comments_not_counted(self, forest):
        """Only active comments of the post count."""
        # Arrange
        post_id = PostId(uuid4())
        for n in range(4):
            await forest.comments.save(make_comment(post_id, at=n, is_removed=n == 0))
        await forest.comments.save(make_comment(PostId(uuid4())))

        # Act
        count = await forest.service.get_comment_count(post_id)

        # Assert
        assert count == 3

    @pytest.mark.asyncio
    async def test_waiter_gets_forest_after_initiator_is_cancelled(self, forest):
        """A shared build keeps serving readers when the one that started it leaves."""
        # Arrange
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())
        for n in range(3):
            await forest.comments.save(make_comment(post_id, at=n))
        forest.comments.gate = asyncio.Event()

        initiator = asyncio.create_task(forest.service.get_forest(post_id, viewer_id))
        await asyncio.sleep(0)
        waiter = asyncio.create_task(forest.service.get_forest(post_id, viewer_id))
        await asyncio.sleep(0)

        # Act
        initiator.cancel()
        await asyncio.sleep(0)
        forest.comments.gate.set()
        result = await waiter

        # Assert
        assert initiator.cancelled()
        assert result.total == 3
        assert forest.comments.fetches == 1
        assert len(forest.votes.calls) == 1
