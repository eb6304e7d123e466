"""Unit tests for CommentForestCache."""

import asyncio
from uuid import uuid4

import pytest

from whistle.config import CommentSettings
from whistle.domain.error import StorageUnavailable
from whistle.domain.model import CommentForest
from whistle.domain.service import CommentForestCache
from whistle.domain.value import PostId, UserId


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class FakeLoader:
    """Forest loader that counts calls and can be held open or made to fail."""

    def __init__(self, post_id: PostId, viewer_id: UserId | None = None) -> None:
        self.post_id = post_id
        self.viewer_id = viewer_id
        self.calls = 0
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def __call__(self) -> CommentForest:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return CommentForest(post_id=self.post_id, viewer_id=self.viewer_id)


def _cache(**overrides) -> tuple[CommentForestCache, FakeClock]:
    clock = FakeClock()
    return CommentForestCache(CommentSettings(**overrides), clock=clock), clock


class TestReadThrough:
    """Tests for hits and misses."""

    @pytest.mark.asyncio
    async def test_second_read_is_served_from_cache(self):
        """A built forest is reused until invalidated."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)

        # Act
        first = await cache.get(post_id, None, loader)
        second = await cache.get(post_id, None, loader)

        # Assert
        assert loader.calls == 1
        assert second is first
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_viewers_are_cached_separately(self):
        """Each viewer gets their own forest."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())
        anonymous = FakeLoader(post_id)
        personal = FakeLoader(post_id, viewer_id)

        # Act
        await cache.get(post_id, None, anonymous)
        forest = await cache.get(post_id, viewer_id, personal)

        # Assert
        assert anonymous.calls == 1
        assert personal.calls == 1
        assert forest.viewer_id == viewer_id
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_moderation_capability_is_part_of_the_key(self):
        """The same viewer gets a separate forest once they moderate."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        viewer_id = UserId(uuid4())
        ordinary = FakeLoader(post_id, viewer_id)
        moderating = FakeLoader(post_id, viewer_id)

        # Act
        await cache.get(post_id, viewer_id, ordinary)
        await cache.get(post_id, viewer_id, moderating, moderator=True)
        await cache.get(post_id, viewer_id, moderating, moderator=True)
        cache.invalidate(post_id)

        # Assert
        assert ordinary.calls == 1
        assert moderating.calls == 1
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_expired_entry_is_rebuilt(self):
        """Forests older than the TTL are rebuilt."""
        # Arrange
        cache, clock = _cache(cache_ttl_seconds=60)
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        await cache.get(post_id, None, loader)

        # Act
        clock.now += 61
        await cache.get(post_id, None, loader)

        # Assert
        assert loader.calls == 2

    @pytest.mark.asyncio
    async def test_no_ttl_never_expires(self):
        """A TTL of None keeps forests until invalidated."""
        # Arrange
        cache, clock = _cache(cache_ttl_seconds=None)
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        await cache.get(post_id, None, loader)

        # Act
        clock.now += 10**9
        await cache.get(post_id, None, loader)

        # Assert
        assert loader.calls == 1

    @pytest.mark.asyncio
    async def test_least_recently_used_entry_is_evicted(self):
        """Past capacity, the least recently read forest goes first."""
        # Arrange
        cache, _ = _cache(cache_max_entries=2)
        posts = [PostId(uuid4()) for _ in range(3)]
        loaders = [FakeLoader(post_id) for post_id in posts]
        await cache.get(posts[0], None, loaders[0])
        await cache.get(posts[1], None, loaders[1])
        await cache.get(posts[0], None, loaders[0])  # refresh posts[0]

        # Act
        await cache.get(posts[2], None, loaders[2])
        await cache.get(posts[0], None, loaders[0])
        await cache.get(posts[1], None, loaders[1])

        # Assert
        assert len(cache) == 2
        assert loaders[0].calls == 1
        assert loaders[1].calls == 2


class TestCoalescing:
    """Tests for concurrent readers sharing one build."""

    @pytest.mark.asyncio
    async def test_concurrent_readers_share_one_build(self):
        """Readers arriving during a build wait for it instead of starting another."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        loader.gate = asyncio.Event()

        # Act
        readers = [
            asyncio.create_task(cache.get(post_id, None, loader)) for _ in range(10)
        ]
        await asyncio.sleep(0)
        loader.gate.set()
        forests = await asyncio.gather(*readers)

        # Assert
        assert loader.calls == 1
        assert all(forest is forests[0] for forest in forests)

    @pytest.mark.asyncio
    async def test_failure_reaches_every_reader_and_is_not_cached(self):
        """All coalesced readers see the error; the next read retries."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        loader.gate = asyncio.Event()
        loader.error = StorageUnavailable("comment fetch", "connection refused")

        # Act
        readers = [
            asyncio.create_task(cache.get(post_id, None, loader)) for _ in range(3)
        ]
        await asyncio.sleep(0)
        loader.gate.set()
        results = await asyncio.gather(*readers, return_exceptions=True)

        # Assert
        assert loader.calls == 1
        assert all(isinstance(result, StorageUnavailable) for result in results)
        assert len(cache) == 0

        loader.error = None
        await cache.get(post_id, None, loader)
        assert loader.calls == 2

    @pytest.mark.asyncio
    async def test_cancelled_sole_reader_cancels_build(self):
        """A build nobody waits for any more is cancelled and stores nothing."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def loader() -> CommentForest:
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return CommentForest(post_id=post_id)

        reader = asyncio.create_task(cache.get(post_id, None, loader))
        await started.wait()

        # Act
        reader.cancel()

        # Assert
        with pytest.raises(asyncio.CancelledError):
            await reader
        await asyncio.wait_for(cancelled.wait(), timeout=1)
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_cancelled_reader_does_not_cancel_shared_build(self):
        """Remaining readers still get the forest when one gives up."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        loader.gate = asyncio.Event()
        leaving = asyncio.create_task(cache.get(post_id, None, loader))
        staying = asyncio.create_task(cache.get(post_id, None, loader))
        await asyncio.sleep(0)

        # Act
        leaving.cancel()
        await asyncio.sleep(0)
        loader.gate.set()
        forest = await staying

        # Assert
        assert leaving.cancelled()
        assert forest.post_id == post_id
        assert loader.calls == 1
        assert len(cache) == 1


class TestInvalidation:
    """Tests for post-scoped invalidation."""

    @pytest.mark.asyncio
    async def test_invalidate_drops_every_viewer_of_the_post(self):
        """All viewers' forests of the post are rebuilt; other posts stay."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        other_post = PostId(uuid4())
        viewer_id = UserId(uuid4())
        anonymous = FakeLoader(post_id)
        personal = FakeLoader(post_id, viewer_id)
        unrelated = FakeLoader(other_post)
        await cache.get(post_id, None, anonymous)
        await cache.get(post_id, viewer_id, personal)
        await cache.get(other_post, None, unrelated)

        # Act
        cache.invalidate(post_id)
        await cache.get(post_id, None, anonymous)
        await cache.get(post_id, viewer_id, personal)
        await cache.get(other_post, None, unrelated)

        # Assert
        assert anonymous.calls == 2
        assert personal.calls == 2
        assert unrelated.calls == 1

    @pytest.mark.asyncio
    async def test_build_started_before_invalidation_is_not_stored(self):
        """A build racing an invalidation returns its result but never caches it."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        loader.gate = asyncio.Event()
        reader = asyncio.create_task(cache.get(post_id, None, loader))
        await asyncio.sleep(0)

        # Act
        cache.invalidate(post_id)
        loader.gate.set()
        stale = await reader
        fresh = await cache.get(post_id, None, loader)

        # Assert
        assert loader.calls == 2
        assert fresh is not stale
        assert await cache.get(post_id, None, loader) is fresh
        assert loader.calls == 2

    @pytest.mark.asyncio
    async def test_reader_after_invalidation_starts_new_build(self):
        """An in-flight build is detached; later readers do not join it."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        loader = FakeLoader(post_id)
        loader.gate = asyncio.Event()
        early = asyncio.create_task(cache.get(post_id, None, loader))
        await asyncio.sleep(0)

        # Act
        cache.invalidate(post_id)
        late = asyncio.create_task(cache.get(post_id, None, loader))
        await asyncio.sleep(0)
        loader.gate.set()
        early_forest, late_forest = await asyncio.gather(early, late)

        # Assert
        assert loader.calls == 2
        assert early_forest is not late_forest
        assert await cache.get(post_id, None, loader) is late_forest

    @pytest.mark.asyncio
    async def test_comment_count_is_cached_and_invalidated(self):
        """The count is loaded once and reloaded after invalidation."""
        # Arrange
        cache, _ = _cache()
        post_id = PostId(uuid4())
        counts = iter([3, 4])
        calls = 0

        async def load_count() -> int:
            nonlocal calls
            calls += 1
            return next(counts)

        # Act
        first = await cache.get_count(post_id, load_count)
        cached = await cache.get_count(post_id, load_count)
        cache.invalidate(post_id)
        reloaded = await cache.get_count(post_id, load_count)

        # Assert
        assert (first, cached, reloaded) == (3, 3, 4)
        assert calls == 2
