"""Per-viewer comment forest cache with coalesced builds.

One instance is shared by every request in the process. It is only touched
from the event loop thread, so plain dicts are enough: no method awaits
between reading and writing its own state.
"""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from typing import Generic, Optional, TypeVar

import logfire

from whistle.config import CommentSettings
from whistle.domain.model import CommentForest
from whistle.domain.value import PostId, UserId

# (post, viewer, viewer may see every removed comment)
CacheKey = tuple[PostId, Optional[UserId], bool]

T = TypeVar("T")


class _Entry(Generic[T]):
    __slots__ = ("value", "stored_at")

    def __init__(self, value: T, stored_at: float) -> None:
        self.value = value
        self.stored_at = stored_at


class _Build:
    __slots__ = ("task", "waiters")

    def __init__(self, task: "asyncio.Task[CommentForest]") -> None:
        self.task = task
        self.waiters = 0


class CommentForestCache:
    """Read-through cache of comment forests keyed by post and viewer.

    The key also carries the viewer's moderation capability, so a role
    change takes effect on the next read instead of after the TTL.

    Concurrent readers of the same key share one build and get the same
    forest or the same exception. Failures are never cached. Invalidating
    a post drops its forests for every viewer and its comment count, and
    a build that started before the invalidation never stores its result.
    """

    def __init__(
        self,
        settings: CommentSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            settings: Comment settings (TTL and capacity)
            clock: Monotonic time source in seconds
        """
        self.ttl = settings.cache_ttl_seconds
        self.max_entries = settings.cache_max_entries
        self._clock = clock

        self._entries: OrderedDict[CacheKey, _Entry[CommentForest]] = OrderedDict()
        self._keys_by_post: dict[PostId, set[CacheKey]] = {}
        self._counts: OrderedDict[PostId, _Entry[int]] = OrderedDict()
        self._inflight: dict[CacheKey, _Build] = {}

        # Generation only advances while a load for the post is running;
        # an idle post has no entry.
        self._generations: dict[PostId, int] = {}
        self._building: dict[PostId, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(
        self,
        post_id: PostId,
        viewer_id: UserId | None,
        loader: Callable[[], Awaitable[CommentForest]],
        *,
        moderator: bool = False,
    ) -> CommentForest:
        """Get the forest for a viewer, building it on a miss.

        Args:
            post_id: Post ID
            viewer_id: Viewer (None for anonymous)
            loader: Builds the forest from storage
            moderator: Whether the viewer currently moderates

        Returns:
            Cached or freshly built forest

        Raises:
            Whatever the loader raises, to every coalesced caller
        """
        key: CacheKey = (post_id, viewer_id, moderator)

        cached = self._lookup(key)
        if cached is not None:
            logfire.debug("Comment forest cache hit", post_id=str(post_id))
            return cached

        build = self._inflight.get(key)
        if build is None:
            build = self._start_build(key, loader)
        else:
            logfire.debug(
                "Joining in-flight comment forest build", post_id=str(post_id)
            )

        build.waiters += 1
        try:
            return await asyncio.shield(build.task)
        finally:
            build.waiters -= 1
            if build.waiters == 0 and not build.task.done():
                logfire.info(
                    "Cancelling abandoned comment forest build", post_id=str(post_id)
                )
                build.task.cancel()
                if self._inflight.get(key) is build:
                    del self._inflight[key]

    async def get_count(
        self, post_id: PostId, loader: Callable[[], Awaitable[int]]
    ) -> int:
        """Get the active comment count of a post, loading it on a miss."""
        entry = self._counts.get(post_id)
        if entry is not None and not self._expired(entry):
            self._counts.move_to_end(post_id)
            return entry.value

        generation = self._begin_load(post_id)
        try:
            count = await loader()
        finally:
            self._end_load(post_id)

        if self._generations.get(post_id, 0) == generation:
            self._counts[post_id] = _Entry(count, self._clock())
            self._counts.move_to_end(post_id)
            while len(self._counts) > self.max_entries:
                self._counts.popitem(last=False)
        return count

    def invalidate(self, post_id: PostId) -> None:
        """Drop everything cached for a post and detach its running builds.

        Callers already waiting on a detached build still receive its
        result; later readers start a new build.
        """
        keys = self._keys_by_post.pop(post_id, set())
        for key in keys:
            self._entries.pop(key, None)
        self._counts.pop(post_id, None)

        detached = [key for key in self._inflight if key[0] == post_id]
        for key in detached:
            del self._inflight[key]

        if self._building.get(post_id):
            self._generations[post_id] = self._generations.get(post_id, 0) + 1
        else:
            self._generations.pop(post_id, None)

        logfire.info(
            "Comment forest cache invalidated",
            post_id=str(post_id),
            dropped=len(keys),
            detached=len(detached),
        )

    def clear(self) -> None:
        """Drop every cached forest and count."""
        for post_id in list(self._keys_by_post) + list(self._counts):
            self.invalidate(post_id)

    def _start_build(
        self, key: CacheKey, loader: Callable[[], Awaitable[CommentForest]]
    ) -> _Build:
        post_id = key[0]
        generation = self._begin_load(post_id)
        task = asyncio.create_task(self._run_build(key, generation, loader))
        build = _Build(task)
        self._inflight[key] = build
        task.add_done_callback(lambda done: self._finish_build(key, build, done))
        return build

    async def _run_build(
        self,
        key: CacheKey,
        generation: int,
        loader: Callable[[], Awaitable[CommentForest]],
    ) -> CommentForest:
        post_id = key[0]
        forest = await loader()
        if self._generations.get(post_id, 0) == generation:
            self._store(key, forest)
        else:
            logfire.info(
                "Discarding comment forest built before invalidation",
                post_id=str(post_id),
            )
        return forest

    def _finish_build(
        self, key: CacheKey, build: _Build, task: "asyncio.Task[CommentForest]"
    ) -> None:
        self._end_load(key[0])
        if self._inflight.get(key) is build:
            del self._inflight[key]
        # Mark the outcome retrieved; the waiters already received it
        if not task.cancelled():
            task.exception()

    def _begin_load(self, post_id: PostId) -> int:
        self._building[post_id] = self._building.get(post_id, 0) + 1
        return self._generations.get(post_id, 0)

    def _end_load(self, post_id: PostId) -> None:
        remaining = self._building[post_id] - 1
        if remaining:
            self._building[post_id] = remaining
        else:
            del self._building[post_id]

    def _expired(self, entry: _Entry) -> bool:
        return self.ttl is not None and self._clock() - entry.stored_at > self.ttl

    def _lookup(self, key: CacheKey) -> CommentForest | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._expired(entry):
            self._discard(key)
            return None
        self._entries.move_to_end(key)
        return entry.value

    def _store(self, key: CacheKey, forest: CommentForest) -> None:
        self._entries[key] = _Entry(forest, self._clock())
        self._entries.move_to_end(key)
        self._keys_by_post.setdefault(key[0], set()).add(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._forget(evicted)

    def _discard(self, key: CacheKey) -> None:
        self._entries.pop(key, None)
        self._forget(key)

    def _forget(self, key: CacheKey) -> None:
        keys = self._keys_by_post.get(key[0])
        if keys is None:
            return
        keys.discard(key)
        if not keys:
            del self._keys_by_post[key[0]]
