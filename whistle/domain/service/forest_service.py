"""Comment forest domain service."""

import logfire

from whistle.domain.model import Comment, CommentForest, Viewer
from whistle.domain.repository import ForestReader
from whistle.domain.value import PostId, UserId

from .base import Service
from .enrichment_service import EnrichmentService
from .forest_builder import build_comment_forest
from .forest_cache import CommentForestCache


class CommentForestService(Service):
    """Serves threaded comment forests through the shared cache.

    A build fetches the viewer's visible rows, enriches them, then
    assembles the forest. Fetch and enrichment failures abort the build
    and reach the caller; nothing is cached for a failed build.

    The service is process-wide. Builds are shared between requests, so
    everything they read goes through session-independent ports.
    """

    def __init__(
        self,
        enrichment_service: EnrichmentService,
        forest_reader: ForestReader,
        forest_cache: CommentForestCache,
    ) -> None:
        """Initialize comment forest service.

        Args:
            enrichment_service: Enrichment domain service
            forest_reader: Session-independent comment, role and vote reads
            forest_cache: Process-wide forest cache
        """
        self.enrichment_service = enrichment_service
        self.forest_reader = forest_reader
        self.forest_cache = forest_cache

    async def get_forest(
        self, post_id: PostId, viewer_id: UserId | None = None
    ) -> CommentForest:
        """Get the comment forest of a post as seen by a viewer.

        The viewer's roles are read on every call, cache hits included, so
        granting or revoking moderation changes the next read.

        Raises:
            StorageUnavailable: If the build could not reach storage
        """
        viewer = await self._resolve_viewer(viewer_id)
        return await self.forest_cache.get(
            post_id,
            viewer_id,
            lambda: self._build(post_id, viewer),
            moderator=viewer is not None and viewer.is_moderator,
        )

    async def get_comment_count(self, post_id: PostId) -> int:
        """Get the number of active comments on a post."""
        return await self.forest_cache.get_count(
            post_id, lambda: self.forest_reader.count_active(post_id)
        )

    def invalidate(self, post_id: PostId) -> None:
        """Forget every cached view of a post after a committed write."""
        self.forest_cache.invalidate(post_id)

    async def _resolve_viewer(self, viewer_id: UserId | None) -> Viewer | None:
        """Resolve a reading viewer with its roles, None for anonymous."""
        if viewer_id is None:
            return None
        roles = await self.forest_reader.find_roles(viewer_id)
        return Viewer(user_id=viewer_id, roles=frozenset(roles))

    async def _fetch_visible(
        self, post_id: PostId, viewer: Viewer | None = None
    ) -> list[Comment]:
        """Fetch the comments of a post that the viewer may see.

        Removed comments are hidden from ordinary viewers, shown to their
        own author, and shown in full to moderators.

        Returns:
            Comments ordered by creation time, then ID

        Raises:
            StorageUnavailable: If the store cannot be reached
        """
        include_removed = viewer is not None and viewer.is_moderator
        visible_to = (
            viewer.user_id if viewer is not None and not include_removed else None
        )

        with logfire.span(
            "comment_forest_service.fetch_visible",
            post_id=str(post_id),
            viewer_id=str(viewer.user_id) if viewer else None,
            include_removed=include_removed,
        ):
            comments = await self.forest_reader.find_comments(
                post_id, include_removed=include_removed, visible_to=visible_to
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def _build(self, post_id: PostId, viewer: Viewer | None) -> CommentForest:
        viewer_id = viewer.user_id if viewer else None
        with logfire.span(
            "comment_forest_service.build",
            post_id=str(post_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            comments = await self._fetch_visible(post_id, viewer)
            enriched = await self.enrichment_service.enrich(comments, viewer_id)
            forest = build_comment_forest(post_id, enriched, viewer_id)

            logfire.info(
                "Comment forest built",
                post_id=str(post_id),
                comments=len(enriched),
                roots=len(forest.roots),
                repaired=len(forest.repaired_ids),
            )
            return forest
