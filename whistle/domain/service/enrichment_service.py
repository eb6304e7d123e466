"""Comment enrichment domain service."""

import asyncio
from typing import Sequence

import logfire

from whistle.config import CommentSettings
from whistle.domain.model import AuthorSummary, Boost, Comment, EnrichedComment
from whistle.domain.repository import BoostRepository, ForestReader, ProfileRepository
from whistle.domain.value import BoostId, CommentId, UserId, VoteDirection

from .base import Service


class EnrichmentService(Service):
    """Attaches author summaries, boosts and the viewer's votes to comments.

    Lookups are batched by distinct key: one profile query per call, one
    boost query when any row is boosted, and one vote query for known
    viewers, whatever the row count. Every repository opens its own
    sessions, so enrichment may run inside a shared forest build.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        boost_repository: BoostRepository,
        forest_reader: ForestReader,
        settings: CommentSettings,
    ) -> None:
        """Initialize enrichment service.

        Args:
            profile_repository: Profile repository
            boost_repository: Boost repository
            forest_reader: Session-independent reads (viewer votes)
            settings: Comment settings (anonymous display name)
        """
        self.profile_repository = profile_repository
        self.boost_repository = boost_repository
        self.forest_reader = forest_reader
        self.settings = settings

    async def enrich(
        self,
        comments: Sequence[Comment],
        viewer_id: UserId | None = None,
    ) -> list[EnrichedComment]:
        """Enrich comments, one node per row, replies left empty.

        The lookups are independent and run concurrently.

        Args:
            comments: Rows from a single fetch
            viewer_id: Viewer whose votes to attach (None for anonymous)

        Returns:
            Enriched comments in input order

        Raises:
            StorageUnavailable: If any lookup fails
        """
        if not comments:
            return []

        author_ids = list(dict.fromkeys(c.author_id for c in comments))
        boost_ids = list(
            dict.fromkeys(c.boost_id for c in comments if c.boost_id is not None)
        )

        with logfire.span(
            "enrichment_service.enrich",
            count=len(comments),
            distinct_authors=len(author_ids),
            distinct_boosts=len(boost_ids),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            lookups = [self._load_authors(author_ids), self._load_boosts(boost_ids)]
            if viewer_id is not None:
                comment_ids = list(dict.fromkeys(c.id for c in comments))
                lookups.append(self._load_votes(viewer_id, comment_ids))

            authors, boosts, *rest = await asyncio.gather(*lookups)
            votes: dict[CommentId, VoteDirection] = rest[0] if rest else {}

            enriched = []
            for comment in comments:
                boost = boosts.get(comment.boost_id) if comment.boost_id else None
                enriched.append(
                    EnrichedComment(
                        comment=comment,
                        author=authors[comment.author_id],
                        viewer_vote=votes.get(comment.id),
                        boost_amount_cents=boost.amount_cents if boost else None,
                        boost_currency=boost.currency if boost else None,
                    )
                )
            return enriched

    async def _load_authors(
        self, author_ids: list[UserId]
    ) -> dict[UserId, AuthorSummary]:
        fallback = self.settings.anonymous_display_name
        profiles = await self.profile_repository.find_by_user_ids(author_ids)

        authors = {
            profile.user_id: AuthorSummary.from_profile(profile, fallback)
            for profile in profiles
        }
        missing = [author_id for author_id in author_ids if author_id not in authors]
        if missing:
            logfire.info("Authors without profile", count=len(missing))
        for author_id in missing:
            authors[author_id] = AuthorSummary.anonymous(author_id, fallback)
        return authors

    async def _load_boosts(self, boost_ids: list[BoostId]) -> dict[BoostId, Boost]:
        if not boost_ids:
            return {}
        boosts = await self.boost_repository.find_by_ids(boost_ids)
        return {boost.id: boost for boost in boosts}

    async def _load_votes(
        self, viewer_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, VoteDirection]:
        votes = await self.forest_reader.find_votes(viewer_id, comment_ids)
        return {vote.comment_id: vote.direction for vote in votes}
