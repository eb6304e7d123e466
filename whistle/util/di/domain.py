"""Domain layer DI providers."""

from dishka import Scope, provide

from whistle.config import AuthSettings, CommentSettings
from whistle.domain.repository import (
    BoostRepository,
    CommentEditRepository,
    CommentRepository,
    ForestReader,
    ProfileRepository,
    RoleRepository,
    VoteRepository,
)
from whistle.domain.service import (
    CommentForestCache,
    CommentForestService,
    CommentService,
    EnrichmentService,
    JWTService,
    ViewerService,
    VoteService,
)
from whistle.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Write-side services are REQUEST-scoped to align with repository/session
    lifecycle. The read side (forest cache, forest and enrichment services)
    is APP-scoped: coalesced builds are shared between requests, so they
    only depend on ports that open their own sessions.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_forest_cache(self, settings: CommentSettings) -> CommentForestCache:
        """Provide the process-wide comment forest cache."""
        return CommentForestCache(settings=settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_viewer_service(self, role_repository: RoleRepository) -> ViewerService:
        """Provide viewer domain service."""
        return ViewerService(role_repository=role_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        edit_repository: CommentEditRepository,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            edit_repository=edit_repository,
            settings=settings,
        )

    @provide(scope=Scope.APP)
    def get_enrichment_service(
        self,
        profile_repository: ProfileRepository,
        boost_repository: BoostRepository,
        forest_reader: ForestReader,
        settings: CommentSettings,
    ) -> EnrichmentService:
        """Provide enrichment domain service."""
        return EnrichmentService(
            profile_repository=profile_repository,
            boost_repository=boost_repository,
            forest_reader=forest_reader,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            comment_repository=comment_repository,
            comment_service=comment_service,
        )

    @provide(scope=Scope.APP)
    def get_forest_service(
        self,
        enrichment_service: EnrichmentService,
        forest_reader: ForestReader,
        forest_cache: CommentForestCache,
    ) -> CommentForestService:
        """Provide comment forest domain service."""
        return CommentForestService(
            enrichment_service=enrichment_service,
            forest_reader=forest_reader,
            forest_cache=forest_cache,
        )
