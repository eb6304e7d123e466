"""Application layer DI providers."""

from dishka import Scope, provide

from whistle.application.usecase.comment import (
    CreateCommentUseCase,
    DistinguishCommentUseCase,
    EditCommentUseCase,
    GetCommentCountUseCase,
    GetCommentForestUseCase,
    GetEditHistoryUseCase,
    RemoveCommentUseCase,
    RestoreCommentUseCase,
)
from whistle.application.usecase.vote import VoteCommentUseCase
from whistle.domain.repository import TransactionManager
from whistle.domain.service import (
    CommentForestService,
    CommentService,
    ViewerService,
    VoteService,
)
from whistle.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_comment_forest_use_case(
        self, forest_service: CommentForestService
    ) -> GetCommentForestUseCase:
        """Provide get comment forest use case."""
        return GetCommentForestUseCase(forest_service=forest_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_count_use_case(
        self, forest_service: CommentForestService
    ) -> GetCommentCountUseCase:
        """Provide get comment count use case."""
        return GetCommentCountUseCase(forest_service=forest_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_history_use_case(
        self, comment_service: CommentService
    ) -> GetEditHistoryUseCase:
        """Provide get edit history use case."""
        return GetEditHistoryUseCase(comment_service=comment_service)

    # Comment mutations
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )

    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(
            comment_service=comment_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_comment_use_case(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> RemoveCommentUseCase:
        """Provide remove comment use case."""
        return RemoveCommentUseCase(
            comment_service=comment_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )

    @provide(scope=Scope.REQUEST)
    def get_restore_comment_use_case(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> RestoreCommentUseCase:
        """Provide restore comment use case."""
        return RestoreCommentUseCase(
            comment_service=comment_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )

    @provide(scope=Scope.REQUEST)
    def get_distinguish_comment_use_case(
        self,
        comment_service: CommentService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> DistinguishCommentUseCase:
        """Provide distinguish comment use case."""
        return DistinguishCommentUseCase(
            comment_service=comment_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_comment_use_case(
        self,
        vote_service: VoteService,
        viewer_service: ViewerService,
        forest_service: CommentForestService,
        transaction: TransactionManager,
    ) -> VoteCommentUseCase:
        """Provide vote comment use case."""
        return VoteCommentUseCase(
            vote_service=vote_service,
            viewer_service=viewer_service,
            forest_service=forest_service,
            transaction=transaction,
        )
