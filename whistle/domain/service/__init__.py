"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .enrichment_service import EnrichmentService
from .forest_builder import build_comment_forest
from .forest_cache import CommentForestCache
from .forest_service import CommentForestService
from .jwt_service import JWTService
from .viewer_service import ViewerService
from .vote_service import VoteService

__all__ = [
    "CommentForestCache",
    "CommentForestService",
    "CommentService",
    "EnrichmentService",
    "JWTService",
    "Service",
    "ViewerService",
    "VoteService",
    "build_comment_forest",
]
