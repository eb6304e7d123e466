"""Comment use cases."""

from .common import AuthorResponse, CommentNodeResponse, CommentResponse
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .distinguish_comment import DistinguishCommentRequest, DistinguishCommentUseCase
from .edit_comment import EditCommentRequest, EditCommentUseCase
from .get_comment_count import (
    GetCommentCountRequest,
    GetCommentCountResponse,
    GetCommentCountUseCase,
)
from .get_comment_forest import (
    GetCommentForestRequest,
    GetCommentForestResponse,
    GetCommentForestUseCase,
)
from .get_edit_history import (
    CommentEditItem,
    GetEditHistoryRequest,
    GetEditHistoryResponse,
    GetEditHistoryUseCase,
)
from .remove_comment import RemoveCommentRequest, RemoveCommentUseCase
from .restore_comment import RestoreCommentRequest, RestoreCommentUseCase

__all__ = [
    "AuthorResponse",
    "CommentEditItem",
    "CommentNodeResponse",
    "CommentResponse",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DistinguishCommentRequest",
    "DistinguishCommentUseCase",
    "EditCommentRequest",
    "EditCommentUseCase",
    "GetCommentCountRequest",
    "GetCommentCountResponse",
    "GetCommentCountUseCase",
    "GetCommentForestRequest",
    "GetCommentForestResponse",
    "GetCommentForestUseCase",
    "GetEditHistoryRequest",
    "GetEditHistoryResponse",
    "GetEditHistoryUseCase",
    "RemoveCommentRequest",
    "RemoveCommentUseCase",
    "RestoreCommentRequest",
    "RestoreCommentUseCase",
]
