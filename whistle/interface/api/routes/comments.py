"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from whistle.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DistinguishCommentRequest,
    DistinguishCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
    GetCommentCountRequest,
    GetCommentCountResponse,
    GetCommentCountUseCase,
    GetCommentForestRequest,
    GetCommentForestResponse,
    GetCommentForestUseCase,
    GetEditHistoryRequest,
    GetEditHistoryResponse,
    GetEditHistoryUseCase,
    RemoveCommentRequest,
    RemoveCommentUseCase,
    RestoreCommentRequest,
    RestoreCommentUseCase,
)
from whistle.domain.error import DomainError, ValidationError
from whistle.domain.service import JWTService
from whistle.interface.api.errors import to_http_error

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body: str = Field(min_length=1)
    parent_id: str | None = None  # Parent comment ID for replies


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    body: str = Field(min_length=1)


class DistinguishCommentAPIRequest(BaseModel):
    """API request for distinguishing a comment."""

    distinguished: bool = True


@router.get("/posts/{post_id}/comments", response_model=GetCommentForestResponse)
async def get_comments(
    post_id: UUID,
    use_case: FromDishka[GetCommentForestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentForestResponse:
    """Get the threaded comments of a post.

    Anonymous readers are allowed. When authenticated, each comment carries
    the viewer's own vote, and the viewer's removed comments stay visible.

    Args:
        post_id: Post UUID
        use_case: Get comment forest use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)

    Returns:
        Root comments with nested replies

    Raises:
        HTTPException: 503 if comments could not be loaded
    """
    viewer_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            GetCommentForestRequest(
                post_id=str(post_id),
                viewer_id=str(viewer_id) if viewer_id else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.get("/posts/{post_id}/comments/count", response_model=GetCommentCountResponse)
async def get_comment_count(
    post_id: UUID,
    use_case: FromDishka[GetCommentCountUseCase],
) -> GetCommentCountResponse:
    """Get the number of active comments on a post."""
    try:
        return await use_case.execute(GetCommentCountRequest(post_id=str(post_id)))
    except DomainError as e:
        raise to_http_error(e)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id),
                body=request.body,
                author_id=str(user_id) if user_id else None,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        raise to_http_error(e)
    except ValueError:
        # Malformed parent_id
        raise to_http_error(ValidationError("Invalid parent comment ID"))


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: UUID,
    request: EditCommentAPIRequest,
    use_case: FromDishka[EditCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Replace a comment's body. Only the author can edit."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            EditCommentRequest(
                comment_id=str(comment_id),
                body=request.body,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.delete("/comments/{comment_id}", response_model=CommentResponse)
async def remove_comment(
    comment_id: UUID,
    use_case: FromDishka[RemoveCommentUseCase],
    jwt_service: FromDishka[JWTService],
    reason: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Remove a comment (soft delete).

    The author or a moderator can remove. Replies stay in place.

    Args:
        comment_id: Comment UUID
        use_case: Remove comment use case from DI
        jwt_service: JWT service for token verification (injected)
        reason: Moderation note (query parameter, optional)
        auth_token: JWT token from cookie
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            RemoveCommentRequest(
                comment_id=str(comment_id),
                user_id=str(user_id) if user_id else None,
                reason=reason,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.post("/comments/{comment_id}/restore", response_model=CommentResponse)
async def restore_comment(
    comment_id: UUID,
    use_case: FromDishka[RestoreCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Undo a comment removal. Moderators only."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            RestoreCommentRequest(
                comment_id=str(comment_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.put("/comments/{comment_id}/distinguish", response_model=CommentResponse)
async def distinguish_comment(
    comment_id: UUID,
    request: DistinguishCommentAPIRequest,
    use_case: FromDishka[DistinguishCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Highlight a comment in its thread, or clear the highlight.

    Moderators only.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            DistinguishCommentRequest(
                comment_id=str(comment_id),
                user_id=str(user_id) if user_id else None,
                distinguished=request.distinguished,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.get("/comments/{comment_id}/edits", response_model=GetEditHistoryResponse)
async def get_edit_history(
    comment_id: UUID,
    use_case: FromDishka[GetEditHistoryUseCase],
) -> GetEditHistoryResponse:
    """List previous bodies of a comment, oldest first."""
    try:
        return await use_case.execute(GetEditHistoryRequest(comment_id=str(comment_id)))
    except DomainError as e:
        raise to_http_error(e)
