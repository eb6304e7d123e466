"""Vote routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from whistle.application.usecase.vote import (
    VoteCommentRequest,
    VoteCommentResponse,
    VoteCommentUseCase,
)
from whistle.domain.error import DomainError
from whistle.domain.service import JWTService
from whistle.interface.api.errors import to_http_error

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    direction: Literal[1, -1]


@router.put("/comments/{comment_id}/vote", response_model=VoteCommentResponse)
async def vote_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    use_case: FromDishka[VoteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteCommentResponse:
    """Cast or change a vote on a comment.

    Requires authentication.

    Args:
        comment_id: Comment UUID
        request: Vote direction, 1 or -1
        use_case: Vote comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Comment score after the vote
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            VoteCommentRequest(
                comment_id=str(comment_id),
                direction=request.direction,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.delete("/comments/{comment_id}/vote", response_model=VoteCommentResponse)
async def withdraw_vote(
    comment_id: UUID,
    use_case: FromDishka[VoteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteCommentResponse:
    """Withdraw the current user's vote on a comment."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    try:
        return await use_case.execute(
            VoteCommentRequest(
                comment_id=str(comment_id),
                direction=None,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)
