"""In-memory forest read port for testing."""

from typing import Optional, Sequence

from whistle.domain.model.comment import Comment
from whistle.domain.model.vote import CommentVote
from whistle.domain.repository.comment import CommentRepository
from whistle.domain.repository.forest_reader import ForestReader
from whistle.domain.repository.role import RoleRepository
from whistle.domain.repository.vote import VoteRepository
from whistle.domain.value import AppRole, CommentId, PostId, UserId


class InMemoryForestReader(ForestReader):
    """Reads through the in-memory repositories it is given."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        role_repository: RoleRepository,
    ) -> None:
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.role_repository = role_repository

    async def find_comments(
        self,
        post_id: PostId,
        include_removed: bool = False,
        visible_to: Optional[UserId] = None,
    ) -> list[Comment]:
        return await self.comment_repository.find_by_post(
            post_id, include_removed=include_removed, visible_to=visible_to
        )

    async def count_active(self, post_id: PostId) -> int:
        return await self.comment_repository.count_by_post(post_id)

    async def find_roles(self, user_id: UserId) -> set[AppRole]:
        return await self.role_repository.find_roles(user_id)

    async def find_votes(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> list[CommentVote]:
        return await self.vote_repository.find_by_user_and_comments(
            user_id, comment_ids
        )
