"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from whistle.config import CommentSettings
from whistle.domain.error import (
    ContentRemovedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from whistle.domain.model import Comment, CommentEdit, Viewer
from whistle.domain.repository import CommentEditRepository, CommentRepository
from whistle.domain.value import CommentId, EditId, PostId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment reads and writes."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        edit_repository: CommentEditRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            edit_repository: Comment edit history repository
            settings: Comment settings
        """
        self.comment_repository = comment_repository
        self.edit_repository = edit_repository
        self.settings = settings

    def _validate_body(self, body: str) -> str:
        if not body or not body.strip():
            raise ValidationError("Comment body cannot be empty")
        if len(body) > self.settings.max_body_length:
            raise ValidationError(
                f"Comment body exceeds {self.settings.max_body_length} characters"
            )
        return body

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        body: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If the body or parent comment is invalid
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            self._validate_body(body)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError(
                        "Parent comment does not belong to this post"
                    )

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                parent_id=parent_id,
                body=body,
                score=0,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def edit_comment(
        self, comment_id: CommentId, editor: Viewer, body: str
    ) -> Comment:
        """Replace a comment's body, keeping the old body in edit history.

        Only the author may edit, and removed comments cannot be edited.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the editor is not the author
            ContentRemovedError: If the comment is removed
            ValidationError: If the new body is invalid
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            editor_id=str(editor.user_id),
            body_length=len(body),
        ):
            comment = await self.get_comment_by_id(comment_id)

            if comment.author_id != editor.user_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    editor_id=str(editor.user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(editor.user_id)
                )
            if comment.is_removed:
                raise ContentRemovedError("comment", str(comment_id))

            self._validate_body(body)

            await self.edit_repository.save(
                CommentEdit(
                    id=EditId(uuid4()),
                    comment_id=comment_id,
                    previous_body=comment.body,
                    edited_by=editor.user_id,
                    created_at=datetime.now(),
                )
            )

            updated = await self.comment_repository.update_body(
                comment_id, body, edited_at=datetime.now()
            )
            if updated is None:
                # Removed between the read and the write
                raise ContentRemovedError("comment", str(comment_id))

            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
            )
            return updated

    async def remove_comment(
        self, comment_id: CommentId, actor: Viewer, reason: str | None = None
    ) -> Comment:
        """Soft-delete a comment. The row stays so replies keep their parent.

        The author or a moderator may remove a comment. Removing an
        already removed comment is a no-op.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is neither author nor moderator
        """
        with logfire.span(
            "comment_service.remove_comment",
            comment_id=str(comment_id),
            actor_id=str(actor.user_id),
            is_moderator=actor.is_moderator,
        ):
            comment = await self.get_comment_by_id(comment_id)

            if comment.author_id != actor.user_id and not actor.is_moderator:
                logfire.warn(
                    "Unauthorized comment removal attempt",
                    comment_id=str(comment_id),
                    actor_id=str(actor.user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(actor.user_id)
                )
            if comment.is_removed:
                logfire.info("Comment already removed", comment_id=str(comment_id))
                return comment

            removed = await self.comment_repository.set_removed(
                comment_id,
                removed=True,
                removed_by=actor.user_id,
                reason=reason,
                removed_at=datetime.now(),
            )
            if removed is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment removed",
                comment_id=str(comment_id),
                post_id=str(removed.post_id),
                by_moderator=comment.author_id != actor.user_id,
            )
            return removed

    async def restore_comment(self, comment_id: CommentId, actor: Viewer) -> Comment:
        """Clear the removal of a comment (moderators only).

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is not a moderator
        """
        with logfire.span(
            "comment_service.restore_comment",
            comment_id=str(comment_id),
            actor_id=str(actor.user_id),
        ):
            if not actor.is_moderator:
                logfire.warn(
                    "Unauthorized comment restore attempt",
                    comment_id=str(comment_id),
                    actor_id=str(actor.user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(actor.user_id)
                )

            comment = await self.get_comment_by_id(comment_id)
            if not comment.is_removed:
                return comment

            restored = await self.comment_repository.set_removed(
                comment_id, removed=False
            )
            if restored is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment restored",
                comment_id=str(comment_id),
                post_id=str(restored.post_id),
            )
            return restored

    async def get_edit_history(self, comment_id: CommentId) -> list[CommentEdit]:
        """Get previous bodies of a comment, oldest first."""
        with logfire.span(
            "comment_service.get_edit_history", comment_id=str(comment_id)
        ):
            return await self.edit_repository.find_by_comment(comment_id)

    async def set_distinguished(
        self, comment_id: CommentId, actor: Viewer, distinguished: bool = True
    ) -> Comment:
        """Highlight a comment as a moderator, or clear the highlight.

        Setting the current value again is a no-op.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is not a moderator
        """
        with logfire.span(
            "comment_service.set_distinguished",
            comment_id=str(comment_id),
            actor_id=str(actor.user_id),
            distinguished=distinguished,
        ):
            if not actor.is_moderator:
                logfire.warn(
                    "Unauthorized comment distinguish attempt",
                    comment_id=str(comment_id),
                    actor_id=str(actor.user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(actor.user_id)
                )

            comment = await self.get_comment_by_id(comment_id)
            if comment.is_distinguished == distinguished:
                return comment

            updated = await self.comment_repository.set_distinguished(
                comment_id, distinguished
            )
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment distinction changed",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
                distinguished=distinguished,
            )
            return updated
