"""In-memory comment edit repository for testing."""

from whistle.domain.model.edit import CommentEdit
from whistle.domain.repository.edit import CommentEditRepository
from whistle.domain.value import CommentId


class InMemoryCommentEditRepository(CommentEditRepository):
    """In-memory implementation of CommentEditRepository for testing."""

    def __init__(self) -> None:
        self._edits: list[CommentEdit] = []

    async def save(self, edit: CommentEdit) -> CommentEdit:
        self._edits.append(edit)
        return edit

    async def find_by_comment(self, comment_id: CommentId) -> list[CommentEdit]:
        edits = [e for e in self._edits if e.comment_id == comment_id]
        edits.sort(key=lambda e: e.created_at)
        return edits
