"""Comment edit history repository interface."""

from abc import ABC, abstractmethod
from typing import List

from whistle.domain.model.edit import CommentEdit
from whistle.domain.value import CommentId


class CommentEditRepository(ABC):
    """Repository for CommentEdit history entries."""

    @abstractmethod
    async def save(self, edit: CommentEdit) -> CommentEdit:
        """Record an edit history entry."""
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[CommentEdit]:
        """Find the edit history of a comment, oldest first."""
        pass
