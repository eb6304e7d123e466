"""Strongly typed identifiers for Whistle domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
EditId = NewType("EditId", UUID)
BoostId = NewType("BoostId", UUID)
