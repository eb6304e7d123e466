"""Post boost entity."""

from datetime import datetime

from pydantic import Field

from whistle.domain.model.common import DomainModel
from whistle.domain.value import BoostId, PostId, UserId


class Boost(DomainModel):
    """A paid boost attached to a post, referenced by the comment it came with.

    Payment itself is handled elsewhere; comments only show the amount.
    """

    id: BoostId
    post_id: PostId
    user_id: UserId
    amount_cents: int = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    created_at: datetime = Field(default_factory=datetime.now)
