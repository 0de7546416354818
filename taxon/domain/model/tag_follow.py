"""TagFollow entity: a user's subscription to a tag."""

from datetime import datetime

from pydantic import Field

from taxon.domain.model.common import DomainModel, utcnow
from taxon.domain.model.tag import Tag
from taxon.domain.value import TagFollowId, TagId, UserId
from taxon.domain.value.common import ValueObject


class TagFollow(DomainModel):
    """Subscription of a user to a tag's activity.

    Unique per (tag_id, user_id). Weight orders a user's followed tags.
    """

    id: TagFollowId
    tag_id: TagId
    user_id: UserId
    weight: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=utcnow)


class FollowedTag(ValueObject):
    """A followed tag with the follow's weight."""

    tag: Tag
    weight: int
