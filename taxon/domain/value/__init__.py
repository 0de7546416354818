"""Domain value objects for the tag taxonomy."""

from taxon.domain.value.identifiers import PostId, TagFollowId, TagId, UserId
from taxon.domain.value.types import Slug, TagSortField, fold, slugify

__all__ = [
    # Identifiers
    "TagId",
    "PostId",
    "UserId",
    "TagFollowId",
    # Types
    "Slug",
    "TagSortField",
    # Helpers
    "fold",
    "slugify",
]
