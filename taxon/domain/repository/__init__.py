"""Repository interfaces for the taxonomy domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from taxon.domain.repository.post import PostRepository
from taxon.domain.repository.tag import TagRepository
from taxon.domain.repository.tag_follow import TagFollowRepository

__all__ = [
    "TagRepository",
    "PostRepository",
    "TagFollowRepository",
]
