"""PostgreSQL repository implementations."""

from taxon.persistence.repository.post import PostgresPostRepository
from taxon.persistence.repository.tag import PostgresTagRepository
from taxon.persistence.repository.tag_follow import PostgresTagFollowRepository

__all__ = [
    "PostgresTagRepository",
    "PostgresPostRepository",
    "PostgresTagFollowRepository",
]
