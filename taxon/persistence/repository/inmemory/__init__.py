"""In-memory repository implementations for testing."""

from .post import InMemoryPostRepository
from .tag import InMemoryTagRepository
from .tag_follow import InMemoryTagFollowRepository

__all__ = [
    "InMemoryPostRepository",
    "InMemoryTagRepository",
    "InMemoryTagFollowRepository",
]
