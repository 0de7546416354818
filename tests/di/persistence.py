"""Mock persistence providers for testing."""

from dishka import Scope, provide

from taxon.domain.repository import (
    PostRepository,
    TagFollowRepository,
    TagRepository,
)
from taxon.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryTagFollowRepository,
    InMemoryTagRepository,
)
from taxon.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP-scoped so data survives across HTTP requests of one test client;
    every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_tag_repository(self) -> TagRepository:
        """Provide in-memory tag repository."""
        return InMemoryTagRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_tag_follow_repository(self) -> TagFollowRepository:
        """Provide in-memory tag follow repository."""
        return InMemoryTagFollowRepository()
