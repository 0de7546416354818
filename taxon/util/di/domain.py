"""Domain layer DI providers."""

from dishka import Scope, provide

from taxon.config import ConfigCell
from taxon.domain.repository import (
    PostRepository,
    TagFollowRepository,
    TagRepository,
)
from taxon.domain.service import (
    AnalyticsService,
    DuplicateService,
    FollowService,
    HierarchyService,
    MergeService,
    TagService,
    TaxonomyService,
)
from taxon.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_hierarchy_service(
        self, tag_repository: TagRepository, config_cell: ConfigCell
    ) -> HierarchyService:
        """Provide hierarchy domain service."""
        return HierarchyService(tag_repository=tag_repository, config_cell=config_cell)

    @provide
    def get_duplicate_service(
        self, tag_repository: TagRepository, config_cell: ConfigCell
    ) -> DuplicateService:
        """Provide duplicate detection domain service."""
        return DuplicateService(tag_repository=tag_repository, config_cell=config_cell)

    @provide
    def get_tag_service(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        follow_repository: TagFollowRepository,
        hierarchy_service: HierarchyService,
        config_cell: ConfigCell,
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(
            tag_repository=tag_repository,
            post_repository=post_repository,
            follow_repository=follow_repository,
            hierarchy_service=hierarchy_service,
            config_cell=config_cell,
        )

    @provide
    def get_merge_service(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        follow_repository: TagFollowRepository,
        duplicate_service: DuplicateService,
        hierarchy_service: HierarchyService,
        config_cell: ConfigCell,
    ) -> MergeService:
        """Provide merge domain service."""
        return MergeService(
            tag_repository=tag_repository,
            post_repository=post_repository,
            follow_repository=follow_repository,
            duplicate_service=duplicate_service,
            hierarchy_service=hierarchy_service,
            config_cell=config_cell,
        )

    @provide
    def get_analytics_service(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        duplicate_service: DuplicateService,
        config_cell: ConfigCell,
    ) -> AnalyticsService:
        """Provide analytics domain service."""
        return AnalyticsService(
            tag_repository=tag_repository,
            post_repository=post_repository,
            duplicate_service=duplicate_service,
            config_cell=config_cell,
        )

    @provide
    def get_follow_service(
        self,
        tag_repository: TagRepository,
        follow_repository: TagFollowRepository,
        config_cell: ConfigCell,
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            tag_repository=tag_repository,
            follow_repository=follow_repository,
            config_cell=config_cell,
        )

    @provide
    def get_taxonomy_service(
        self,
        tag_service: TagService,
        hierarchy_service: HierarchyService,
        duplicate_service: DuplicateService,
        merge_service: MergeService,
        analytics_service: AnalyticsService,
        follow_service: FollowService,
        config_cell: ConfigCell,
    ) -> TaxonomyService:
        """Provide the taxonomy orchestrator."""
        return TaxonomyService(
            tag_service=tag_service,
            hierarchy_service=hierarchy_service,
            duplicate_service=duplicate_service,
            merge_service=merge_service,
            analytics_service=analytics_service,
            follow_service=follow_service,
            config_cell=config_cell,
        )
