"""Application layer DI providers."""

from dishka import Scope, provide

from taxon.application.usecase.tag import (
    BulkUpdateUseCase,
    CleanupOrphansUseCase,
    CreateTagUseCase,
    DeleteTagUseCase,
    FindDuplicatesUseCase,
    FollowTagUseCase,
    GetAnalyticsUseCase,
    GetFollowedTagsUseCase,
    GetSettingsUseCase,
    GetTagRelativesUseCase,
    GetTagTreeUseCase,
    GetTagUseCase,
    GetTrendingTagsUseCase,
    GroupDuplicatesUseCase,
    ListTagsUseCase,
    MergeDuplicatesUseCase,
    MergeTagsUseCase,
    RebuildTreeUseCase,
    RefreshTrendingUseCase,
    ResolvePostTagsUseCase,
    UnfollowTagUseCase,
    UpdateSettingsUseCase,
    UpdateTagUseCase,
)
from taxon.domain.service import TaxonomyService
from taxon.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Tag CRUD
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_get_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_create_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_update_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> UpdateTagUseCase:
        """Provide update tag use case."""
        return UpdateTagUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(taxonomy_service=taxonomy_service)


    # Hierarchy
    @provide(scope=Scope.REQUEST)
    def get_get_tag_tree_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetTagTreeUseCase:
        """Provide get tag tree use case."""
        return GetTagTreeUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_get_tag_relatives_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetTagRelativesUseCase:
        """Provide get tag relatives use case."""
        return GetTagRelativesUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_rebuild_tree_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> RebuildTreeUseCase:
        """Provide rebuild tree use case."""
        return RebuildTreeUseCase(taxonomy_service=taxonomy_service)


    # Duplicates and merging
    @provide(scope=Scope.REQUEST)
    def get_find_duplicates_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> FindDuplicatesUseCase:
        """Provide find duplicates use case."""
        return FindDuplicatesUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_group_duplicates_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GroupDuplicatesUseCase:
        """Provide group duplicates use case."""
        return GroupDuplicatesUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_merge_duplicates_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> MergeDuplicatesUseCase:
        """Provide merge duplicates use case."""
        return MergeDuplicatesUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_merge_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> MergeTagsUseCase:
        """Provide merge tags use case."""
        return MergeTagsUseCase(taxonomy_service=taxonomy_service)


    # Analytics and maintenance
    @provide(scope=Scope.REQUEST)
    def get_get_analytics_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetAnalyticsUseCase:
        """Provide get analytics use case."""
        return GetAnalyticsUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_update_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> BulkUpdateUseCase:
        """Provide bulk update use case."""
        return BulkUpdateUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_refresh_trending_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> RefreshTrendingUseCase:
        """Provide refresh trending use case."""
        return RefreshTrendingUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_get_trending_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetTrendingTagsUseCase:
        """Provide get trending tags use case."""
        return GetTrendingTagsUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_cleanup_orphans_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> CleanupOrphansUseCase:
        """Provide cleanup orphans use case."""
        return CleanupOrphansUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_resolve_post_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> ResolvePostTagsUseCase:
        """Provide resolve post tags use case."""
        return ResolvePostTagsUseCase(taxonomy_service=taxonomy_service)


    # Following
    @provide(scope=Scope.REQUEST)
    def get_follow_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> FollowTagUseCase:
        """Provide follow tag use case."""
        return FollowTagUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_unfollow_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> UnfollowTagUseCase:
        """Provide unfollow tag use case."""
        return UnfollowTagUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_get_followed_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetFollowedTagsUseCase:
        """Provide get followed tags use case."""
        return GetFollowedTagsUseCase(taxonomy_service=taxonomy_service)


    # Settings
    @provide(scope=Scope.REQUEST)
    def get_get_settings_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> GetSettingsUseCase:
        """Provide get settings use case."""
        return GetSettingsUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_update_settings_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> UpdateSettingsUseCase:
        """Provide update settings use case."""
        return UpdateSettingsUseCase(taxonomy_service=taxonomy_service)
