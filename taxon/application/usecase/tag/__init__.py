"""Tag use cases."""

from .bulk_update import BulkAction, BulkUpdateRequest, BulkUpdateUseCase
from .common import BulkFailureItem, BulkResultResponse, TagItem
from .create_tag import CreateTagRequest, CreateTagResponse, CreateTagUseCase
from .delete_tag import DeleteTagUseCase
from .find_duplicates import (
    DuplicateCandidateItem,
    DuplicateGroupItem,
    FindDuplicatesRequest,
    FindDuplicatesResponse,
    FindDuplicatesUseCase,
    GroupDuplicatesRequest,
    GroupDuplicatesResponse,
    GroupDuplicatesUseCase,
    TagSummaryItem,
)
from .follow_tag import (
    FollowedTagItem,
    FollowTagRequest,
    FollowTagResponse,
    FollowTagUseCase,
    GetFollowedTagsResponse,
    GetFollowedTagsUseCase,
    UnfollowTagUseCase,
)
from .get_analytics import GetAnalyticsResponse, GetAnalyticsUseCase
from .get_tag import GetTagRequest, GetTagUseCase
from .get_tag_relatives import (
    GetTagRelativesResponse,
    GetTagRelativesUseCase,
    TagRelation,
)
from .get_tag_tree import GetTagTreeResponse, GetTagTreeUseCase, TagTreeNodeResponse
from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase
from .maintenance import (
    CleanupOrphansResponse,
    CleanupOrphansUseCase,
    GetTrendingTagsResponse,
    GetTrendingTagsUseCase,
    RefreshTrendingResponse,
    RefreshTrendingUseCase,
)
from .merge_duplicates import (
    MergeDuplicatesRequest,
    MergeDuplicatesResponse,
    MergeDuplicatesUseCase,
)
from .merge_tags import MergeTagsRequest, MergeTagsResponse, MergeTagsUseCase
from .rebuild_tree import RebuildTreeResponse, RebuildTreeUseCase
from .resolve_post_tags import (
    ResolvePostTagsRequest,
    ResolvePostTagsResponse,
    ResolvePostTagsUseCase,
)
from .update_settings import (
    GetSettingsUseCase,
    UpdateSettingsRequest,
    UpdateSettingsUseCase,
)
from .update_tag import UpdateTagRequest, UpdateTagResponse, UpdateTagUseCase

__all__ = [
    # Shared
    "TagItem",
    "BulkFailureItem",
    "BulkResultResponse",
    # CRUD
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "GetTagRequest",
    "GetTagUseCase",
    "CreateTagRequest",
    "CreateTagResponse",
    "CreateTagUseCase",
    "UpdateTagRequest",
    "UpdateTagResponse",
    "UpdateTagUseCase",
    "DeleteTagUseCase",
    # Hierarchy
    "GetTagTreeResponse",
    "GetTagTreeUseCase",
    "TagTreeNodeResponse",
    "GetTagRelativesResponse",
    "GetTagRelativesUseCase",
    "TagRelation",
    "RebuildTreeResponse",
    "RebuildTreeUseCase",
    # Duplicates and merging
    "TagSummaryItem",
    "DuplicateCandidateItem",
    "DuplicateGroupItem",
    "FindDuplicatesRequest",
    "FindDuplicatesResponse",
    "FindDuplicatesUseCase",
    "GroupDuplicatesRequest",
    "GroupDuplicatesResponse",
    "GroupDuplicatesUseCase",
    "MergeDuplicatesRequest",
    "MergeDuplicatesResponse",
    "MergeDuplicatesUseCase",
    "MergeTagsRequest",
    "MergeTagsResponse",
    "MergeTagsUseCase",
    # Analytics
    "GetAnalyticsResponse",
    "GetAnalyticsUseCase",
    # Bulk
    "BulkAction",
    "BulkUpdateRequest",
    "BulkUpdateUseCase",
    # Maintenance
    "CleanupOrphansResponse",
    "CleanupOrphansUseCase",
    "GetTrendingTagsResponse",
    "GetTrendingTagsUseCase",
    "RefreshTrendingResponse",
    "RefreshTrendingUseCase",
    "ResolvePostTagsRequest",
    "ResolvePostTagsResponse",
    "ResolvePostTagsUseCase",
    # Following
    "FollowTagRequest",
    "FollowTagResponse",
    "FollowTagUseCase",
    "FollowedTagItem",
    "GetFollowedTagsResponse",
    "GetFollowedTagsUseCase",
    "UnfollowTagUseCase",
    # Settings
    "GetSettingsUseCase",
    "UpdateSettingsRequest",
    "UpdateSettingsUseCase",
]
