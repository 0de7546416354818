"""Domain model entities for the tag taxonomy."""

from taxon.domain.model.analytics import (
    ParentGroup,
    SynonymUtilization,
    TagAnalytics,
    TagCreation,
)
from taxon.domain.model.bulk import BulkFailure, BulkResult, CleanupResult
from taxon.domain.model.duplicate import (
    BulkMergeResult,
    DuplicateCandidate,
    DuplicateGroup,
    MergeReceipt,
    SkippedCluster,
)
from taxon.domain.model.post import Post
from taxon.domain.model.tag import (
    Tag,
    TagChanges,
    TagDraft,
    TagStyle,
    TagSummary,
    TreeFields,
)
from taxon.domain.model.tag_follow import FollowedTag, TagFollow

__all__ = [
    "Tag",
    "TagSummary",
    "TreeFields",
    "TagDraft",
    "TagChanges",
    "TagStyle",
    "TagFollow",
    "FollowedTag",
    "Post",
    "DuplicateCandidate",
    "DuplicateGroup",
    "MergeReceipt",
    "SkippedCluster",
    "BulkMergeResult",
    "BulkFailure",
    "BulkResult",
    "CleanupResult",
    "TagAnalytics",
    "TagCreation",
    "ParentGroup",
    "SynonymUtilization",
]
