"""Domain services."""

from .analytics_service import AnalyticsService
from .base import Service
from .duplicate_service import MAX_DUPLICATE_CANDIDATES, DuplicateService
from .follow_service import FollowService
from .hierarchy_service import HierarchyService, TagTreeNode
from .merge_service import MergeService
from .similarity import levenshtein, similarity
from .tag_service import TagService
from .taxonomy_service import TaxonomyService
from .union_find import UnionFind

__all__ = [
    "AnalyticsService",
    "DuplicateService",
    "FollowService",
    "HierarchyService",
    "MAX_DUPLICATE_CANDIDATES",
    "MergeService",
    "Service",
    "TagService",
    "TagTreeNode",
    "TaxonomyService",
    "UnionFind",
    "levenshtein",
    "similarity",
]
