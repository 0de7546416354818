"""Duplicate detection and merge results.

None of these are persisted: candidates and groups are recomputed on
demand, receipts are returned to the caller.
"""

from pydantic import Field

from taxon.domain.model.tag import TagSummary
from taxon.domain.value import TagId
from taxon.domain.value.common import ValueObject


class DuplicateCandidate(ValueObject):
    """Pair of tags whose names score above the similarity threshold."""

    a: TagSummary
    b: TagSummary
    score: float = Field(ge=0.0, le=1.0)


class DuplicateGroup(ValueObject):
    """Cluster of transitively similar tags.

    ``survivor`` absorbs ``duplicates`` on merge. ``max_score`` is the best
    pairwise score observed inside the cluster.
    """

    survivor: TagSummary
    duplicates: list[TagSummary]
    max_score: float


class MergeReceipt(ValueObject):
    """Record of one survivor absorbing its duplicates."""

    survivor_id: TagId
    survivor_name: str
    merged_ids: list[TagId]
    posts_relinked: int


class SkippedCluster(ValueObject):
    """Cluster the bulk merge could not process."""

    survivor_id: TagId
    survivor_name: str
    duplicate_ids: list[TagId]
    reason: str


class BulkMergeResult(ValueObject):
    """Outcome of an automatic, cluster-driven merge run.

    In a dry run ``merges`` lists what would happen and ``posts_relinked``
    is always 0.
    """

    dry_run: bool
    groups_merged: int
    tags_deleted: int
    merges: list[MergeReceipt]
    skipped: list[SkippedCluster] = Field(default_factory=list)
