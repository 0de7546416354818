"""Duplicate tag detection domain service."""

from collections.abc import Iterable
from typing import Optional

import logfire

from taxon.config import ConfigCell
from taxon.domain.error import ValidationError
from taxon.domain.model import DuplicateCandidate, DuplicateGroup, TagSummary
from taxon.domain.repository import TagRepository
from taxon.domain.value import TagId

from .base import Service
from .similarity import similarity
from .union_find import UnionFind

MAX_DUPLICATE_CANDIDATES = 50


class DuplicateService(Service):
    """Domain service for near-duplicate tag detection.

    Scores every pair of tag names with normalized Levenshtein similarity
    and clusters transitively similar tags with union-find.
    """

    def __init__(self, tag_repository: TagRepository, config_cell: ConfigCell) -> None:
        """Initialize duplicate service.

        Args:
            tag_repository: Tag repository
            config_cell: Live taxonomy configuration
        """
        self.tag_repository = tag_repository
        self.config_cell = config_cell

    async def find_duplicate_tags(
        self, threshold: Optional[float] = None
    ) -> list[DuplicateCandidate]:
        """Find pairs of tags with similar names.

        Every unordered pair is scored once. Pairs scoring at or above the
        threshold are kept, highest score first, at most
        ``MAX_DUPLICATE_CANDIDATES`` of them.

        Args:
            threshold: Minimum similarity in [0, 1], configured default if None

        Returns:
            Duplicate candidates with scores rounded to 2 decimals

        Raises:
            ValidationError: If threshold is outside [0, 1]
        """
        cutoff = self._resolve_threshold(threshold)

        with logfire.span("duplicate_service.find_duplicate_tags", threshold=cutoff):
            summaries = await self.tag_repository.find_summaries()
            candidates = score_pairs(summaries, cutoff)

            logfire.info(
                "Duplicate candidates found",
                tag_count=len(summaries),
                candidate_count=len(candidates),
            )
            return candidates

    async def group_duplicates(
        self,
        threshold: Optional[float] = None,
        exclude_ids: Optional[Iterable[TagId]] = None,
    ) -> list[DuplicateGroup]:
        """Cluster duplicate candidates into merge groups.

        Args:
            threshold: Minimum similarity in [0, 1], configured default if None
            exclude_ids: Tags that must not take part in any group

        Returns:
            Groups ordered by best pairwise score, highest first
        """
        excluded = set(exclude_ids or ())

        with logfire.span(
            "duplicate_service.group_duplicates", excluded_count=len(excluded)
        ):
            candidates = await self.find_duplicate_tags(threshold)
            groups = cluster_candidates(candidates, excluded)

            logfire.info(
                "Duplicate groups built",
                group_count=len(groups),
                tag_count=sum(len(group.duplicates) + 1 for group in groups),
            )
            return groups

    def _resolve_threshold(self, threshold: Optional[float]) -> float:
        if threshold is None:
            return self.config_cell.current.duplicate_threshold
        if not 0.0 <= threshold <= 1.0:
            raise ValidationError(f"Threshold must be between 0 and 1, got {threshold}")
        return threshold


def score_pairs(summaries: list[TagSummary], threshold: float) -> list[DuplicateCandidate]:
    """Score all unordered pairs and keep those at or above ``threshold``.

    The comparison uses the raw score; the stored score is rounded.
    """
    candidates: list[DuplicateCandidate] = []
    for i, first in enumerate(summaries):
        for second in summaries[i + 1 :]:
            score = similarity(first.name, second.name)
            if score >= threshold:
                candidates.append(
                    DuplicateCandidate(a=first, b=second, score=round(score, 2))
                )

    candidates.sort(key=lambda candidate: candidate.score, reverse=True)
    return candidates[:MAX_DUPLICATE_CANDIDATES]


def cluster_candidates(
    candidates: list[DuplicateCandidate], excluded: set[TagId]
) -> list[DuplicateGroup]:
    """Union candidate pairs into groups with a survivor each.

    The survivor is the member with the highest usage count, ties broken
    by name. ``max_score`` is taken per final cluster, after every union.
    """
    kept = [
        candidate
        for candidate in candidates
        if candidate.a.id not in excluded and candidate.b.id not in excluded
    ]

    clusters: UnionFind[TagId] = UnionFind()
    summaries: dict[TagId, TagSummary] = {}
    for candidate in kept:
        summaries.setdefault(candidate.a.id, candidate.a)
        summaries.setdefault(candidate.b.id, candidate.b)
        clusters.union(candidate.a.id, candidate.b.id)

    max_scores: dict[TagId, float] = {}
    for candidate in kept:
        root = clusters.find(candidate.a.id)
        max_scores[root] = max(max_scores.get(root, 0.0), candidate.score)

    groups: list[DuplicateGroup] = []
    for root, member_ids in clusters.groups().items():
        if len(member_ids) < 2:
            continue
        members = sorted(
            (summaries[member_id] for member_id in member_ids),
            key=lambda summary: (-summary.usage_count, summary.name),
        )
        groups.append(
            DuplicateGroup(
                survivor=members[0],
                duplicates=members[1:],
                max_score=max_scores[root],
            )
        )

    groups.sort(key=lambda group: (-group.max_score, group.survivor.name))
    return groups
