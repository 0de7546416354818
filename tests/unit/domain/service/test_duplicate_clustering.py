"""Unit tests for duplicate pair scoring and clustering."""

from uuid import uuid4

from taxon.domain.model import DuplicateCandidate, TagSummary
from taxon.domain.service import MAX_DUPLICATE_CANDIDATES
from taxon.domain.service.duplicate_service import cluster_candidates, score_pairs
from taxon.domain.value import TagId, slugify


def summary(name: str, usage_count: int = 0) -> TagSummary:
    return TagSummary(
        id=TagId(uuid4()), name=name, slug=slugify(name), usage_count=usage_count
    )


class TestScorePairs:
    """Tests for score_pairs."""

    def test_keeps_pairs_at_or_above_threshold(self):
        react = summary("React")
        reactjs = summary("Reactjs")
        django = summary("Django")

        candidates = score_pairs([react, reactjs, django], 0.7)

        assert len(candidates) == 1
        assert {candidates[0].a.id, candidates[0].b.id} == {react.id, reactjs.id}
        assert candidates[0].score == 0.71

    def test_orders_by_score_descending(self):
        names = ["javascript", "javascripts", "java", "javas"]
        candidates = score_pairs([summary(n) for n in names], 0.3)

        scores = [candidate.score for candidate in candidates]
        assert scores == sorted(scores, reverse=True)

    def test_threshold_zero_keeps_every_pair(self):
        summaries = [summary(f"tag{i}") for i in range(5)]

        assert len(score_pairs(summaries, 0.0)) == 10

    def test_caps_number_of_candidates(self):
        summaries = [summary(f"name{i:02d}") for i in range(20)]

        candidates = score_pairs(summaries, 0.0)

        assert len(candidates) == MAX_DUPLICATE_CANDIDATES


class TestClusterCandidates:
    """Tests for cluster_candidates."""

    def test_groups_transitively_similar_tags(self):
        """a~b and b~c end up together even though a and c never pair."""
        a, b, c = summary("javascript"), summary("javascripts"), summary("javascriptss")
        candidates = score_pairs([a, b, c], 0.9)
        assert len(candidates) == 2

        groups = cluster_candidates(candidates, set())

        assert len(groups) == 1
        members = {groups[0].survivor.id} | {d.id for d in groups[0].duplicates}
        assert members == {a.id, b.id, c.id}
        assert groups[0].max_score == 0.92

    def test_survivor_has_highest_usage(self):
        low, high = summary("Vue", usage_count=2), summary("Vuejs", usage_count=9)
        candidates = [DuplicateCandidate(a=low, b=high, score=0.6)]

        groups = cluster_candidates(candidates, set())

        assert groups[0].survivor.id == high.id
        assert [d.id for d in groups[0].duplicates] == [low.id]

    def test_usage_tie_broken_by_name(self):
        b, a = summary("b-tag", usage_count=3), summary("a-tag", usage_count=3)

        groups = cluster_candidates([DuplicateCandidate(a=b, b=a, score=0.8)], set())

        assert groups[0].survivor.id == a.id

    def test_excluded_tags_drop_their_pairs(self):
        x, y, z = summary("xx"), summary("xy"), summary("xz")
        candidates = [
            DuplicateCandidate(a=x, b=y, score=0.5),
            DuplicateCandidate(a=y, b=z, score=0.5),
        ]

        groups = cluster_candidates(candidates, {y.id})

        assert groups == []

    def test_groups_ordered_by_max_score(self):
        a1, a2 = summary("alpha"), summary("alpha2")
        b1, b2 = summary("beta"), summary("beta2")
        candidates = [
            DuplicateCandidate(a=a1, b=a2, score=0.5),
            DuplicateCandidate(a=b1, b=b2, score=0.9),
        ]

        groups = cluster_candidates(candidates, set())

        assert [group.max_score for group in groups] == [0.9, 0.5]

    def test_max_score_spans_merged_clusters(self):
        """A late union joining two clusters keeps the best score of both."""
        p, q, r, s = summary("p"), summary("q"), summary("r"), summary("s")
        candidates = [
            DuplicateCandidate(a=p, b=q, score=0.95),
            DuplicateCandidate(a=r, b=s, score=0.6),
            DuplicateCandidate(a=q, b=r, score=0.4),
        ]

        groups = cluster_candidates(candidates, set())

        assert len(groups) == 1
        assert groups[0].max_score == 0.95
