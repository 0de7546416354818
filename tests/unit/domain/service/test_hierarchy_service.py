"""Unit tests for HierarchyService."""

from uuid import uuid4

import pytest

from taxon.domain.error import CycleDetectedError, SelfParentError, TagNotFoundError
from taxon.domain.model import TagChanges, TagDraft
from taxon.domain.repository import TagRepository
from taxon.domain.service import HierarchyService, TaxonomyService
from taxon.domain.service.hierarchy_service import compute_label
from taxon.domain.value import TagId
from tests.factories import make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestComputeLabel:
    """Tests for compute_label."""

    def test_plain_name_is_its_own_label(self):
        assert compute_label("Python", "/") == "Python"

    def test_takes_last_segment(self):
        assert compute_label("Languages / Python", "/") == "Python"

    def test_ignores_empty_trailing_segments(self):
        assert compute_label("Web/Frontend//", "/") == "Frontend"

    def test_only_separators_falls_back_to_name(self):
        assert compute_label("//", "/") == "//"


class TestHierarchyService:
    """Tests for HierarchyService."""

    @pytest.mark.asyncio
    async def test_three_level_path(self, unit_env):
        """A grandchild's path lists every ancestor slug."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tech = await taxonomy.create_tag(TagDraft(name="Technology"))
        programming = await taxonomy.create_tag(
            TagDraft(name="Programming", parent_id=tech.id)
        )

        # Act
        python = await taxonomy.create_tag(
            TagDraft(name="Python", parent_id=programming.id)
        )

        # Assert
        assert python.path == "technology/programming/python"
        assert python.level == 3
        assert python.label == "Python"

    @pytest.mark.asyncio
    async def test_self_parent_rejected(self, unit_env):
        """A tag cannot be its own parent."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        tag = await taxonomy.create_tag(TagDraft(name="Loop"))

        # Act & Assert
        with pytest.raises(SelfParentError):
            await taxonomy.update_tag(tag.id, TagChanges(parent_id=tag.id))

    @pytest.mark.asyncio
    async def test_cycle_rejected(self, unit_env):
        """Moving an ancestor under its descendant is refused and nothing changes."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        a = await taxonomy.create_tag(TagDraft(name="A"))
        b = await taxonomy.create_tag(TagDraft(name="B", parent_id=a.id))
        c = await taxonomy.create_tag(TagDraft(name="C", parent_id=b.id))

        # Act & Assert
        with pytest.raises(CycleDetectedError):
            await taxonomy.update_tag(a.id, TagChanges(parent_id=c.id))

        unchanged = await taxonomy.get_tag(a.id)
        assert unchanged.parent_id is None
        assert unchanged.path == "a"

    @pytest.mark.asyncio
    async def test_would_cycle(self, unit_env):
        """Detects descendants as invalid parents."""
        # Arrange
        hierarchy = await unit_env.get(HierarchyService)
        repo = await unit_env.get(TagRepository)
        root = await repo.save(make_tag("Root"))
        child = await repo.save(make_tag("Child", parent_id=root.id))
        other = await repo.save(make_tag("Other"))

        # Act & Assert
        assert await hierarchy.would_cycle(root.id, child.id)
        assert await hierarchy.would_cycle(root.id, root.id)
        assert not await hierarchy.would_cycle(child.id, other.id)

    @pytest.mark.asyncio
    async def test_validate_parent_missing(self, unit_env):
        """An unknown parent id is reported as not found."""
        # Arrange
        hierarchy = await unit_env.get(HierarchyService)
        repo = await unit_env.get(TagRepository)
        tag = await repo.save(make_tag("Lonely"))

        # Act & Assert
        with pytest.raises(TagNotFoundError):
            await hierarchy.validate_parent(tag.id, TagId(uuid4()))

    @pytest.mark.asyncio
    async def test_rebuild_fixes_stale_paths_and_is_idempotent(self, unit_env):
        """Rebuild repairs paths, and a second run changes nothing."""
        # Arrange
        hierarchy = await unit_env.get(HierarchyService)
        repo = await unit_env.get(TagRepository)
        parent = await repo.save(make_tag("Science"))
        child = await repo.save(
            make_tag("Physics", parent_id=parent.id, path="wrong", level=1)
        )

        # Act
        first = await hierarchy.rebuild_tree_paths()
        second = await hierarchy.rebuild_tree_paths()

        # Assert
        assert first == 1
        assert second == 0
        rebuilt = await repo.find_by_id(child.id)
        assert rebuilt.path == "science/physics"
        assert rebuilt.level == 2

    @pytest.mark.asyncio
    async def test_rebuild_skipped_when_tree_disabled(self, unit_env):
        """With the tree switched off nothing is rewritten."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        repo = await unit_env.get(TagRepository)
        parent = await repo.save(make_tag("Science"))
        await repo.save(make_tag("Physics", parent_id=parent.id, path="wrong"))
        taxonomy.update_config(enable_tree=False)

        # Act
        updated = await taxonomy.rebuild_tree_paths()

        # Assert
        assert updated == 0

    @pytest.mark.asyncio
    async def test_rename_refreshes_descendant_paths(self, unit_env):
        """Changing a parent's slug rewrites every path below it."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        web = await taxonomy.create_tag(TagDraft(name="Web"))
        frontend = await taxonomy.create_tag(TagDraft(name="Frontend", parent_id=web.id))
        react = await taxonomy.create_tag(TagDraft(name="React", parent_id=frontend.id))

        # Act
        await taxonomy.update_tag(web.id, TagChanges(name="Internet"))

        # Assert
        assert (await taxonomy.get_tag(frontend.id)).path == "internet/frontend"
        assert (await taxonomy.get_tag(react.id)).path == "internet/frontend/react"

    @pytest.mark.asyncio
    async def test_relatives(self, unit_env):
        """Ancestors root first, descendants breadth first, siblings exclude self."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        root = await taxonomy.create_tag(TagDraft(name="Root"))
        left = await taxonomy.create_tag(TagDraft(name="Left", parent_id=root.id))
        right = await taxonomy.create_tag(TagDraft(name="Right", parent_id=root.id))
        leaf = await taxonomy.create_tag(TagDraft(name="Leaf", parent_id=left.id))

        # Act
        ancestors = await taxonomy.get_ancestors(leaf.id)
        descendants = await taxonomy.get_descendants(root.id)
        siblings = await taxonomy.get_siblings(left.id)

        # Assert
        assert [tag.id for tag in ancestors] == [root.id, left.id]
        assert [tag.id for tag in descendants] == [left.id, right.id, leaf.id]
        assert [tag.id for tag in siblings] == [right.id]

    @pytest.mark.asyncio
    async def test_nested_tree(self, unit_env):
        """The forest nests children under parents, sorted by name."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        zoo = await taxonomy.create_tag(TagDraft(name="Zoo"))
        art = await taxonomy.create_tag(TagDraft(name="Art"))
        await taxonomy.create_tag(TagDraft(name="Lions", parent_id=zoo.id))
        await taxonomy.create_tag(TagDraft(name="Bears", parent_id=zoo.id))

        # Act
        forest = await taxonomy.get_nested_tree()
        subtree = await taxonomy.get_nested_tree(zoo.id)

        # Assert
        assert [node.tag.name for node in forest] == ["Art", "Zoo"]
        assert forest[0].tag.id == art.id
        assert [node.tag.name for node in forest[1].children] == ["Bears", "Lions"]
        assert [node.tag.name for node in subtree] == ["Bears", "Lions"]

    @pytest.mark.asyncio
    async def test_nested_tree_unknown_parent(self, unit_env):
        """Asking for the subtree of a missing tag fails."""
        taxonomy = await unit_env.get(TaxonomyService)

        with pytest.raises(TagNotFoundError):
            await taxonomy.get_nested_tree(TagId(uuid4()))

    @pytest.mark.asyncio
    async def test_corrupted_parent_chain_does_not_hang(self, unit_env):
        """A stored loop is reported instead of walked forever."""
        # Arrange
        hierarchy = await unit_env.get(HierarchyService)
        repo = await unit_env.get(TagRepository)
        a_id, b_id = TagId(uuid4()), TagId(uuid4())
        await repo.save(make_tag("Alpha", id=a_id, parent_id=b_id))
        await repo.save(make_tag("Beta", id=b_id, parent_id=a_id))

        # Act & Assert
        with pytest.raises(CycleDetectedError):
            await hierarchy.compute_tree_fields("Gamma", a_id)
