"""Unit tests for the hierarchy use cases."""

import pytest

from taxon.application.usecase.tag import (
    GetTagRelativesUseCase,
    GetTagTreeUseCase,
    RebuildTreeUseCase,
    TagRelation,
)
from taxon.domain.model import TagDraft
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestHierarchyUseCases:
    """Tests for tree, relatives and rebuild."""

    @pytest.mark.asyncio
    async def test_tree_and_relatives(self, unit_env):
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        science = await taxonomy.create_tag(TagDraft(name="Science"))
        biology = await taxonomy.create_tag(TagDraft(name="Biology", parent_id=science.id))
        await taxonomy.create_tag(TagDraft(name="Chemistry", parent_id=science.id))
        await taxonomy.create_tag(TagDraft(name="Genetics", parent_id=biology.id))

        # Act
        tree = await GetTagTreeUseCase(taxonomy_service=taxonomy).execute()
        ancestors = await GetTagRelativesUseCase(taxonomy_service=taxonomy).execute(
            biology.id, TagRelation.ANCESTORS
        )
        siblings = await GetTagRelativesUseCase(taxonomy_service=taxonomy).execute(
            biology.id, TagRelation.SIBLINGS
        )

        # Assert
        assert tree.total_tags == 4
        assert [node.name for node in tree.roots] == ["Science"]
        assert [node.name for node in tree.roots[0].children] == ["Biology", "Chemistry"]
        assert tree.roots[0].children[0].children[0].path == "science/biology/genetics"
        assert [tag.id for tag in ancestors.tags] == [str(science.id)]
        assert [tag.name for tag in siblings.tags] == ["Chemistry"]

    @pytest.mark.asyncio
    async def test_rebuild_on_consistent_tree(self, unit_env):
        """A tree maintained by the service needs no rebuild."""
        taxonomy = await unit_env.get(TaxonomyService)
        root = await taxonomy.create_tag(TagDraft(name="Root"))
        await taxonomy.create_tag(TagDraft(name="Leaf", parent_id=root.id))

        response = await RebuildTreeUseCase(taxonomy_service=taxonomy).execute()

        assert response.updated == 0
