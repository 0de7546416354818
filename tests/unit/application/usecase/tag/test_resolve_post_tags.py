"""Unit tests for ResolvePostTagsUseCase."""

from uuid import uuid4

import pytest

from taxon.application.usecase.tag import (
    ResolvePostTagsRequest,
    ResolvePostTagsUseCase,
)
from taxon.domain.error import TagCountExceededError
from taxon.domain.model import TagDraft
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestResolvePostTagsUseCase:
    """Tests for ResolvePostTagsUseCase."""

    @pytest.mark.asyncio
    async def test_linked_tags_added(self, unit_env):
        """Choosing a tag brings its linked companions along."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        ts = await taxonomy.create_tag(TagDraft(name="TypeScript"))
        angular = await taxonomy.create_tag(
            TagDraft(name="Angular", linked_tag_ids=[ts.id])
        )
        use_case = ResolvePostTagsUseCase(taxonomy_service=taxonomy)

        # Act
        response = await use_case.execute(
            uuid4(), ResolvePostTagsRequest(tag_ids=[angular.id])
        )

        # Assert
        assert response.tag_ids == [str(angular.id), str(ts.id)]

    @pytest.mark.asyncio
    async def test_expanded_set_counts_against_limit(self, unit_env):
        """Linked companions count towards the per-post maximum."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        ts = await taxonomy.create_tag(TagDraft(name="TypeScript"))
        angular = await taxonomy.create_tag(
            TagDraft(name="Angular", linked_tag_ids=[ts.id])
        )
        taxonomy.update_config(max_tags_per_post=1)
        use_case = ResolvePostTagsUseCase(taxonomy_service=taxonomy)

        # Act & Assert
        with pytest.raises(TagCountExceededError):
            await use_case.execute(uuid4(), ResolvePostTagsRequest(tag_ids=[angular.id]))
