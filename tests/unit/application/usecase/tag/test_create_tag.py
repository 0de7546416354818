"""Unit tests for CreateTagUseCase."""

import pytest

from taxon.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    GetTagRequest,
    GetTagUseCase,
)
from taxon.domain.error import DuplicateNameOrSlugError, TagNotFoundError
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateTagUseCase:
    """Tests for CreateTagUseCase."""

    @pytest.mark.asyncio
    async def test_create_child_tag(self, unit_env):
        """A child tag comes back with its path and string ids."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        use_case = CreateTagUseCase(taxonomy_service=taxonomy)
        parent = await use_case.execute(CreateTagRequest(name="Databases"))

        # Act
        response = await use_case.execute(
            CreateTagRequest(
                name="PostgreSQL",
                parent_id=parent.tag.id,
                synonyms=["Postgres", "PG"],
            )
        )

        # Assert
        assert response.tag.slug == "postgresql"
        assert response.tag.parent_id == parent.tag.id
        assert response.tag.path == "databases/postgresql"
        assert response.tag.level == 2
        assert response.tag.synonyms == ["postgres", "pg"]

    @pytest.mark.asyncio
    async def test_create_duplicate(self, unit_env):
        """Creating the same tag twice conflicts."""
        taxonomy = await unit_env.get(TaxonomyService)
        use_case = CreateTagUseCase(taxonomy_service=taxonomy)
        await use_case.execute(CreateTagRequest(name="Redis"))

        with pytest.raises(DuplicateNameOrSlugError):
            await use_case.execute(CreateTagRequest(name="redis"))


class TestGetTagUseCase:
    """Tests for GetTagUseCase."""

    @pytest.mark.asyncio
    async def test_get_by_id_and_slug(self, unit_env):
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        created = await CreateTagUseCase(taxonomy_service=taxonomy).execute(
            CreateTagRequest(name="Web Assembly", slug="wasm")
        )
        use_case = GetTagUseCase(taxonomy_service=taxonomy)

        # Act
        by_id = await use_case.execute(GetTagRequest(tag_id=created.tag.id))
        by_slug = await use_case.execute(GetTagRequest(slug="wasm"))

        # Assert
        assert by_id.id == by_slug.id == created.tag.id

    @pytest.mark.asyncio
    async def test_invalid_slug_is_not_found(self, unit_env):
        """A malformed slug cannot match any tag."""
        taxonomy = await unit_env.get(TaxonomyService)
        use_case = GetTagUseCase(taxonomy_service=taxonomy)

        with pytest.raises(TagNotFoundError):
            await use_case.execute(GetTagRequest(slug="Not A Slug"))
