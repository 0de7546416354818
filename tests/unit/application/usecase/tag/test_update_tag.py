"""Unit tests for UpdateTagUseCase."""

from uuid import UUID

import pytest

from taxon.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateTagUseCase:
    """Tests for UpdateTagUseCase."""

    @pytest.mark.asyncio
    async def test_only_sent_fields_change(self, unit_env):
        """Fields absent from the request keep their values."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        created = await CreateTagUseCase(taxonomy_service=taxonomy).execute(
            CreateTagRequest(name="Kubernetes", description="Orchestration", icon="k8s")
        )
        use_case = UpdateTagUseCase(taxonomy_service=taxonomy)

        # Act
        response = await use_case.execute(
            UUID(created.tag.id), UpdateTagRequest(description="Containers")
        )

        # Assert
        assert response.tag.description == "Containers"
        assert response.tag.icon == "k8s"
        assert response.tag.name == "Kubernetes"

    @pytest.mark.asyncio
    async def test_explicit_null_parent_moves_to_root(self, unit_env):
        """Sending parent_id as null detaches the tag."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        create = CreateTagUseCase(taxonomy_service=taxonomy)
        parent = await create.execute(CreateTagRequest(name="Cloud"))
        child = await create.execute(
            CreateTagRequest(name="Lambda", parent_id=parent.tag.id)
        )
        use_case = UpdateTagUseCase(taxonomy_service=taxonomy)

        # Act
        response = await use_case.execute(
            UUID(child.tag.id), UpdateTagRequest.model_validate({"parent_id": None})
        )

        # Assert
        assert response.tag.parent_id is None
        assert response.tag.path == "lambda"
