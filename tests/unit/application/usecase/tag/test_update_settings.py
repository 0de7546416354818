"""Unit tests for the settings use cases."""

import pytest

from taxon.application.usecase.tag import (
    GetSettingsUseCase,
    UpdateSettingsRequest,
    UpdateSettingsUseCase,
)
from taxon.domain.error import ValidationError
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSettingsUseCases:
    """Tests for reading and changing the taxonomy settings."""

    @pytest.mark.asyncio
    async def test_partial_update(self, unit_env):
        """Only the fields sent change."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        use_case = UpdateSettingsUseCase(taxonomy_service=taxonomy)

        # Act
        updated = await use_case.execute(
            UpdateSettingsRequest(duplicate_threshold=0.5, enable_following=False)
        )
        current = await GetSettingsUseCase(taxonomy_service=taxonomy).execute()

        # Assert
        assert updated.duplicate_threshold == 0.5
        assert not updated.enable_following
        assert updated.max_bulk_ids == 100
        assert current == updated

    @pytest.mark.asyncio
    async def test_invalid_value(self, unit_env):
        """Out-of-range values are rejected and nothing changes."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        use_case = UpdateSettingsUseCase(taxonomy_service=taxonomy)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(UpdateSettingsRequest(max_bulk_ids=0))

        assert taxonomy.config.max_bulk_ids == 100
