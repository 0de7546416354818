"""Unit tests for TaxonomyService configuration handling."""

import pytest

from taxon.config import ConfigCell
from taxon.domain.error import ValidationError
from taxon.domain.service import TaxonomyService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestTaxonomyConfig:
    """Tests for runtime configuration updates."""

    @pytest.mark.asyncio
    async def test_defaults(self, unit_env):
        taxonomy = await unit_env.get(TaxonomyService)

        assert taxonomy.config.duplicate_threshold == 0.28
        assert taxonomy.config.max_bulk_ids == 100
        assert taxonomy.config.enable_following
        assert taxonomy.config.health.duplicate_threshold == 0.35

    @pytest.mark.asyncio
    async def test_update_is_shared(self, unit_env):
        """An update is seen by everything holding the same cell."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        cell = await unit_env.get(ConfigCell)

        # Act
        updated = taxonomy.update_config(max_bulk_ids=5, protect_all=True)

        # Assert
        assert updated.max_bulk_ids == 5
        assert cell.current is updated
        assert taxonomy.config.protect_all

    @pytest.mark.asyncio
    async def test_invalid_update_changes_nothing(self, unit_env):
        """A rejected update leaves the old configuration in place."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)
        before = taxonomy.config

        # Act & Assert
        with pytest.raises(ValidationError):
            taxonomy.update_config(max_bulk_ids=5, duplicate_threshold=2.0)

        assert taxonomy.config is before

    @pytest.mark.asyncio
    async def test_update_health_block(self, unit_env):
        """Nested health thresholds are replaced as a whole."""
        # Arrange
        taxonomy = await unit_env.get(TaxonomyService)

        # Act
        updated = taxonomy.update_config(health={"max_root_tags": 50})

        # Assert
        assert updated.health.max_root_tags == 50
        assert updated.health.orphan_ratio == 0.3
