"""Taxonomy settings use cases."""

from typing import Any, Optional

import logfire
from pydantic import BaseModel

from taxon.config import TaxonomySettings
from taxon.domain.service import TaxonomyService


class UpdateSettingsRequest(BaseModel):
    """Update settings request.

    Only fields present in the request body are changed; ``health`` is
    replaced as a whole when given.
    """

    duplicate_threshold: Optional[float] = None
    max_bulk_ids: Optional[int] = None
    max_name_length: Optional[int] = None
    max_slug_length: Optional[int] = None
    max_synonyms: Optional[int] = None
    max_linked_tags: Optional[int] = None
    max_tags_per_post: Optional[int] = None
    case_sensitive: Optional[bool] = None
    force_lowercase: Optional[bool] = None
    default_color: Optional[str] = None
    enable_tree: Optional[bool] = None
    tree_separator: Optional[str] = None
    max_tree_depth: Optional[int] = None
    protect_all: Optional[bool] = None
    auto_cleanup_days: Optional[int] = None
    enable_following: Optional[bool] = None
    trending_window_days: Optional[int] = None
    trending_limit: Optional[int] = None
    health: Optional[dict[str, Any]] = None


class GetSettingsUseCase:
    """Use case returning the configuration in effect."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> TaxonomySettings:
        return self.taxonomy_service.config


class UpdateSettingsUseCase:
    """Use case for changing the taxonomy configuration at runtime."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize update settings use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: UpdateSettingsRequest) -> TaxonomySettings:
        """Validate and apply the requested changes.

        Raises:
            ValidationError: If a value is invalid; nothing changes then
        """
        changes = request.model_dump(include=request.model_fields_set)
        with logfire.span("update_settings.execute", fields=sorted(changes)):
            return self.taxonomy_service.update_config(**changes)
