"""Get tag use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, model_validator

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import TagItem


class GetTagRequest(BaseModel):
    """Get tag request, by id or by slug."""

    tag_id: Optional[UUID] = None
    slug: Optional[str] = None

    @model_validator(mode="after")
    def require_one_key(self) -> "GetTagRequest":
        """Exactly one of tag_id and slug must be given."""
        if (self.tag_id is None) == (self.slug is None):
            raise ValueError("Provide exactly one of tag_id or slug")
        return self


class GetTagUseCase:
    """Use case for fetching a single tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: GetTagRequest) -> TagItem:
        """Execute get tag flow.

        Raises:
            TagNotFoundError: If no tag matches
        """
        if request.tag_id is not None:
            tag = await self.taxonomy_service.get_tag(TagId(request.tag_id))
        else:
            tag = await self.taxonomy_service.get_tag_by_slug(request.slug or "")
        return TagItem.from_domain(tag)
