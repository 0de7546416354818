"""Update tag use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.model import TagChanges
from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import TagItem


class UpdateTagRequest(BaseModel):
    """Update tag request.

    Only fields present in the request body are changed. Sending
    ``"parent_id": null`` moves the tag to the root level.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image: Optional[str] = None
    parent_id: Optional[UUID] = None
    featured: Optional[bool] = None
    locked: Optional[bool] = None
    protected: Optional[bool] = None
    synonyms: Optional[list[str]] = None
    linked_tag_ids: Optional[list[UUID]] = None
    force_unlock: bool = False


class UpdateTagResponse(BaseModel):
    """Update tag response."""

    tag: TagItem


class UpdateTagUseCase:
    """Use case for partially updating a tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize update tag use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, tag_id: UUID, request: UpdateTagRequest) -> UpdateTagResponse:
        """Execute update tag flow.

        Args:
            tag_id: Tag to update
            request: Fields to change

        Returns:
            Updated tag

        Raises:
            TagNotFoundError: If the tag does not exist
            TagLockedError: If the tag is locked
            CycleDetectedError: If the new parent is a descendant
        """
        with logfire.span(
            "update_tag.execute",
            tag_id=str(tag_id),
            fields=sorted(request.model_fields_set),
        ):
            changes = TagChanges.model_validate(
                request.model_dump(include=request.model_fields_set)
            )
            tag = await self.taxonomy_service.update_tag(TagId(tag_id), changes)
            return UpdateTagResponse(tag=TagItem.from_domain(tag))
