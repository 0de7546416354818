"""Create tag use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from taxon.domain.model import TagDraft
from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId

from .common import TagItem


class CreateTagRequest(BaseModel):
    """Create tag request."""

    name: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image: Optional[str] = None
    parent_id: Optional[UUID] = None
    featured: bool = False
    locked: bool = False
    protected: bool = False
    synonyms: list[str] = Field(default_factory=list)
    linked_tag_ids: list[UUID] = Field(default_factory=list)


class CreateTagResponse(BaseModel):
    """Create tag response."""

    tag: TagItem


class CreateTagUseCase:
    """Use case for creating a tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize create tag use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: CreateTagRequest) -> CreateTagResponse:
        """Execute create tag flow.

        Args:
            request: Create tag request

        Returns:
            Created tag

        Raises:
            DuplicateNameOrSlugError: If the name or slug is taken
            TagNotFoundError: If the parent or a linked tag does not exist
        """
        with logfire.span("create_tag.execute", name=request.name):
            draft = TagDraft(
                **request.model_dump(exclude={"parent_id", "linked_tag_ids"}),
                parent_id=TagId(request.parent_id) if request.parent_id else None,
                linked_tag_ids=[TagId(linked) for linked in request.linked_tag_ids],
            )
            tag = await self.taxonomy_service.create_tag(draft)
            return CreateTagResponse(tag=TagItem.from_domain(tag))
