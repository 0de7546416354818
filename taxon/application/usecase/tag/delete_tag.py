"""Delete tag use case."""

from uuid import UUID

import logfire

from taxon.domain.service import TaxonomyService
from taxon.domain.value import TagId


class DeleteTagUseCase:
    """Use case for deleting a single tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, tag_id: UUID) -> None:
        """Delete a tag.

        Raises:
            TagNotFoundError: If the tag does not exist
            TagLockedError: If the tag is locked
            TagProtectedError: If the tag is protected under protect-all
        """
        with logfire.span("delete_tag.execute", tag_id=str(tag_id)):
            await self.taxonomy_service.delete_tag(TagId(tag_id))
