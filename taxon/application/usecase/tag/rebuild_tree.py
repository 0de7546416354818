"""Rebuild tree paths use case."""

from pydantic import BaseModel

from taxon.domain.service import TaxonomyService


class RebuildTreeResponse(BaseModel):
    """Rebuild tree paths response."""

    updated: int


class RebuildTreeUseCase:
    """Use case for recomputing path, label and level of every tag."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> RebuildTreeResponse:
        updated = await self.taxonomy_service.rebuild_tree_paths()
        return RebuildTreeResponse(updated=updated)
