#!/usr/bin/env python3
"""Run taxonomy maintenance jobs from the command line.

Each job runs in one database transaction, committed when it succeeds.

Usage:
    python scripts/taxonomy_maintenance.py rebuild-paths
    python scripts/taxonomy_maintenance.py merge-duplicates --threshold 0.3 --dry-run
    python scripts/taxonomy_maintenance.py cleanup-orphans
    python scripts/taxonomy_maintenance.py update-trending
"""

import argparse
import asyncio
import sys

import logfire

from taxon.config import Settings
from taxon.domain.service import TaxonomyService
from taxon.util.di.container import create_container
from taxon.util.logging import setup_logging
from taxon.util.observability import configure_logfire


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(description="Tag taxonomy maintenance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("rebuild-paths", help="Recompute every path, label and level")

    merge = subparsers.add_parser("merge-duplicates", help="Merge duplicate clusters")
    merge.add_argument("--threshold", type=float, default=None)
    merge.add_argument("--dry-run", action="store_true")

    subparsers.add_parser("cleanup-orphans", help="Delete unused tags")
    subparsers.add_parser("update-trending", help="Recompute trending flags")
    return parser


async def run(args: argparse.Namespace, service: TaxonomyService) -> None:
    """Dispatch one maintenance command."""
    if args.command == "rebuild-paths":
        updated = await service.rebuild_tree_paths()
        print(f"Rebuilt paths: {updated} tags updated")
    elif args.command == "merge-duplicates":
        result = await service.bulk_merge_duplicates(
            threshold=args.threshold, dry_run=args.dry_run
        )
        prefix = "[dry run] " if result.dry_run else ""
        for receipt in result.merges:
            print(
                f"{prefix}{receipt.survivor_name}: absorbed {len(receipt.merged_ids)} tags, "
                f"{receipt.posts_relinked} posts relinked"
            )
        for skipped in result.skipped:
            print(f"skipped {skipped.survivor_name}: {skipped.reason}")
        print(
            f"{prefix}{result.groups_merged} groups merged, "
            f"{result.tags_deleted} tags deleted"
        )
    elif args.command == "cleanup-orphans":
        cleanup = await service.cleanup_orphaned_tags()
        print(f"Deleted {cleanup.deleted} orphaned tags, skipped {cleanup.skipped}")
    elif args.command == "update-trending":
        count = await service.update_trending_tags()
        print(f"{count} tags marked trending")


async def amain(args: argparse.Namespace) -> None:
    container = create_container(web=False)
    try:
        async with container() as request_container:
            service = await request_container.get(TaxonomyService)
            with logfire.span("maintenance.run", command=args.command):
                await run(args, service)
    finally:
        await container.close()


def main() -> int:
    """Parse arguments and run the chosen maintenance job."""
    args = build_parser().parse_args()
    settings = Settings()

    configure_logfire(settings, service_name="taxon-maintenance")
    setup_logging(settings)

    try:
        asyncio.run(amain(args))
        return 0
    except Exception as e:
        logfire.error(
            "Maintenance job failed",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
