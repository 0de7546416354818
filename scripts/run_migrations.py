#!/usr/bin/env python3
"""Apply or roll back taxonomy schema migrations.

Usage:
    python scripts/run_migrations.py               # upgrade to head
    python scripts/run_migrations.py 3c1f9a7d2e64  # upgrade to a revision
    python scripts/run_migrations.py base --downgrade
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from taxon.config import Settings
from taxon.util.logging import setup_logging
from taxon.util.observability import configure_logfire


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(description="Taxonomy schema migrations")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--downgrade", action="store_true", help="Roll back to the revision instead"
    )
    parser.add_argument("--config", default="alembic.ini", help="Alembic config file")
    return parser


def main() -> int:
    """Run migrations and report failures to Logfire."""
    args = build_parser().parse_args()
    settings = Settings()

    configure_logfire(settings, service_name="taxon-migrations")
    setup_logging(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    alembic_cfg = Config(args.config)
    alembic_cfg.attributes["configure_logger"] = False

    try:
        with logfire.span(
            "migrations.run", direction=direction, revision=args.revision
        ):
            if args.downgrade:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)

        logfire.info("Migrations applied", direction=direction, revision=args.revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            direction=direction,
            revision=args.revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy never starts against a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main())
