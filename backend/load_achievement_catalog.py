"""
Seed or refresh the achievements table from a JSON catalog.

Run after `alembic upgrade head` on a fresh database, and again whenever the
catalog file changes. Rows are matched by code, so reruns are safe.

    cd backend && python load_achievement_catalog.py
    cd backend && python load_achievement_catalog.py --path my_catalog.json
"""
import argparse
import logging
from pathlib import Path

from liftbook.db import SessionLocal
from liftbook.services.achievements import DEFAULT_CATALOG, load_catalog


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Load the achievement catalog into the database.")
    parser.add_argument(
        "--path",
        type=Path,
        default=None,
        help=f"catalog JSON (default: ACHIEVEMENT_CATALOG_PATH or {DEFAULT_CATALOG.name})",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    args = parse_args(argv)
    if args.path is not None and not args.path.is_file():
        print(f"Catalog not found: {args.path}")
        return 1

    with SessionLocal() as db:
        touched = load_catalog(db, args.path)
    print(f"Loaded {touched} achievements")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
