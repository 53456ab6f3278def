#!/usr/bin/env python3
"""Seed an advocates DuckDB file with the sample dataset plus random profiles.

Writes directly to the database (no server needed). Summary goes to stderr,
inserted records to stdout as JSON when ``--json`` is given.

Usage:
    python3 scripts/seed_advocates.py --db data/advocates.duckdb --random-count 1000
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

import orjson

from advocates.config import get_settings
from advocates.seed_data import build_seed_dataset
from advocates.store import AdvocateStore

log = logging.getLogger("seed_advocates")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Seed the advocates database with sample data."
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=settings.db_path,
        help=f"Path to advocates.duckdb (default: {settings.db_path})",
    )
    parser.add_argument(
        "--random-count",
        type=int,
        default=settings.seed_random_count,
        help=f"Generated records on top of the fixed sample (default: {settings.seed_random_count})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed for reproducible generated records",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print inserted records as JSON to stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if get_settings().is_production:
        log.error("Refusing to seed: ADVOCATES_ENV is production")
        return 1
    if args.random_count < 0:
        log.error("--random-count must be >= 0")
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    dataset = build_seed_dataset(args.random_count, rng)

    with AdvocateStore(args.db, create_if_missing=True) as store:
        records = store.insert_advocates(dataset)
        log.info(
            "Inserted %d advocates into %s (%d total)",
            len(records),
            args.db,
            store.advocate_count,
        )

    if args.json:
        sys.stdout.buffer.write(
            orjson.dumps([r.to_api() for r in records], option=orjson.OPT_INDENT_2)
        )
        sys.stdout.buffer.write(b"\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
