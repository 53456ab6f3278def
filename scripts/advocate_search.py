#!/usr/bin/env python3
"""Search the advocate directory through a running API server.

Drives the same search state the browser uses: filters are committed into a
query string, which is fetched from ``/api/advocates``. Results go to stdout
(table or JSON), summary messages to stderr.

Usage:
    python3 scripts/advocate_search.py --base-url http://localhost:8000 \
      --search jane --specialty "Trauma & PTSD" --specialty Bipolar --min-experience 5
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

import httpx
import orjson

from advocates.models import format_phone_number
from advocates.query_filters import ALLOWED_LIMITS, DEFAULT_LIMIT
from advocates.search_state import FilterState, SearchStateController


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search healthcare advocates by name/city, specialty, degree and experience."
    )
    parser.add_argument(
        "--base-url", default="http://localhost:8000", help="API server base URL"
    )
    parser.add_argument(
        "--query-string",
        default=None,
        help="Raw query string (e.g. copied from a shared link); overrides filter flags",
    )
    parser.add_argument("--search", default="", help="Name or city substring")
    parser.add_argument(
        "--specialty",
        action="append",
        default=[],
        help="Specialty tag (repeatable, any match)",
    )
    parser.add_argument("--degree", default="", help="Degree, e.g. MD, PhD, MSW")
    parser.add_argument(
        "--min-experience", type=int, default=0, help="Minimum years of experience"
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        choices=ALLOWED_LIMITS,
        help=f"Page size (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the raw response payload as JSON"
    )
    parser.add_argument(
        "--timeout", type=float, default=10.0, help="HTTP timeout in seconds"
    )
    return parser


def render_table(data: list[dict[str, Any]]) -> str:
    lines = []
    for adv in data:
        name = f"{adv['firstName']} {adv['lastName']}"
        lines.append(
            f"{adv['id']:>6}  {name:<24} {adv['city']:<16} {adv['degree']:<4} "
            f"{adv['yearsOfExperience']:>3}y  {format_phone_number(adv['phoneNumber'])}  "
            f"{', '.join(adv['specialties'])}"
        )
    return "\n".join(lines)


def state_from_args(args: argparse.Namespace) -> FilterState:
    if args.query_string is not None:
        return FilterState.from_query_string(args.query_string)
    return FilterState(
        search=args.search,
        specialties=tuple(args.specialty),
        degree=args.degree,
        min_experience=max(0, args.min_experience),
        page=max(1, args.page),
        limit=args.limit,
    )


async def run_search(
    args: argparse.Namespace,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SearchStateController:
    async with httpx.AsyncClient(
        base_url=args.base_url, timeout=args.timeout, transport=transport
    ) as client:
        controller = SearchStateController(client)
        # An unfiltered first page encodes to the already-committed empty string.
        if not await controller.navigate(state_from_args(args).to_query_string()):
            await controller.refresh()
        return controller


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    controller = asyncio.run(run_search(args))

    if controller.status == "error":
        print(f"Error: {controller.error}", file=sys.stderr)
        return 1

    if args.json:
        payload = {"data": controller.data, "pagination": controller.pagination}
        sys.stdout.buffer.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        sys.stdout.buffer.write(b"\n")
    elif controller.data:
        print(render_table(controller.data))

    p = controller.pagination
    print(
        f"Page {p['page']}/{p['totalPages']} ({p['total']} advocates, {p['limit']} per page)"
        + (f" [?{controller.query_string}]" if controller.query_string else ""),
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
