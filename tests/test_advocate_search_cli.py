"""Tests for scripts/advocate_search.py."""
from __future__ import annotations

import asyncio

import httpx

from advocates.search_state import FilterState
from scripts import advocate_search


def _handler_recording(seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": 1,
                        "firstName": "Jane",
                        "lastName": "Smith",
                        "city": "Austin",
                        "degree": "PhD",
                        "specialties": ["Bipolar", "LGBTQ"],
                        "yearsOfExperience": 8,
                        "phoneNumber": 5559876543,
                        "createdAt": None,
                    }
                ],
                "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1},
            },
        )

    return handler


def test_state_from_flags() -> None:
    args = advocate_search.build_parser().parse_args([
        "--search", "jane",
        "--specialty", "Bipolar",
        "--specialty", "LGBTQ",
        "--min-experience", "5",
        "--limit", "10",
    ])
    assert advocate_search.state_from_args(args) == FilterState(
        search="jane",
        specialties=("Bipolar", "LGBTQ"),
        min_experience=5,
        limit=10,
    )


def test_state_from_query_string_overrides_flags() -> None:
    args = advocate_search.build_parser().parse_args([
        "--search", "ignored", "--query-string", "degree=MD&page=2",
    ])
    assert advocate_search.state_from_args(args) == FilterState(degree="MD", page=2)


def test_run_search_issues_one_request() -> None:
    seen: list[httpx.Request] = []
    args = advocate_search.build_parser().parse_args(["--search", "jane", "--limit", "10"])
    controller = asyncio.run(
        advocate_search.run_search(args, transport=httpx.MockTransport(_handler_recording(seen)))
    )
    assert len(seen) == 1
    assert seen[0].url.path == "/api/advocates"
    assert dict(seen[0].url.params) == {"search": "jane", "limit": "10"}
    assert controller.status == "idle"


def test_run_search_unfiltered_still_fetches() -> None:
    seen: list[httpx.Request] = []
    args = advocate_search.build_parser().parse_args([])
    asyncio.run(
        advocate_search.run_search(args, transport=httpx.MockTransport(_handler_recording(seen)))
    )
    assert [str(r.url) for r in seen] == ["http://localhost:8000/api/advocates"]


def test_render_table() -> None:
    table = advocate_search.render_table([
        {
            "id": 1,
            "firstName": "Jane",
            "lastName": "Smith",
            "city": "Austin",
            "degree": "PhD",
            "specialties": ["Bipolar", "LGBTQ"],
            "yearsOfExperience": 8,
            "phoneNumber": 5559876543,
        }
    ])
    assert "Jane Smith" in table
    assert "(555) 987-6543" in table
    assert "Bipolar, LGBTQ" in table
