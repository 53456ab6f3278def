"""Tests for advocates.models and advocates.config."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from advocates.config import Settings
from advocates.models import (
    AdvocateRecord,
    Pagination,
    advocate_from_row,
    decode_specialties,
    format_phone_number,
)


def test_to_api_camel_case() -> None:
    rec = AdvocateRecord(
        id=7,
        first_name="Jane",
        last_name="Smith",
        city="Los Angeles",
        degree="PhD",
        specialties=("Bipolar",),
        years_of_experience=8,
        phone_number=5559876543,
        created_at=datetime(2026, 1, 2, 3, 4, 5),
    )
    assert rec.to_api() == {
        "id": 7,
        "firstName": "Jane",
        "lastName": "Smith",
        "city": "Los Angeles",
        "degree": "PhD",
        "specialties": ["Bipolar"],
        "yearsOfExperience": 8,
        "phoneNumber": 5559876543,
        "createdAt": "2026-01-02T03:04:05",
    }


def test_pagination_to_api() -> None:
    assert Pagination(page=1, limit=25, total=47).to_api() == {
        "page": 1, "limit": 25, "total": 47, "totalPages": 2,
    }
    assert Pagination(page=1, limit=25, total=0).to_api()["totalPages"] == 0


def test_decode_specialties() -> None:
    assert decode_specialties(None) == ()
    assert decode_specialties(["a", "b"]) == ("a", "b")
    assert decode_specialties(("a", "")) == ("a",)


def test_advocate_from_row_missing_specialties_is_empty() -> None:
    rec = advocate_from_row({"id": 1, "first_name": "A", "specialties": None})
    assert rec.specialties == ()
    assert rec.created_at is None


def test_format_phone_number() -> None:
    assert format_phone_number(5551234567) == "(555) 123-4567"
    assert format_phone_number("123") == "123"


def test_settings_from_env() -> None:
    s = Settings.from_env({
        "ADVOCATES_DB_PATH": "/tmp/x.duckdb",
        "ADVOCATES_ENV": "Production",
        "ADVOCATES_SEED_RANDOM_COUNT": "10",
        "ADVOCATES_CORS_ORIGINS": "http://a, http://b,",
        "ADVOCATES_LOG_LEVEL": "debug",
    })
    assert s.db_path == Path("/tmp/x.duckdb")
    assert s.is_production
    assert s.seed_random_count == 10
    assert s.cors_origins == ("http://a", "http://b")
    assert s.log_level == "DEBUG"


def test_settings_defaults() -> None:
    s = Settings.from_env({})
    assert s == Settings()
    assert not s.is_production
    assert s.seed_random_count == 1000
