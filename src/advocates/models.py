"""Advocate record types and their JSON wire shape."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from advocates.query_filters import total_pages

_PHONE_RE = re.compile(r"(\d{3})(\d{3})(\d{4})")


@dataclass(frozen=True, slots=True)
class NewAdvocate:
    """An advocate not yet inserted (no id / created_at)."""

    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: tuple[str, ...]
    years_of_experience: int
    phone_number: int


@dataclass(frozen=True, slots=True)
class AdvocateRecord:
    """A stored advocate row."""

    id: int
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: tuple[str, ...]
    years_of_experience: int
    phone_number: int
    created_at: datetime | None

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "city": self.city,
            "degree": self.degree,
            "specialties": list(self.specialties),
            "yearsOfExperience": self.years_of_experience,
            "phoneNumber": self.phone_number,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    def to_api(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }


def decode_specialties(value: Any) -> tuple[str, ...]:
    """DuckDB ``VARCHAR[]`` value (a list, or None) → tuple of tags."""
    if value is None:
        return ()
    return tuple(str(v) for v in value if v)


def advocate_from_row(d: dict[str, Any]) -> AdvocateRecord:
    """Build an AdvocateRecord from a column-name → value dict."""
    created = d.get("created_at")
    return AdvocateRecord(
        id=int(d["id"]),
        first_name=str(d.get("first_name", "")),
        last_name=str(d.get("last_name", "")),
        city=str(d.get("city", "")),
        degree=str(d.get("degree", "")),
        specialties=decode_specialties(d.get("specialties")),
        years_of_experience=int(d.get("years_of_experience") or 0),
        phone_number=int(d.get("phone_number") or 0),
        created_at=created if isinstance(created, datetime) else None,
    )


def format_phone_number(phone_number: int | str) -> str:
    """``5551234567`` → ``(555) 123-4567``; other shapes pass through."""
    return _PHONE_RE.sub(r"(\1) \2-\3", str(phone_number), count=1)
