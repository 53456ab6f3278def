"""Filter composition and pagination normalization for the advocate listing.

Turns the optional listing parameters into one SQL predicate that is shared
by the count query and the page query.

Functions:

* ``parse_int_param`` — lenient integer coercion (leading digits, never raises).
* ``split_specialties`` — comma-separated tag list → tuple of tags.
* ``normalize_page`` / ``normalize_limit`` — clamp page, snap limit to the allow-list.
* ``normalize_min_experience`` — clamp the experience threshold to the column range.
* ``filter_from_params`` / ``page_from_params`` — boundary normalization for raw query values.
* ``escape_like`` — escape ``%`` and ``_`` for ILIKE literals.
* ``build_advocate_filter_sql`` — AND of the supplied criteria.
* ``build_listing_queries`` — count + page SQL sharing the same predicate.
* ``total_pages`` — ``ceil(total / limit)``.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ALLOWED_LIMITS: tuple[int, ...] = (10, 25, 100)
DEFAULT_LIMIT = 25
DEFAULT_PAGE = 1

# OFFSET is a signed 64-bit parameter; (MAX_PAGE - 1) * limit must fit in it
MAX_PAGE = (2**63 - 1) // max(ALLOWED_LIMITS)

# years_of_experience is an INTEGER column
MAX_EXPERIENCE = 2**31 - 1

# Columns matched by the free-text search (OR'ed together)
SEARCH_COLUMNS: tuple[str, ...] = ("first_name", "last_name", "city")

ADVOCATE_COLUMNS: tuple[str, ...] = (
    "id",
    "first_name",
    "last_name",
    "city",
    "degree",
    "specialties",
    "years_of_experience",
    "phone_number",
    "created_at",
)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# Criteria types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AdvocateFilter:
    """Normalized listing criteria. Empty values contribute no conjunct."""

    search: str = ""
    specialties: tuple[str, ...] = ()
    degree: str = ""
    min_experience: int = 0

    @property
    def is_empty(self) -> bool:
        return not (
            self.search or self.specialties or self.degree or self.min_experience > 0
        )


@dataclass(frozen=True, slots=True)
class PageRequest:
    """1-based page number plus an allow-listed page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class ListingQueries:
    """Count and page statements compiled from the same predicate."""

    count_sql: str
    count_params: tuple[Any, ...]
    page_sql: str
    page_params: tuple[Any, ...]


# ---------------------------------------------------------------------------
# Parameter normalization
# ---------------------------------------------------------------------------

def parse_int_param(raw: object, default: int) -> int:
    """Coerce a raw query value to ``int``.

    Accepts an optional sign followed by digits and ignores anything after
    them (``"12abc"`` → 12, ``"3.7"`` → 3). Missing or non-numeric input
    returns *default*.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT_RE.match(str(raw))
    if not m:
        return default
    return int(m.group(1))


def split_specialties(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated specialty list, dropping empty fragments."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def normalize_page(raw: object) -> int:
    """Page numbers are 1-based; zero, negatives and junk become 1.

    Pages past ``MAX_PAGE`` are capped there; they are empty anyway.
    """
    return min(MAX_PAGE, max(DEFAULT_PAGE, parse_int_param(raw, DEFAULT_PAGE)))


def normalize_limit(raw: object) -> int:
    """Snap *raw* to the page-size allow-list, falling back to 25."""
    value = parse_int_param(raw, DEFAULT_LIMIT)
    return value if value in ALLOWED_LIMITS else DEFAULT_LIMIT


def normalize_min_experience(raw: object) -> int:
    """Experience thresholds below 1 mean "no filter"; huge ones are capped."""
    return min(MAX_EXPERIENCE, max(0, parse_int_param(raw, 0)))


def filter_from_params(
    *,
    search: str | None = None,
    specialties: str | None = None,
    degree: str | None = None,
    min_experience: object = None,
) -> AdvocateFilter:
    """Build an ``AdvocateFilter`` from raw query-string values."""
    return AdvocateFilter(
        search=search or "",
        specialties=split_specialties(specialties),
        degree=degree or "",
        min_experience=normalize_min_experience(min_experience),
    )


def page_from_params(*, page: object = None, limit: object = None) -> PageRequest:
    return PageRequest(page=normalize_page(page), limit=normalize_limit(limit))


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


# ---------------------------------------------------------------------------
# SQL generation
# ---------------------------------------------------------------------------

def escape_like(value: str) -> str:
    """Escape SQL LIKE/ILIKE wildcards so ``%`` and ``_`` match literally.

    Uses backslash as escape character (pair with ``ESCAPE '\\\\'`` in SQL).
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_search_sql(
    text: str,
    columns: tuple[str, ...] = SEARCH_COLUMNS,
) -> tuple[str, list[Any]]:
    """Substring match of *text* against any of *columns*, case-insensitive."""
    pattern = f"%{escape_like(text)}%"
    parts = [f"{col} ILIKE ? ESCAPE '\\'" for col in columns]
    return ("(" + " OR ".join(parts) + ")", [pattern] * len(columns))


def build_advocate_filter_sql(flt: AdvocateFilter) -> tuple[str, list[Any]]:
    """Compile *flt* into a WHERE fragment (without ``WHERE``) + parameters.

    Each supplied criterion contributes one conjunct:

    * search → ``(first_name ILIKE ? OR last_name ILIKE ? OR city ILIKE ?)``
    * specialties → ``list_has_any(specialties, ?)`` (any shared tag matches)
    * degree → ``lower(degree) = lower(?)``
    * min_experience > 0 → ``years_of_experience >= ?``

    Returns ``("", [])`` when nothing is supplied, meaning "match everything".
    """
    if flt.is_empty:
        return ("", [])

    conditions: list[str] = []
    params: list[Any] = []

    if flt.search:
        sql, p = build_search_sql(flt.search)
        conditions.append(sql)
        params.extend(p)
    if flt.specialties:
        conditions.append("list_has_any(specialties, ?::VARCHAR[])")
        params.append(list(flt.specialties))
    if flt.degree:
        conditions.append("lower(degree) = lower(?)")
        params.append(flt.degree)
    if flt.min_experience > 0:
        conditions.append("years_of_experience >= ?")
        params.append(flt.min_experience)

    return (" AND ".join(conditions), params)


def build_where(*conditions: str) -> str:
    """Join non-empty conditions into a WHERE clause."""
    parts = [c for c in conditions if c]
    if not parts:
        return ""
    return " WHERE " + " AND ".join(parts)


def build_listing_queries(
    flt: AdvocateFilter,
    page: PageRequest,
    *,
    table: str = "advocates",
) -> ListingQueries:
    """Count query and page query over the same predicate.

    The page query is ordered by ``id`` so consecutive pages do not overlap.
    """
    predicate, params = build_advocate_filter_sql(flt)
    where = build_where(predicate)
    columns = ", ".join(ADVOCATE_COLUMNS)
    return ListingQueries(
        count_sql=f"SELECT COUNT(*) FROM {table}{where}",
        count_params=tuple(params),
        page_sql=(
            f"SELECT {columns} FROM {table}{where} "
            f"ORDER BY id ASC "
            f"LIMIT ? OFFSET ?"
        ),
        page_params=(*params, page.limit, page.offset),
    )
