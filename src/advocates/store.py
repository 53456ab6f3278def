"""DuckDB-backed store for advocate records.

Owns a single ``advocates`` table. Rows are inserted by the seed path and
read back by the listing/detail endpoints; nothing updates or deletes them.

Tables:
    advocates        — one row per advocate profile
    _schema_version  — schema version tracking
"""
from __future__ import annotations

import contextlib
import importlib
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from advocates.models import AdvocateRecord, NewAdvocate, advocate_from_row
from advocates.query_filters import (
    ADVOCATE_COLUMNS,
    AdvocateFilter,
    PageRequest,
    build_listing_queries,
)

# Dynamic DuckDB import for pyright compatibility
_duckdb_mod = importlib.import_module("duckdb")


SCHEMA_VERSION = "1.0.0"

# Rows per multi-row INSERT statement
_INSERT_BATCH_SIZE = 500

_SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS _schema_version (
    table_name VARCHAR PRIMARY KEY,
    version VARCHAR NOT NULL,
    created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS advocates_id_seq START 1;

CREATE TABLE IF NOT EXISTS advocates (
    id BIGINT PRIMARY KEY DEFAULT nextval('advocates_id_seq'),
    first_name VARCHAR NOT NULL,
    last_name VARCHAR NOT NULL,
    city VARCHAR NOT NULL,
    degree VARCHAR NOT NULL,
    specialties VARCHAR[] NOT NULL,
    years_of_experience INTEGER NOT NULL CHECK (years_of_experience >= 0),
    phone_number BIGINT NOT NULL,
    created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE INDEX IF NOT EXISTS idx_advocates_first_name ON advocates (first_name);
CREATE INDEX IF NOT EXISTS idx_advocates_last_name ON advocates (last_name);
CREATE INDEX IF NOT EXISTS idx_advocates_city ON advocates (city);
CREATE INDEX IF NOT EXISTS idx_advocates_degree ON advocates (degree);
CREATE INDEX IF NOT EXISTS idx_advocates_years_of_experience ON advocates (years_of_experience)
"""


class SchemaVersionError(RuntimeError):
    """Raised when an advocates DB schema version does not match expected."""


def _read_schema_version(conn: Any) -> str:
    result = conn.execute(
        "SELECT version FROM _schema_version WHERE table_name = 'advocates'"
    ).fetchone()
    return str(result[0]) if result else "unknown"


class AdvocateStore:
    """Read/write interface to the advocates DuckDB database.

    DuckDB connections are not thread-safe: share one store per process and
    call it from a single thread (the server's event loop).
    """

    def __init__(
        self,
        db_path: Path | str,
        *,
        create_if_missing: bool = False,
    ) -> None:
        self._db_path = Path(db_path) if str(db_path) != ":memory:" else None
        if self._db_path is not None and not self._db_path.exists():
            if not create_if_missing:
                raise FileNotFoundError(f"Advocates database not found: {self._db_path}")
            self._db_path.parent.mkdir(parents=True, exist_ok=True)

        target = str(self._db_path) if self._db_path is not None else ":memory:"
        self._conn: Any = _duckdb_mod.connect(target)
        try:
            self._create_schema()
        except Exception:
            self._conn.close()
            raise

    def _create_schema(self) -> None:
        for stmt in _SCHEMA_DDL.split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)

        actual = _read_schema_version(self._conn)
        if actual == "unknown":
            self._conn.execute(
                "INSERT INTO _schema_version (table_name, version) VALUES ('advocates', ?)",
                [SCHEMA_VERSION],
            )
        elif actual != SCHEMA_VERSION:
            where = f" in {self._db_path}" if self._db_path is not None else ""
            raise SchemaVersionError(
                f"Schema version mismatch{where}: expected {SCHEMA_VERSION}, got {actual}"
            )

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def __enter__(self) -> AdvocateStore:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    @property
    def db_path(self) -> Path | None:
        return self._db_path

    @property
    def schema_version(self) -> str:
        return _read_schema_version(self._conn)

    @property
    def advocate_count(self) -> int:
        """Total number of advocates in the store."""
        result = self._conn.execute("SELECT COUNT(*) FROM advocates").fetchone()
        return int(result[0]) if result else 0

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[tuple[Any, ...]]:
        """Execute a raw SQL query and return all rows."""
        if params:
            return self._conn.execute(sql, list(params)).fetchall()
        return self._conn.execute(sql).fetchall()

    def _records(self, rows: list[tuple[Any, ...]]) -> list[AdvocateRecord]:
        return [advocate_from_row(dict(zip(ADVOCATE_COLUMNS, r, strict=True))) for r in rows]

    def list_advocates(
        self,
        flt: AdvocateFilter,
        page: PageRequest,
    ) -> tuple[list[AdvocateRecord], int]:
        """One page of matching advocates plus the total match count.

        Count and page are two independent reads; they are not isolated
        from concurrent writers.
        """
        q = build_listing_queries(flt, page)
        count_row = self.query(q.count_sql, q.count_params)
        total = int(count_row[0][0]) if count_row else 0
        rows = self.query(q.page_sql, q.page_params)
        return self._records(rows), total

    def get_advocate(self, advocate_id: int) -> AdvocateRecord | None:
        columns = ", ".join(ADVOCATE_COLUMNS)
        rows = self.query(
            f"SELECT {columns} FROM advocates WHERE id = ?", [advocate_id]
        )
        if not rows:
            return None
        return self._records(rows)[0]

    def distinct_degrees(self) -> list[str]:
        rows = self.query("SELECT DISTINCT degree FROM advocates ORDER BY degree")
        return [str(r[0]) for r in rows]

    def insert_advocates(self, advocates: Iterable[NewAdvocate]) -> list[AdvocateRecord]:
        """Insert *advocates* in one transaction and return the stored rows."""
        pending = list(advocates)
        if not pending:
            return []

        columns = ", ".join(ADVOCATE_COLUMNS)
        inserted: list[AdvocateRecord] = []
        self._conn.execute("BEGIN TRANSACTION")
        try:
            for start in range(0, len(pending), _INSERT_BATCH_SIZE):
                batch = pending[start:start + _INSERT_BATCH_SIZE]
                values_sql = ", ".join(["(?, ?, ?, ?, ?::VARCHAR[], ?, ?)"] * len(batch))
                params: list[Any] = []
                for adv in batch:
                    params.extend([
                        adv.first_name,
                        adv.last_name,
                        adv.city,
                        adv.degree,
                        list(adv.specialties),
                        adv.years_of_experience,
                        adv.phone_number,
                    ])
                rows = self._conn.execute(
                    "INSERT INTO advocates "
                    "(first_name, last_name, city, degree, specialties, "
                    "years_of_experience, phone_number) "
                    f"VALUES {values_sql} RETURNING {columns}",
                    params,
                ).fetchall()
                inserted.extend(self._records(rows))
            self._conn.execute("COMMIT")
        except Exception:
            with contextlib.suppress(Exception):
                self._conn.execute("ROLLBACK")
            raise
        inserted.sort(key=lambda r: r.id)
        return inserted
