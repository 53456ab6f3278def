"""Runtime configuration for the advocate directory, read from the environment."""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
)


def _split_csv(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _int_env(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


@dataclass(frozen=True, slots=True)
class Settings:
    db_path: Path = Path("data/advocates.duckdb")
    environment: str = "development"
    seed_random_count: int = 1000
    cors_origins: tuple[str, ...] = _DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            db_path=Path(env.get("ADVOCATES_DB_PATH", "data/advocates.duckdb")),
            environment=env.get("ADVOCATES_ENV", "development"),
            seed_random_count=_int_env(env.get("ADVOCATES_SEED_RANDOM_COUNT"), 1000),
            cors_origins=_split_csv(env.get("ADVOCATES_CORS_ORIGINS"), _DEFAULT_CORS_ORIGINS),
            log_level=env.get("ADVOCATES_LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, computed once."""
    return Settings.from_env()
