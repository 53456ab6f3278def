"""FastAPI server for the advocate directory.

Serves filtered, paginated advocate listings out of the DuckDB store opened
at startup and exposes a development-only seed endpoint.

Usage:
    ADVOCATES_DB_PATH=data/advocates.duckdb uvicorn dashboard.api.server:app --reload --port 8000
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import duckdb
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field

from advocates.config import Settings, get_settings
from advocates.models import Pagination
from advocates.query_filters import filter_from_params, page_from_params
from advocates.seed_data import DEGREES, SPECIALTIES, build_seed_dataset
from advocates.store import AdvocateStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Store access
#
# IMPORTANT: DuckDB connections are NOT thread-safe. This server MUST run with
# a single uvicorn worker (the default) and all endpoints MUST remain async def
# so they execute on the single event loop thread. Do NOT convert endpoints to
# sync def (which would use a thread pool) or use --workers N > 1.
# ---------------------------------------------------------------------------


def get_store(request: Request) -> AdvocateStore:
    """The store opened by the lifespan, raising 503 if not available."""
    store: AdvocateStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=503,
            detail="Advocate store not available. Check ADVOCATES_DB_PATH.",
        )
    return store


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # Handlers belong to uvicorn; only this project's logger levels are set here
    for name in ("advocates", "dashboard"):
        logging.getLogger(name).setLevel(settings.log_level)
    try:
        app.state.store = AdvocateStore(settings.db_path, create_if_missing=True)
        logger.info(
            "Advocate store loaded from %s: %d advocates",
            settings.db_path,
            app.state.store.advocate_count,
        )
    except (OSError, duckdb.Error) as exc:
        logger.warning("Could not open advocate store at %s: %s", settings.db_path, exc)
        app.state.store = None

    yield

    if app.state.store is not None:
        app.state.store.close()
        app.state.store = None


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Advocate Directory API",
    version="0.1.0",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes: Health
# ---------------------------------------------------------------------------
@app.get("/api/health")
async def health(request: Request):
    store: AdvocateStore | None = getattr(request.app.state, "store", None)
    return {
        "status": "ok",
        "store_loaded": store is not None,
        "advocate_count": store.advocate_count if store else 0,
    }


# ---------------------------------------------------------------------------
# Routes: Advocates
# ---------------------------------------------------------------------------
@app.get("/api/advocates")
async def list_advocates(
    store: AdvocateStore = Depends(get_store),
    search: str | None = Query(None),
    specialties: str | None = Query(None),
    degree: str | None = Query(None),
    min_experience: str | None = Query(None, alias="minExperience"),
    page: str | None = Query(None),
    limit: str | None = Query(None),
):
    """Filtered, paginated advocate list.

    Every parameter is taken as raw text and coerced: malformed numbers fall
    back to their defaults instead of failing validation.
    """
    flt = filter_from_params(
        search=search,
        specialties=specialties,
        degree=degree,
        min_experience=min_experience,
    )
    page_req = page_from_params(page=page, limit=limit)

    try:
        records, total = store.list_advocates(flt, page_req)
    except duckdb.Error as exc:
        logger.exception("Failed to query advocates")
        raise HTTPException(status_code=500, detail="Failed to query advocates") from exc

    pagination = Pagination(page=page_req.page, limit=page_req.limit, total=total)
    return {
        "data": [r.to_api() for r in records],
        "pagination": pagination.to_api(),
    }


@app.get("/api/advocates/options")
async def advocate_options(store: AdvocateStore = Depends(get_store)):
    """Vocabularies for the filter controls."""
    try:
        stored_degrees = store.distinct_degrees()
    except duckdb.Error as exc:
        logger.exception("Failed to read degree options")
        raise HTTPException(status_code=500, detail="Failed to query advocates") from exc
    degrees = list(DEGREES) + [d for d in stored_degrees if d not in DEGREES]
    return {
        "specialties": list(SPECIALTIES),
        "degrees": degrees,
        "limits": [10, 25, 100],
    }


@app.get("/api/advocates/{advocate_id}")
async def get_advocate(advocate_id: int, store: AdvocateStore = Depends(get_store)):
    """Single advocate record for the detail view."""
    try:
        record = store.get_advocate(advocate_id)
    except duckdb.Error as exc:
        logger.exception("Failed to load advocate %s", advocate_id)
        raise HTTPException(status_code=500, detail="Failed to query advocates") from exc
    if record is None:
        raise HTTPException(status_code=404, detail=f"Advocate not found: {advocate_id}")
    return record.to_api()


# ---------------------------------------------------------------------------
# Routes: Seed
# ---------------------------------------------------------------------------
class SeedRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    random_count: int | None = Field(None, ge=0, le=10_000, alias="randomCount")


@app.post("/api/seed")
async def seed_advocates(
    request: Request,
    body: SeedRequest | None = None,
    settings: Settings = Depends(get_settings),
):
    """Insert the sample dataset plus generated advocates (never in production)."""
    if settings.is_production:
        raise HTTPException(status_code=403, detail="cannot seed db in production")
    store = get_store(request)

    random_count = settings.seed_random_count
    if body is not None and body.random_count is not None:
        random_count = body.random_count

    try:
        records = store.insert_advocates(build_seed_dataset(random_count))
    except duckdb.Error as exc:
        logger.exception("Seeding advocates failed")
        raise HTTPException(status_code=500, detail="Failed to seed advocates") from exc

    logger.info("Seeded %d advocates (%d generated)", len(records), random_count)
    return {"advocates": [r.to_api() for r in records]}
