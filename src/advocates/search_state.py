"""Client-side search state for the advocate directory.

The committed query string is the single source of truth for the active
filters: ``FilterState`` encodes to and decodes from it, and
``SearchStateController`` refetches ``/api/advocates`` whenever it changes.

State machine per commit::

    idle ──stage()──▶ idle (staged edits only, no fetch)
    idle ──commit()/set_page()/set_limit()/clear()──▶ loading
    loading ──2xx──▶ idle        (data + pagination replaced)
    loading ──failure──▶ error   (previous data kept, error visible)

A response is applied only while the query string it was issued for is
still the committed one, so a slow stale fetch never overwrites a newer
result.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import parse_qsl, urlencode

import httpx

from advocates.query_filters import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    normalize_limit,
    normalize_min_experience,
    normalize_page,
    split_specialties,
)

logger = logging.getLogger(__name__)

SearchStatus = Literal["idle", "loading", "error"]

FETCH_ERROR_MESSAGE = "Failed to fetch advocates"

_EMPTY_PAGINATION: dict[str, int] = {
    "page": DEFAULT_PAGE,
    "limit": DEFAULT_LIMIT,
    "total": 0,
    "totalPages": 0,
}


@dataclass(frozen=True, slots=True)
class FilterState:
    """Serializable filter + pagination state mirrored in the query string."""

    search: str = ""
    specialties: tuple[str, ...] = ()
    degree: str = ""
    min_experience: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def to_params(self) -> list[tuple[str, str]]:
        """Query parameters, omitting every value equal to its empty default."""
        params: list[tuple[str, str]] = []
        if self.search:
            params.append(("search", self.search))
        if self.specialties:
            params.append(("specialties", ",".join(self.specialties)))
        if self.degree:
            params.append(("degree", self.degree))
        if self.min_experience > 0:
            params.append(("minExperience", str(self.min_experience)))
        if self.page != DEFAULT_PAGE:
            params.append(("page", str(self.page)))
        if self.limit != DEFAULT_LIMIT:
            params.append(("limit", str(self.limit)))
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_params(), safe=",")

    @classmethod
    def from_query_string(cls, query_string: str) -> FilterState:
        """Decode *query_string*; the first occurrence of a key wins."""
        raw: dict[str, str] = {}
        for key, value in parse_qsl(query_string.lstrip("?"), keep_blank_values=False):
            raw.setdefault(key, value)
        return cls(
            search=raw.get("search", ""),
            specialties=split_specialties(raw.get("specialties")),
            degree=raw.get("degree", ""),
            min_experience=normalize_min_experience(raw.get("minExperience")),
            page=normalize_page(raw.get("page")),
            limit=normalize_limit(raw.get("limit")),
        )


class SearchStateController:
    """Keeps fetched results in step with the committed query string.

    Parameters
    ----------
    client:
        ``httpx.AsyncClient`` pointed at the API (``base_url`` set).
    query_string:
        Initial committed query string, e.g. taken from a shared link.
    endpoint:
        Listing path relative to the client's base URL.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        query_string: str = "",
        endpoint: str = "/api/advocates",
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self.query_string = query_string.lstrip("?")
        self.filters = FilterState.from_query_string(self.query_string)
        self.staged = self.filters
        self.status: SearchStatus = "idle"
        self.data: list[dict[str, Any]] = []
        self.pagination: dict[str, int] = dict(_EMPTY_PAGINATION)
        self.error: str | None = None
        self.fetch_count = 0

    @property
    def loading(self) -> bool:
        return self.status == "loading"

    # -- staged (uncommitted) edits ------------------------------------

    def stage(self, **changes: Any) -> FilterState:
        """Edit local filter values without touching the URL."""
        if "specialties" in changes:
            changes["specialties"] = tuple(changes["specialties"])
        self.staged = dataclasses.replace(self.staged, **changes)
        return self.staged

    # -- commits -------------------------------------------------------

    async def commit(self) -> bool:
        """Publish staged filters; a new filter set always starts at page 1."""
        target = dataclasses.replace(
            self.staged, page=DEFAULT_PAGE, limit=self.filters.limit
        )
        return await self.navigate(target.to_query_string())

    async def set_page(self, page: int) -> bool:
        target = dataclasses.replace(self.filters, page=max(DEFAULT_PAGE, page))
        return await self.navigate(target.to_query_string())

    async def set_limit(self, limit: int) -> bool:
        """Change page size; the current page offset no longer applies."""
        target = dataclasses.replace(
            self.filters, limit=normalize_limit(limit), page=DEFAULT_PAGE
        )
        return await self.navigate(target.to_query_string())

    async def clear(self) -> bool:
        self.staged = FilterState()
        return await self.navigate("")

    async def navigate(self, query_string: str) -> bool:
        """Commit *query_string* and refetch if it differs from the current one.

        Returns ``False`` (and does nothing) when the string is unchanged.
        """
        query_string = query_string.lstrip("?")
        if query_string == self.query_string:
            return False
        self.query_string = query_string
        self.filters = FilterState.from_query_string(query_string)
        self.staged = self.filters
        await self._fetch(query_string)
        return True

    async def refresh(self) -> None:
        """Fetch the currently committed query string (initial load)."""
        await self._fetch(self.query_string)

    # -- fetching ------------------------------------------------------

    def _url_for(self, query_string: str) -> str:
        return f"{self._endpoint}?{query_string}" if query_string else self._endpoint

    async def _fetch(self, query_string: str) -> None:
        self.status = "loading"
        self.error = None
        self.fetch_count += 1
        url = self._url_for(query_string)
        try:
            response = await self._client.get(url)
            if not response.is_success:
                raise httpx.HTTPStatusError(
                    f"{FETCH_ERROR_MESSAGE} (HTTP {response.status_code})",
                    request=response.request,
                    response=response,
                )
            payload = response.json()
            data = list(payload["data"])
            pagination = dict(payload["pagination"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            if query_string != self.query_string:
                logger.debug("Discarding stale failure for %s: %s", url, exc)
                return
            logger.warning("Advocate fetch failed for %s: %s", url, exc)
            self.status = "error"
            self.error = str(exc) or FETCH_ERROR_MESSAGE
            return

        if query_string != self.query_string:
            logger.debug("Discarding stale response for %s", url)
            return
        self.data = data
        self.pagination = pagination
        self.status = "idle"
