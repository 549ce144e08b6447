"""Search resolution: exact identifier lookup, then a bounded substring fallback."""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass, field
from typing import Sequence, Union

from pokedex.config import SearchSettings
from pokedex.domain.models import Entity, ListingEntry
from pokedex.logging import logger
from pokedex.services.catalog import CatalogClient
from pokedex.services.exceptions import (
    CatalogError,
    DetailFetchError,
    ListingError,
    NoMatchError,
    NotFoundError,
)


class ErrorKind(str, enum.Enum):
    SEARCH_FAILED = "search_failed"
    NO_MATCH = "no_match"
    LISTING_UNAVAILABLE = "listing_unavailable"


@dataclass(slots=True, frozen=True)
class Exact:
    entity: Entity

    @property
    def entities(self) -> list[Entity]:
        return [self.entity]


@dataclass(slots=True, frozen=True)
class Fallback:
    entities: list[Entity]


@dataclass(slots=True, frozen=True)
class Listing:
    entities: list[Entity]


@dataclass(slots=True, frozen=True)
class UseDefaultListing:
    pass


@dataclass(slots=True, frozen=True)
class Failed:
    kind: ErrorKind
    error: Exception | None = field(default=None, compare=False)


Resolution = Union[Exact, Fallback, Listing, UseDefaultListing, Failed]


def normalize_query(raw: str | None) -> str:
    return (raw or "").strip().lower()


class SearchResolver:
    """Turn a raw query into entities to render, or a failure kind.

    An exact identifier match always wins. Only when it misses is the first
    ``search_window`` listing entries scanned for names containing the
    query; at most ``match_cap`` of those are hydrated.
    """

    def __init__(self, catalog: CatalogClient, settings: SearchSettings | None = None) -> None:
        self._catalog = catalog
        self._settings = settings or SearchSettings()

    async def resolve(self, raw_query: str | None) -> Resolution:
        query = normalize_query(raw_query)
        if not query:
            return UseDefaultListing()

        try:
            entity = await self._catalog.fetch_by_identifier(query)
        except NotFoundError as exc:
            logger.info("exact_lookup_missed", query=query, error=str(exc))
        else:
            logger.info("search_resolved", query=query, phase="exact", entity_id=entity.id)
            return Exact(entity)

        return await self._resolve_fallback(query)

    async def default_listing(self, limit: int | None = None) -> Resolution:
        limit = limit or self._settings.default_count
        try:
            entries = await self._catalog.fetch_listing(limit)
            entities = await self._hydrate(entries)
        except CatalogError as exc:
            logger.warning("default_listing_failed", limit=limit, error=str(exc))
            return Failed(ErrorKind.LISTING_UNAVAILABLE, exc)
        return Listing(entities)

    async def _resolve_fallback(self, query: str) -> Resolution:
        try:
            entries = await self._catalog.fetch_listing(self._settings.search_window)
        except ListingError as exc:
            return Failed(ErrorKind.SEARCH_FAILED, exc)

        matches = [entry for entry in entries if query in entry.name.lower()]
        logger.info(
            "fallback_matches",
            query=query,
            window=len(entries),
            matches=len(matches),
        )
        if not matches:
            return Failed(ErrorKind.NO_MATCH, NoMatchError("No matching entity found"))

        try:
            entities = await self._hydrate(matches[: self._settings.match_cap])
        except DetailFetchError as exc:
            return Failed(ErrorKind.SEARCH_FAILED, exc)

        logger.info("search_resolved", query=query, phase="fallback", count=len(entities))
        return Fallback(entities)

    async def _hydrate(self, entries: Sequence[ListingEntry]) -> list[Entity]:
        # gather() leaves siblings running when one fails; their results are dropped.
        return list(
            await asyncio.gather(*(self._catalog.fetch_detail(entry.url) for entry in entries))
        )


__all__ = [
    "ErrorKind",
    "Exact",
    "Failed",
    "Fallback",
    "Listing",
    "Resolution",
    "SearchResolver",
    "UseDefaultListing",
    "normalize_query",
]
