"""Read-only client for the creature catalog HTTP API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from pokedex.config import CatalogSettings
from pokedex.domain.models import Entity, ListingEntry
from pokedex.logging import logger
from pokedex.services.exceptions import (
    CatalogError,
    DetailFetchError,
    ListingError,
    NotFoundError,
)


class CatalogClient:
    """Fetch single entities, listings and detail URLs.

    Every call is a single GET with no caching, deduplication or retry.
    Failures are reported through the ``CatalogError`` subclass matching
    the operation.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or CatalogSettings()

    async def fetch_by_identifier(self, identifier: str | int) -> Entity:
        key = str(identifier).lower()
        url = f"{self._settings.base_url()}/{quote(key, safe='')}"
        payload = await self._get_json(url, NotFoundError)
        return self._to_entity(payload, url, NotFoundError)

    async def fetch_listing(self, limit: int) -> list[ListingEntry]:
        url = self._settings.base_url()
        payload = await self._get_json(url, ListingError, params={"limit": limit})
        if not isinstance(payload, dict):
            raise ListingError(f"Unexpected listing payload from {url}")
        results = payload.get("results") or []
        try:
            return [ListingEntry.model_validate(item) for item in results]
        except ValueError as exc:
            raise ListingError(f"Malformed listing entry from {url}: {exc}") from exc

    async def fetch_detail(self, url: str) -> Entity:
        payload = await self._get_json(url, DetailFetchError)
        return self._to_entity(payload, url, DetailFetchError)

    async def _get_json(
        self,
        url: str,
        error_cls: type[CatalogError],
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("catalog_request", url=url, params=params)
        try:
            response = await self._client.get(
                url,
                params=params,
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            logger.warning("catalog_request_failed", url=url, status_code=status_code)
            raise error_cls(f"Catalog request to {url} failed ({status_code})") from exc
        except httpx.RequestError as exc:
            logger.warning("catalog_request_failed", url=url, error=str(exc))
            raise error_cls(f"Catalog request to {url} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("catalog_response_invalid", url=url, error=str(exc))
            raise error_cls(f"Catalog response from {url} is not JSON") from exc

    @staticmethod
    def _to_entity(payload: Any, url: str, error_cls: type[CatalogError]) -> Entity:
        if not isinstance(payload, dict):
            raise error_cls(f"Unexpected entity payload from {url}")
        try:
            return Entity.from_payload(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise error_cls(f"Malformed entity payload from {url}: {exc}") from exc


__all__ = ["CatalogClient"]
