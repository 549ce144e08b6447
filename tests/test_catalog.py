"""Tests for the catalog HTTP client."""

from __future__ import annotations

import httpx
import pytest

from pokedex.config import CatalogSettings
from pokedex.domain.models import Entity, ListingEntry
from pokedex.services.catalog import CatalogClient
from pokedex.services.exceptions import DetailFetchError, ListingError, NotFoundError

from conftest import API_BASE, make_payload


@pytest.mark.asyncio
async def test_fetch_by_identifier_accepts_numbers(catalog, fake_catalog):
    entity = await catalog.fetch_by_identifier(25)

    assert entity.id == 25
    assert entity.name == "pikachu"
    assert str(fake_catalog.requests[-1].url) == f"{API_BASE}/25"


@pytest.mark.asyncio
async def test_fetch_by_identifier_lowercases_names(catalog, fake_catalog):
    entity = await catalog.fetch_by_identifier("PiKaChU")

    assert entity.id == 25
    assert fake_catalog.requests[-1].url.path == "/api/v2/pokemon/pikachu"


@pytest.mark.asyncio
async def test_fetch_by_identifier_missing_raises_not_found(catalog):
    with pytest.raises(NotFoundError):
        await catalog.fetch_by_identifier("missingno")


@pytest.mark.asyncio
async def test_fetch_by_identifier_transport_error_raises_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NotFoundError) as excinfo:
            await CatalogClient(client).fetch_by_identifier("pikachu")

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_by_identifier_encodes_path_segment():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path.decode())
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NotFoundError):
            await CatalogClient(client).fetch_by_identifier("mr mime/")

    assert seen == ["/api/v2/pokemon/mr%20mime%2F"]


@pytest.mark.asyncio
async def test_fetch_listing_preserves_api_order(catalog, fake_catalog):
    entries = await catalog.fetch_listing(5)

    assert [entry.name for entry in entries] == [
        "bulbasaur",
        "ivysaur",
        "venusaur",
        "charmander",
        "charmeleon",
    ]
    assert entries[0] == ListingEntry(name="bulbasaur", url=f"{API_BASE}/1/")
    assert fake_catalog.listing_requests[-1].url.params["limit"] == "5"


@pytest.mark.asyncio
async def test_fetch_listing_without_results_is_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"count": 0})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await CatalogClient(client).fetch_listing(10) == []


@pytest.mark.asyncio
async def test_fetch_listing_error_status(catalog, fake_catalog):
    fake_catalog.listing_status = 503

    with pytest.raises(ListingError):
        await catalog.fetch_listing(200)


@pytest.mark.asyncio
async def test_fetch_detail_dereferences_listing_url(catalog):
    entity = await catalog.fetch_detail(f"{API_BASE}/6/")

    assert entity.name == "charizard"
    assert entity.artwork_url == "https://img.example/artwork/6.png"


@pytest.mark.asyncio
async def test_fetch_detail_error_status(catalog, fake_catalog):
    fake_catalog.failing_details.add(6)

    with pytest.raises(DetailFetchError):
        await catalog.fetch_detail(f"{API_BASE}/6/")


@pytest.mark.asyncio
async def test_fetch_detail_rejects_non_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(DetailFetchError):
            await CatalogClient(client).fetch_detail(f"{API_BASE}/1/")


@pytest.mark.asyncio
async def test_custom_api_base_is_used():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=make_payload(1, "bulbasaur"))

    settings = CatalogSettings(api_base="https://mirror.example/api/pokemon/")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await CatalogClient(client, settings=settings).fetch_by_identifier(1)

    assert seen == ["https://mirror.example/api/pokemon/1"]


def test_entity_from_payload_reads_nested_fields():
    payload = make_payload(
        25,
        "pikachu",
        height=4,
        weight=60,
        types=("electric",),
        stats={"hp": 35, "attack": 55, "speed": 90},
        artwork=None,
    )

    entity = Entity.from_payload(payload)

    assert entity.types == ("electric",)
    assert list(entity.stats.items()) == [("hp", 35), ("attack", 55), ("speed", 90)]
    assert entity.artwork_url is None
    assert entity.sprite_url == "https://img.example/sprites/25.png"
    assert (entity.height, entity.weight) == (4, 60)


def test_entity_from_payload_requires_identifier():
    with pytest.raises(ValueError):
        Entity.from_payload({"name": "nobody"})


def test_entity_from_payload_skips_nameless_types_and_odd_sprites():
    payload = make_payload(4, "charmander", types=("fire",))
    payload["types"].insert(0, {"slot": 0, "type": {}})
    payload["types"].append("not-a-mapping")
    payload["sprites"] = "missing"

    entity = Entity.from_payload(payload)

    assert entity.types == ("fire",)
    assert entity.artwork_url is None
    assert entity.sprite_url is None


@pytest.mark.asyncio
async def test_malformed_entity_payload_raises_operation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 999, "name": "charm", "stats": 5})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        catalog = CatalogClient(client)
        with pytest.raises(NotFoundError):
            await catalog.fetch_by_identifier("charm")
        with pytest.raises(DetailFetchError):
            await catalog.fetch_detail(f"{API_BASE}/999/")
