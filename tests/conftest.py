"""Shared pytest fixtures: a fake catalog API and an in-memory preference database."""

from __future__ import annotations

from typing import Any, Iterable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from pokedex.config import DexSettings
from pokedex.db.session import Database
from pokedex.services.catalog import CatalogClient
from pokedex.services.preferences import PreferenceStore
from pokedex.services.search import SearchResolver

API_BASE = "https://pokeapi.co/api/v2/pokemon"
LISTING_PATH = "/api/v2/pokemon"

FIRST_THIRTY = [
    "bulbasaur", "ivysaur", "venusaur", "charmander", "charmeleon", "charizard",
    "squirtle", "wartortle", "blastoise", "caterpie", "metapod", "butterfree",
    "weedle", "kakuna", "beedrill", "pidgey", "pidgeotto", "pidgeot",
    "rattata", "raticate", "spearow", "fearow", "ekans", "arbok",
    "pikachu", "raichu", "sandshrew", "sandslash", "nidoran-f", "nidorina",
]


def make_payload(
    pid: int,
    name: str,
    *,
    height: int = 7,
    weight: int = 69,
    types: Iterable[str] = ("normal",),
    stats: dict[str, int] | None = None,
    artwork: str | None = "default",
    sprite: str | None = "default",
) -> dict[str, Any]:
    stats = stats if stats is not None else {
        "hp": 45,
        "attack": 49,
        "defense": 49,
        "special-attack": 65,
        "special-defense": 65,
        "speed": 45,
    }
    if artwork == "default":
        artwork = f"https://img.example/artwork/{pid}.png"
    if sprite == "default":
        sprite = f"https://img.example/sprites/{pid}.png"
    return {
        "id": pid,
        "name": name,
        "height": height,
        "weight": weight,
        "sprites": {
            "front_default": sprite,
            "other": {"official-artwork": {"front_default": artwork}},
        },
        "types": [
            {"slot": slot, "type": {"name": type_name, "url": "https://x/type"}}
            for slot, type_name in enumerate(types, start=1)
        ],
        "stats": [
            {"base_stat": value, "effort": 0, "stat": {"name": stat_name, "url": "https://x/stat"}}
            for stat_name, value in stats.items()
        ],
    }


class FakeCatalog:
    """In-memory stand-in for the catalog API served through ``httpx.MockTransport``.

    Detail URLs handed out by the listing end with a slash; identifier
    lookups built by the client do not, which lets tests tell them apart.
    """

    def __init__(self, payloads: Iterable[dict[str, Any]]) -> None:
        self.payloads = list(payloads)
        self.requests: list[httpx.Request] = []
        self.failing_details: set[int] = set()
        self.listing_status = 200

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.rstrip("/") == LISTING_PATH:
            if self.listing_status != 200:
                return httpx.Response(self.listing_status, json={"detail": "boom"})
            limit = int(request.url.params.get("limit", "20"))
            results = [
                {"name": payload["name"], "url": f"{API_BASE}/{payload['id']}/"}
                for payload in self.payloads[:limit]
            ]
            return httpx.Response(200, json={"count": len(self.payloads), "results": results})

        key = path.rstrip("/").rsplit("/", 1)[-1]
        is_detail = path.endswith("/")
        for payload in self.payloads:
            if key in (str(payload["id"]), payload["name"]):
                if is_detail and payload["id"] in self.failing_details:
                    return httpx.Response(500, text="upstream error")
                return httpx.Response(200, json=payload)
        return httpx.Response(404, text="Not Found")

    @property
    def listing_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.rstrip("/") == LISTING_PATH]

    @property
    def exact_requests(self) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.url.path.rstrip("/") != LISTING_PATH and not r.url.path.endswith("/")
        ]

    @property
    def detail_requests(self) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.url.path.rstrip("/") != LISTING_PATH and r.url.path.endswith("/")
        ]


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(
        make_payload(pid, name) for pid, name in enumerate(FIRST_THIRTY, start=1)
    )


@pytest.fixture
def settings() -> DexSettings:
    return DexSettings(_env_file=None)


@pytest_asyncio.fixture
async def http_client(fake_catalog):
    async with httpx.AsyncClient(transport=fake_catalog.transport()) as client:
        yield client


@pytest.fixture
def catalog(http_client, settings) -> CatalogClient:
    return CatalogClient(http_client, settings=settings.catalog)


@pytest.fixture
def resolver(catalog, settings) -> SearchResolver:
    return SearchResolver(catalog, settings=settings.search)


@pytest.fixture
def database(settings):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    db = Database(settings=settings, engine=engine)
    try:
        yield db
    finally:
        engine.dispose()


@pytest.fixture
def preferences(database) -> PreferenceStore:
    return PreferenceStore(database)
