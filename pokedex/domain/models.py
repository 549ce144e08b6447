"""Pydantic models shared across the catalog, search and render layers."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Theme = Literal["light", "dark"]


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class ListingEntry(BaseModel):
    """Lightweight reference to an entity, as returned by the listing endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class Entity(BaseModel):
    """A single catalog record.

    Height and weight keep the catalog's source units (decimetres and
    hectograms); the render pipeline scales them for display. ``stats``
    preserves the order the catalog reports them in.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    height: int = 0
    weight: int = 0
    types: tuple[str, ...] = ()
    stats: dict[str, int] = Field(default_factory=dict)
    artwork_url: str | None = None
    sprite_url: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Entity":
        sprites = _mapping(payload.get("sprites"))
        artwork = _mapping(_mapping(sprites.get("other")).get("official-artwork"))

        types: list[str] = []
        for entry in payload.get("types") or []:
            name = _mapping(_mapping(entry).get("type")).get("name")
            if isinstance(name, str) and name:
                types.append(name)
        stats: dict[str, int] = {}
        for entry in payload.get("stats") or []:
            if not isinstance(entry, dict) or not isinstance(entry.get("stat"), dict):
                continue
            name = entry["stat"].get("name")
            if name and name not in stats:
                stats[name] = entry.get("base_stat", 0)

        return cls.model_validate(
            {
                "id": payload.get("id"),
                "name": payload.get("name"),
                "height": payload.get("height") or 0,
                "weight": payload.get("weight") or 0,
                "types": tuple(types),
                "stats": stats,
                "artwork_url": artwork.get("front_default"),
                "sprite_url": sprites.get("front_default"),
            }
        )


__all__ = ["Entity", "ListingEntry", "Theme"]
