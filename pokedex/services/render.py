"""Pure conversion of entities into display cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from pokedex.domain.models import Entity

PLACEHOLDER_IMAGE = "https://via.placeholder.com/120?text=?"
NO_RESULTS_TEXT = "No results found."
STAT_ALLOW_LIST: tuple[str, ...] = ("hp", "attack", "defense", "speed")
UNIT_DIVISOR = 10

ImageAccessor = Callable[[Entity], "str | None"]

IMAGE_ACCESSORS: tuple[ImageAccessor, ...] = (
    lambda entity: entity.artwork_url,
    lambda entity: entity.sprite_url,
)


@dataclass(slots=True, frozen=True)
class Card:
    name: str
    image_url: str
    caption: str
    tags: tuple[str, ...] = ()
    stats: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RenderedView:
    cards: tuple[Card, ...] = ()
    placeholder: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.cards


def resolve_image(entity: Entity, placeholder: str = PLACEHOLDER_IMAGE) -> str:
    for accessor in IMAGE_ACCESSORS:
        url = accessor(entity)
        if url:
            return url
    return placeholder


def format_measure(value: int) -> str:
    """Scale a source-unit measure for display, without a trailing ``.0``."""

    return f"{value / UNIT_DIVISOR:.1f}".removesuffix(".0")


def select_stats(entity: Entity) -> tuple[str, ...]:
    lines: list[str] = []
    for key in STAT_ALLOW_LIST:
        match = next((name for name in entity.stats if key in name), None)
        if match is not None:
            lines.append(f"{match}: {entity.stats[match]}")
    return tuple(lines)


def build_card(entity: Entity, placeholder: str = PLACEHOLDER_IMAGE) -> Card:
    return Card(
        name=entity.name,
        image_url=resolve_image(entity, placeholder),
        caption=(
            f"#{entity.id} • {format_measure(entity.height)}m "
            f"• {format_measure(entity.weight)}kg"
        ),
        tags=tuple(entity.types),
        stats=select_stats(entity),
    )


def render(
    entities: Sequence[Entity],
    *,
    placeholder_image: str = PLACEHOLDER_IMAGE,
    no_results_text: str = NO_RESULTS_TEXT,
) -> RenderedView:
    if not entities:
        return RenderedView(placeholder=no_results_text)
    return RenderedView(cards=tuple(build_card(entity, placeholder_image) for entity in entities))


__all__ = [
    "Card",
    "IMAGE_ACCESSORS",
    "RenderedView",
    "STAT_ALLOW_LIST",
    "build_card",
    "format_measure",
    "render",
    "resolve_image",
    "select_stats",
]
