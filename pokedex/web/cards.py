"""HTML rendering of cards for the browser front-end."""

from __future__ import annotations

import html
from typing import Dict, List, Sequence

from pokedex.services.render import Card, RenderedView

TYPE_COLORS: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}
DEFAULT_TYPE_COLOR = "#777777"


def build_type_chips_html(types: Sequence[str] | None) -> str:
    spans: List[str] = []
    for t in types or []:
        label = str(t)
        color = TYPE_COLORS.get(label.lower(), DEFAULT_TYPE_COLOR)
        spans.append(
            f'<span class="type" style="background-color:{color};">{html.escape(label)}</span>'
        )
    return "".join(spans)


def render_card_html(card: Card) -> str:
    stats_html = "".join(f'<div class="stat">{html.escape(line)}</div>' for line in card.stats)
    parts = [
        f'<article class="card" data-name="{html.escape(card.name, quote=True)}">',
        f'  <img class="poke-img" src="{html.escape(card.image_url, quote=True)}"'
        f' alt="{html.escape(card.name, quote=True)}" />',
        f'  <h3 class="poke-name">{html.escape(card.name)}</h3>',
        f'  <div class="poke-id">{html.escape(card.caption)}</div>',
        f'  <div class="types">{build_type_chips_html(card.tags)}</div>',
        f'  <div class="stats">{stats_html}</div>',
        "</article>",
    ]
    return "\n".join(parts)


def render_view_html(view: RenderedView) -> str:
    if view.is_empty:
        if not view.placeholder:
            return ""
        return f'<p class="no-results">{html.escape(view.placeholder)}</p>'
    cards_html = "".join(render_card_html(card) for card in view.cards)
    return f'<section id="cards" class="cards">{cards_html}</section>'


__all__ = ["TYPE_COLORS", "build_type_chips_html", "render_card_html", "render_view_html"]
