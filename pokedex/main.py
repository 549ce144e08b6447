"""Console entrypoint: run the controller once and print the rendered cards."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

import httpx

from pokedex.config import get_settings
from pokedex.controller import AppState, build_controller
from pokedex.db.session import Database
from pokedex.logging import configure_logging, logger
from pokedex.services.render import Card


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pokedex",
        description="Search the creature catalog by name or number.",
    )
    parser.add_argument("query", nargs="?", default=None, help="name, number or name fragment")
    parser.add_argument("--reset", action="store_true", help="forget the last search")
    parser.add_argument("--toggle-theme", action="store_true", help="switch light/dark theme")
    return parser.parse_args(argv)


def format_card(card: Card) -> str:
    lines = [card.name, f"  {card.caption}", f"  image: {card.image_url}"]
    if card.tags:
        lines.append(f"  types: {', '.join(card.tags)}")
    lines.extend(f"  {stat}" for stat in card.stats)
    return "\n".join(lines)


def format_state(state: AppState) -> str:
    blocks = [f"[theme: {state.theme}]"]
    if state.query:
        blocks.append(f"search: {state.query}")
    if state.error:
        blocks.append(f"error: {state.error}")
    elif state.view.is_empty and state.view.placeholder:
        blocks.append(state.view.placeholder)
    blocks.extend(format_card(card) for card in state.view.cards)
    return "\n\n".join(blocks)


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.json_logs)

    database = Database(settings=settings)
    state = AppState()
    logger.info("pokedex_starting", environment=settings.environment)
    try:
        async with httpx.AsyncClient() as http_client:
            controller = build_controller(state, http_client, settings=settings, database=database)
            controller.apply_stored_theme()
            if args.toggle_theme:
                controller.toggle_theme()
            if args.reset:
                await controller.reset()
            elif args.query is not None:
                await controller.submit(args.query)
            else:
                await controller.startup()
    finally:
        database.dispose()

    print(format_state(state))
    return 1 if state.error else 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
