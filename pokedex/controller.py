"""Application controller wiring UI events to search, rendering and preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import httpx

from pokedex.config import DexSettings, get_settings
from pokedex.db.session import Database
from pokedex.domain.models import Theme
from pokedex.i18n import I18nService
from pokedex.logging import logger
from pokedex.services.catalog import CatalogClient
from pokedex.services.preferences import LAST_SEARCH_KEY, THEME_KEY, PreferenceStore
from pokedex.services.render import RenderedView, render
from pokedex.services.search import (
    ErrorKind,
    Exact,
    Failed,
    Fallback,
    Listing,
    Resolution,
    SearchResolver,
    UseDefaultListing,
    normalize_query,
)

ERROR_MESSAGE_KEYS: dict[ErrorKind, str] = {
    ErrorKind.SEARCH_FAILED: "errors.search_failed",
    ErrorKind.NO_MATCH: "errors.no_match",
    ErrorKind.LISTING_UNAVAILABLE: "errors.listing_unavailable",
}


@dataclass(slots=True)
class AppState:
    """Everything a front-end needs to draw the page."""

    theme: Theme = "light"
    query: str = ""
    loading: bool = False
    error: str = ""
    view: RenderedView = field(default_factory=RenderedView)


StateListener = Callable[[AppState], None]


class AppController:
    """Sole mutator of ``AppState``.

    Searches started while another is in flight are not cancelled; whichever
    finishes last owns ``state.view``.
    """

    def __init__(
        self,
        state: AppState,
        resolver: SearchResolver,
        preferences: PreferenceStore,
        *,
        settings: DexSettings | None = None,
        i18n: I18nService | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self.state = state
        self._resolver = resolver
        self._preferences = preferences
        self._settings = settings or get_settings()
        self._i18n = i18n or I18nService(locale=self._settings.locale)
        self._on_change = on_change

    async def startup(self) -> AppState:
        self.apply_stored_theme()
        last_search = self._preferences.get(LAST_SEARCH_KEY)
        if isinstance(last_search, str) and last_search:
            self.state.query = last_search
            await self._search(last_search, persist=False)
        else:
            await self._load_default_listing()
        return self.state

    async def submit(self, raw_query: str | None = None) -> AppState:
        if raw_query is not None:
            self.state.query = raw_query
        # An empty submit falls back to the listing but keeps the stored search.
        if not normalize_query(self.state.query):
            await self._load_default_listing()
            return self.state
        await self._search(self.state.query, persist=True)
        return self.state

    async def reset(self) -> AppState:
        self.state.query = ""
        self._preferences.set(LAST_SEARCH_KEY, "")
        logger.info("search_reset")
        return await self.startup()

    def toggle_theme(self) -> Theme:
        new_theme: Theme = "light" if self.state.theme == "dark" else "dark"
        self.state.theme = new_theme
        self._preferences.set(THEME_KEY, new_theme)
        logger.info("theme_toggled", theme=new_theme)
        self._notify()
        return new_theme

    def apply_stored_theme(self) -> Theme:
        stored = self._preferences.get(THEME_KEY)
        self.state.theme = "dark" if stored == "dark" else "light"
        self._notify()
        return self.state.theme

    async def _search(self, raw_query: str, *, persist: bool) -> None:
        self._begin()
        try:
            resolution = await self._resolver.resolve(raw_query)
            if isinstance(resolution, UseDefaultListing):
                resolution = await self._resolver.default_listing()
            self._apply(resolution)
            if persist and isinstance(resolution, (Exact, Fallback)):
                self._preferences.set(LAST_SEARCH_KEY, normalize_query(raw_query))
        except Exception:
            logger.exception("search_crashed", query=raw_query)
            self._fail(ErrorKind.SEARCH_FAILED)
        finally:
            self._end()

    async def _load_default_listing(self) -> None:
        self._begin()
        try:
            self._apply(await self._resolver.default_listing())
        except Exception:
            logger.exception("default_listing_crashed")
            self._fail(ErrorKind.LISTING_UNAVAILABLE)
        finally:
            self._end()

    def _apply(self, resolution: Resolution) -> None:
        if isinstance(resolution, Failed):
            self._fail(resolution.kind)
            return
        if isinstance(resolution, (Exact, Fallback, Listing)):
            self.state.view = render(
                resolution.entities,
                placeholder_image=self._settings.display.placeholder_image,
                no_results_text=self._i18n.gettext("view.no_results"),
            )

    def _fail(self, kind: ErrorKind) -> None:
        self.state.error = self._i18n.gettext(ERROR_MESSAGE_KEYS[kind])

    def _begin(self) -> None:
        self.state.error = ""
        self.state.view = RenderedView()
        self.state.loading = True
        self._notify()

    def _end(self) -> None:
        self.state.loading = False
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)


def build_controller(
    state: AppState,
    http_client: httpx.AsyncClient,
    *,
    settings: DexSettings | None = None,
    database: Database | None = None,
    on_change: StateListener | None = None,
) -> AppController:
    settings = settings or get_settings()
    catalog = CatalogClient(http_client, settings=settings.catalog)
    resolver = SearchResolver(catalog, settings=settings.search)
    preferences = PreferenceStore(database or Database(settings=settings))
    return AppController(
        state,
        resolver,
        preferences,
        settings=settings,
        on_change=on_change,
    )


__all__ = ["AppController", "AppState", "build_controller"]
