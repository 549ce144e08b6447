"""Browser front-end. Run with ``streamlit run pokedex/web/app.py``."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import httpx
import streamlit as st

from pokedex.config import get_settings
from pokedex.controller import AppController, AppState, build_controller
from pokedex.db.session import Database
from pokedex.i18n import I18nService
from pokedex.logging import configure_logging
from pokedex.web.cards import render_view_html
from pokedex.web.theme import build_theme_css

STATE_KEY = "app_state"
INPUT_KEY = "search_input"
STARTED_KEY = "started"

Action = Callable[[AppController], Awaitable[Any]]


@st.cache_resource
def get_database() -> Database:
    return Database(settings=get_settings())


@st.cache_resource
def init_logging() -> bool:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.json_logs)
    return True


def ensure_state() -> AppState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = AppState()
    if INPUT_KEY not in st.session_state:
        st.session_state[INPUT_KEY] = ""
    return st.session_state[STATE_KEY]


def run_action(action: Action, *, show_spinner: bool = True) -> AppState:
    """Drive the controller once on a fresh HTTP client and sync the input box."""

    state = ensure_state()
    settings = get_settings()

    async def _run() -> None:
        async with httpx.AsyncClient() as http_client:
            controller = build_controller(
                state,
                http_client,
                settings=settings,
                database=get_database(),
            )
            await action(controller)

    if show_spinner:
        with st.spinner(I18nService(locale=settings.locale).gettext("ui.loading")):
            asyncio.run(_run())
    else:
        asyncio.run(_run())
    st.session_state[INPUT_KEY] = state.query
    return state


async def _toggle_theme(controller: AppController) -> None:
    controller.toggle_theme()


def _on_submit() -> None:
    query = st.session_state.get(INPUT_KEY, "")
    run_action(lambda controller: controller.submit(query))


def _on_reset() -> None:
    run_action(lambda controller: controller.reset())


def _on_toggle_theme() -> None:
    run_action(_toggle_theme, show_spinner=False)


def main() -> None:
    settings = get_settings()
    init_logging()
    i18n = I18nService(locale=settings.locale)

    st.set_page_config(
        page_title=i18n.gettext("ui.title"),
        page_icon="⚡️",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    state = ensure_state()
    if not st.session_state.get(STARTED_KEY):
        st.session_state[STARTED_KEY] = True
        run_action(lambda controller: controller.startup())

    st.markdown(build_theme_css(state.theme), unsafe_allow_html=True)

    title_col, toggle_col = st.columns([5, 1])
    with title_col:
        st.title(i18n.gettext("ui.title"))
    with toggle_col:
        toggle_label = "ui.theme_to_light" if state.theme == "dark" else "ui.theme_to_dark"
        st.button(i18n.gettext(toggle_label), key="themeToggle", on_click=_on_toggle_theme)

    with st.form("searchForm"):
        st.text_input(
            i18n.gettext("ui.search"),
            key=INPUT_KEY,
            placeholder=i18n.gettext("ui.search_placeholder"),
            label_visibility="collapsed",
        )
        st.form_submit_button(i18n.gettext("ui.search"), on_click=_on_submit)
    st.button(i18n.gettext("ui.reset"), key="resetBtn", on_click=_on_reset)

    if state.error:
        st.error(state.error)
    view_html = render_view_html(state.view)
    if view_html:
        st.markdown(view_html, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
