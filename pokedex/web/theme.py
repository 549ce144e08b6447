"""Light and dark palettes injected as CSS into the Streamlit page."""

from __future__ import annotations

from typing import Dict

from pokedex.domain.models import Theme

PALETTES: Dict[str, Dict[str, str]] = {
    "light": {
        "bg": "#f6f7fb",
        "card": "#ffffff",
        "text": "#1f2330",
        "muted": "#6b7280",
        "accent": "#3b4cca",
    },
    "dark": {
        "bg": "#0f1117",
        "card": "#1b1f2a",
        "text": "#e6e8ef",
        "muted": "#9aa3b2",
        "accent": "#ffde00",
    },
}


def build_theme_css(theme: Theme) -> str:
    palette = PALETTES.get(theme, PALETTES["light"])
    return f"""
    <style>
    :root {{
        --bg: {palette["bg"]};
        --card: {palette["card"]};
        --text: {palette["text"]};
        --muted: {palette["muted"]};
        --accent: {palette["accent"]};
    }}
    .stApp {{ background-color: var(--bg); color: var(--text); }}
    .cards {{
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(200px, 1fr));
        gap: 16px;
    }}
    .card {{
        background: var(--card);
        border-radius: 14px;
        padding: 14px;
        box-shadow: 0 3px 10px rgba(0,0,0,0.15);
        text-align: center;
    }}
    .poke-img {{ width: 120px; height: 120px; object-fit: contain; }}
    .poke-name {{ text-transform: capitalize; color: var(--text); margin: 6px 0 2px; }}
    .poke-id {{ color: var(--muted); font-size: 0.85rem; }}
    .types {{ margin: 8px 0; }}
    .type {{
        display: inline-block;
        color: #ffffff;
        border-radius: 999px;
        padding: 2px 10px;
        margin: 0 3px;
        font-size: 0.75rem;
        text-transform: capitalize;
    }}
    .stat {{ color: var(--text); font-size: 0.8rem; }}
    .no-results {{ grid-column: 1 / -1; color: var(--muted); }}
    </style>
    """


__all__ = ["PALETTES", "build_theme_css"]
