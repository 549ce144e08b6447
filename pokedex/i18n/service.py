"""User-facing message catalog loaded from a JSON file per locale."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

LOCALES_PATH = Path(__file__).with_name("locales")
FALLBACK_LOCALE = "en"


class I18nService:
    """Look up messages by key.

    Keys missing from the configured locale come from the English catalog;
    keys missing there too are returned unchanged.
    """

    def __init__(self, *, locale: str = FALLBACK_LOCALE, locales_path: Path | None = None) -> None:
        self.locale = locale.lower()
        self.locales_path = locales_path or LOCALES_PATH

    def gettext(self, key: str) -> str:
        text = _load_catalog(self.locales_path, self.locale).get(key)
        if text is None and self.locale != FALLBACK_LOCALE:
            text = _load_catalog(self.locales_path, FALLBACK_LOCALE).get(key)
        return text if text is not None else key


@lru_cache(maxsize=8)
def _load_catalog(locales_path: Path, locale: str) -> dict[str, str]:
    file_path = locales_path / f"{locale}.json"
    if not file_path.exists():
        return {}
    return json.loads(file_path.read_text(encoding="utf-8"))


__all__ = ["I18nService"]
