"""Persistent key-value store for user preferences."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import select

from pokedex.db.models.core import Preference
from pokedex.db.session import Database
from pokedex.logging import logger

THEME_KEY = "theme"
LAST_SEARCH_KEY = "lastSearch"


class PreferenceStore:
    """JSON-serialised preferences keyed by name.

    A stored value that cannot be decoded reads back as ``None``.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def get(self, key: str) -> Any | None:
        with self._database.session() as session:
            row = session.execute(
                select(Preference).where(Preference.key == key)
            ).scalar_one_or_none()
            raw = row.value if row is not None else None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("preference_malformed", key=key)
            return None

    def set(self, key: str, value: Any) -> None:
        serialized = json.dumps(value, ensure_ascii=False)
        with self._database.session() as session:
            row = session.execute(
                select(Preference).where(Preference.key == key)
            ).scalar_one_or_none()
            if row is None:
                session.add(Preference(key=key, value=serialized))
            else:
                row.value = serialized
            session.commit()
        logger.debug("preference_saved", key=key)


__all__ = ["LAST_SEARCH_KEY", "PreferenceStore", "THEME_KEY"]
