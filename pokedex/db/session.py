"""SQLAlchemy engine and session management for the preference database."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pokedex.config import DexSettings, get_settings
from pokedex.db.base import Base
from pokedex.logging import logger


class Database:
    """Lazy SQLAlchemy engine/session factory wrapper.

    The schema is created on first use. An in-memory SQLite DSN is pinned to a
    single connection so every session sees the same tables.
    """

    def __init__(self, settings: DexSettings | None = None, *, engine: Engine | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine = engine
        self._session_factory: sessionmaker[Session] | None = None

    def _ensure_engine(self) -> None:
        if self._session_factory is not None:
            return
        if self._engine is None:
            pref_cfg = self.settings.preferences
            options: dict = {"echo": pref_cfg.echo}
            if pref_cfg.dsn.startswith("sqlite"):
                options["connect_args"] = {"check_same_thread": False}
                if pref_cfg.dsn in {"sqlite://", "sqlite:///:memory:"}:
                    options["poolclass"] = StaticPool
            self._engine = create_engine(pref_cfg.dsn, **options)
            logger.info("db_engine_initialized", dsn=pref_cfg.dsn)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> Engine:
        self._ensure_engine()
        assert self._engine is not None
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        self._ensure_engine()
        assert self._session_factory is not None
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        factory = self.session_factory
        with factory() as session:
            try:
                yield session
            except Exception:
                session.rollback()
                raise

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()


__all__ = ["Database"]
