"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseModel):
    api_base: HttpUrl = Field(
        default="https://pokeapi.co/api/v2/pokemon",
        description="Collection endpoint of the creature catalog.",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout. Unset means requests may hang indefinitely.",
    )

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def base_url(self) -> str:
        return str(self.api_base).rstrip("/")


class SearchSettings(BaseModel):
    default_count: int = Field(default=12, ge=1, le=200)
    search_window: int = Field(default=200, ge=1, le=2000)
    match_cap: int = Field(default=24, ge=1, le=200)


class PreferenceSettings(BaseModel):
    dsn: str = Field(
        default="sqlite:///pokedex_preferences.db",
        description="SQLAlchemy DSN of the preference database.",
    )
    echo: bool = False


class DisplaySettings(BaseModel):
    placeholder_image: str = "https://via.placeholder.com/120?text=?"


class DexSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_logs: bool = True
    locale: str = "en"

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    preferences: PreferenceSettings = Field(default_factory=PreferenceSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> DexSettings:
    """Return cached settings instance."""

    return DexSettings()


__all__ = [
    "CatalogSettings",
    "DexSettings",
    "DisplaySettings",
    "PreferenceSettings",
    "SearchSettings",
    "get_settings",
]
