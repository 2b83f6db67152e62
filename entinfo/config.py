"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

BUNDLED_CONFIG_PATH = Path(__file__).with_name("bundle.json")


class Settings(BaseSettings):
    """Settings loaded from the environment, a .env file or the bundled config.

    Sources are consulted in that order and the first non-empty value wins,
    so an exported ``TMDB_API_KEY`` always beats the one in ``.env``.
    """

    app_name: str = Field(default="EntInfo", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    region: str | None = Field(default=None, alias="TMDB_REGION")
    request_timeout_seconds: float = Field(
        default=20.0, alias="REQUEST_TIMEOUT", ge=1.0, le=120.0
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./entinfo.db", alias="DATABASE_URL"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("tmdb_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("region", mode="before")
    @classmethod
    def _normalise_region(cls, value: object) -> object:
        """Region overrides are two-letter codes; blanks defer to the locale."""

        if value is None:
            return None
        text = str(value).strip().upper()
        if not text:
            return None
        if len(text) != 2 or not text.isalpha():
            raise ValueError("TMDB_REGION must be a two-letter region code")
        return text

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        json_file=BUNDLED_CONFIG_PATH,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
