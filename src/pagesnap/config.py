"""
Process-wide configuration.

Read once at startup and passed explicitly into the HTTP layer; the capture
core never reads the environment.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="PAGESNAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    rapidapi_proxy_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RAPIDAPI_PROXY_SECRET", "PAGESNAP_RAPIDAPI_PROXY_SECRET"),
        description="Secret RapidAPI adds to every proxied request.",
    )
    rapidapi_host: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RAPIDAPI_HOST", "PAGESNAP_RAPIDAPI_HOST"),
        description="Expected X-RapidAPI-Host value, e.g. screenshot-api.p.rapidapi.com.",
    )

    host: str = Field(default="0.0.0.0", description="Interface to bind.")
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "PAGESNAP_PORT"),
        description="Port to listen on.",
    )

    navigation_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Navigation deadline per capture (seconds).",
    )
    capture_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Screenshot deadline per capture (seconds).",
    )
    chromium_executable: str | None = Field(
        default=None,
        description="Chromium binary; None uses pyppeteer's default.",
    )

    enable_public_endpoint: bool = Field(
        default=True,
        description="Serve the unauthenticated /screenshot route.",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
