"""Configuration management for the livestock marketplace API."""

import os
from datetime import timedelta
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from livestock_common.config.store_config import StoreConfig


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the project root.

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is src/livestock_api/config.py, so the project root is 3 levels up
    project_dir = Path(__file__).parent.parent.parent
    return str(project_dir / ".env")


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "livestock-market"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = Field(4000, validation_alias=AliasChoices("api_port", "port"))

    # Azure Cosmos DB (no endpoint -> in-memory stores)
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    database_name: str = "livestock"

    # Containers
    users_container: str = "users"
    listings_container: str = "animals"
    notifications_container: str = "notifications"

    # Tokens
    jwt_secret: str = "devsecret"
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    # CORS
    ui_url: str | None = Field("http://localhost:5173", validation_alias=AliasChoices("ui_url", "frontend_url"))
    cors_allowed_origins: str = ""
    cors_allowed_suffixes: str = ""
    cors_allow_credentials: bool = True

    # Uploads
    upload_dir: str = "uploads"
    upload_max_files: int = 8
    upload_max_file_size: int = 20 * 1024 * 1024

    # Require a bearer token to upload or create listings, and ownership to delete
    require_auth_for_listings: bool = False

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in {"development", "dev", "local", "test"}

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(days=self.token_expire_days)

    @property
    def extra_allowed_origins(self) -> list[str]:
        return _split_csv(self.cors_allowed_origins)

    @property
    def allowed_suffixes(self) -> list[str]:
        return _split_csv(self.cors_allowed_suffixes)

    @property
    def cosmos_configured(self) -> bool:
        return bool(self.azure_cosmosdb_endpoint)

    def store_config(self) -> StoreConfig:
        """Document store settings derived from these settings."""
        return StoreConfig(
            _env_file=None,
            azure_cosmosdb_endpoint=self.azure_cosmosdb_endpoint,
            azure_cosmosdb_key=self.azure_cosmosdb_key,
            database_name=self.database_name,
            users_container=self.users_container,
            listings_container=self.listings_container,
            notifications_container=self.notifications_container,
        )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
