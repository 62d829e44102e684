"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CLEANING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Cleaning Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Directory holding the JSON collection files.")
    log_level: str = Field(default="INFO", description="Root logger level.")
    log_file: Optional[Path] = Field(default=None, description="Optional file to mirror log output to.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:3001",
            "http://127.0.0.1:3001",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Geocoding provider (Mapbox forward geocoding compatible)
    geocoder_base_url: str = Field(
        default="https://api.mapbox.com/geocoding/v5/mapbox.places",
        description="Base URL of the forward geocoding endpoint.",
    )
    geocoder_access_token: Optional[str] = Field(
        default=None,
        description="Access token for the geocoding provider. Geocoding is disabled when unset.",
    )
    geocoder_country: str = Field(default="gb", description="ISO country code results are limited to.")
    geocoder_types: str = Field(default="address,postcode")
    geocoder_limit: int = Field(default=5, ge=1, le=10)
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoder_max_retries: int = Field(default=2, ge=0)
    geocoder_backoff_seconds: float = Field(default=0.5, ge=0.0)
    geocoder_confidence_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum relevance score for an address to count as verified.",
    )

    # Client data layer
    client_base_url: str = Field(default="http://localhost:8000/api", description="API root used by PlannerClient.")
    client_timeout_seconds: float = Field(default=10.0, gt=0.0)

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def geocoder_configured(self) -> bool:
        return bool(self.geocoder_access_token)


settings = Settings()
