"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
import json
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exchange_relay.errors import ConfigurationError

DEFAULT_REQUEST_TIMEOUT_MS = 60000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
        protected_namespaces=("settings_",),  # allow MODEL_MAP as model_map
    )

    # Application settings
    app_name: str = "Exchange Relay"
    environment: str = "local"
    relay_version: str = "1"

    # Azure OpenAI upstream
    aoai_endpoint: str = ""
    aoai_api_version: str = ""
    aoai_api_key: str = ""
    request_timeout_ms: float = DEFAULT_REQUEST_TIMEOUT_MS

    # JSON object: display name -> deployment name
    model_map: str = "{}"

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = True

    @field_validator("aoai_endpoint")
    @classmethod
    def _strip_endpoint(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("aoai_api_version", "aoai_api_key")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"


@dataclass(frozen=True)
class RelayConfig:
    """Validated upstream settings used by a single chat relay call."""

    endpoint: str
    api_version: str
    api_key: str
    request_timeout_ms: float = DEFAULT_REQUEST_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0


def resolve_relay_config(settings: Settings) -> RelayConfig:
    """
    Build the upstream config from settings.

    Raises:
        ConfigurationError: If endpoint, API version or API key is empty,
            or the request timeout is not a positive number.
    """
    required = {
        "AOAI_ENDPOINT": settings.aoai_endpoint,
        "AOAI_API_VERSION": settings.aoai_api_version,
        "AOAI_API_KEY": settings.aoai_api_key,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Server misconfiguration: {', '.join(missing)} must be set."
        )

    timeout_ms = settings.request_timeout_ms
    if not math.isfinite(timeout_ms) or timeout_ms <= 0:
        raise ConfigurationError(
            "Server misconfiguration: REQUEST_TIMEOUT_MS must be a positive number."
        )

    return RelayConfig(
        endpoint=settings.aoai_endpoint,
        api_version=settings.aoai_api_version,
        api_key=settings.aoai_api_key,
        request_timeout_ms=timeout_ms,
    )


def resolve_model_map(settings: Settings) -> Dict[str, str]:
    """
    Parse MODEL_MAP into a {display name: deployment name} dict.

    Raises:
        ConfigurationError: If MODEL_MAP is not a JSON object of non-empty strings.
    """
    raw = settings.model_map.strip() or "{}"
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise ConfigurationError(f"Server misconfiguration: MODEL_MAP is not valid JSON ({e}).")

    if not isinstance(parsed, dict):
        raise ConfigurationError("Server misconfiguration: MODEL_MAP must be a JSON object.")

    bad_entries: List[str] = [
        str(name)
        for name, deployment in parsed.items()
        if not isinstance(deployment, str) or not deployment.strip()
    ]
    if bad_entries:
        raise ConfigurationError(
            "Server misconfiguration: MODEL_MAP entries must map to deployment names: "
            + ", ".join(sorted(bad_entries))
        )

    return {name: deployment.strip() for name, deployment in parsed.items()}


def count_model_map_entries(settings: Settings) -> int:
    """Number of MODEL_MAP entries, 0 when the map is unusable."""
    try:
        return len(resolve_model_map(settings))
    except ConfigurationError:
        return 0


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
