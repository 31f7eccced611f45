"""Configuration management for the Party Optimizer.

Centralized configuration using pydantic-settings, supporting environment
variables and .env files. API keys are held as SecretStr.

Example:
    >>> from party_optimizer.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.model.default_success_chance)
    50

Environment Variables:
    PARTY_OPTIMIZER_OPENROUTER_API_KEY: OpenRouter API key
    PARTY_OPTIMIZER_OPENAI_API_KEY: OpenAI API key
    PARTY_OPTIMIZER_MODEL_MODEL_DIR: Directory holding model.json and weights.bin
    PARTY_OPTIMIZER_MODEL_DATASET_PATH: Offline training dataset
    PARTY_OPTIMIZER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from party_optimizer.core.exceptions import ConfigurationError


class AIProviderSettings(BaseSettings):
    """Configuration for the generative-text provider.

    Attributes:
        openrouter_api_key: OpenRouter API key (primary provider).
        openai_api_key: OpenAI API key for the direct provider.
        default_provider: Which provider the tactician talks to.
        tactician_model: Model identifier used for turn actions.
        temperature: Sampling temperature.
        timeout_seconds: Hard timeout on the single outbound call.
        enabled: Set to False to always use fallback turn actions.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_OPTIMIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openrouter_api_key: SecretStr | None = Field(
        default=None,
        description="OpenRouter API key (primary)",
    )
    openai_api_key: SecretStr | None = Field(
        default=None,
        description="OpenAI API key",
    )
    default_provider: Literal["openrouter", "openai"] = Field(
        default="openrouter",
        description="Default AI provider to use",
    )
    tactician_model: str = Field(
        default="google/gemini-2.0-flash-001",
        description="Model used to generate turn actions",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=120,
        description="Generative call timeout",
    )
    enabled: bool = Field(
        default=True,
        description="Enable the generative turn-action call",
    )

    @model_validator(mode="after")
    def validate_api_key_for_provider(self) -> "AIProviderSettings":
        """Ensure an explicitly chosen OpenAI provider has a key.

        OpenRouter without a key is allowed: the tactician is simply not
        built and turn actions come from the fallback table.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If OpenAI is the provider but no key is set.
        """
        if self.default_provider == "openai" and not self.openai_api_key:
            raise ConfigurationError(
                "OpenAI is set as default provider but OPENAI_API_KEY is not configured",
                config_key="openai_api_key",
            )
        return self

    @property
    def active_api_key(self) -> str | None:
        """Return the plain API key of the default provider, if any."""
        secret = (
            self.openrouter_api_key
            if self.default_provider == "openrouter"
            else self.openai_api_key
        )
        return secret.get_secret_value() if secret else None


class ModelSettings(BaseSettings):
    """Configuration for the success model and its offline training.

    Attributes:
        model_dir: Directory holding model.json and weights.bin.
        dataset_path: JSON training dataset.
        epochs: Training passes over the dataset.
        batch_size: Mini-batch size.
        learning_rate: Adam learning rate.
        seed: Optional torch seed for reproducible training.
        default_success_chance: Percentage used when the model is unavailable.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_OPTIMIZER_MODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    model_dir: Path = Field(
        default=Path("models/party-optimizer-model"),
        description="Directory of persisted model artifacts",
    )
    dataset_path: Path = Field(
        default=Path("data/training_dataset.json"),
        description="Offline training dataset",
    )
    epochs: int = Field(default=200, ge=1, le=10_000, description="Training epochs")
    batch_size: int = Field(default=32, ge=1, le=4096, description="Mini-batch size")
    learning_rate: float = Field(default=0.001, gt=0, le=1, description="Adam learning rate")
    seed: int | None = Field(default=None, description="Training seed")
    default_success_chance: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Success chance substituted when the model is unavailable",
    )


class APISettings(BaseSettings):
    """Configuration for the HTTP API.

    Attributes:
        host: Bind address for uvicorn.
        port: Bind port for uvicorn.
        cors_origins: Origins allowed to call the API from a browser.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_OPTIMIZER_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:8501"],
        description="Allowed CORS origins",
    )


class UISettings(BaseSettings):
    """Configuration for the Streamlit party builder.

    Attributes:
        page_title: Browser page title.
        max_party_size: Upper bound of the member count selector.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_OPTIMIZER_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_title: str = Field(default="Party Optimizer", description="Browser page title")
    max_party_size: int = Field(default=6, ge=1, le=12, description="Largest party")


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON logs instead of console output.
        ai: Generative provider settings.
        model: Success model settings.
        api: HTTP API settings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_OPTIMIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        protected_namespaces=(),
    )

    app_name: str = Field(default="Party Optimizer", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="JSON log output")

    ai: AIProviderSettings = Field(default_factory=AIProviderSettings)
    model: ModelSettings = Field(default_factory=ModelSettings)
    api: APISettings = Field(default_factory=APISettings)
    ui: UISettings = Field(default_factory=UISettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "AIProviderSettings",
    "ModelSettings",
    "APISettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
