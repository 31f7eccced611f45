"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from party_optimizer.core.config import (
    AIProviderSettings,
    ModelSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from party_optimizer.core.exceptions import ConfigurationError


class TestAIProviderSettings:
    """Tests for AIProviderSettings configuration."""

    def test_default_values(self) -> None:
        """Test default provider settings."""
        settings = AIProviderSettings()

        assert settings.default_provider == "openrouter"
        assert settings.tactician_model == "google/gemini-2.0-flash-001"
        assert settings.timeout_seconds == 15.0
        assert settings.enabled is True

    def test_openrouter_without_key_is_allowed(self) -> None:
        """Test that OpenRouter may run keyless (fallback actions only)."""
        settings = AIProviderSettings()

        assert settings.active_api_key is None

    def test_active_api_key_reads_secret(self, mock_env_vars: dict[str, str]) -> None:
        """Test the active key follows the default provider."""
        settings = AIProviderSettings()

        assert settings.active_api_key == "test-openrouter-key"
        assert "test-openrouter-key" not in repr(settings)

    def test_openai_provider_requires_key(self) -> None:
        """Test that choosing OpenAI without a key fails."""
        with pytest.raises(ConfigurationError) as exc_info:
            AIProviderSettings(default_provider="openai")

        assert "openai_api_key" in str(exc_info.value)

    def test_openai_provider_with_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the direct OpenAI provider with a key."""
        monkeypatch.setenv("PARTY_OPTIMIZER_OPENAI_API_KEY", "sk-test")

        settings = AIProviderSettings(default_provider="openai")

        assert settings.active_api_key == "sk-test"


class TestModelSettings:
    """Tests for ModelSettings configuration."""

    def test_training_defaults(self) -> None:
        """Test training hyperparameter defaults."""
        settings = ModelSettings()

        assert settings.epochs == 200
        assert settings.batch_size == 32
        assert settings.learning_rate == 0.001
        assert settings.default_success_chance == 50

    def test_model_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the model directory is read from the environment."""
        monkeypatch.setenv("PARTY_OPTIMIZER_MODEL_MODEL_DIR", str(tmp_path / "artifacts"))

        settings = ModelSettings()

        assert settings.model_dir == tmp_path / "artifacts"


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings initialization."""
        settings = Settings()

        assert settings.app_name == "Party Optimizer"
        assert settings.log_level == "INFO"
        assert settings.api.port == 8000
        assert settings.ui.max_party_size == 6
        assert settings.is_production

    def test_debug_from_env(self, mock_env_vars: dict[str, str]) -> None:
        """Test debug and log level come from the environment."""
        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_cache(self) -> None:
        """Test that clearing the cache rebuilds settings."""
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first

    def test_invalid_config_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that invalid configuration surfaces as ConfigurationError."""
        monkeypatch.setenv("PARTY_OPTIMIZER_DEFAULT_PROVIDER", "openai")

        with pytest.raises(ConfigurationError):
            get_settings()
