"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        PartyOptimizerError: Base exception for all application errors.
        ValidationError: Request and party validation errors.
        ModelUnavailableError, ModelArtifactError, DatasetError: Model errors.
        AIControlError and subclasses: Generative-service failures.
        AnalysisError: Unexpected analysis pipeline failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging, get_logger, bind_context, clear_context,
        request_context.
"""

from __future__ import annotations

from party_optimizer.core.config import (
    AIProviderSettings,
    APISettings,
    ModelSettings,
    Settings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from party_optimizer.core.exceptions import (
    AIConnectionError,
    AIControlError,
    AIResponseError,
    AITimeoutError,
    AnalysisError,
    ConfigurationError,
    DatasetError,
    ModelArtifactError,
    ModelError,
    ModelUnavailableError,
    PartyOptimizerError,
    TrainingError,
    ValidationError,
)
from party_optimizer.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    request_context,
)


__all__ = [
    # Exceptions
    "PartyOptimizerError",
    "ConfigurationError",
    "ValidationError",
    "ModelError",
    "ModelUnavailableError",
    "ModelArtifactError",
    "TrainingError",
    "DatasetError",
    "AIControlError",
    "AIConnectionError",
    "AIResponseError",
    "AITimeoutError",
    "AnalysisError",
    # Configuration
    "Settings",
    "AIProviderSettings",
    "ModelSettings",
    "APISettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "request_context",
]
