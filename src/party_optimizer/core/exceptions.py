"""Custom exception hierarchy for the Party Optimizer.

All exceptions inherit from PartyOptimizerError so the HTTP boundary can
handle every domain failure uniformly while keeping domain-specific context
in ``details``.

Example:
    >>> from party_optimizer.core.exceptions import DatasetError
    >>> raise DatasetError("Dataset not found", dataset_path="data/training_dataset.json")
"""

from __future__ import annotations

from typing import Any


class PartyOptimizerError(Exception):
    """Base exception for all Party Optimizer errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(PartyOptimizerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(PartyOptimizerError):
    """Raised when a party, request or record fails validation.

    These are the only errors whose message is shown to the caller verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Success Model Exceptions
# =============================================================================


class ModelError(PartyOptimizerError):
    """Base exception for success model loading, inference and training."""


class ModelUnavailableError(ModelError):
    """Raised when the trained success model cannot be located or loaded.

    The model loader converts this into an "unavailable" outcome; it never
    reaches an API caller.
    """

    def __init__(
        self,
        message: str,
        *,
        model_dir: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the model directory that was searched.

        Args:
            message: Human-readable error description.
            model_dir: Directory the artifacts were expected in.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if model_dir:
            combined_details["model_dir"] = model_dir
        super().__init__(message, details=combined_details)


class ModelArtifactError(ModelError):
    """Raised when persisted model artifacts are missing or inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        artifact: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending artifact path.

        Args:
            message: Human-readable error description.
            artifact: Path of the artifact file involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if artifact:
            combined_details["artifact"] = artifact
        super().__init__(message, details=combined_details)


class TrainingError(ModelError):
    """Raised when offline training cannot proceed."""


class DatasetError(TrainingError):
    """Raised when the training dataset is missing or malformed."""

    def __init__(
        self,
        message: str,
        *,
        dataset_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the dataset path.

        Args:
            message: Human-readable error description.
            dataset_path: Path to the dataset file.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if dataset_path:
            combined_details["dataset_path"] = dataset_path
        super().__init__(message, details=combined_details)


# =============================================================================
# AI Control Exceptions
# =============================================================================


class AIControlError(PartyOptimizerError):
    """Base exception for generative-text failures.

    The recommendation composer catches this family and substitutes
    deterministic fallback actions.
    """

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AI control error with model context.

        Args:
            message: Human-readable error description.
            model: Name of the AI model involved.
            provider: Name of the AI provider (e.g., 'openrouter', 'openai').
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if model:
            combined_details["model"] = model
        if provider:
            combined_details["provider"] = provider
        super().__init__(message, details=combined_details)


class AIConnectionError(AIControlError):
    """Raised when the generative service cannot be reached."""


class AIResponseError(AIControlError):
    """Raised when a generative response is malformed or not a JSON array."""


class AITimeoutError(AIControlError):
    """Raised when the generative call exceeds its timeout."""


# =============================================================================
# Analysis Exceptions
# =============================================================================


class AnalysisError(PartyOptimizerError):
    """Raised when the analysis pipeline fails unexpectedly.

    Surfaced to API callers only as a generic failure message.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the pipeline stage that failed.

        Args:
            message: Human-readable error description.
            stage: Name of the pipeline stage.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if stage:
            combined_details["stage"] = stage
        super().__init__(message, details=combined_details)


__all__ = [
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
]
