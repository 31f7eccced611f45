"""Success model inference and its process-wide loader.

The loader initialises once, on first use, under a lock: concurrent first
callers share a single load attempt, and the outcome (a ready model or
"unavailable") is kept for the life of the process.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from pathlib import Path

import torch
from torch import nn

from party_optimizer.core.config import get_settings
from party_optimizer.core.constants import FEATURE_COUNT
from party_optimizer.core.exceptions import ModelError, ModelUnavailableError
from party_optimizer.core.logging import get_logger
from party_optimizer.ml.artifacts import load_artifacts


logger = get_logger(__name__)


class SuccessModel:
    """Trained regressor mapping a feature vector to a success probability.

    Parameters are read-only after construction, so one instance can serve
    concurrent requests.
    """

    def __init__(self, network: nn.Module) -> None:
        self._network = network.eval()

    @classmethod
    def load(cls, model_dir: str | Path) -> SuccessModel:
        """Load a model from persisted artifacts.

        Args:
            model_dir: Directory containing model.json and weights.bin.

        Returns:
            A ready SuccessModel.

        Raises:
            ModelUnavailableError: If the directory does not exist.
            ModelArtifactError: If the artifacts are missing or invalid.
        """
        model_dir = Path(model_dir)
        if not model_dir.is_dir():
            raise ModelUnavailableError("Model directory not found", model_dir=str(model_dir))
        return cls(load_artifacts(model_dir))

    def predict_probability(self, features: Sequence[float]) -> float:
        """Predict the probability that the party succeeds.

        Args:
            features: The 14-value feature vector.

        Returns:
            Probability in [0, 1].

        Raises:
            ModelError: If the vector has the wrong length.
        """
        if len(features) != FEATURE_COUNT:
            raise ModelError(
                "Feature vector has the wrong length",
                details={"length": len(features), "expected": FEATURE_COUNT},
            )
        # Tensors created here live only inside the inference scope.
        with torch.inference_mode():
            inputs = torch.tensor([list(features)], dtype=torch.float32)
            probability = self._network(inputs)
            return float(probability.reshape(-1)[0])


class ModelLoader:
    """Lazy, memoised, thread-safe success model loader.

    Attributes:
        model_dir: Directory to load from; defaults to the configured one.
    """

    def __init__(self, model_dir: str | Path | None = None) -> None:
        self.model_dir = Path(model_dir) if model_dir is not None else None
        self._lock = threading.Lock()
        self._attempted = False
        self._model: SuccessModel | None = None

    @property
    def attempted(self) -> bool:
        """Whether the one-time load has already run."""
        return self._attempted

    def get(self) -> SuccessModel | None:
        """Return the shared model, loading it on first call.

        Returns:
            The loaded model, or None if it is unavailable. A failed load is
            not retried.
        """
        if self._attempted:
            return self._model
        with self._lock:
            if not self._attempted:
                try:
                    self._model = self._load()
                finally:
                    self._attempted = True
        return self._model

    def _load(self) -> SuccessModel | None:
        model_dir = self.model_dir or get_settings().model.model_dir
        try:
            model = SuccessModel.load(model_dir)
        except ModelError as exc:
            logger.error(
                "Success model unavailable, default success chance will be used",
                error=exc.message,
                **exc.details,
            )
            return None
        except Exception as exc:
            # Corrupt artifacts can fail inside json, numpy or torch.
            logger.error(
                "Success model unavailable, default success chance will be used",
                error=str(exc),
                error_type=type(exc).__name__,
                model_dir=str(model_dir),
            )
            return None
        logger.info("Success model loaded", model_dir=str(model_dir))
        return model


_loader_lock = threading.Lock()
_loader: ModelLoader | None = None


def get_model_loader() -> ModelLoader:
    """Get the process-wide model loader."""
    global _loader

    with _loader_lock:
        if _loader is None:
            _loader = ModelLoader()
        return _loader


def get_success_model() -> SuccessModel | None:
    """Return the process-wide success model, or None if unavailable."""
    return get_model_loader().get()


def reset_model_cache() -> None:
    """Discard the process-wide loader so the next call loads again.

    Intended for tests and for picking up freshly trained artifacts.
    """
    global _loader

    with _loader_lock:
        _loader = None


__all__ = [
    "SuccessModel",
    "ModelLoader",
    "get_model_loader",
    "get_success_model",
    "reset_model_cache",
]
