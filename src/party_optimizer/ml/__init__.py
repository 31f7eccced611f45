"""Success model: network, persisted artifacts, inference and training.

Submodules:
    network: torch network definition and structural description.
    artifacts: model.json + weights.bin persistence.
    success_model: Inference wrapper and process-wide loader.
    training: Offline training script.
"""

from __future__ import annotations

from party_optimizer.ml.artifacts import load_artifacts, save_artifacts
from party_optimizer.ml.network import build_network, describe_topology
from party_optimizer.ml.success_model import (
    ModelLoader,
    SuccessModel,
    get_model_loader,
    get_success_model,
    reset_model_cache,
)


__all__ = [
    "build_network",
    "describe_topology",
    "save_artifacts",
    "load_artifacts",
    "SuccessModel",
    "ModelLoader",
    "get_model_loader",
    "get_success_model",
    "reset_model_cache",
]
