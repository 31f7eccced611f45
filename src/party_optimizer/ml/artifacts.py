"""Persisted model artifacts.

A model directory holds two files:

* ``model.json``: the structural description plus a weights manifest naming
  every tensor with its shape and dtype, and pointing at the weights file.
* ``weights.bin``: the raw little-endian float32 values of those tensors,
  concatenated in manifest order.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import numpy as np
import torch
from torch import nn

from party_optimizer.core.constants import MODEL_JSON_FILENAME, WEIGHTS_FILENAME
from party_optimizer.core.exceptions import ModelArtifactError
from party_optimizer.core.logging import get_logger
from party_optimizer.ml.network import build_network_from_topology, describe_topology


logger = get_logger(__name__)

ARTIFACT_FORMAT = "party-optimizer/1"

_DTYPES: dict[str, str] = {"float32": "<f4"}


def save_artifacts(network: nn.Sequential, directory: str | Path) -> Path:
    """Write a trained network to a model directory.

    Args:
        network: The trained success network.
        directory: Target directory (created if missing).

    Returns:
        Path of the written model.json.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    weight_specs: list[dict[str, Any]] = []
    chunks: list[bytes] = []
    for name, tensor in network.state_dict().items():
        array = tensor.detach().cpu().numpy().astype(_DTYPES["float32"])
        weight_specs.append({"name": name, "shape": list(array.shape), "dtype": "float32"})
        chunks.append(array.tobytes(order="C"))

    model_json = {
        "format": ARTIFACT_FORMAT,
        "modelTopology": describe_topology(network),
        "weightsManifest": [{"paths": [WEIGHTS_FILENAME], "weights": weight_specs}],
    }

    weights_path = directory / WEIGHTS_FILENAME
    weights_path.write_bytes(b"".join(chunks))
    json_path = directory / MODEL_JSON_FILENAME
    json_path.write_text(json.dumps(model_json, indent=2), encoding="utf-8")

    logger.info(
        "Model artifacts saved",
        directory=str(directory),
        tensors=len(weight_specs),
        weight_bytes=weights_path.stat().st_size,
    )
    return json_path


def _read_model_json(json_path: Path) -> dict[str, Any]:
    if not json_path.is_file():
        raise ModelArtifactError("Model description not found", artifact=str(json_path))
    try:
        model_json = json.loads(json_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ModelArtifactError(
            f"Cannot read model description: {exc}",
            artifact=str(json_path),
        ) from exc
    if not isinstance(model_json, dict):
        raise ModelArtifactError("Model description must be a JSON object", artifact=str(json_path))
    return model_json


def _decode_weights(
    weight_data: bytes,
    weight_specs: list[dict[str, Any]],
) -> dict[str, torch.Tensor]:
    state_dict: dict[str, torch.Tensor] = {}
    offset = 0
    for spec in weight_specs:
        try:
            name = spec["name"]
            shape = [int(dim) for dim in spec["shape"]]
            dtype = np.dtype(_DTYPES[spec.get("dtype", "float32")])
        except (KeyError, TypeError, ValueError) as exc:
            raise ModelArtifactError(f"Invalid weight spec: {spec!r}") from exc

        count = math.prod(shape)
        nbytes = count * dtype.itemsize
        if offset + nbytes > len(weight_data):
            raise ModelArtifactError(
                "Weights file is shorter than the manifest",
                details={"tensor": name, "needed": offset + nbytes, "available": len(weight_data)},
            )
        array = np.frombuffer(weight_data, dtype=dtype, count=count, offset=offset).reshape(shape)
        state_dict[name] = torch.from_numpy(array.astype(np.float32))
        offset += nbytes

    if offset != len(weight_data):
        raise ModelArtifactError(
            "Weights file is longer than the manifest",
            details={"consumed": offset, "available": len(weight_data)},
        )
    return state_dict


def load_artifacts(directory: str | Path) -> nn.Sequential:
    """Rebuild a trained network from a model directory.

    Args:
        directory: Directory containing model.json and its weights file(s).

    Returns:
        The network in eval mode.

    Raises:
        ModelArtifactError: If an artifact is missing, malformed, or the
            weights do not fit the described topology.
    """
    directory = Path(directory)
    model_json = _read_model_json(directory / MODEL_JSON_FILENAME)

    try:
        topology = model_json["modelTopology"]
        manifest = model_json["weightsManifest"]
        groups = [(list(group["paths"]), list(group["weights"])) for group in manifest]
    except (KeyError, TypeError) as exc:
        raise ModelArtifactError(
            f"Model description is missing {exc}",
            artifact=str(directory / MODEL_JSON_FILENAME),
        ) from exc

    buffers: list[bytes] = []
    weight_specs: list[dict[str, Any]] = []
    for paths, specs in groups:
        for relative_path in paths:
            weights_path = directory / relative_path
            try:
                buffers.append(weights_path.read_bytes())
            except OSError as exc:
                raise ModelArtifactError(
                    f"Cannot read weights: {exc}",
                    artifact=str(weights_path),
                ) from exc
        weight_specs.extend(specs)

    state_dict = _decode_weights(b"".join(buffers), weight_specs)
    network = build_network_from_topology(topology)
    try:
        network.load_state_dict(state_dict)
    except RuntimeError as exc:
        raise ModelArtifactError(
            f"Weights do not match the model topology: {exc}",
            artifact=str(directory),
        ) from exc

    network.eval()
    return network


__all__ = [
    "ARTIFACT_FORMAT",
    "save_artifacts",
    "load_artifacts",
]
