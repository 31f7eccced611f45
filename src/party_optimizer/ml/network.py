"""Feed-forward network behind the success model.

Topology: features -> Dense(64, relu) -> Dense(32, relu) -> Dense(1, sigmoid).
The structural description produced here is what gets persisted next to
the weights, and ``build_network_from_topology`` rebuilds the same module
from it at serving time.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any

from torch import nn

from party_optimizer.core.constants import FEATURE_COUNT
from party_optimizer.core.exceptions import ModelArtifactError


HIDDEN_LAYERS: tuple[tuple[int, str], ...] = ((64, "relu"), (32, "relu"))
OUTPUT_LAYER: tuple[int, str] = (1, "sigmoid")

_ACTIVATIONS: dict[str, type[nn.Module] | None] = {
    "relu": nn.ReLU,
    "sigmoid": nn.Sigmoid,
    "linear": None,
}


def _layers_to_modules(input_size: int, layers: list[dict[str, Any]]) -> nn.Sequential:
    modules: OrderedDict[str, nn.Module] = OrderedDict()
    previous = input_size
    for index, layer in enumerate(layers, start=1):
        try:
            units = int(layer["units"])
            activation = layer.get("activation", "linear")
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ModelArtifactError(f"Invalid layer description: {layer!r}") from exc
        if units < 1:
            raise ModelArtifactError(f"Layer units must be positive, got {units}", details={"layer": index})
        if not isinstance(activation, str) or activation not in _ACTIVATIONS:
            raise ModelArtifactError(
                f"Unsupported activation '{activation}'",
                details={"layer": layer.get("name", index)},
            )
        name = layer.get("name", f"dense_{index}")
        modules[name] = nn.Linear(previous, units)
        activation_cls = _ACTIVATIONS[activation]
        if activation_cls is not None:
            modules[f"{activation}_{index}"] = activation_cls()
        previous = units
    return nn.Sequential(modules)


def build_network(input_size: int = FEATURE_COUNT) -> nn.Sequential:
    """Create a freshly initialised success network.

    Args:
        input_size: Length of the feature vector.

    Returns:
        An untrained torch Sequential module.
    """
    layers = [
        {"name": f"dense_{index}", "units": units, "activation": activation}
        for index, (units, activation) in enumerate((*HIDDEN_LAYERS, OUTPUT_LAYER), start=1)
    ]
    return _layers_to_modules(input_size, layers)


def describe_topology(network: nn.Sequential) -> dict[str, Any]:
    """Describe a network's layer sizes and activations.

    Args:
        network: A Sequential of Linear layers, each optionally followed by
            a ReLU or Sigmoid.

    Returns:
        A JSON-serialisable structural description.
    """
    layers: list[dict[str, Any]] = []
    input_size: int | None = None
    for name, module in network.named_children():
        if isinstance(module, nn.Linear):
            if input_size is None:
                input_size = module.in_features
            layers.append({"name": name, "units": module.out_features, "activation": "linear"})
        elif isinstance(module, nn.ReLU) and layers:
            layers[-1]["activation"] = "relu"
        elif isinstance(module, nn.Sigmoid) and layers:
            layers[-1]["activation"] = "sigmoid"
        else:
            raise ModelArtifactError(
                f"Cannot describe layer '{name}' of type {type(module).__name__}",
            )
    return {"class_name": "Sequential", "input_size": input_size, "layers": layers}


def build_network_from_topology(topology: dict[str, Any]) -> nn.Sequential:
    """Rebuild an (uninitialised) network from its structural description.

    Raises:
        ModelArtifactError: If the description is incomplete or unsupported.
    """
    try:
        input_size = int(topology["input_size"])
        layers = list(topology["layers"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ModelArtifactError(f"Invalid model topology: {exc}") from exc
    if input_size != FEATURE_COUNT:
        raise ModelArtifactError(
            "Model topology does not match the feature vector",
            details={"input_size": input_size, "expected": FEATURE_COUNT},
        )
    return _layers_to_modules(input_size, layers)


__all__ = [
    "HIDDEN_LAYERS",
    "OUTPUT_LAYER",
    "build_network",
    "describe_topology",
    "build_network_from_topology",
]
