"""Offline training of the success model.

Reads a static JSON array of ``{party, encounter, actual_outcome}`` records,
fits the network with binary cross-entropy and Adam, and writes the model
artifacts the API loads at serving time.

Usage:
    party-optimizer-train --dataset data/training_dataset.json \\
        --output models/party-optimizer-model --epochs 200
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import torch
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from torch import nn
from torch.utils.data import DataLoader, TensorDataset

from party_optimizer.core.config import get_settings
from party_optimizer.core.exceptions import DatasetError, TrainingError
from party_optimizer.core.logging import configure_logging, get_logger
from party_optimizer.engine.features import extract_features
from party_optimizer.ml.artifacts import save_artifacts
from party_optimizer.ml.network import build_network
from party_optimizer.models.party import Character, Encounter


logger = get_logger(__name__)

SUCCESS_OUTCOME = "success"


class TrainingRecord(BaseModel):
    """One observed adventure outcome.

    Attributes:
        party: The party that attempted the encounter.
        encounter: The encounter attempted.
        actual_outcome: Observed result; only 'success' counts as a success.
    """

    model_config = ConfigDict(extra="ignore")

    party: list[Character] = Field(default_factory=list)
    encounter: Encounter
    actual_outcome: str = ""

    @property
    def label(self) -> float:
        """Binary training target."""
        return 1.0 if self.actual_outcome == SUCCESS_OUTCOME else 0.0


@dataclass
class TrainingReport:
    """Result of a training run.

    Attributes:
        network: The trained network, in eval mode.
        sample_count: Number of records trained on.
        loss_history: Mean loss of each epoch.
    """

    network: nn.Sequential
    sample_count: int
    loss_history: list[float] = field(default_factory=list)

    @property
    def final_loss(self) -> float | None:
        """Mean loss of the last epoch."""
        return self.loss_history[-1] if self.loss_history else None


_RECORDS_ADAPTER = TypeAdapter(list[TrainingRecord])


def load_training_records(path: str | Path) -> list[TrainingRecord]:
    """Load and validate a training dataset.

    Args:
        path: JSON file holding an array of records.

    Returns:
        The parsed records.

    Raises:
        DatasetError: If the file is missing, unreadable, not a non-empty
            array, or contains invalid records.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetError("Training dataset not found", dataset_path=str(path))
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise DatasetError(f"Cannot read training dataset: {exc}", dataset_path=str(path)) from exc
    if not isinstance(raw, list) or not raw:
        raise DatasetError("Training dataset must be a non-empty JSON array", dataset_path=str(path))
    try:
        return _RECORDS_ADAPTER.validate_python(raw)
    except PydanticValidationError as exc:
        raise DatasetError(
            f"Invalid training record: {exc.errors()[0]['msg']}",
            dataset_path=str(path),
            details={"error_count": exc.error_count()},
        ) from exc


def build_training_tensors(records: Sequence[TrainingRecord]) -> tuple[torch.Tensor, torch.Tensor]:
    """Encode records as a feature matrix and a column of labels."""
    features = torch.tensor(
        [extract_features(record.party, record.encounter) for record in records],
        dtype=torch.float32,
    )
    labels = torch.tensor([[record.label] for record in records], dtype=torch.float32)
    return features, labels


def train_success_model(
    records: Sequence[TrainingRecord],
    *,
    epochs: int = 200,
    batch_size: int = 32,
    learning_rate: float = 0.001,
    seed: int | None = None,
    log_every: int = 20,
) -> TrainingReport:
    """Fit a fresh success network on the given records.

    Args:
        records: Labelled training records.
        epochs: Passes over the dataset.
        batch_size: Mini-batch size (batches are reshuffled each epoch).
        learning_rate: Adam learning rate.
        seed: Optional seed for weight init and shuffling.
        log_every: Log the epoch loss every this many epochs.

    Returns:
        TrainingReport with the trained network.

    Raises:
        TrainingError: If there is nothing to train on.
    """
    if not records:
        raise TrainingError("No training records supplied")

    generator = torch.Generator()
    if seed is not None:
        torch.manual_seed(seed)
        generator.manual_seed(seed)

    features, labels = build_training_tensors(records)
    network = build_network(features.shape[1])
    loader = DataLoader(
        TensorDataset(features, labels),
        batch_size=batch_size,
        shuffle=True,
        generator=generator,
    )
    optimizer = torch.optim.Adam(network.parameters(), lr=learning_rate)
    loss_fn = nn.BCELoss()

    logger.info(
        "Training success model",
        samples=len(records),
        positives=int(labels.sum().item()),
        epochs=epochs,
    )

    history: list[float] = []
    network.train()
    for epoch in range(epochs):
        epoch_loss = 0.0
        for batch_features, batch_labels in loader:
            optimizer.zero_grad()
            loss = loss_fn(network(batch_features), batch_labels)
            loss.backward()
            optimizer.step()
            epoch_loss += loss.item() * batch_features.shape[0]
        epoch_loss /= len(records)
        history.append(epoch_loss)
        if epoch % log_every == 0:
            logger.info("Epoch complete", epoch=epoch, loss=round(epoch_loss, 4))

    network.eval()
    logger.info("Model training complete", final_loss=round(history[-1], 4))
    return TrainingReport(network=network, sample_count=len(records), loss_history=history)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="party-optimizer-train",
        description="Train the party success model and write its artifacts.",
    )
    parser.add_argument("--dataset", type=Path, default=None, help="Training dataset JSON")
    parser.add_argument("--output", type=Path, default=None, help="Model artifact directory")
    parser.add_argument("--epochs", type=int, default=None, help="Training epochs")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point.

    Returns:
        Process exit status: 0 on success, 1 if the dataset cannot be read.
    """
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    dataset_path = args.dataset or settings.model.dataset_path
    output_dir = args.output or settings.model.model_dir

    try:
        records = load_training_records(dataset_path)
    except DatasetError as exc:
        logger.error("Cannot train without a dataset", error=exc.message, **exc.details)
        return 1

    report = train_success_model(
        records,
        epochs=args.epochs or settings.model.epochs,
        batch_size=settings.model.batch_size,
        learning_rate=settings.model.learning_rate,
        seed=args.seed if args.seed is not None else settings.model.seed,
    )
    save_artifacts(report.network, output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())


__all__ = [
    "SUCCESS_OUTCOME",
    "TrainingRecord",
    "TrainingReport",
    "load_training_records",
    "build_training_tensors",
    "train_success_model",
    "main",
]
