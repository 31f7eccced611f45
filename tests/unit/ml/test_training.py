"""Tests for offline training."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from party_optimizer.core.exceptions import DatasetError, TrainingError
from party_optimizer.ml.artifacts import load_artifacts
from party_optimizer.ml.success_model import SuccessModel
from party_optimizer.ml.training import (
    TrainingRecord,
    build_training_tensors,
    load_training_records,
    main,
    train_success_model,
)


@pytest.fixture
def dataset(tmp_path: Path, character_payload: dict[str, object]) -> Path:
    """A small dataset file in the training format."""
    mage = {
        "name": "Elara",
        "class": "Mage",
        "strength": 5,
        "agility": 10,
        "health": 5,
        "mana": 25,
        "dexterity": 10,
        "wisdom": 25,
    }
    records = [
        {"party": [character_payload], "encounter": {"event_type": "Dragon Fight"}, "actual_outcome": "success"},
        {"party": [mage], "encounter": {"event_type": "Dragon Fight"}, "actual_outcome": "failure"},
        {"party": [mage], "encounter": {"event_type": "Mystic Puzzle"}, "actual_outcome": "success"},
        {"party": [character_payload], "encounter": {"event_type": "Mystic Puzzle"}, "actual_outcome": "failure"},
    ]
    path = tmp_path / "training_dataset.json"
    path.write_text(json.dumps(records))
    return path


class TestLoadTrainingRecords:
    """Tests for load_training_records."""

    def test_load(self, dataset: Path) -> None:
        records = load_training_records(dataset)

        assert len(records) == 4
        assert records[1].party[0].type == "Mage"
        assert [r.label for r in records] == [1.0, 0.0, 1.0, 0.0]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetError) as exc_info:
            load_training_records(tmp_path / "nope.json")

        assert "nope.json" in exc_info.value.details["dataset_path"]

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("[{")

        with pytest.raises(DatasetError, match="Cannot read"):
            load_training_records(path)

    @pytest.mark.parametrize("payload", [[], {"party": []}])
    def test_not_a_non_empty_array(self, tmp_path: Path, payload: object) -> None:
        path = tmp_path / "data.json"
        path.write_text(json.dumps(payload))

        with pytest.raises(DatasetError, match="non-empty JSON array"):
            load_training_records(path)

    def test_invalid_record(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text(json.dumps([{"party": "everyone", "encounter": {}}]))

        with pytest.raises(DatasetError, match="Invalid training record"):
            load_training_records(path)

    def test_only_success_is_positive(self) -> None:
        record = TrainingRecord.model_validate({"party": [], "encounter": {}, "actual_outcome": "Success"})

        assert record.label == 0.0


class TestTraining:
    """Tests for train_success_model."""

    def test_tensors(self, dataset: Path) -> None:
        features, labels = build_training_tensors(load_training_records(dataset))

        assert tuple(features.shape) == (4, 14)
        assert tuple(labels.shape) == (4, 1)

    def test_train(self, dataset: Path) -> None:
        report = train_success_model(load_training_records(dataset), epochs=50, batch_size=2, seed=1)

        assert report.sample_count == 4
        assert len(report.loss_history) == 50
        assert report.final_loss == report.loss_history[-1]
        assert report.final_loss < report.loss_history[0]
        assert not report.network.training

    def test_seeded_runs_match(self, dataset: Path) -> None:
        records = load_training_records(dataset)

        first = train_success_model(records, epochs=5, seed=3)
        second = train_success_model(records, epochs=5, seed=3)

        assert first.loss_history == second.loss_history

    def test_no_records(self) -> None:
        with pytest.raises(TrainingError):
            train_success_model([])

    def test_saved_model_reproduces_predictions(self, dataset: Path, tmp_path: Path) -> None:
        from party_optimizer.ml.artifacts import save_artifacts

        records = load_training_records(dataset)
        report = train_success_model(records, epochs=10, seed=5)
        save_artifacts(report.network, tmp_path / "model")

        features, _ = build_training_tensors(records)
        original = SuccessModel(report.network).predict_probability(features[0].tolist())
        restored = SuccessModel(load_artifacts(tmp_path / "model")).predict_probability(features[0].tolist())

        assert restored == pytest.approx(original, abs=1e-6)


class TestMain:
    """Tests for the training CLI."""

    def test_writes_artifacts(self, dataset: Path, tmp_path: Path) -> None:
        output = tmp_path / "out"

        status = main(["--dataset", str(dataset), "--output", str(output), "--epochs", "3", "--seed", "0"])

        assert status == 0
        assert (output / "model.json").is_file()
        assert (output / "weights.bin").is_file()

    def test_missing_dataset_exits_with_error(self, tmp_path: Path) -> None:
        status = main(["--dataset", str(tmp_path / "missing.json"), "--output", str(tmp_path / "out")])

        assert status == 1
        assert not (tmp_path / "out").exists()
