"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Party Optimizer test suite.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from party_optimizer.models.party import Character


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from party_optimizer.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_model_cache() -> Generator[None, None, None]:
    """Discard the process-wide success model before and after each test."""
    from party_optimizer.ml.success_model import reset_model_cache as reset

    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from real API keys and real model artifacts."""
    for key in (
        "PARTY_OPTIMIZER_OPENROUTER_API_KEY",
        "PARTY_OPTIMIZER_OPENAI_API_KEY",
        "PARTY_OPTIMIZER_DEFAULT_PROVIDER",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PARTY_OPTIMIZER_MODEL_MODEL_DIR", str(tmp_path / "no-model"))


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "PARTY_OPTIMIZER_OPENROUTER_API_KEY": "test-openrouter-key",
        "PARTY_OPTIMIZER_DEBUG": "true",
        "PARTY_OPTIMIZER_LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def thane() -> Character:
    """A Barbarian at class base stats."""
    from party_optimizer.models.party import Character

    return Character(
        name="Thane",
        type="Barbarian",
        strength=25,
        agility=10,
        health=25,
        mana=5,
        dexterity=10,
        wisdom=5,
    )


@pytest.fixture
def elara() -> Character:
    """A Mage at class base stats."""
    from party_optimizer.models.party import Character

    return Character(
        name="Elara",
        type="Mage",
        strength=5,
        agility=10,
        health=5,
        mana=25,
        dexterity=10,
        wisdom=25,
    )


@pytest.fixture
def vex() -> Character:
    """A Rogue at class base stats."""
    from party_optimizer.models.party import Character

    return Character(
        name="Vex",
        type="Rogue",
        strength=10,
        agility=25,
        health=5,
        mana=5,
        dexterity=25,
        wisdom=10,
    )


@pytest.fixture
def character_payload() -> dict[str, object]:
    """A Barbarian as the party editor sends it."""
    return {
        "name": "Thane",
        "type": "Barbarian",
        "strength": 25,
        "agility": 10,
        "health": 25,
        "mana": 5,
        "dexterity": 10,
        "wisdom": 5,
    }


# =============================================================================
# Collaborator Fixtures
# =============================================================================


class FakeTactician:
    """TacticalActionGenerator returning canned actions and recording calls."""

    def __init__(self, actions: object = None) -> None:
        self.actions = actions if actions is not None else [
            "Primary: Rage and cleave.",
            "Alternative: Shove the foe prone.",
            "Defensive: Brace behind your shield.",
        ]
        self.calls: list[tuple[str, str]] = []

    def generate_tactical_actions(self, character: Character, event_type: str) -> Sequence[str]:
        self.calls.append((character.name, event_type))
        return self.actions  # type: ignore[return-value]


class FailingTactician:
    """TacticalActionGenerator that always fails like an unreachable provider."""

    def __init__(self) -> None:
        self.calls = 0

    def generate_tactical_actions(self, character: Character, event_type: str) -> Sequence[str]:
        from party_optimizer.core.exceptions import AIConnectionError

        self.calls += 1
        raise AIConnectionError("provider unreachable", provider="openrouter")


@pytest.fixture
def fake_tactician() -> FakeTactician:
    """Tactician returning three canned actions."""
    return FakeTactician()


@pytest.fixture
def failing_tactician() -> FailingTactician:
    """Tactician that always raises AIConnectionError."""
    return FailingTactician()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def model_dir(tmp_path: Path) -> Path:
    """Directory holding artifacts of a small, seeded (untrained) network."""
    import torch

    from party_optimizer.ml.artifacts import save_artifacts
    from party_optimizer.ml.network import build_network

    torch.manual_seed(0)
    directory = tmp_path / "party-optimizer-model"
    save_artifacts(build_network(), directory)
    return directory
