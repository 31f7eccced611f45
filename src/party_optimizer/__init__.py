"""Party Optimizer - D&D party success analysis.

Predicts how an adventuring party will fare against an encounter and
suggests tactics:

- A small neural network turns the party's aggregate stats into a party
  success chance
- A weighted heuristic scores each character and picks an action
- Templates and a generative Dungeon Master suggest strategy and turn actions

Example:
    >>> from party_optimizer import Character, Encounter, PartyAnalyzer
    >>>
    >>> thane = Character(name="Thane", type="Barbarian", strength=25, health=25)
    >>> analyzer = PartyAnalyzer()
    >>> result = analyzer.analyze([thane], Encounter(event_type="Dragon Fight"), "Thane")
    >>> print(result.encounter_difficulty)
    Hard

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas and catalogs.
    engine: Feature extraction, scoring, recommendations, orchestration.
    ml: Success model network, artifacts, inference and training.
    ai: Generative tactician.
    api: FastAPI HTTP surface.
    ui: Streamlit party builder.
"""

from __future__ import annotations

# Core
from party_optimizer.core.config import Settings, get_settings
from party_optimizer.core.exceptions import PartyOptimizerError
from party_optimizer.core.logging import configure_logging, get_logger

# Models
from party_optimizer.models import (
    AnalysisResult,
    Character,
    CharacterClass,
    Encounter,
    EventType,
    Party,
    create_character,
)

# Engine
from party_optimizer.engine.orchestrator import PartyAnalyzer
from party_optimizer.engine.scoring import score_character


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "PartyOptimizerError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "AnalysisResult",
    "Character",
    "CharacterClass",
    "Encounter",
    "EventType",
    "Party",
    "create_character",
    # Engine
    "PartyAnalyzer",
    "score_character",
]
