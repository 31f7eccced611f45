"""Pydantic V2 data models for the Party Optimizer.

Submodules:
    enums: Attribute, class, event type and difficulty enumerations.
    party: Character, Party and Encounter schemas.
    classes: Class catalog with base stats.
    encounters: Adventure catalog.
    analysis: Analysis request/response payloads.
"""

from __future__ import annotations

from party_optimizer.models.analysis import (
    AnalysisResult,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    IndividualSuccessRate,
)
from party_optimizer.models.classes import (
    CLASS_PROFILES,
    BaseStats,
    ClassProfile,
    change_class,
    create_character,
    get_class_profile,
)
from party_optimizer.models.encounters import (
    ENCOUNTER_CATALOG,
    EncounterProfile,
    get_encounter_enemy,
    get_encounter_profile,
)
from party_optimizer.models.enums import Attribute, CharacterClass, Difficulty, EventType
from party_optimizer.models.party import Character, Encounter, Party


__all__ = [
    # Enums
    "Attribute",
    "CharacterClass",
    "Difficulty",
    "EventType",
    # Entities
    "Character",
    "Encounter",
    "Party",
    # Catalogs
    "BaseStats",
    "ClassProfile",
    "CLASS_PROFILES",
    "get_class_profile",
    "create_character",
    "change_class",
    "EncounterProfile",
    "ENCOUNTER_CATALOG",
    "get_encounter_profile",
    "get_encounter_enemy",
    # Analysis payloads
    "AnalyzeRequest",
    "AnalysisResult",
    "AnalyzeResponse",
    "ErrorResponse",
    "IndividualSuccessRate",
]
