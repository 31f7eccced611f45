"""Encounter catalog shown on the adventure picker."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from party_optimizer.models.enums import Difficulty, EventType


class EncounterProfile(BaseModel):
    """Display data for a selectable adventure.

    Attributes:
        event_type: Encounter type sent to the analyzer.
        slug: URL-friendly identifier.
        description: One-line adventure hook.
        enemy: Name of the opposing foe.
        difficulty: Displayed difficulty label.
    """

    model_config = ConfigDict(frozen=True)

    event_type: EventType
    slug: str
    description: str
    enemy: str
    difficulty: Difficulty


ENCOUNTER_CATALOG: tuple[EncounterProfile, ...] = (
    EncounterProfile(
        event_type=EventType.DRAGON_FIGHT,
        slug="dragon-fight",
        description="Face the mighty Ancient Red Dragon in its volcanic lair.",
        enemy="Ancient Red Dragon",
        difficulty=Difficulty.HARD,
    ),
    EncounterProfile(
        event_type=EventType.ANCIENT_TRAP,
        slug="ancient-trap",
        description="Navigate a dungeon filled with deadly traps and mechanisms.",
        enemy="Mechanical Guardian",
        difficulty=Difficulty.MEDIUM,
    ),
    EncounterProfile(
        event_type=EventType.MYSTIC_PUZZLE,
        slug="mystic-puzzle",
        description="Solve the riddles of the Crystal Chamber to claim your prize.",
        enemy="Crystal Golem",
        difficulty=Difficulty.EASY,
    ),
)

UNKNOWN_ENEMY = "Unknown Foe"


def get_encounter_profile(event_type: str) -> EncounterProfile | None:
    """Return the catalog entry for an event type, or None if unknown."""
    return next((p for p in ENCOUNTER_CATALOG if p.event_type == event_type), None)


def get_encounter_enemy(event_type: str) -> str:
    """Return the foe faced in an encounter.

    Args:
        event_type: Encounter type string.

    Returns:
        Enemy name, or 'Unknown Foe' for unknown encounters.
    """
    profile = get_encounter_profile(event_type)
    return profile.enemy if profile else UNKNOWN_ENEMY


__all__ = [
    "EncounterProfile",
    "ENCOUNTER_CATALOG",
    "UNKNOWN_ENEMY",
    "get_encounter_profile",
    "get_encounter_enemy",
]
