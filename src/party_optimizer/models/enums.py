"""Enumeration types for the Party Optimizer.

Class tags and event types arrive as free strings from the party editor, so
these enums name the known members while the rest of the pipeline tolerates
unknown values.
"""

from __future__ import annotations

from enum import StrEnum


class Attribute(StrEnum):
    """The six character attributes, in feature-extraction order."""

    STRENGTH = "strength"
    HEALTH = "health"
    AGILITY = "agility"
    MANA = "mana"
    DEXTERITY = "dexterity"
    WISDOM = "wisdom"

    @property
    def label(self) -> str:
        """Get the display label (e.g., 'Strength')."""
        return self.value.capitalize()

    @property
    def is_optional(self) -> bool:
        """Whether the party editor may omit this attribute."""
        return self in (Attribute.MANA, Attribute.DEXTERITY, Attribute.WISDOM)


class CharacterClass(StrEnum):
    """Playable character classes."""

    MAGE = "Mage"
    BARBARIAN = "Barbarian"
    ROGUE = "Rogue"
    BANDIT = "Bandit"


class EventType(StrEnum):
    """Known encounter types."""

    DRAGON_FIGHT = "Dragon Fight"
    ANCIENT_TRAP = "Ancient Trap"
    MYSTIC_PUZZLE = "Mystic Puzzle"

    @classmethod
    def parse(cls, value: str | None) -> EventType | None:
        """Return the matching event type, or None for unknown strings."""
        try:
            return cls(value)
        except ValueError:
            return None


class Difficulty(StrEnum):
    """Encounter difficulty labels."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    UNKNOWN = "Unknown"


__all__ = [
    "Attribute",
    "CharacterClass",
    "EventType",
    "Difficulty",
]
