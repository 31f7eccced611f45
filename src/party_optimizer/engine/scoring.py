"""Heuristic per-character scoring.

Independent of the success model: every character gets a success rate from
stat weights keyed by encounter type, plus a recommended action from a
small decision table on raw attribute values.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from party_optimizer.core.constants import (
    ACTION_THRESHOLD_HIGH,
    ACTION_THRESHOLD_LOW,
    BASE_SUCCESS_RATE,
    MAX_SUCCESS_RATE,
    MIN_SUCCESS_RATE,
    STAT_NORMALIZER,
    STAT_RATE_SCALE,
)
from party_optimizer.models.analysis import IndividualSuccessRate
from party_optimizer.models.enums import Attribute, Difficulty, EventType
from party_optimizer.models.party import Character, Encounter


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    Python's built-in round() uses banker's rounding, which would shift
    success percentages that land exactly on a half.
    """
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class StatWeights:
    """Per-encounter attribute multipliers.

    Attributes:
        strength: Strength multiplier.
        agility: Agility multiplier.
        health: Health multiplier.
        mana: Mana multiplier.
        dexterity: Dexterity multiplier.
        wisdom: Wisdom multiplier.
        total: Sum of the six multipliers (normalising constant).
    """

    strength: float
    agility: float
    health: float
    mana: float
    dexterity: float
    wisdom: float
    total: float

    @classmethod
    def from_mapping(cls, weights: Mapping[Attribute, float]) -> StatWeights:
        """Build weights, summing the total in the mapping's order."""
        return cls(
            **{attribute.value: weights[attribute] for attribute in Attribute},
            total=sum(weights.values()),
        )

    def weight(self, attribute: Attribute) -> float:
        """Return the multiplier for one attribute."""
        return getattr(self, attribute.value)


_STAT_WEIGHT_PROFILES: dict[EventType, dict[Attribute, float]] = {
    EventType.DRAGON_FIGHT: {
        Attribute.STRENGTH: 1.3,
        Attribute.HEALTH: 1.2,
        Attribute.AGILITY: 1.1,
        Attribute.MANA: 1.1,
        Attribute.DEXTERITY: 1.0,
        Attribute.WISDOM: 0.9,
    },
    EventType.ANCIENT_TRAP: {
        Attribute.DEXTERITY: 1.4,
        Attribute.AGILITY: 1.3,
        Attribute.WISDOM: 1.2,
        Attribute.HEALTH: 1.0,
        Attribute.MANA: 0.9,
        Attribute.STRENGTH: 0.8,
    },
    EventType.MYSTIC_PUZZLE: {
        Attribute.WISDOM: 1.5,
        Attribute.MANA: 1.3,
        Attribute.DEXTERITY: 1.0,
        Attribute.AGILITY: 0.9,
        Attribute.HEALTH: 0.8,
        Attribute.STRENGTH: 0.7,
    },
}
_UNIFORM_WEIGHTS: dict[Attribute, float] = {
    Attribute.STRENGTH: 1.0,
    Attribute.AGILITY: 1.0,
    Attribute.HEALTH: 1.0,
    Attribute.MANA: 1.0,
    Attribute.DEXTERITY: 1.0,
    Attribute.WISDOM: 1.0,
}

_DIFFICULTY_MULTIPLIERS: dict[EventType, float] = {
    EventType.DRAGON_FIGHT: 0.85,
    EventType.ANCIENT_TRAP: 0.90,
    EventType.MYSTIC_PUZZLE: 1.00,
}
_UNKNOWN_DIFFICULTY_MULTIPLIER = 0.95

_DIFFICULTY_LABELS: dict[EventType, Difficulty] = {
    EventType.DRAGON_FIGHT: Difficulty.HARD,
    EventType.ANCIENT_TRAP: Difficulty.MEDIUM,
    EventType.MYSTIC_PUZZLE: Difficulty.EASY,
}

# (attribute, threshold, action) rules, first match wins.
_ACTION_RULES: dict[EventType, tuple[tuple[Attribute, int, str], ...]] = {
    EventType.DRAGON_FIGHT: (
        (Attribute.STRENGTH, ACTION_THRESHOLD_HIGH, "Power Attack"),
        (Attribute.MANA, ACTION_THRESHOLD_HIGH, "Cast Fireball"),
        (Attribute.AGILITY, ACTION_THRESHOLD_HIGH, "Dodge and Weave"),
    ),
    EventType.ANCIENT_TRAP: (
        (Attribute.DEXTERITY, ACTION_THRESHOLD_HIGH, "Disarm Trap"),
        (Attribute.WISDOM, ACTION_THRESHOLD_HIGH, "Analyze Mechanism"),
        (Attribute.AGILITY, ACTION_THRESHOLD_HIGH, "Evade Pressure Plate"),
    ),
    EventType.MYSTIC_PUZZLE: (
        (Attribute.WISDOM, ACTION_THRESHOLD_HIGH, "Decipher Runes"),
        (Attribute.MANA, ACTION_THRESHOLD_HIGH, "Channel Insight"),
        (Attribute.DEXTERITY, ACTION_THRESHOLD_LOW, "Manipulate Artifact"),
    ),
}
_DEFAULT_ACTIONS: dict[EventType, str] = {
    EventType.DRAGON_FIGHT: "Defensive Stance",
    EventType.ANCIENT_TRAP: "Provide Lookout",
    EventType.MYSTIC_PUZZLE: "Observe Patterns",
}
_UNKNOWN_EVENT_ACTION = "Take Action"


def get_stat_weights(event_type: str) -> StatWeights:
    """Select the stat weight profile for an encounter type.

    Args:
        event_type: Encounter type string.

    Returns:
        StatWeights favouring the attributes relevant to the encounter,
        or uniform weights for unknown encounters.
    """
    event = EventType.parse(event_type)
    profile = _UNIFORM_WEIGHTS if event is None else _STAT_WEIGHT_PROFILES[event]
    return StatWeights.from_mapping(profile)


def get_difficulty_multiplier(event_type: str) -> float:
    """Return the rate damping factor for an encounter type."""
    event = EventType.parse(event_type)
    if event is None:
        return _UNKNOWN_DIFFICULTY_MULTIPLIER
    return _DIFFICULTY_MULTIPLIERS[event]


def get_encounter_difficulty(event_type: str) -> Difficulty:
    """Return the difficulty label of an encounter type.

    Args:
        event_type: Encounter type string.

    Returns:
        Hard, Medium or Easy for the known encounters, Unknown otherwise.
    """
    event = EventType.parse(event_type)
    if event is None:
        return Difficulty.UNKNOWN
    return _DIFFICULTY_LABELS[event]


def get_recommended_action(character: Character, event_type: str) -> str:
    """Pick a recommended action from the character's raw attributes.

    Args:
        character: The character to advise.
        event_type: Encounter type string.

    Returns:
        The first action whose attribute threshold the character exceeds,
        the encounter's default action otherwise, or 'Take Action' for
        unknown encounters.
    """
    event = EventType.parse(event_type)
    if event is None:
        return _UNKNOWN_EVENT_ACTION
    for attribute, threshold, action in _ACTION_RULES[event]:
        if character.get(attribute) > threshold:
            return action
    return _DEFAULT_ACTIONS[event]


def score_character(character: Character, event_type: str) -> int:
    """Compute a character's heuristic success rate.

    The weighted stat sum is normalised by ``total weight x 15`` and mapped
    to ``20 + base x 75 x difficulty``, clamped to [15, 95].

    Args:
        character: The character to score.
        event_type: Encounter type string.

    Returns:
        Integer success percentage in [15, 95].
    """
    weights = get_stat_weights(event_type)
    difficulty = get_difficulty_multiplier(event_type)

    weighted_total = (
        character.strength * weights.strength
        + character.agility * weights.agility
        + character.health * weights.health
        + character.mana * weights.mana
        + character.dexterity * weights.dexterity
        + character.wisdom * weights.wisdom
    )
    base_rate = weighted_total / (weights.total * STAT_NORMALIZER)
    rate = BASE_SUCCESS_RATE + base_rate * STAT_RATE_SCALE * difficulty
    return round_half_up(min(MAX_SUCCESS_RATE, max(MIN_SUCCESS_RATE, rate)))


def compute_individual_success_rates(
    party: Sequence[Character],
    encounter: Encounter,
) -> list[IndividualSuccessRate]:
    """Score every party member against an encounter.

    Args:
        party: Party members, in display order.
        encounter: The encounter being attempted.

    Returns:
        One IndividualSuccessRate per member, in the same order.
    """
    return [
        IndividualSuccessRate(
            character=member.name,
            success_rate=score_character(member, encounter.event_type),
            recommended_action=get_recommended_action(member, encounter.event_type),
        )
        for member in party
    ]


__all__ = [
    "StatWeights",
    "round_half_up",
    "get_stat_weights",
    "get_difficulty_multiplier",
    "get_encounter_difficulty",
    "get_recommended_action",
    "score_character",
    "compute_individual_success_rates",
]
