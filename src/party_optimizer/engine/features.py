"""Feature extraction for the success model.

The success model was fit against this exact 14-value encoding, so the
order and contents of the vector must not change without retraining.
"""

from __future__ import annotations

from collections.abc import Sequence

from party_optimizer.models.enums import Attribute, CharacterClass, EventType
from party_optimizer.models.party import Character, Encounter


# Attribute order is the enum's declaration order: strength, health,
# agility, mana, dexterity, wisdom.
_COUNTED_CLASSES: tuple[CharacterClass, ...] = (
    CharacterClass.MAGE,
    CharacterClass.BARBARIAN,
    CharacterClass.ROGUE,
    CharacterClass.BANDIT,
)
_FLAGGED_EVENTS: tuple[EventType, ...] = (
    EventType.DRAGON_FIGHT,
    EventType.ANCIENT_TRAP,
    EventType.MYSTIC_PUZZLE,
)

FEATURE_NAMES: tuple[str, ...] = (
    "party_size",
    *(f"total_{attribute.value}" for attribute in Attribute),
    *(f"count_{character_class.value}" for character_class in _COUNTED_CLASSES),
    *(f"is_{event.value.replace(' ', '')}" for event in _FLAGGED_EVENTS),
)


def extract_features(party: Sequence[Character], encounter: Encounter) -> list[float]:
    """Encode a party and encounter as the model's feature vector.

    Args:
        party: Party members (order does not matter).
        encounter: The encounter being attempted.

    Returns:
        Fourteen floats: party size, six attribute totals, four class counts
        and three one-hot encounter flags.

    Example:
        >>> extract_features([], Encounter(event_type="Dragon Fight"))
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    """
    totals = [float(sum(member.get(attribute) for member in party)) for attribute in Attribute]
    class_counts = [
        float(sum(1 for member in party if member.type == character_class.value))
        for character_class in _COUNTED_CLASSES
    ]
    event_flags = [1.0 if encounter.event_type == event.value else 0.0 for event in _FLAGGED_EVENTS]
    return [float(len(party)), *totals, *class_counts, *event_flags]


__all__ = [
    "FEATURE_NAMES",
    "extract_features",
]
