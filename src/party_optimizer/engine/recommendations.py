"""Strategic recommendations and current-turn actions.

Party-level guidance is built from fixed templates. Turn actions come from
a pluggable TacticalActionGenerator (normally the generative tactician);
any failure there falls back to a deterministic list built from the
heuristic scorer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from party_optimizer.core.constants import (
    ADVANTAGE_ABOVE,
    CHALLENGING_BELOW,
    MAX_TURN_ACTIONS,
)
from party_optimizer.core.exceptions import AIControlError, AIResponseError
from party_optimizer.core.logging import get_logger
from party_optimizer.engine.scoring import get_recommended_action
from party_optimizer.models.enums import Attribute, EventType
from party_optimizer.models.party import Character, Encounter


logger = get_logger(__name__)


# =============================================================================
# Strategic Recommendations
# =============================================================================


CHALLENGING_COMMENT = (
    "This is a highly challenging encounter. Survival should be the top priority; "
    "focus on defensive abilities and healing."
)
ADVANTAGE_COMMENT = (
    "Your party has a clear advantage. A coordinated, aggressive strategy should "
    "secure a swift victory."
)
BALANCED_COMMENT = (
    "The odds are balanced. A smart, tactical approach combining offense and defense "
    "is crucial for success."
)


def get_tier_comment(success_chance: int) -> str:
    """Pick the opening comment for a party success chance.

    Exactly 40 and exactly 75 fall in the balanced tier.
    """
    if success_chance < CHALLENGING_BELOW:
        return CHALLENGING_COMMENT
    if success_chance > ADVANTAGE_ABOVE:
        return ADVANTAGE_COMMENT
    return BALANCED_COMMENT


def find_best(party: Sequence[Character], attribute: Attribute) -> Character | None:
    """Return the member with the highest value of an attribute.

    Ties go to the member that appears first in the party.

    Args:
        party: Party members in display order.
        attribute: Attribute to compare.

    Returns:
        The best member, or None for an empty party.
    """
    best: Character | None = None
    for member in party:
        if best is None or member.get(attribute) > best.get(attribute):
            best = member
    return best


def _dragon_fight_lines(party: Sequence[Character]) -> list[str]:
    tank = find_best(party, Attribute.HEALTH)
    strongest = find_best(party, Attribute.STRENGTH)
    if tank is None or strongest is None:
        return []
    return [
        f"Let {tank.name} draw the dragon's attention while others attack from the flanks.",
        f"{strongest.name} should focus on dealing maximum physical damage.",
    ]


def _ancient_trap_lines(party: Sequence[Character]) -> list[str]:
    nimble = find_best(party, Attribute.DEXTERITY)
    wise = find_best(party, Attribute.WISDOM)
    if nimble is None or wise is None:
        return []
    lines = [f"{nimble.name} should take the lead to scout for and disarm any traps."]
    if wise is not nimble:
        lines.append(f"{wise.name} can assist by spotting the trap mechanisms from a distance.")
    return lines


def _mystic_puzzle_lines(party: Sequence[Character]) -> list[str]:
    wise = find_best(party, Attribute.WISDOM)
    mage = find_best(party, Attribute.MANA)
    if wise is None or mage is None:
        return []
    lines = [f"The party should rely on {wise.name}'s wisdom to solve the core puzzle."]
    if mage is not wise:
        lines.append(f"{mage.name} could use their mana to reveal hidden clues or magical auras.")
    return lines


_ENCOUNTER_LINES = {
    EventType.DRAGON_FIGHT: _dragon_fight_lines,
    EventType.ANCIENT_TRAP: _ancient_trap_lines,
    EventType.MYSTIC_PUZZLE: _mystic_puzzle_lines,
}


def generate_strategic_recommendations(
    party: Sequence[Character],
    encounter: Encounter,
    success_chance: int,
) -> list[str]:
    """Build the party-level recommendation list.

    Args:
        party: Party members in display order.
        encounter: The encounter being attempted.
        success_chance: Aggregate party success percentage.

    Returns:
        The tier comment followed by up to two encounter-specific lines
        naming the party's best characters.
    """
    recommendations = [get_tier_comment(success_chance)]
    event = EventType.parse(encounter.event_type)
    if event is not None:
        recommendations.extend(_ENCOUNTER_LINES[event](party))
    return recommendations


# =============================================================================
# Current-Turn Actions
# =============================================================================


@runtime_checkable
class TacticalActionGenerator(Protocol):
    """Source of short tactical suggestions for the acting character.

    Implementations raise AIControlError (or a subclass) on any failure.
    """

    def generate_tactical_actions(self, character: Character, event_type: str) -> Sequence[str]:
        """Return up to three action strings for the character's turn."""
        ...


_FALLBACK_ALTERNATIVES: dict[EventType, str] = {
    EventType.DRAGON_FIGHT: "Alternative: Use a defensive maneuver.",
    EventType.ANCIENT_TRAP: "Alternative: Search the area for triggers.",
}
DODGE_ACTION = "Default: Take the 'Dodge' action."


def fallback_turn_actions(character: Character, event_type: str) -> list[str]:
    """Deterministic turn actions used when generation is unavailable.

    Args:
        character: The acting character.
        event_type: Encounter type string.

    Returns:
        The heuristic primary action, an encounter alternative where one
        exists, and the universal Dodge default.
    """
    actions = [f"Primary: {get_recommended_action(character, event_type)}"]
    event = EventType.parse(event_type)
    if event in _FALLBACK_ALTERNATIVES:
        actions.append(_FALLBACK_ALTERNATIVES[event])
    actions.append(DODGE_ACTION)
    return actions


def _normalize_actions(actions: object) -> list[str]:
    if not isinstance(actions, (list, tuple)):
        raise AIResponseError(
            "Tactical actions must be a list",
            details={"received_type": type(actions).__name__},
        )
    cleaned = [str(action).strip() for action in actions if str(action).strip()]
    if not cleaned:
        raise AIResponseError("Tactical action list is empty")
    return cleaned[:MAX_TURN_ACTIONS]


def compose_turn_actions(
    character: Character,
    event_type: str,
    generator: TacticalActionGenerator | None,
) -> list[str]:
    """Produce turn actions for the acting character.

    Args:
        character: The acting character.
        event_type: Encounter type string.
        generator: Generative collaborator, or None to use the fallback.

    Returns:
        At most three action strings; never empty.
    """
    if generator is None:
        return fallback_turn_actions(character, event_type)

    try:
        actions = _normalize_actions(generator.generate_tactical_actions(character, event_type))
    except AIControlError as exc:
        logger.warning(
            "Tactical generation failed, using fallback",
            character=character.name,
            event_type=event_type,
            error=exc.message,
        )
        return fallback_turn_actions(character, event_type)

    logger.debug("Tactical actions generated", character=character.name, count=len(actions))
    return actions


__all__ = [
    "CHALLENGING_COMMENT",
    "ADVANTAGE_COMMENT",
    "BALANCED_COMMENT",
    "DODGE_ACTION",
    "TacticalActionGenerator",
    "get_tier_comment",
    "find_best",
    "generate_strategic_recommendations",
    "fallback_turn_actions",
    "compose_turn_actions",
]
