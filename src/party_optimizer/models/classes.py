"""Class catalog used by the party editor.

Each class carries a base stat line; changing a character's class replaces
all six attributes with the new class's base values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from party_optimizer.models.enums import CharacterClass
from party_optimizer.models.party import Character


class BaseStats(BaseModel):
    """Starting attribute line for a class."""

    model_config = ConfigDict(frozen=True)

    strength: int = Field(ge=0)
    agility: int = Field(ge=0)
    mana: int = Field(ge=0)
    dexterity: int = Field(ge=0)
    wisdom: int = Field(ge=0)
    health: int = Field(ge=0)


class ClassProfile(BaseModel):
    """Descriptive card and base stats for a playable class.

    Attributes:
        name: Class name.
        beginner_friendly: Whether the class is recommended for new players.
        strengths: Short strength bullet points.
        weaknesses: Short weakness bullet points.
        tip: One-line play tip.
        base_stats: Attribute values a new character of this class starts with.
    """

    model_config = ConfigDict(frozen=True)

    name: CharacterClass
    beginner_friendly: bool
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    tip: str
    base_stats: BaseStats


CLASS_PROFILES: dict[CharacterClass, ClassProfile] = {
    CharacterClass.BARBARIAN: ClassProfile(
        name=CharacterClass.BARBARIAN,
        beginner_friendly=True,
        strengths=("Massive health pool", "High physical damage", "Simple to play"),
        weaknesses=("No magical ability", "Vulnerable to ranged magic", "Lacks utility"),
        tip="Get in close and hit things hard. You're the party's tank.",
        base_stats=BaseStats(strength=25, agility=10, mana=5, dexterity=10, wisdom=5, health=25),
    ),
    CharacterClass.MAGE: ClassProfile(
        name=CharacterClass.MAGE,
        beginner_friendly=True,
        strengths=("High-impact spells", "Excellent mana pool", "Ranged control"),
        weaknesses=("Low health (fragile)", "Weak in close combat", "Reliant on mana"),
        tip="Stay at a distance and use your spells to control the battlefield.",
        base_stats=BaseStats(strength=5, agility=10, mana=25, dexterity=10, wisdom=25, health=5),
    ),
    CharacterClass.ROGUE: ClassProfile(
        name=CharacterClass.ROGUE,
        beginner_friendly=False,
        strengths=("High single-target damage", "Excels at stealth & skills", "High evasion"),
        weaknesses=("Low health", "Can be complex", "Less effective in open combat"),
        tip="Use stealth and surprise attacks. Focus on disabling traps and picking locks.",
        base_stats=BaseStats(strength=10, agility=25, mana=5, dexterity=25, wisdom=10, health=5),
    ),
    CharacterClass.BANDIT: ClassProfile(
        name=CharacterClass.BANDIT,
        beginner_friendly=False,
        strengths=("High speed & evasion", "Good critical hit chance", "Versatile"),
        weaknesses=("Moderate health", "Weaker defenses", "Lower sustained damage"),
        tip="Focus on flanking enemies and striking when they are vulnerable.",
        base_stats=BaseStats(strength=15, agility=20, mana=5, dexterity=20, wisdom=5, health=15),
    ),
}


def get_class_profile(character_class: CharacterClass | str) -> ClassProfile:
    """Look up a class profile.

    Args:
        character_class: Class enum or its string value.

    Returns:
        The class profile.

    Raises:
        ValueError: If the class is not in the catalog.
    """
    return CLASS_PROFILES[CharacterClass(character_class)]


def create_character(
    name: str = "",
    character_class: CharacterClass | str = CharacterClass.MAGE,
) -> Character:
    """Create a character at its class's base stats.

    Args:
        name: Character name.
        character_class: Class of the new character.

    Returns:
        A new Character.
    """
    profile = get_class_profile(character_class)
    return Character(name=name, type=profile.name.value, **profile.base_stats.model_dump())


def change_class(character: Character, character_class: CharacterClass | str) -> Character:
    """Return a copy of a character with a new class and that class's base stats.

    Any attribute edits made under the previous class are discarded.
    """
    return create_character(character.name, character_class)


__all__ = [
    "BaseStats",
    "ClassProfile",
    "CLASS_PROFILES",
    "get_class_profile",
    "create_character",
    "change_class",
]
