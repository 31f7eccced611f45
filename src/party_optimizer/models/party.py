"""Pydantic V2 schemas for characters, parties and encounters.

Absent or null attributes are normalised to zero once, here, so feature
extraction and scoring never need to special-case optional stats.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from party_optimizer.core.constants import MAX_STAT_POINTS
from party_optimizer.core.exceptions import ValidationError
from party_optimizer.models.enums import Attribute


class Character(BaseModel):
    """A party member with class-based stats.

    Attributes:
        name: Character name (matched against the current-turn name).
        type: Class tag, e.g. 'Mage'. Also accepted as 'class'.
        strength: Strength attribute.
        agility: Agility attribute.
        health: Health attribute.
        mana: Mana attribute (optional, defaults to 0).
        dexterity: Dexterity attribute (optional, defaults to 0).
        wisdom: Wisdom attribute (optional, defaults to 0).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field(default="", max_length=100, description="Character name")
    type: str = Field(
        default="",
        validation_alias=AliasChoices("type", "class"),
        description="Class tag",
    )
    strength: int = Field(default=0, ge=0, description="Strength")
    agility: int = Field(default=0, ge=0, description="Agility")
    health: int = Field(default=0, ge=0, description="Health")
    mana: int = Field(default=0, ge=0, description="Mana")
    dexterity: int = Field(default=0, ge=0, description="Dexterity")
    wisdom: int = Field(default=0, ge=0, description="Wisdom")

    @field_validator(*(a.value for a in Attribute), mode="before")
    @classmethod
    def default_missing_to_zero(cls, value: Any) -> Any:
        """Treat null attributes as zero."""
        return 0 if value is None else value

    def get(self, attribute: Attribute | str) -> int:
        """Return the value of an attribute by name.

        Args:
            attribute: Attribute enum or its string value.

        Returns:
            The attribute value.
        """
        return getattr(self, Attribute(attribute).value)

    @property
    def total_points(self) -> int:
        """Sum of all six attributes."""
        return sum(self.get(attribute) for attribute in Attribute)

    @property
    def within_point_cap(self) -> bool:
        """Whether the character respects the party editor's soft cap."""
        return self.total_points <= MAX_STAT_POINTS


class Party(BaseModel):
    """A named, ordered roster of characters.

    Member order is display order only; scoring does not depend on it except
    for tie-breaking in narrative recommendations.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", max_length=100, description="Party name")
    members: list[Character] = Field(default_factory=list, description="Members")

    def validate_for_analysis(self) -> None:
        """Check the invariants the party editor enforces before analysis.

        Raises:
            ValidationError: If the party or one of its members is incomplete.
        """
        if not self.name.strip():
            raise ValidationError("Please enter a name for your party.", field_name="name")
        if not self.members:
            raise ValidationError(
                "You must create a party before starting an adventure!",
                field_name="members",
            )
        for index, member in enumerate(self.members):
            if not member.name.strip():
                raise ValidationError(
                    "Please make sure every character has a name.",
                    field_name=f"members[{index}].name",
                )
            if not member.within_point_cap:
                raise ValidationError(
                    f"At least one character has exceeded the maximum of {MAX_STAT_POINTS} points.",
                    field_name=f"members[{index}]",
                    invalid_value=member.total_points,
                )

    def find_member(self, name: str) -> Character | None:
        """Return the first member with the given name, if any."""
        return next((member for member in self.members if member.name == name), None)


class Encounter(BaseModel):
    """The adventure scenario a party attempts.

    Attributes:
        event_type: Encounter type string; unknown values are tolerated.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    event_type: str = Field(default="", description="Encounter type")

    @field_validator("event_type", mode="before")
    @classmethod
    def default_missing_event(cls, value: Any) -> Any:
        """Treat a null event type as unknown."""
        return "" if value is None else value


__all__ = [
    "Character",
    "Party",
    "Encounter",
]
