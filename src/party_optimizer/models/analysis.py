"""Request and response schemas for the analysis endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from party_optimizer.models.party import Character, Encounter


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api/analyze``.

    Attributes:
        party: Party members, in display order.
        encounter: Encounter the party attempts.
        current_turn_character: Name of the character whose turn it is.
    """

    model_config = ConfigDict(extra="ignore")

    party: list[Character]
    encounter: Encounter
    current_turn_character: str


class IndividualSuccessRate(BaseModel):
    """Heuristic outlook for one party member."""

    model_config = ConfigDict(frozen=True)

    character: str
    success_rate: int = Field(ge=0, le=100)
    recommended_action: str


class AnalysisResult(BaseModel):
    """Aggregated outcome of one analysis request.

    Attributes:
        party_success_chance: Model (or fallback) success percentage.
        individual_success_rates: Per-character heuristic rates, in party order.
        encounter_difficulty: Difficulty label of the encounter.
        strategic_recommendations: Party-level guidance lines.
        current_turn_actions: Suggested actions for the acting character.
    """

    party_success_chance: int = Field(ge=0, le=100)
    individual_success_rates: list[IndividualSuccessRate] = Field(default_factory=list)
    encounter_difficulty: Literal["Easy", "Medium", "Hard", "Unknown"]
    strategic_recommendations: list[str] = Field(default_factory=list)
    current_turn_actions: list[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    """Successful response envelope."""

    success: Literal[True] = True
    analysis: AnalysisResult


class ErrorResponse(BaseModel):
    """Failure response envelope."""

    error: str


__all__ = [
    "AnalyzeRequest",
    "IndividualSuccessRate",
    "AnalysisResult",
    "AnalyzeResponse",
    "ErrorResponse",
]
