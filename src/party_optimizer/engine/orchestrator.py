"""Analysis orchestrator.

Runs one party against one encounter through the whole pipeline: feature
extraction and the success model for the aggregate chance, the heuristic
scorer for each member, then strategic recommendations and turn actions
for the character whose turn it is.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from party_optimizer.core.constants import DEFAULT_SUCCESS_CHANCE
from party_optimizer.core.exceptions import AnalysisError
from party_optimizer.core.logging import get_logger
from party_optimizer.engine.features import extract_features
from party_optimizer.engine.recommendations import (
    TacticalActionGenerator,
    compose_turn_actions,
    generate_strategic_recommendations,
)
from party_optimizer.engine.scoring import (
    compute_individual_success_rates,
    get_encounter_difficulty,
    round_half_up,
)
from party_optimizer.ml.success_model import SuccessModel, get_success_model
from party_optimizer.models.analysis import AnalysisResult
from party_optimizer.models.party import Character, Encounter


logger = get_logger(__name__)

ModelProvider = Callable[[], SuccessModel | None]


class PartyAnalyzer:
    """Produces an AnalysisResult for a party and an encounter.

    Holds no per-request state, so one instance serves every request.

    Attributes:
        tactician: Generative collaborator for turn actions, or None.
        default_success_chance: Aggregate percentage used when the success
            model is unavailable.
    """

    def __init__(
        self,
        *,
        model_provider: ModelProvider = get_success_model,
        tactician: TacticalActionGenerator | None = None,
        default_success_chance: int = DEFAULT_SUCCESS_CHANCE,
    ) -> None:
        self._model_provider = model_provider
        self.tactician = tactician
        self.default_success_chance = default_success_chance

    @property
    def model_available(self) -> bool:
        """Whether the shared success model loaded."""
        return self._model_provider() is not None

    def predict_party_success(self, party: Sequence[Character], encounter: Encounter) -> int:
        """Aggregate party success percentage from the success model.

        Returns:
            round_half_up(probability * 100), or the default chance when
            the model is unavailable.
        """
        model = self._model_provider()
        if model is None:
            logger.debug("Success model unavailable, using default chance")
            return self.default_success_chance
        probability = model.predict_probability(extract_features(party, encounter))
        return round_half_up(probability * 100)

    def analyze(
        self,
        party: Sequence[Character],
        encounter: Encounter,
        current_turn_character: str,
    ) -> AnalysisResult:
        """Run the full analysis.

        Args:
            party: Party members in display order.
            encounter: The encounter being attempted.
            current_turn_character: Name of the character whose turn it is.

        Returns:
            The complete analysis.

        Raises:
            AnalysisError: If any stage fails unexpectedly. No partial
                result is returned.
        """
        stage = "success_model"
        try:
            success_chance = self.predict_party_success(party, encounter)

            stage = "scoring"
            individual = compute_individual_success_rates(party, encounter)

            stage = "recommendations"
            recommendations = generate_strategic_recommendations(party, encounter, success_chance)

            stage = "turn_actions"
            acting = next((member for member in party if member.name == current_turn_character), None)
            turn_actions = (
                compose_turn_actions(acting, encounter.event_type, self.tactician)
                if acting is not None
                else []
            )

            result = AnalysisResult(
                party_success_chance=success_chance,
                individual_success_rates=individual,
                encounter_difficulty=get_encounter_difficulty(encounter.event_type).value,
                strategic_recommendations=recommendations,
                current_turn_actions=turn_actions,
            )
        except Exception as exc:
            logger.exception("Analysis failed", stage=stage)
            raise AnalysisError(f"Analysis failed during {stage}: {exc}", stage=stage) from exc

        logger.info(
            "Party analyzed",
            members=len(party),
            event_type=encounter.event_type,
            success_chance=success_chance,
            turn_character_found=acting is not None,
        )
        return result


__all__ = ["ModelProvider", "PartyAnalyzer"]
