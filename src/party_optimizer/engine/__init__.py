"""Analysis engine: features, heuristic scoring, recommendations, orchestration.

Submodules:
    features: 14-value feature vector for the success model.
    scoring: Event-weighted per-character success rates and actions.
    recommendations: Strategic lines and current-turn actions.
    orchestrator: PartyAnalyzer, the end-to-end pipeline.
    dice: d20 roll for the party builder.
"""

from __future__ import annotations

from party_optimizer.engine.dice import D20Roll, roll_d20
from party_optimizer.engine.features import FEATURE_NAMES, extract_features
from party_optimizer.engine.orchestrator import PartyAnalyzer
from party_optimizer.engine.recommendations import (
    TacticalActionGenerator,
    compose_turn_actions,
    fallback_turn_actions,
    find_best,
    generate_strategic_recommendations,
    get_tier_comment,
)
from party_optimizer.engine.scoring import (
    StatWeights,
    compute_individual_success_rates,
    get_difficulty_multiplier,
    get_encounter_difficulty,
    get_recommended_action,
    get_stat_weights,
    round_half_up,
    score_character,
)


__all__ = [
    "D20Roll",
    "roll_d20",
    "FEATURE_NAMES",
    "extract_features",
    "PartyAnalyzer",
    "TacticalActionGenerator",
    "compose_turn_actions",
    "fallback_turn_actions",
    "find_best",
    "generate_strategic_recommendations",
    "get_tier_comment",
    "StatWeights",
    "compute_individual_success_rates",
    "get_difficulty_multiplier",
    "get_encounter_difficulty",
    "get_recommended_action",
    "get_stat_weights",
    "round_half_up",
    "score_character",
]
