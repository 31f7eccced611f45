"""Application-wide constants for the Party Optimizer."""

from __future__ import annotations

# =============================================================================
# Party Rules
# =============================================================================

MAX_STAT_POINTS = 80
"""Soft cap on the sum of a character's six attributes (party editor only)."""

# =============================================================================
# Heuristic Scoring
# =============================================================================

MIN_SUCCESS_RATE = 15
"""Lowest individual success rate the heuristic scorer reports."""

MAX_SUCCESS_RATE = 95
"""Highest individual success rate the heuristic scorer reports."""

BASE_SUCCESS_RATE = 20
"""Floor added before the weighted stat contribution."""

STAT_RATE_SCALE = 75
"""Percentage points contributed by a base rate of 1.0."""

STAT_NORMALIZER = 15
"""Per-weight stat value that maps to a base rate of 1.0."""

ACTION_THRESHOLD_HIGH = 15
"""Raw attribute value above which a stat drives the recommended action."""

ACTION_THRESHOLD_LOW = 10
"""Lower threshold used by the Mystic Puzzle dexterity branch."""

# =============================================================================
# Recommendation Tiers
# =============================================================================

CHALLENGING_BELOW = 40
"""Party success chances strictly below this are treated as challenging."""

ADVANTAGE_ABOVE = 75
"""Party success chances strictly above this are treated as an advantage."""

MAX_TURN_ACTIONS = 3
"""Maximum number of turn actions returned for the acting character."""

# =============================================================================
# Success Model
# =============================================================================

FEATURE_COUNT = 14
"""Length of the feature vector consumed by the success model."""

DEFAULT_SUCCESS_CHANCE = 50
"""Aggregate success chance used when the model is unavailable."""

MODEL_JSON_FILENAME = "model.json"
"""Structural description + weights manifest artifact."""

WEIGHTS_FILENAME = "weights.bin"
"""Raw little-endian float32 weights artifact."""


__all__ = [
    "MAX_STAT_POINTS",
    "MIN_SUCCESS_RATE",
    "MAX_SUCCESS_RATE",
    "BASE_SUCCESS_RATE",
    "STAT_RATE_SCALE",
    "STAT_NORMALIZER",
    "ACTION_THRESHOLD_HIGH",
    "ACTION_THRESHOLD_LOW",
    "CHALLENGING_BELOW",
    "ADVANTAGE_ABOVE",
    "MAX_TURN_ACTIONS",
    "FEATURE_COUNT",
    "DEFAULT_SUCCESS_CHANCE",
    "MODEL_JSON_FILENAME",
    "WEIGHTS_FILENAME",
]
