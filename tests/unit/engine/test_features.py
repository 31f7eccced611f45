"""Tests for success model feature extraction."""

from __future__ import annotations

from party_optimizer.core.constants import FEATURE_COUNT
from party_optimizer.engine.features import FEATURE_NAMES, extract_features
from party_optimizer.models.party import Character, Encounter


class TestExtractFeatures:
    """Tests for extract_features."""

    def test_feature_names(self) -> None:
        assert len(FEATURE_NAMES) == FEATURE_COUNT == 14
        assert FEATURE_NAMES[:3] == ("party_size", "total_strength", "total_health")
        assert FEATURE_NAMES[-3:] == ("is_DragonFight", "is_AncientTrap", "is_MysticPuzzle")

    def test_two_member_party(self, thane: Character, elara: Character) -> None:
        features = extract_features([thane, elara], Encounter(event_type="Dragon Fight"))

        assert features == [
            2.0,
            30.0, 30.0, 20.0, 30.0, 20.0, 30.0,
            1.0, 1.0, 0.0, 0.0,
            1.0, 0.0, 0.0,
        ]

    def test_empty_party(self) -> None:
        features = extract_features([], Encounter(event_type="Mystic Puzzle"))

        assert features == [0.0] * 13 + [1.0]

    def test_unknown_event_and_class(self) -> None:
        paladin = Character(name="Ser", type="Paladin", strength=10)

        features = extract_features([paladin], Encounter(event_type="Tavern Brawl"))

        assert features[0] == 1.0
        assert features[1] == 10.0
        assert features[7:] == [0.0] * 7

    def test_member_order_does_not_matter(self, thane: Character, elara: Character, vex: Character) -> None:
        encounter = Encounter(event_type="Ancient Trap")

        assert extract_features([thane, elara, vex], encounter) == extract_features([vex, thane, elara], encounter)

    def test_deterministic(self, thane: Character) -> None:
        encounter = Encounter(event_type="Ancient Trap")

        assert extract_features([thane], encounter) == extract_features([thane], encounter)
