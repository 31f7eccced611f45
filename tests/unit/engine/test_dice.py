"""Tests for the d20 roll."""

from __future__ import annotations

from party_optimizer.engine.dice import D20Roll, roll_d20


class TestRollD20:
    """Tests for roll_d20."""

    def test_range(self) -> None:
        for _ in range(100):
            roll = roll_d20()
            assert 1 <= roll.value <= 20

    def test_details_from_d20(self) -> None:
        assert "1d20" in roll_d20().details

    def test_critical_and_fumble(self) -> None:
        assert D20Roll(value=20, details="").is_critical
        assert D20Roll(value=1, details="").is_fumble
        assert not D20Roll(value=10, details="").is_critical
