"""Dice rolling for the party builder's landing page."""

from __future__ import annotations

from dataclasses import dataclass

import d20


@dataclass(frozen=True)
class D20Roll:
    """Result of a single d20 roll.

    Attributes:
        value: The natural roll, 1 to 20.
        details: d20's rendering of the roll, e.g. '1d20 (17) = `17`'.
    """

    value: int
    details: str

    @property
    def is_critical(self) -> bool:
        return self.value == 20

    @property
    def is_fumble(self) -> bool:
        return self.value == 1


def roll_d20() -> D20Roll:
    """Roll one twenty-sided die using the d20 library."""
    result = d20.roll("1d20")
    return D20Roll(value=result.total, details=str(result))


__all__ = ["D20Roll", "roll_d20"]
