"""
Dice Rogue - Hand / Roll State Machine

Tracks one hand: whether it is active and how many rolls have been used.

States:
    Inactive --start()--> Active --end() / reset()--> Inactive

The state is immutable; every transition returns a new HandState.
"""

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from dicerogue.engine.base import Die

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROLLS = 3


@dataclass(frozen=True)
class HandState:
    """
    Roll budget and activity of the current hand.

    Attributes:
        rolls_used: Rolls taken so far (0..max_rolls)
        max_rolls: Roll budget for the hand
        is_active: Whether the hand accepts rolls and submissions
    """
    rolls_used: int = 0
    max_rolls: int = DEFAULT_MAX_ROLLS
    is_active: bool = False

    def __post_init__(self) -> None:
        if self.max_rolls < 1:
            raise ValueError(f"max_rolls must be at least 1, got {self.max_rolls}.")
        if not (0 <= self.rolls_used <= self.max_rolls):
            raise ValueError(
                f"rolls_used must be between 0 and {self.max_rolls}, got {self.rolls_used}."
            )

    @property
    def can_roll(self) -> bool:
        return self.is_active and self.rolls_used < self.max_rolls

    @property
    def rolls_left(self) -> int:
        return self.max_rolls - self.rolls_used

    def start(self) -> "HandState":
        """Begin a fresh hand with the full roll budget."""
        logger.info("New hand started - %d rolls available", self.max_rolls)
        return replace(self, rolls_used=0, is_active=True)

    def increment_roll(self) -> "HandState":
        """
        Consume one roll.

        No-op (same state returned) when the hand is inactive or the
        budget is spent. The new roll number is `rolls_used`.
        """
        if not self.can_roll:
            logger.warning("Cannot roll - max rolls reached or hand not active")
            return self
        new_state = replace(self, rolls_used=self.rolls_used + 1)
        logger.debug("Roll %d/%d", new_state.rolls_used, self.max_rolls)
        return new_state

    def end(self) -> "HandState":
        """Close the hand, keeping the roll count for reporting."""
        logger.info("Hand ended after %d rolls", self.rolls_used)
        return replace(self, is_active=False)

    def reset(self) -> "HandState":
        """Back to inactive with no rolls used."""
        return replace(self, rolls_used=0, is_active=False)

    def can_submit(self, dice: Sequence[Die]) -> bool:
        """True when the hand is active and at least one real die is locked with a value."""
        return self.submit_blocker(dice) is None

    def submit_blocker(self, dice: Sequence[Die]) -> str | None:
        """User-facing reason the hand cannot be submitted, or None."""
        if not self.is_active:
            return "No active hand to submit."
        if not submitted_dice(dice):
            return "No dice are locked! Lock some dice before submitting."
        return None


def is_submittable(die: Die) -> bool:
    """Locked, rolled and not a filler placeholder."""
    return die.locked and die.value > 0 and not die.is_filler


def submitted_dice(dice: Sequence[Die]) -> list[Die]:
    """Submittable dice in hand order."""
    return [d for d in dice if is_submittable(d)]


def submitted_values(dice: Sequence[Die]) -> list[int]:
    return [d.value for d in dice]
