"""
Dice Rogue - Multiplier Composition

Turns the special dice in a submission into one scalar score multiplier.
Contributions multiply, so the order of the submission does not matter.

Multipliers:
    - Collector: x1.5 when its value repeats its previous roll
    - Lucky Six: x1.5 on a 6
    - 777: x2 when its value appears at least 3 times in the submission
    - D8: x5 on a 7, x10 on an 8
    - Everything else: x1
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from dicerogue.engine.base import DiceVariant, Die

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultiplierBreakdown:
    """
    One die's contribution to the dice multiplier.

    Attributes:
        die_name: Display name of the contributing die
        multiplier: Factor applied (> 1.0)
        reason: Human-readable trigger
    """
    die_name: str
    multiplier: float
    reason: str


@dataclass(frozen=True)
class MultiplierResult:
    """
    Combined dice multiplier for a submission.

    Attributes:
        total: Product of every contribution (>= 1.0)
        breakdown: Contributions above x1, in submission order
    """
    total: float = 1.0
    breakdown: tuple[MultiplierBreakdown, ...] = tuple()

    @property
    def is_boosted(self) -> bool:
        return self.total > 1.0

    def __str__(self) -> str:
        lines = ["Multiplier Breakdown:"]
        for item in self.breakdown:
            lines.append(f"  {item.die_name}: x{item.multiplier:g} ({item.reason})")
        lines.append(f"Total Multiplier: x{self.total:.2f}")
        return "\n".join(lines)


class MultiplierCalculator:
    """Stateless multiplier composition over submitted dice."""

    COLLECTOR_MULTIPLIER = 1.5
    LUCKY_SIX_MULTIPLIER = 1.5
    TRIPLE_SEVEN_MULTIPLIER = 2.0
    TRIPLE_SEVEN_MIN_MATCHES = 3
    D8_MULTIPLIERS = {7: 5.0, 8: 10.0}

    @classmethod
    def calculate(cls, submitted: Sequence[Die]) -> MultiplierResult:
        """
        Compose the multiplier for a submission.

        Args:
            submitted: Dice that were locked and submitted

        Returns:
            MultiplierResult with the product and per-die breakdown
        """
        counts = Counter(d.value for d in submitted)
        total = 1.0
        breakdown: list[MultiplierBreakdown] = []

        for die in submitted:
            multiplier, reason = cls.die_multiplier(die, counts)
            if multiplier > 1.0:
                breakdown.append(MultiplierBreakdown(die.name, multiplier, reason))
            total *= multiplier

        result = MultiplierResult(total=total, breakdown=tuple(breakdown))
        if result.is_boosted:
            logger.info("%s", result)
        return result

    @classmethod
    def die_multiplier(cls, die: Die, counts: Counter[int]) -> tuple[float, str]:
        """
        Multiplier contributed by one die.

        Args:
            die: The submitted die
            counts: Value frequencies across the whole submission

        Returns:
            Tuple of (multiplier, reason); (1.0, "") when nothing triggers
        """
        variant = die.variant

        if variant is DiceVariant.COLLECTOR:
            if die.previous_value > 0 and die.value == die.previous_value:
                return cls.COLLECTOR_MULTIPLIER, "matched previous roll"
        elif variant is DiceVariant.LUCKY_SIX:
            if die.value == 6:
                return cls.LUCKY_SIX_MULTIPLIER, "rolled 6"
        elif variant is DiceVariant.SEVEN_SEVEN_SEVEN:
            if counts[die.value] >= cls.TRIPLE_SEVEN_MIN_MATCHES:
                return cls.TRIPLE_SEVEN_MULTIPLIER, "three-of-a-kind"
        elif variant is DiceVariant.D8:
            if die.value in cls.D8_MULTIPLIERS:
                return cls.D8_MULTIPLIERS[die.value], f"rolled {die.value}"

        return 1.0, ""
