"""
Dice Rogue - Hand Evaluator

Classifies a submission into a combo and computes its score. All methods
are stateless class methods; the same values always give the same result.

Combos (first match wins, highest priority first):
    Five of a Kind   180 x4.0     All Even     35 x1.2
    Four of a Kind   120 x2.5     All Odd      35 x1.2
    Full House       100 x2.0     Low Roll     25 x1.0   (all <= 3)
    Large Straight    90 x1.8     High Roll    25 x1.0   (all >= 4)
    Small Straight    75 x1.5     No Combo     10 x0.8
    Sum Jackpot       70 x1.8     (total = 21)
    Three of a Kind   60 x1.5
    Two Pair          45 x1.2
    One Pair          30 x1.0

Score = round((base + sum) x combo multiplier x dice multiplier)
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from dicerogue.engine.base import ComboType
from dicerogue.engine.validators import validate_dice_values

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComboRule:
    """Display name, base score and multiplier of a combo."""
    name: str
    base_score: int
    multiplier: float


@dataclass(frozen=True)
class HandResult:
    """
    Complete scoring result for a submission.

    Attributes:
        values: Submitted values, sorted ascending
        combo: Matched combo
        combo_name: Display name of the combo
        base_score: Combo base points
        dice_sum: Sum of the submitted values
        combo_multiplier: Multiplier attached to the combo
        dice_multiplier: External multiplier from special dice
        score: Final rounded score
    """
    values: tuple[int, ...]
    combo: ComboType
    combo_name: str
    base_score: int
    dice_sum: int
    combo_multiplier: float
    dice_multiplier: float
    score: int

    @property
    def is_bust(self) -> bool:
        return self.combo in (ComboType.NO_COMBO, ComboType.INVALID)

    def summary(self) -> str:
        """Multi-line result summary for display."""
        lines = [
            " === RESULT SUMMARY ===",
            f"Dice: [{', '.join(str(v) for v in self.values)}]",
            f"Combo: {self.combo_name}",
            f"Base: {self.base_score} + Sum: {self.dice_sum} = {self.base_score + self.dice_sum}",
            f"Combo Multiplier: x{self.combo_multiplier:.1f}",
        ]
        if self.dice_multiplier != 1.0:
            lines.append(f"Dice Multiplier: x{self.dice_multiplier:.1f}")
        lines.append(f"Final Score: {self.score}")
        lines.append("=========================")
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"{self.combo_name}: {self.score} points"


class HandEvaluator:
    """
    Stateless combo classifier and scorer.

    All methods are class methods operating on immutable data.
    """

    MAX_DICE = 5

    RULES: dict[ComboType, ComboRule] = {
        ComboType.FIVE_OF_A_KIND: ComboRule("Five of a Kind", 180, 4.0),
        ComboType.FOUR_OF_A_KIND: ComboRule("Four of a Kind", 120, 2.5),
        ComboType.FULL_HOUSE: ComboRule("Full House", 100, 2.0),
        ComboType.LARGE_STRAIGHT: ComboRule("Large Straight", 90, 1.8),
        ComboType.SMALL_STRAIGHT: ComboRule("Small Straight", 75, 1.5),
        ComboType.SUM_JACKPOT: ComboRule("Sum Jackpot", 70, 1.8),
        ComboType.THREE_OF_A_KIND: ComboRule("Three of a Kind", 60, 1.5),
        ComboType.TWO_PAIR: ComboRule("Two Pair", 45, 1.2),
        ComboType.ONE_PAIR: ComboRule("One Pair", 30, 1.0),
        ComboType.ALL_EVEN: ComboRule("All Even", 35, 1.2),
        ComboType.ALL_ODD: ComboRule("All Odd", 35, 1.2),
        ComboType.LOW_ROLL: ComboRule("Low Roll", 25, 1.0),
        ComboType.HIGH_ROLL: ComboRule("High Roll", 25, 1.0),
        ComboType.NO_COMBO: ComboRule("No Combo/Bust", 10, 0.8),
        ComboType.INVALID: ComboRule("Invalid", 0, 0.0),
    }

    LARGE_STRAIGHTS = ((1, 2, 3, 4, 5), (2, 3, 4, 5, 6))
    SMALL_STRAIGHT_STARTS = (1, 2, 3)
    JACKPOT_SUM = 21

    @classmethod
    def evaluate(
        cls,
        values: Sequence[int],
        dice_multiplier: float = 1.0,
    ) -> HandResult:
        """
        Classify a submission and compute its score.

        Args:
            values: 1 to 5 submitted die values, any order
            dice_multiplier: External multiplier from special dice

        Returns:
            HandResult; an empty submission scores 0 as INVALID

        Raises:
            ValueError: If more than 5 values are given or a value is out of range
        """
        if not values:
            return cls._build_result((), ComboType.INVALID, dice_multiplier)

        checked = validate_dice_values(values, min_count=1, max_count=cls.MAX_DICE)
        ordered = tuple(sorted(checked))
        combo = cls.classify(ordered)
        result = cls._build_result(ordered, combo, dice_multiplier)
        logger.debug(
            "Combo=%s, Base=%d, Sum=%d, Mult=%s, DiceMult=%s, Total=%d",
            result.combo_name, result.base_score, result.dice_sum,
            result.combo_multiplier, dice_multiplier, result.score,
        )
        return result

    @classmethod
    def classify(cls, values: Sequence[int]) -> ComboType:
        """
        Return the highest-priority combo the values satisfy.

        Args:
            values: Non-empty submitted values

        Returns:
            The matched ComboType
        """
        ordered = sorted(values)
        freq = sorted(Counter(ordered).values(), reverse=True)
        top = freq[0]

        if top == 5:
            return ComboType.FIVE_OF_A_KIND
        if top == 4:
            return ComboType.FOUR_OF_A_KIND
        if top == 3 and 2 in freq:
            return ComboType.FULL_HOUSE
        if cls.is_large_straight(ordered):
            return ComboType.LARGE_STRAIGHT
        if cls.is_small_straight(ordered):
            return ComboType.SMALL_STRAIGHT
        if sum(ordered) == cls.JACKPOT_SUM:
            return ComboType.SUM_JACKPOT
        if top == 3:
            return ComboType.THREE_OF_A_KIND
        if freq.count(2) == 2:
            return ComboType.TWO_PAIR
        if top == 2:
            return ComboType.ONE_PAIR
        if all(v % 2 == 0 for v in ordered):
            return ComboType.ALL_EVEN
        if all(v % 2 == 1 for v in ordered):
            return ComboType.ALL_ODD
        if all(v <= 3 for v in ordered):
            return ComboType.LOW_ROLL
        if all(v >= 4 for v in ordered):
            return ComboType.HIGH_ROLL
        return ComboType.NO_COMBO

    @classmethod
    def is_large_straight(cls, values: Sequence[int]) -> bool:
        """Distinct values are exactly 1-5 or 2-6."""
        return tuple(sorted(set(values))) in cls.LARGE_STRAIGHTS

    @classmethod
    def is_small_straight(cls, values: Sequence[int]) -> bool:
        """Any four consecutive values starting at 1, 2 or 3."""
        unique = set(values)
        if len(unique) < 4:
            return False
        return any(
            all(start + step in unique for step in range(4))
            for start in cls.SMALL_STRAIGHT_STARTS
        )

    @classmethod
    def calculate_score(
        cls,
        base_score: int,
        dice_sum: int,
        combo_multiplier: float,
        dice_multiplier: float = 1.0,
    ) -> int:
        """round((base + sum) x combo multiplier x dice multiplier), half to even."""
        return int(round((base_score + dice_sum) * combo_multiplier * dice_multiplier))

    @classmethod
    def _build_result(
        cls,
        values: tuple[int, ...],
        combo: ComboType,
        dice_multiplier: float,
    ) -> HandResult:
        rule = cls.RULES[combo]
        dice_sum = sum(values)
        if combo is ComboType.INVALID:
            score = 0
        else:
            score = cls.calculate_score(rule.base_score, dice_sum, rule.multiplier, dice_multiplier)
        return HandResult(
            values=values,
            combo=combo,
            combo_name=rule.name,
            base_score=rule.base_score,
            dice_sum=dice_sum,
            combo_multiplier=rule.multiplier,
            dice_multiplier=dice_multiplier,
            score=score,
        )
