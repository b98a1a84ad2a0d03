"""
Dice Rogue - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random

import pytest

from dicerogue.config.settings import BattleSettings
from dicerogue.engine.base import DiceVariant
from dicerogue.engine.catalog import create_die


class ScriptedRandom(random.Random):
    """Random source that replays queued values before falling back to a seed.

    `floats` feed random(); `ints` feed randint(). choice/sample/shuffle
    stay on the seeded generator.
    """

    def __init__(self, floats=(), ints=(), seed=0):
        super().__init__(seed)
        self._floats = list(floats)
        self._ints = list(ints)

    def random(self):
        if self._floats:
            return self._floats.pop(0)
        return super().random()

    def getrandbits(self, k):
        # Keeps choice/sample on getrandbits rather than random()
        return super().getrandbits(k)

    def randint(self, a, b):
        if self._ints:
            value = self._ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside {a}..{b}"
            return value
        return super().randint(a, b)

    @property
    def exhausted(self) -> bool:
        return not self._floats and not self._ints


@pytest.fixture
def scripted_rng():
    """Factory: scripted_rng(floats=[...], ints=[...])."""
    return ScriptedRandom


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings() -> BattleSettings:
    return BattleSettings(
        pool_size=8,
        max_hand_size=5,
        max_rolls_per_hand=3,
        max_hands_per_cycle=5,
        cooldown_turns=1,
        seed=42,
    )


@pytest.fixture
def normal_pool():
    """Eight plain D6 dice with distinct names."""
    return [create_die(DiceVariant.NORMAL, name=f"Normal {i}") for i in range(8)]


# =============================================================================
# COMBO TEST DATA
# =============================================================================

@pytest.fixture
def combo_table() -> dict[str, tuple[tuple[int, ...], str, int]]:
    """
    Known submissions with expected combo and score (dice multiplier 1.0).

    Returns:
        Dict mapping name to (values, combo_name, expected_score)
    """
    return {
        "five_sixes": ((6, 6, 6, 6, 6), "Five of a Kind", 840),
        "four_twos": ((2, 2, 2, 2, 6), "Four of a Kind", 335),
        "full_house": ((5, 5, 5, 6, 6), "Full House", 254),
        "large_low": ((1, 2, 3, 4, 5), "Large Straight", 189),
        "small_with_pair": ((2, 3, 4, 5, 5), "Small Straight", 141),
        "jackpot_two_pair": ((3, 4, 4, 5, 5), "Sum Jackpot", 164),
        "jackpot_triple": ((6, 6, 6, 2, 1), "Sum Jackpot", 164),
        "three_twos": ((1, 2, 2, 2, 4), "Three of a Kind", 106),
        "two_pair": ((1, 1, 3, 3, 6), "Two Pair", 71),
        "one_pair": ((1, 1, 3, 5, 6), "One Pair", 46),
        "all_even": ((2, 4, 6), "All Even", 56),
        "all_odd": ((1, 3, 5), "All Odd", 53),
        "low_roll": ((1, 2), "Low Roll", 28),
        "high_roll": ((4, 5), "High Roll", 34),
        "bust": ((1, 4), "No Combo/Bust", 12),
    }
