"""
Dice Rogue - Game Engine Base Classes

This module defines the foundational data structures and enums used by the
battle engine. Dice are immutable (frozen dataclasses): every roll, lock
toggle or effect produces a new Die instead of mutating the old one.
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum, auto


# Shared generator used when callers do not inject their own.
_DEFAULT_RNG = random.Random()


def resolve_rng(rng: random.Random | None) -> random.Random:
    """Return the injected generator or the module default."""
    return rng if rng is not None else _DEFAULT_RNG


class DiceTier(Enum):
    """Rarity tiers. Drives cost and flavour, not roll odds."""
    FILLER = 0
    COMMON = 1
    RARE = 2
    LEGENDARY = 3


class DiceVariant(Enum):
    """Closed set of roll behaviours."""
    NORMAL = "NormalDice"
    BIG_ONE = "BigOne"
    BIG_SIX = "BigSix"
    COUNTER = "CounterDice"
    EVEN = "EvenDice"
    ODD = "OddDice"
    HEAVY = "HeavyDice"
    LIGHT = "LightDice"
    MIRROR = "MirrorDice"
    WEIGHTED = "WeightedDice"
    COLLECTOR = "CollectorDice"
    LUCKY_SIX = "LuckySix"
    PLUS_ONE = "PlusOne"
    SEVEN_SEVEN_SEVEN = "SevenSevenSeven"
    TWIN_BOND = "TwinBond"
    WEIGHTED_EDGE = "WeightedEdge"
    D8 = "D8"
    GOLDEN = "GoldenDice"
    ZOMBIE = "ZombieDice"


class ComboType(Enum):
    """Hand classifications, highest priority first."""
    FIVE_OF_A_KIND = auto()
    FOUR_OF_A_KIND = auto()
    FULL_HOUSE = auto()
    LARGE_STRAIGHT = auto()
    SMALL_STRAIGHT = auto()
    SUM_JACKPOT = auto()
    THREE_OF_A_KIND = auto()
    TWO_PAIR = auto()
    ONE_PAIR = auto()
    ALL_EVEN = auto()
    ALL_ODD = auto()
    LOW_ROLL = auto()
    HIGH_ROLL = auto()
    NO_COMBO = auto()
    INVALID = auto()


@dataclass(frozen=True)
class Die:
    """
    Immutable snapshot of one die.

    Attributes:
        variant: Roll behaviour tag
        name: Display name
        tier: Rarity tier
        cost: Budget cost (informational only)
        cooldown_after_use: Hands the die sits out after being submitted
        cooldown_remaining: Hands left before the die is selectable again
        locked: Locked dice keep their value through rolls and effects
        value: Last rolled value (0 = not rolled this hand)
        previous_value: Value before the latest roll (Collector)
        has_rolled: One-shot flag (D8)
        injected_value: Predecessor's value fed in before rolling (Plus One)
        should_infect: Contagion triggered by the latest roll (Zombie)
    """
    variant: DiceVariant
    name: str
    tier: DiceTier
    cost: int = 1
    cooldown_after_use: int = 1
    cooldown_remaining: int = 0
    locked: bool = False
    value: int = 0
    previous_value: int = 0
    has_rolled: bool = False
    injected_value: int = 0
    should_infect: bool = False

    @property
    def is_filler(self) -> bool:
        return self.tier is DiceTier.FILLER

    @property
    def is_available(self) -> bool:
        """True when the die is off cooldown."""
        return self.cooldown_remaining == 0

    def with_value(self, value: int) -> "Die":
        """Copy of this die showing a different face."""
        return replace(self, value=value)

    def __str__(self) -> str:
        shown = str(self.value) if self.value else "-"
        suffix = " [LOCKED]" if self.locked else ""
        return f"{self.name}: {shown}{suffix}"


@dataclass(frozen=True)
class VariantSpec:
    """
    Static catalog entry for a dice variant.

    Attributes:
        variant: Tag this entry describes
        name: Default display name
        tier: Rarity tier
        description: Flavour text for reward screens
        faces: Face table sampled by table-driven variants
        weights: Per-face weights (weighted variant only)
    """
    variant: DiceVariant
    name: str
    tier: DiceTier
    description: str
    faces: tuple[int, ...] = (1, 2, 3, 4, 5, 6)
    weights: tuple[float, ...] = field(default_factory=tuple)

    @property
    def cost(self) -> int:
        """Budget cost follows tier: Filler 0, Common 1, Rare 2, Legendary 3."""
        return self.tier.value
