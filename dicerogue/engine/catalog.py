"""
Dice Rogue - Dice Catalog

Static table of every dice variant plus the factories used to build pools,
fill empty slots and offer rewards.

Catalog:
    Common:    Normal, Big One, Big Six, Counter, Even, Odd, Heavy, Light,
               Mirror, Weighted
    Rare:      Collector, Lucky Six, Plus One, 777, Twin Bond, Weighted Edge
    Legendary: D8, Golden, Zombie
"""

import logging
import random
from typing import Sequence

from dicerogue.engine.base import (
    DiceTier,
    DiceVariant,
    Die,
    VariantSpec,
    resolve_rng,
)

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 8
DEFAULT_COOLDOWN_TURNS = 1

VARIANT_SPECS: dict[DiceVariant, VariantSpec] = {
    spec.variant: spec
    for spec in (
        # Common
        VariantSpec(DiceVariant.NORMAL, "Normal Dice", DiceTier.COMMON,
                    "Plain uniform D6"),
        VariantSpec(DiceVariant.BIG_ONE, "Big One", DiceTier.COMMON,
                    "25% chance to roll 1"),
        VariantSpec(DiceVariant.BIG_SIX, "Big Six", DiceTier.COMMON,
                    "25% chance to roll 6"),
        VariantSpec(DiceVariant.COUNTER, "Counter Dice", DiceTier.COMMON,
                    "Faces 1, 2, 2, 5, 5, 6", faces=(1, 2, 2, 5, 5, 6)),
        VariantSpec(DiceVariant.EVEN, "Even Dice", DiceTier.COMMON,
                    "Only rolls 2, 4 or 6", faces=(2, 2, 4, 4, 6, 6)),
        VariantSpec(DiceVariant.ODD, "Odd Dice", DiceTier.COMMON,
                    "Only rolls 1, 3 or 5", faces=(1, 1, 3, 3, 5, 5)),
        VariantSpec(DiceVariant.HEAVY, "Heavy Dice", DiceTier.COMMON,
                    "70% chance to roll 4, 5 or 6"),
        VariantSpec(DiceVariant.LIGHT, "Light Dice", DiceTier.COMMON,
                    "70% chance to roll 1, 2 or 3"),
        VariantSpec(DiceVariant.MIRROR, "Mirror Dice", DiceTier.COMMON,
                    "Rolls 7 minus its last value"),
        VariantSpec(DiceVariant.WEIGHTED, "Weighted Dice", DiceTier.COMMON,
                    "6 comes up about 30% of the time",
                    weights=(1.0, 1.0, 1.0, 1.0, 1.0, 3.0)),
        # Rare
        VariantSpec(DiceVariant.COLLECTOR, "Collector Dice", DiceTier.RARE,
                    "x1.5 when it repeats its last roll"),
        VariantSpec(DiceVariant.LUCKY_SIX, "Lucky Six", DiceTier.RARE,
                    "x1.5 when it rolls a 6"),
        VariantSpec(DiceVariant.PLUS_ONE, "Plus One", DiceTier.RARE,
                    "70% chance to roll the previous die's value + 1"),
        VariantSpec(DiceVariant.SEVEN_SEVEN_SEVEN, "777", DiceTier.RARE,
                    "x2 when its value appears three times in the submission"),
        VariantSpec(DiceVariant.TWIN_BOND, "Twin Bond", DiceTier.RARE,
                    "Copies a random other die"),
        VariantSpec(DiceVariant.WEIGHTED_EDGE, "Weighted Edge", DiceTier.RARE,
                    "Only rolls 3 or 6", faces=(3, 3, 3, 6, 6, 6)),
        # Legendary
        VariantSpec(DiceVariant.D8, "D8", DiceTier.LEGENDARY,
                    "Rolls 1-8 once per hand; 7 is x5, 8 is x10",
                    faces=(1, 2, 3, 4, 5, 6, 7, 8)),
        VariantSpec(DiceVariant.GOLDEN, "Golden Dice", DiceTier.LEGENDARY,
                    "All other dice +1 (max 6)"),
        VariantSpec(DiceVariant.ZOMBIE, "Zombie", DiceTier.LEGENDARY,
                    "20% chance to infect both neighbours with its value"),
    )
}

# Variants the pool factory and reward screen draw from.
REWARD_VARIANTS: tuple[DiceVariant, ...] = (
    DiceVariant.BIG_ONE,
    DiceVariant.BIG_SIX,
    DiceVariant.COUNTER,
    DiceVariant.EVEN,
    DiceVariant.ODD,
    DiceVariant.HEAVY,
    DiceVariant.LIGHT,
    DiceVariant.MIRROR,
    DiceVariant.COLLECTOR,
    DiceVariant.LUCKY_SIX,
    DiceVariant.PLUS_ONE,
    DiceVariant.SEVEN_SEVEN_SEVEN,
    DiceVariant.TWIN_BOND,
    DiceVariant.WEIGHTED_EDGE,
    DiceVariant.D8,
    DiceVariant.GOLDEN,
    DiceVariant.ZOMBIE,
)


def get_spec(variant: DiceVariant) -> VariantSpec:
    """Look up the catalog entry for a variant."""
    return VARIANT_SPECS[variant]


def create_die(
    variant: DiceVariant,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
    name: str | None = None,
) -> Die:
    """
    Instantiate a fresh die of the given variant.

    Args:
        variant: Variant to create
        cooldown_turns: Hands the die sits out after use
        name: Override for the catalog display name

    Returns:
        Unrolled, unlocked die with no cooldown
    """
    spec = get_spec(variant)
    return Die(
        variant=variant,
        name=name or spec.name,
        tier=spec.tier,
        cost=spec.cost,
        cooldown_after_use=cooldown_turns,
    )


def create_die_by_id(type_id: str, cooldown_turns: int = DEFAULT_COOLDOWN_TURNS) -> Die:
    """
    Recreate a die from its variant identifier (e.g. "D8", "HeavyDice").

    Raises:
        ValueError: If the identifier is not in the catalog
    """
    for variant in DiceVariant:
        if variant.value == type_id or variant.name == type_id:
            return create_die(variant, cooldown_turns)
    raise ValueError(f"Unknown dice type id '{type_id}'.")


def create_basic_die(slot: int, cooldown_turns: int = DEFAULT_COOLDOWN_TURNS) -> Die:
    """Zero-cost normal die used to pad a pool up to full size."""
    return Die(
        variant=DiceVariant.NORMAL,
        name=f"Basic D6_{slot}",
        tier=DiceTier.COMMON,
        cost=0,
        cooldown_after_use=cooldown_turns,
    )


def create_placeholder(slot: int) -> Die:
    """Filler die shown in empty hand slots. Never rolled or submitted."""
    return Die(
        variant=DiceVariant.NORMAL,
        name=f"Empty_{slot}",
        tier=DiceTier.FILLER,
        cost=0,
        cooldown_after_use=0,
    )


def create_random_pool(
    rng: random.Random | None = None,
    size: int = DEFAULT_POOL_SIZE,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
) -> list[Die]:
    """
    Build a pool from a random selection of distinct reward variants.

    Args:
        rng: Random source (module default if omitted)
        size: Number of dice to draw (capped at the number of variants)
        cooldown_turns: Cooldown applied to every die

    Returns:
        List of freshly created dice
    """
    rng = resolve_rng(rng)
    shuffled = list(REWARD_VARIANTS)
    rng.shuffle(shuffled)

    pool = [create_die(variant, cooldown_turns) for variant in shuffled[:size]]
    for die in pool:
        logger.debug("Added %s (%s, cost: %d)", die.name, die.tier.name, die.cost)
    logger.info("Created random pool of %d dice", len(pool))
    return pool


def pad_pool(
    dice: Sequence[Die],
    size: int = DEFAULT_POOL_SIZE,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
) -> list[Die]:
    """
    Fit a dice list to exactly `size` slots.

    Extra dice are dropped; missing slots get basic D6 dice.
    """
    if len(dice) > size:
        logger.warning("Pool given %d dice, keeping the first %d", len(dice), size)
    pool = list(dice[:size])
    while len(pool) < size:
        pool.append(create_basic_die(len(pool) + 1, cooldown_turns))
    return pool


def reward_options(
    rng: random.Random | None = None,
    count: int = 3,
    cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
) -> list[Die]:
    """
    Draw distinct non-filler dice for the reward screen.

    Args:
        rng: Random source
        count: Number of options (capped at the catalog size)
        cooldown_turns: Cooldown applied to every option

    Returns:
        List of candidate dice
    """
    rng = resolve_rng(rng)
    picks = rng.sample(REWARD_VARIANTS, min(count, len(REWARD_VARIANTS)))
    options = [create_die(variant, cooldown_turns) for variant in picks]
    logger.info(
        "Reward options: %s",
        ", ".join(f"{d.name} ({d.tier.name})" for d in options),
    )
    return options
