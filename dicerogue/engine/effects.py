"""
Dice Rogue - Effect Resolution Pass

Neighbour-dependent dice specials, resolved once per reroll in a fixed order:

    1. Context injection: a Plus One die is fed its predecessor's value
       right before it rolls
    2. Copy-random: an unlocked Twin Bond copies a random other unlocked,
       rolled, non-filler die
    3. Contagion: a Zombie whose roll triggered infection writes its value
       onto both unlocked, non-filler neighbours (cascades in hand order)
    4. Global bonus: with a Golden die in hand, every other unlocked,
       rolled, non-filler die gains +1 (max 6)

Each step sees the output of the previous one. Locked dice are never
touched. All methods take a hand (tuple of dice) and return a new one.
"""

import logging
import random
from typing import Sequence

from dicerogue.engine.base import DiceVariant, Die, resolve_rng
from dicerogue.engine.dice import DiceEngine

logger = logging.getLogger(__name__)


class EffectResolver:
    """
    Stateless resolver for rolling a hand and applying dice specials.

    All methods are class methods operating on immutable dice.
    """

    GOLDEN_BONUS = 1
    GOLDEN_CAP = 6

    @classmethod
    def resolve_roll(
        cls,
        dice: Sequence[Die],
        rng: random.Random | None = None,
    ) -> tuple[Die, ...]:
        """
        Roll every unlocked die, then apply the effect pass exactly once.

        Args:
            dice: Current hand in slot order
            rng: Random source

        Returns:
            The hand after rolling and effects
        """
        rng = resolve_rng(rng)
        rolled = cls.roll_unlocked(dice, rng)
        return cls.apply_effects(rolled, rng)

    @classmethod
    def roll_unlocked(
        cls,
        dice: Sequence[Die],
        rng: random.Random | None = None,
    ) -> tuple[Die, ...]:
        """
        Roll unlocked non-filler dice in hand order.

        A Plus One die receives its predecessor's value (as already
        rolled in this pass) just before rolling.
        """
        rng = resolve_rng(rng)
        hand = list(dice)
        for i, die in enumerate(hand):
            if die.locked or die.is_filler:
                continue
            if die.variant is DiceVariant.PLUS_ONE and i > 0:
                die = DiceEngine.inject_previous(die, hand[i - 1].value)
                logger.debug("%s: previous value = %d", die.name, die.injected_value)
            hand[i] = DiceEngine.roll(die, rng)
            logger.debug("%s rolled: %d", die.name, hand[i].value)
        return tuple(hand)

    @classmethod
    def apply_effects(
        cls,
        dice: Sequence[Die],
        rng: random.Random | None = None,
    ) -> tuple[Die, ...]:
        """Run copy-random, contagion and global bonus, in that order."""
        rng = resolve_rng(rng)
        hand = cls.apply_twin_bond(dice, rng)
        hand = cls.apply_zombie_infection(hand)
        return cls.apply_golden_bonus(hand)

    @classmethod
    def apply_twin_bond(
        cls,
        dice: Sequence[Die],
        rng: random.Random | None = None,
    ) -> tuple[Die, ...]:
        """Each unlocked Twin Bond copies a random eligible sibling."""
        rng = resolve_rng(rng)
        hand = list(dice)
        for i, die in enumerate(hand):
            if die.variant is not DiceVariant.TWIN_BOND or die.locked or die.is_filler:
                continue

            candidates = [
                other for j, other in enumerate(hand)
                if j != i and not other.locked and not other.is_filler and other.value > 0
            ]
            if not candidates:
                continue

            source = rng.choice(candidates)
            hand[i] = die.with_value(source.value)
            logger.debug("%s copied value %d from %s", die.name, source.value, source.name)
        return tuple(hand)

    @classmethod
    def apply_zombie_infection(cls, dice: Sequence[Die]) -> tuple[Die, ...]:
        """Triggered Zombies overwrite their unlocked, non-filler neighbours."""
        hand = list(dice)
        for i, die in enumerate(hand):
            if die.variant is not DiceVariant.ZOMBIE or die.locked or die.is_filler:
                continue
            if not die.should_infect:
                continue

            # May already carry an earlier zombie's value
            value = die.value
            logger.debug("%s is infecting neighbours with value %d", die.name, value)
            for j in (i - 1, i + 1):
                if 0 <= j < len(hand):
                    neighbour = hand[j]
                    if not neighbour.locked and not neighbour.is_filler:
                        hand[j] = neighbour.with_value(value)
                        logger.debug("  infected %s", neighbour.name)
        return tuple(hand)

    @classmethod
    def apply_golden_bonus(cls, dice: Sequence[Die]) -> tuple[Die, ...]:
        """+1 (max 6) to every other unlocked, rolled, non-filler die."""
        golden_index = next(
            (
                i for i, d in enumerate(dice)
                if d.variant is DiceVariant.GOLDEN and not d.is_filler
            ),
            None,
        )
        if golden_index is None:
            return tuple(dice)

        hand = list(dice)
        for i, die in enumerate(hand):
            if i == golden_index or die.locked or die.is_filler or die.value <= 0:
                continue
            hand[i] = die.with_value(min(die.value + cls.GOLDEN_BONUS, cls.GOLDEN_CAP))
            logger.debug("%s: %d -> %d", die.name, die.value, hand[i].value)
        return tuple(hand)
