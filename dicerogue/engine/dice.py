"""
Dice Rogue - Dice Roll Engine

Single dispatch point for every variant's roll behaviour. All methods are
stateless class methods: a die goes in, a new die comes out.

Distributions:
    - Uniform 1-6: Normal, Collector, Lucky Six, 777, Twin Bond, Golden, Zombie
    - Big One / Big Six: 25% fixed face, 75% uniform over the other five
    - Heavy / Light: 70% upper (4-6) or lower (1-3) half, 30% the other half
    - Counter / Even / Odd / Weighted Edge: uniform pick from a 6-entry face table
    - Weighted: cumulative-weight sampling, uniform if total weight <= 0
    - Mirror: 7 - last value, uniform on the first roll
    - Plus One: 70% predecessor + 1 (6 wraps to 1), else uniform
    - D8: uniform 1-8, first roll of the hand only
    - Collector: uniform, remembers the previous value
    - Zombie: uniform, plus a 20% infection trigger
"""

import random
from dataclasses import replace
from typing import Sequence

from dicerogue.engine.base import DiceVariant, Die, resolve_rng
from dicerogue.engine.catalog import get_spec


class DiceEngine:
    """
    Stateless roll dispatcher for the dice variant set.

    All methods are class methods operating on immutable dice.
    """

    MIN_FACE = 1
    MAX_FACE = 6
    D8_MAX_FACE = 8

    SKEWED_FACE_CHANCE = 0.25
    HALF_RANGE_CHANCE = 0.7
    PLUS_ONE_CHANCE = 0.7
    INFECT_CHANCE = 0.2

    @classmethod
    def roll(cls, die: Die, rng: random.Random | None = None) -> Die:
        """
        Roll a die according to its variant.

        Locked dice are returned unchanged.

        Args:
            die: Die to roll
            rng: Random source (module default if omitted)

        Returns:
            New Die carrying the rolled value and updated private state
        """
        if die.locked:
            return die

        rng = resolve_rng(rng)
        variant = die.variant

        if variant is DiceVariant.BIG_ONE:
            return die.with_value(cls._roll_skewed(rng, 1))
        if variant is DiceVariant.BIG_SIX:
            return die.with_value(cls._roll_skewed(rng, 6))
        if variant is DiceVariant.HEAVY:
            return die.with_value(cls._roll_half_range(rng, high=True))
        if variant is DiceVariant.LIGHT:
            return die.with_value(cls._roll_half_range(rng, high=False))
        if variant in (
            DiceVariant.COUNTER,
            DiceVariant.EVEN,
            DiceVariant.ODD,
            DiceVariant.WEIGHTED_EDGE,
        ):
            return die.with_value(rng.choice(get_spec(variant).faces))
        if variant is DiceVariant.WEIGHTED:
            spec = get_spec(variant)
            return die.with_value(cls.sample_weighted(spec.faces, spec.weights, rng))
        if variant is DiceVariant.MIRROR:
            return die.with_value(cls._roll_mirror(die.value, rng))
        if variant is DiceVariant.PLUS_ONE:
            return die.with_value(cls._roll_plus_one(die.injected_value, rng))
        if variant is DiceVariant.D8:
            if die.has_rolled:
                return die
            value = rng.randint(cls.MIN_FACE, cls.D8_MAX_FACE)
            return replace(die, value=value, has_rolled=True)
        if variant is DiceVariant.COLLECTOR:
            value = cls.roll_uniform(rng)
            return replace(die, previous_value=die.value, value=value)
        if variant is DiceVariant.ZOMBIE:
            value = cls.roll_uniform(rng)
            return replace(
                die, value=value, should_infect=rng.random() < cls.INFECT_CHANCE
            )

        # Normal, Lucky Six, 777, Twin Bond and Golden roll a plain D6;
        # their specials live in the effect pass and multiplier step.
        return die.with_value(cls.roll_uniform(rng))

    @classmethod
    def roll_uniform(cls, rng: random.Random) -> int:
        """Plain 1-6."""
        return rng.randint(cls.MIN_FACE, cls.MAX_FACE)

    @classmethod
    def _roll_skewed(cls, rng: random.Random, face: int) -> int:
        """25% the given face, else uniform over the remaining five."""
        if rng.random() < cls.SKEWED_FACE_CHANCE:
            return face
        others = [v for v in range(cls.MIN_FACE, cls.MAX_FACE + 1) if v != face]
        return rng.choice(others)

    @classmethod
    def _roll_half_range(cls, rng: random.Random, high: bool) -> int:
        """70% from the favoured half of the die, 30% from the other."""
        favoured = rng.random() < cls.HALF_RANGE_CHANCE
        if favoured == high:
            return rng.randint(4, 6)
        return rng.randint(1, 3)

    @classmethod
    def _roll_mirror(cls, last_value: int, rng: random.Random) -> int:
        if cls.MIN_FACE <= last_value <= cls.MAX_FACE:
            return 7 - last_value
        # First roll of the hand, or a value copied from outside 1-6
        return cls.roll_uniform(rng)

    @classmethod
    def _roll_plus_one(cls, injected_value: int, rng: random.Random) -> int:
        if rng.random() < cls.PLUS_ONE_CHANCE and injected_value > 0:
            value = injected_value + 1
            return cls.MIN_FACE if value > cls.MAX_FACE else value
        return cls.roll_uniform(rng)

    @classmethod
    def sample_weighted(
        cls,
        faces: Sequence[int],
        weights: Sequence[float],
        rng: random.Random | None = None,
    ) -> int:
        """
        Pick a face by cumulative weight.

        Negative weights count as zero. A table with no positive weight,
        or whose length does not match the faces, falls back to a uniform pick.

        Args:
            faces: Face values
            weights: One weight per face (need not be normalised)
            rng: Random source

        Returns:
            The sampled face
        """
        rng = resolve_rng(rng)
        if len(weights) != len(faces):
            return rng.choice(faces)

        clamped = [max(0.0, w) for w in weights]
        total = sum(clamped)
        if total <= 0:
            return rng.choice(faces)

        target = rng.random() * total
        accumulated = 0.0
        for face, weight in zip(faces, clamped):
            accumulated += weight
            if target < accumulated:
                return face

        # Floating point drift: land on the last face that carries weight
        return next(f for f, w in zip(reversed(faces), reversed(clamped)) if w > 0)

    @classmethod
    def toggle_lock(cls, die: Die) -> Die:
        """Flip the locked flag."""
        return replace(die, locked=not die.locked)

    @classmethod
    def inject_previous(cls, die: Die, value: int) -> Die:
        """Feed a Plus One die its predecessor's value before it rolls."""
        return replace(die, injected_value=value)

    @classmethod
    def reset_for_new_hand(cls, die: Die) -> Die:
        """
        Clear lock, value and every per-hand flag.

        Cooldown bookkeeping is left untouched.
        """
        return replace(
            die,
            locked=False,
            value=0,
            previous_value=0,
            has_rolled=False,
            injected_value=0,
            should_infect=False,
        )
