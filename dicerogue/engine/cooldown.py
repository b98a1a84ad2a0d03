"""
Dice Rogue - Pool & Cooldown Scheduler

Owns the fixed 8-slot dice pool and the hand counter.

Rules:
    - A die is selectable only while its cooldown is 0
    - A hand uses 1 to 5 available dice
    - Submitted dice get cooldown = cooldown_after_use + 1; cooldowns tick
      down once at the start of every hand except the first of a cycle,
      so a submitted die sits out exactly one full hand
    - After max_hands_per_cycle hands every cooldown resets to 0
"""

import logging
import random
from dataclasses import replace
from typing import Sequence

from dicerogue.engine.base import Die, resolve_rng
from dicerogue.engine.catalog import (
    DEFAULT_COOLDOWN_TURNS,
    DEFAULT_POOL_SIZE,
    create_random_pool,
    pad_pool,
)
from dicerogue.engine.dice import DiceEngine
from dicerogue.engine.events import BattleEvent, EventQueue
from dicerogue.engine.validators import validate_slot_index, validate_slot_indices

logger = logging.getLogger(__name__)


class CooldownScheduler:
    """Manages pool rotation, cooldowns and the per-cycle hand counter.

    Dice are addressed by pool slot index. The pool is always exactly
    `pool_size` long; individual slots are replaced, never removed.
    """

    def __init__(
        self,
        dice: Sequence[Die] | None = None,
        *,
        pool_size: int = DEFAULT_POOL_SIZE,
        max_hand_size: int = 5,
        max_hands: int = 5,
        cooldown_turns: int = DEFAULT_COOLDOWN_TURNS,
        events: EventQueue | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._pool_size = pool_size
        self._max_hand_size = max_hand_size
        self._max_hands = max_hands
        self._cooldown_turns = cooldown_turns
        self._events = events if events is not None else EventQueue()
        self._pool: list[Die] = []
        self._selected: tuple[int, ...] = ()
        self._hands_played = 0

        if dice is None:
            dice = create_random_pool(rng, pool_size, cooldown_turns)
        self._install(dice)
        logger.info("Initialized pool with %d dice (%d supplied)", len(self._pool), len(dice))

    # -- Queries ---------------------------------------------------------

    @property
    def pool(self) -> tuple[Die, ...]:
        """Every die in slot order, including those on cooldown."""
        return tuple(self._pool)

    @property
    def events(self) -> EventQueue:
        return self._events

    @property
    def max_hands(self) -> int:
        return self._max_hands

    @property
    def hands_played(self) -> int:
        return self._hands_played

    @property
    def hands_remaining(self) -> int:
        return self._max_hands - self._hands_played

    @property
    def hand_counter(self) -> tuple[int, int]:
        """(hands played, hands remaining) for the current cycle."""
        return self._hands_played, self.hands_remaining

    @property
    def selected_indices(self) -> tuple[int, ...]:
        return self._selected

    @property
    def selected_dice(self) -> tuple[Die, ...]:
        return tuple(self._pool[i] for i in self._selected)

    def get_available(self) -> list[Die]:
        """Dice with no cooldown remaining."""
        return [die for die in self._pool if die.is_available]

    def available_indices(self) -> list[int]:
        """Slot indices of dice with no cooldown remaining."""
        return [i for i, die in enumerate(self._pool) if die.is_available]

    def has_available(self) -> bool:
        return any(die.is_available for die in self._pool)

    def selected_cost(self) -> int:
        """Total budget cost of the current selection."""
        return sum(die.cost for die in self.selected_dice)

    def is_within_budget(self, budget: int) -> bool:
        return self.selected_cost() <= budget

    # -- Selection -------------------------------------------------------

    def select_for_hand(self, indices: Sequence[int]) -> bool:
        """
        Select pool slots for the current hand.

        The selection must hold 1 to max_hand_size distinct, available
        slots. On failure the previous selection is kept.

        Args:
            indices: Pool slot indices to select

        Returns:
            True if the selection was accepted
        """
        try:
            chosen = validate_slot_indices(indices, len(self._pool), self._max_hand_size)
        except ValueError as exc:
            logger.warning("Rejected selection %s: %s", list(indices), exc)
            return False

        for index in chosen:
            die = self._pool[index]
            if not die.is_available:
                logger.warning(
                    "Rejected selection: %s is on cooldown (%d)",
                    die.name, die.cooldown_remaining,
                )
                return False

        self._selected = chosen
        logger.info("Selected %d dice for current hand", len(chosen))
        for die in self.selected_dice:
            logger.debug("  - %s (%s, cost: %d)", die.name, die.tier.name, die.cost)
        return True

    def draw_hand(self, rng: random.Random | None = None) -> tuple[int, ...]:
        """
        Randomly select up to max_hand_size available slots.

        Returns:
            The selected slot indices (empty when nothing is available)
        """
        available = self.available_indices()
        if not available:
            logger.warning("No dice available for selection")
            self._selected = ()
            return ()

        count = min(self._max_hand_size, len(available))
        drawn = resolve_rng(rng).sample(available, count)
        self.select_for_hand(drawn)
        return self._selected

    # -- Hand lifecycle --------------------------------------------------

    def advance_cooldowns(self) -> None:
        """Tick every cooldown down by one, never below zero."""
        for index, die in enumerate(self._pool):
            if die.cooldown_remaining > 0:
                remaining = die.cooldown_remaining - 1
                self._pool[index] = replace(die, cooldown_remaining=remaining)
                logger.debug(
                    "%s cooldown: %d -> %d", die.name, die.cooldown_remaining, remaining
                )
        self._publish_available()

    def complete_hand(self, submitted: Sequence[int] = ()) -> None:
        """
        Close out the current hand.

        Only the submitted slots go on cooldown. The hand counter always
        advances; when the cycle is used up the pool refreshes.

        Args:
            submitted: Pool slot indices of the dice that were submitted
        """
        for index in dict.fromkeys(submitted):
            try:
                validate_slot_index(index, len(self._pool))
            except ValueError as exc:
                logger.warning("Skipping cooldown for submitted slot: %s", exc)
                continue
            die = self._pool[index]
            cooldown = die.cooldown_after_use + 1
            self._pool[index] = replace(die, cooldown_remaining=cooldown)
            logger.debug("%s cooldown: %d -> %d", die.name, die.cooldown_remaining, cooldown)

        self._selected = ()
        self._hands_played += 1
        logger.info(
            "Hand %d/%d completed, %d remaining",
            self._hands_played, self._max_hands, self.hands_remaining,
        )

        if self.hands_remaining <= 0:
            self.refresh_pool()
        else:
            self._events.push(
                BattleEvent.HAND_COUNTER_CHANGED,
                current=self._hands_played,
                remaining=self.hands_remaining,
            )
            self._publish_available()

    def refresh_pool(self) -> None:
        """Reset every cooldown and start a new cycle of hands."""
        self._pool = [replace(die, cooldown_remaining=0) for die in self._pool]
        self._hands_played = 0
        logger.info("Dice pool refreshed, ready for a new set of hands")

        self._events.push(BattleEvent.POOL_REFRESHED)
        self._events.push(
            BattleEvent.HAND_COUNTER_CHANGED,
            current=self._hands_played,
            remaining=self.hands_remaining,
        )
        self._publish_available()

    def force_refresh(self) -> None:
        """Refresh immediately, regardless of hands remaining."""
        self.refresh_pool()

    def set_pool(self, dice: Sequence[Die]) -> None:
        """
        Replace the pool with an externally chosen set of dice.

        Every die gets the configured cooldown and starts available.
        The hand counter is left as is.
        """
        self._install(dice)
        logger.info("Dice pool replaced: %d total (%d supplied)", len(self._pool), len(dice))
        self._events.push(BattleEvent.POOL_REPLACED, size=len(self._pool))
        self._publish_available()

    def reset_system(self) -> None:
        """Back to the start of a cycle: no cooldowns, no selection, clean dice."""
        self._hands_played = 0
        self._selected = ()
        self._pool = [
            replace(DiceEngine.reset_for_new_hand(die), cooldown_remaining=0)
            for die in self._pool
        ]
        logger.info("Scheduler reset to initial state")
        self._publish_available()

    def status_lines(self) -> list[str]:
        """One line per slot: name, tier, cost and cooldown state."""
        lines = []
        for die in self._pool:
            status = (
                f"COOLDOWN({die.cooldown_remaining})"
                if die.cooldown_remaining > 0 else "AVAILABLE"
            )
            lines.append(f"{die.name}: {die.tier.name}, cost={die.cost}, {status}")
        return lines

    # -- Internals -------------------------------------------------------

    def _install(self, dice: Sequence[Die]) -> None:
        normalized = [
            replace(die, cooldown_after_use=self._cooldown_turns, cooldown_remaining=0)
            for die in dice
        ]
        self._pool = pad_pool(normalized, self._pool_size, self._cooldown_turns)
        self._selected = ()

    def _publish_available(self) -> None:
        available = self.get_available()
        logger.debug("%d/%d dice available", len(available), len(self._pool))
        self._events.push(
            BattleEvent.AVAILABLE_DICE_CHANGED,
            available=[die.name for die in available],
        )
