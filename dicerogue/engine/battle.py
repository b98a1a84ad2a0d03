"""
Dice Rogue - Battle Session

Synchronous facade the host drives: one battle instance owns a cooldown
scheduler, the current hand and its state machine, and an event queue.

Flow of one hand:
    start -> roll (up to 3x, effects after each) -> lock -> submit
    -> multiplier + evaluator score -> cooldowns on submitted dice
    -> advance_to_next_hand

Every action returns an ActionResult; user errors never raise.
"""

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from dicerogue.config.settings import BattleSettings, get_settings
from dicerogue.engine.base import Die
from dicerogue.engine.catalog import create_placeholder
from dicerogue.engine.cooldown import CooldownScheduler
from dicerogue.engine.dice import DiceEngine
from dicerogue.engine.effects import EffectResolver
from dicerogue.engine.evaluator import HandEvaluator, HandResult
from dicerogue.engine.events import BattleEvent, EventPayload, EventQueue
from dicerogue.engine.hand import (
    HandState,
    is_submittable,
    submitted_dice,
    submitted_values,
)
from dicerogue.engine.multipliers import MultiplierCalculator, MultiplierResult
from dicerogue.engine.validators import validate_slot_index
from dicerogue.models import (
    BattleSnapshot,
    DieStatus,
    HandCounter,
    PoolStatusEntry,
    ScoreReport,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of a host-triggered action.

    Attributes:
        ok: Whether the action changed state
        message: User-facing feedback or rejection reason
        roll_number: 1-indexed roll number (roll only)
        hand_result: Scoring result (submit only)
        multiplier: Dice multiplier breakdown (submit only)
    """
    ok: bool
    message: str
    roll_number: int | None = None
    hand_result: HandResult | None = None
    multiplier: MultiplierResult | None = None


class BattleSession:
    """Drives one battle: dealing hands, rolling, locking and scoring.

    Not thread-safe. A concurrent host must serialize calls per instance.
    """

    def __init__(
        self,
        dice: Sequence[Die] | None = None,
        *,
        settings: BattleSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._rng = rng if rng is not None else random.Random(self._settings.seed)
        self._events = EventQueue()
        self._scheduler = CooldownScheduler(
            dice,
            pool_size=self._settings.pool_size,
            max_hand_size=self._settings.max_hand_size,
            max_hands=self._settings.max_hands_per_cycle,
            cooldown_turns=self._settings.cooldown_turns,
            events=self._events,
            rng=self._rng,
        )
        self._hand_state = HandState(max_rolls=self._settings.max_rolls_per_hand)
        self._dice: list[Die] = []
        self._slots: list[int | None] = []
        self._last_result: HandResult | None = None
        self._last_multiplier: MultiplierResult | None = None

        self.start_hand()

    # -- Queries ---------------------------------------------------------

    @property
    def scheduler(self) -> CooldownScheduler:
        return self._scheduler

    @property
    def hand_state(self) -> HandState:
        return self._hand_state

    @property
    def dice(self) -> tuple[Die, ...]:
        """Current hand in slot order, placeholders included."""
        return tuple(self._dice)

    @property
    def hand_counter(self) -> HandCounter:
        current, remaining = self._scheduler.hand_counter
        return HandCounter(current=current, remaining=remaining)

    @property
    def last_result(self) -> HandResult | None:
        return self._last_result

    @property
    def last_multiplier(self) -> MultiplierResult | None:
        return self._last_multiplier

    def pool_status(self) -> list[PoolStatusEntry]:
        return [
            PoolStatusEntry(
                slot=slot,
                name=die.name,
                tier=die.tier.name,
                cost=die.cost,
                cooldown_remaining=die.cooldown_remaining,
                available=die.is_available,
            )
            for slot, die in enumerate(self._scheduler.pool)
        ]

    def hand_status(self) -> list[DieStatus]:
        return [
            DieStatus(
                name=die.name,
                variant=die.variant.value,
                tier=die.tier.name,
                value=die.value,
                locked=die.locked,
                is_filler=die.is_filler,
            )
            for die in self._dice
        ]

    def score_report(self) -> ScoreReport | None:
        if self._last_result is None:
            return None
        multiplier = self._last_multiplier or MultiplierResult()
        return ScoreReport(
            values=list(self._last_result.values),
            combo_name=self._last_result.combo_name,
            combo_multiplier=self._last_result.combo_multiplier,
            dice_multiplier=multiplier.total,
            multiplier_breakdown=str(multiplier) if multiplier.is_boosted else "",
            score=self._last_result.score,
            summary=self._last_result.summary(),
        )

    def snapshot(self) -> BattleSnapshot:
        return BattleSnapshot(
            hand=self.hand_status(),
            pool=self.pool_status(),
            hand_counter=self.hand_counter,
            rolls_used=self._hand_state.rolls_used,
            max_rolls=self._hand_state.max_rolls,
            hand_active=self._hand_state.is_active,
            last_score=self.score_report(),
        )

    def drain_events(self) -> list[EventPayload]:
        """Pending notifications, oldest first. Clears the queue."""
        return self._events.drain()

    # -- Actions ---------------------------------------------------------

    def start_hand(self, *, advance_cooldowns: bool | None = None) -> ActionResult:
        """
        Deal a new hand from the available dice.

        Cooldowns tick first unless this is the first hand of a cycle.

        Args:
            advance_cooldowns: Override the tick decision (None = automatic)
        """
        if advance_cooldowns is None:
            advance_cooldowns = self._scheduler.hands_played > 0
        if advance_cooldowns:
            self._scheduler.advance_cooldowns()

        slots = self._scheduler.draw_hand(self._rng)
        self._dice = [DiceEngine.reset_for_new_hand(self._scheduler.pool[i]) for i in slots]
        self._slots = list(slots)
        while len(self._dice) < self._settings.max_hand_size:
            self._dice.append(create_placeholder(len(self._dice) + 1))
            self._slots.append(None)

        self._hand_state = self._hand_state.start()
        current, remaining = self._scheduler.hand_counter
        self._events.push(
            BattleEvent.HAND_STARTED,
            hand=current + 1,
            remaining=remaining,
            dice=[d.name for d in self._dice if not d.is_filler],
        )
        for line in self._scheduler.status_lines():
            logger.debug("  %s", line)

        message = (
            f"Hand {current + 1}: Ready! {len(slots)} dice selected. "
            "Roll and lock the ones you want to keep!"
        )
        logger.info("Started hand %d with %d dice", current + 1, len(slots))
        return ActionResult(ok=bool(slots), message=message)

    def roll(self) -> ActionResult:
        """Roll every unlocked die and resolve effects once."""
        if not self._hand_state.can_roll:
            if not self._hand_state.is_active:
                return self._reject("No active hand. Start the next hand first.")
            return self._reject(
                f"Already reached maximum rolls per hand ({self._hand_state.max_rolls}). "
                "Submit your combo or Reset."
            )

        self._hand_state = self._hand_state.increment_roll()
        roll_number = self._hand_state.rolls_used
        self._dice = list(EffectResolver.resolve_roll(self._dice, self._rng))

        self._events.push(
            BattleEvent.DICE_ROLLED,
            roll=roll_number,
            values=[d.value for d in self._dice],
        )

        lines = [f"Roll {roll_number}/{self._hand_state.max_rolls}:"]
        lines.extend(f"  {die}" for die in self._dice if not die.is_filler)
        if self._hand_state.can_roll:
            lines.append("Lock dice you want to keep, then Roll again or Submit.")
        else:
            lines.append("Max rolls reached! Submit your combo now.")
        return ActionResult(ok=True, message="\n".join(lines), roll_number=roll_number)

    def toggle_lock(self, index: int) -> ActionResult:
        """Lock or unlock the die in a hand slot."""
        if not self._hand_state.is_active:
            return self._reject("No active hand.")
        try:
            validate_slot_index(index, len(self._dice))
        except ValueError as exc:
            return self._reject(str(exc))

        die = self._dice[index]
        if die.is_filler:
            return self._reject(f"Slot {index} is empty.")

        self._dice[index] = DiceEngine.toggle_lock(die)
        locked = self._dice[index].locked
        self._events.push(BattleEvent.DIE_LOCK_TOGGLED, slot=index, locked=locked)
        return ActionResult(ok=True, message=f"{die.name} {'locked' if locked else 'unlocked'}.")

    def submit(self) -> ActionResult:
        """Score the locked dice and close the hand."""
        blocker = self._hand_state.submit_blocker(self._dice)
        if blocker is not None:
            return self._reject(blocker)

        chosen = submitted_dice(self._dice)
        values = submitted_values(chosen)
        multiplier = MultiplierCalculator.calculate(chosen)
        result = HandEvaluator.evaluate(values, multiplier.total)
        self._last_result = result
        self._last_multiplier = multiplier

        submitted_slots = [
            slot for die, slot in zip(self._dice, self._slots)
            if slot is not None and is_submittable(die)
        ]
        self._hand_state = self._hand_state.end()
        self._scheduler.complete_hand(submitted_slots)

        self._events.push(
            BattleEvent.HAND_SUBMITTED,
            values=values,
            combo=result.combo_name,
            score=result.score,
        )
        logger.info("Submitted %s -> %s", values, result)

        lines = [
            f"Rolls used: {self._hand_state.rolls_used}/{self._hand_state.max_rolls}",
            f"Submitted values: [{', '.join(str(v) for v in values)}]",
            result.summary(),
        ]
        if multiplier.is_boosted:
            lines.append(str(multiplier))
        current, remaining = self._scheduler.hand_counter
        if current == 0:
            lines.append("All hands completed! Dice pool refreshed.")
        else:
            lines.append(f"Hand completed! {remaining} hands remaining.")
        return ActionResult(
            ok=True,
            message="\n".join(lines),
            hand_result=result,
            multiplier=multiplier,
        )

    def reset_hand(self) -> ActionResult:
        """
        Re-deal the current hand without spending it or ticking cooldowns.

        After a submission there is no current hand, so the next hand is
        dealt as usual.
        """
        if not self._hand_state.is_active:
            return self.advance_to_next_hand()
        self._hand_state = self._hand_state.reset()
        logger.info("Resetting current hand")
        return self.start_hand(advance_cooldowns=False)

    def advance_to_next_hand(self) -> ActionResult:
        """Deal the next hand once the current one has been submitted."""
        if self._hand_state.is_active:
            return self._reject("Submit the current hand before moving on.")
        return self.start_hand()

    def set_pool_from_external_selection(self, dice: Sequence[Die]) -> ActionResult:
        """
        Replace the pool with freshly chosen dice and re-deal the hand.

        The hand counter is kept; cooldowns start at zero.
        """
        self._scheduler.set_pool(dice)
        self._hand_state = self._hand_state.reset()
        result = self.start_hand(advance_cooldowns=False)
        return ActionResult(
            ok=result.ok,
            message=f"Dice pool updated ({len(dice)} supplied). {result.message}",
        )

    def _reject(self, reason: str) -> ActionResult:
        logger.warning("%s", reason)
        return ActionResult(ok=False, message=reason)
