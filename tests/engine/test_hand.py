"""
Dice Rogue - Hand State Machine Tests
"""

import pytest

from dicerogue.engine.base import DiceVariant
from dicerogue.engine.catalog import create_die, create_placeholder
from dicerogue.engine.dice import DiceEngine
from dicerogue.engine.hand import (
    HandState,
    is_submittable,
    submitted_dice,
    submitted_values,
)


def locked_die(value: int, name: str = "Normal Dice"):
    die = create_die(DiceVariant.NORMAL, name=name).with_value(value)
    return DiceEngine.toggle_lock(die)


class TestHandState:
    def test_initial_state(self):
        state = HandState()
        assert state.rolls_used == 0
        assert state.max_rolls == 3
        assert not state.is_active
        assert not state.can_roll

    def test_start_opens_full_budget(self):
        state = HandState(rolls_used=2, max_rolls=3).start()
        assert state.is_active
        assert state.rolls_used == 0
        assert state.rolls_left == 3

    def test_three_rolls_then_blocked(self):
        state = HandState().start()
        for expected in (1, 2, 3):
            state = state.increment_roll()
            assert state.rolls_used == expected

        assert not state.can_roll
        assert state.increment_roll() is state

    def test_roll_when_inactive_is_noop(self):
        state = HandState()
        assert state.increment_roll() is state

    def test_end_keeps_roll_count(self):
        state = HandState().start().increment_roll().increment_roll().end()
        assert not state.is_active
        assert state.rolls_used == 2

    def test_reset(self):
        state = HandState().start().increment_roll().reset()
        assert state == HandState()

    def test_immutable(self):
        state = HandState()
        state.start()
        assert not state.is_active

    @pytest.mark.parametrize("kwargs", [
        {"max_rolls": 0},
        {"rolls_used": -1},
        {"rolls_used": 4, "max_rolls": 3},
    ])
    def test_invalid_construction(self, kwargs):
        with pytest.raises(ValueError):
            HandState(**kwargs)


class TestSubmission:
    def test_inactive_hand_cannot_submit(self):
        state = HandState()
        assert state.submit_blocker([locked_die(3)]) == "No active hand to submit."
        assert not state.can_submit([locked_die(3)])

    def test_nothing_locked(self):
        state = HandState().start()
        dice = [create_die(DiceVariant.NORMAL).with_value(4)]
        assert state.submit_blocker(dice) == (
            "No dice are locked! Lock some dice before submitting."
        )

    def test_locked_die_allows_submit(self):
        state = HandState().start()
        assert state.can_submit([locked_die(5), create_placeholder(2)])

    def test_placeholders_never_submitted(self):
        filler = DiceEngine.toggle_lock(create_placeholder(1).with_value(3))
        assert not is_submittable(filler)
        assert not HandState().start().can_submit([filler])

    def test_unrolled_locked_die_not_submitted(self):
        die = DiceEngine.toggle_lock(create_die(DiceVariant.NORMAL))
        assert not is_submittable(die)

    def test_submitted_dice_in_hand_order(self):
        unlocked = create_die(DiceVariant.NORMAL).with_value(1)
        dice = [locked_die(6, "a"), unlocked, locked_die(2, "b")]

        chosen = submitted_dice(dice)
        assert [d.name for d in chosen] == ["a", "b"]
        assert submitted_values(chosen) == [6, 2]
