"""
Dice Rogue - Pool & Cooldown Scheduler Tests

Covers selection validation, cooldown bookkeeping, the hand counter
and pool refresh notifications.
"""

import pytest

from dicerogue.engine.base import DiceVariant
from dicerogue.engine.catalog import create_die
from dicerogue.engine.cooldown import CooldownScheduler
from dicerogue.engine.events import BattleEvent


@pytest.fixture
def scheduler(normal_pool):
    return CooldownScheduler(normal_pool)


def event_names(scheduler):
    return [p.event for p in scheduler.events.drain()]


class TestPoolSize:
    def test_short_pool_is_padded(self):
        scheduler = CooldownScheduler([create_die(DiceVariant.D8)])
        assert len(scheduler.pool) == 8
        assert scheduler.pool[0].variant is DiceVariant.D8
        assert all(d.cost == 0 for d in scheduler.pool[1:])

    def test_long_pool_is_truncated(self):
        dice = [create_die(DiceVariant.NORMAL) for _ in range(11)]
        assert len(CooldownScheduler(dice).pool) == 8

    def test_random_pool_when_none_supplied(self, rng):
        scheduler = CooldownScheduler(rng=rng)
        assert len(scheduler.pool) == 8

    def test_supplied_dice_get_configured_cooldown(self):
        scheduler = CooldownScheduler([create_die(DiceVariant.D8)], cooldown_turns=2)
        assert all(d.cooldown_after_use == 2 for d in scheduler.pool)

    def test_size_constant_through_cycle(self, scheduler, rng):
        for _ in range(12):
            scheduler.advance_cooldowns()
            slots = scheduler.draw_hand(rng)
            scheduler.complete_hand(slots[:2])
            assert len(scheduler.pool) == 8


class TestSelection:
    def test_valid_selection(self, scheduler):
        assert scheduler.select_for_hand([0, 2, 4])
        assert scheduler.selected_indices == (0, 2, 4)

    @pytest.mark.parametrize("indices", [
        [],
        [0, 1, 2, 3, 4, 5],
        [0, 0],
        [8],
        [-1],
    ])
    def test_invalid_selection_rejected(self, scheduler, indices):
        scheduler.select_for_hand([1, 2])
        assert scheduler.select_for_hand(indices) is False
        assert scheduler.selected_indices == (1, 2)

    def test_unavailable_die_rejected(self, scheduler):
        scheduler.complete_hand([3])
        scheduler.select_for_hand([0])

        assert scheduler.select_for_hand([1, 3]) is False
        assert scheduler.selected_indices == (0,)

    def test_draw_hand_takes_five_available(self, scheduler, rng):
        scheduler.complete_hand([0, 1])
        slots = scheduler.draw_hand(rng)
        assert len(slots) == 5
        assert not {0, 1} & set(slots)

    def test_draw_hand_with_nothing_available(self, rng):
        scheduler = CooldownScheduler(
            [create_die(DiceVariant.NORMAL) for _ in range(2)], pool_size=2, max_hand_size=2
        )
        scheduler.complete_hand([0, 1])
        assert scheduler.draw_hand(rng) == ()


class TestCooldowns:
    def test_submitted_dice_only(self, scheduler):
        scheduler.select_for_hand([0, 1, 2])
        scheduler.complete_hand([0, 2])

        cooldowns = [d.cooldown_remaining for d in scheduler.pool]
        assert cooldowns == [2, 0, 2, 0, 0, 0, 0, 0]
        assert len(scheduler.get_available()) == 6
        assert scheduler.available_indices() == [1, 3, 4, 5, 6, 7]

    def test_unavailable_for_exactly_one_hand(self, scheduler):
        scheduler.complete_hand([0])

        scheduler.advance_cooldowns()  # start of hand 2
        assert 0 not in scheduler.available_indices()
        scheduler.complete_hand([])

        scheduler.advance_cooldowns()  # start of hand 3
        assert 0 in scheduler.available_indices()

    def test_never_below_zero(self, scheduler):
        for _ in range(5):
            scheduler.advance_cooldowns()
        assert all(d.cooldown_remaining == 0 for d in scheduler.pool)

    def test_cooldown_excludes_from_available(self, scheduler):
        scheduler.complete_hand([5])
        assert all(d.cooldown_remaining == 0 for d in scheduler.get_available())

    def test_duplicate_and_bad_slots_ignored(self, scheduler):
        scheduler.complete_hand([1, 1, 42])
        assert scheduler.pool[1].cooldown_remaining == 2
        assert scheduler.hands_played == 1


class TestHandCounter:
    def test_empty_submission_still_advances(self, scheduler):
        scheduler.complete_hand([])
        assert scheduler.hand_counter == (1, 4)

    def test_played_plus_remaining_is_constant(self, scheduler):
        for _ in range(13):
            played, remaining = scheduler.hand_counter
            assert played + remaining == 5
            scheduler.complete_hand([])

    def test_counter_event(self, scheduler):
        scheduler.events.drain()
        scheduler.complete_hand([])
        payloads = scheduler.events.drain()

        counter = [p for p in payloads if p.event is BattleEvent.HAND_COUNTER_CHANGED]
        assert counter[0].data == {"current": 1, "remaining": 4}
        assert any(p.event is BattleEvent.AVAILABLE_DICE_CHANGED for p in payloads)
        assert not any(p.event is BattleEvent.POOL_REFRESHED for p in payloads)


class TestRefresh:
    def test_refresh_after_last_hand(self, scheduler):
        for slot in range(4):
            scheduler.complete_hand([slot])
        scheduler.events.drain()

        scheduler.complete_hand([4])

        events = event_names(scheduler)
        assert events.count(BattleEvent.POOL_REFRESHED) == 1
        assert scheduler.hand_counter == (0, 5)
        assert all(d.cooldown_remaining == 0 for d in scheduler.pool)

    def test_refresh_event_carries_reset_counter(self, scheduler):
        for _ in range(4):
            scheduler.complete_hand([])
        scheduler.events.drain()
        scheduler.complete_hand([])

        payloads = scheduler.events.drain()
        counter = [p for p in payloads if p.event is BattleEvent.HAND_COUNTER_CHANGED]
        assert counter[-1].data == {"current": 0, "remaining": 5}

    def test_force_refresh(self, scheduler):
        scheduler.complete_hand([0, 1])
        scheduler.force_refresh()
        assert scheduler.hand_counter == (0, 5)
        assert len(scheduler.get_available()) == 8


class TestPoolManagement:
    def test_set_pool(self, scheduler):
        scheduler.complete_hand([0])
        scheduler.events.drain()

        scheduler.set_pool([create_die(DiceVariant.ZOMBIE), create_die(DiceVariant.GOLDEN)])

        assert len(scheduler.pool) == 8
        assert scheduler.pool[0].name == "Zombie"
        assert scheduler.has_available()
        assert all(d.cooldown_remaining == 0 for d in scheduler.pool)
        assert scheduler.hand_counter == (1, 4)
        assert BattleEvent.POOL_REPLACED in event_names(scheduler)

    def test_budget_passthrough(self):
        dice = [
            create_die(DiceVariant.D8),
            create_die(DiceVariant.LUCKY_SIX),
            create_die(DiceVariant.EVEN),
        ]
        scheduler = CooldownScheduler(dice)
        scheduler.select_for_hand([0, 1, 2, 3])

        assert scheduler.selected_cost() == 6
        assert scheduler.is_within_budget(6)
        assert not scheduler.is_within_budget(5)

    def test_reset_system(self, scheduler):
        scheduler.select_for_hand([0])
        scheduler.complete_hand([0])
        scheduler.reset_system()

        assert scheduler.hand_counter == (0, 5)
        assert scheduler.selected_indices == ()
        assert len(scheduler.get_available()) == 8

    def test_status_lines(self, scheduler):
        scheduler.complete_hand([0])
        lines = scheduler.status_lines()
        assert lines[0] == "Normal 0: COMMON, cost=1, COOLDOWN(2)"
        assert lines[1].endswith("AVAILABLE")
