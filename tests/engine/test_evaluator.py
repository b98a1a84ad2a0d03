"""
Dice Rogue - Hand Evaluator Tests

Combo classification priority, score arithmetic and input validation.
"""

import pytest

from dicerogue.engine.base import ComboType
from dicerogue.engine.evaluator import HandEvaluator


class TestCombos:
    def test_known_hands(self, combo_table):
        for name, (values, combo_name, score) in combo_table.items():
            result = HandEvaluator.evaluate(values)
            assert result.combo_name == combo_name, name
            assert result.score == score, name

    def test_order_of_values_is_irrelevant(self):
        a = HandEvaluator.evaluate([5, 3, 1, 2, 4])
        b = HandEvaluator.evaluate([1, 2, 3, 4, 5])
        assert a == b
        assert a.values == (1, 2, 3, 4, 5)

    def test_full_house_beats_jackpot_sum(self):
        # 3+3+3+6+6 = 21
        assert HandEvaluator.classify([3, 3, 3, 6, 6]) is ComboType.FULL_HOUSE

    def test_straight_beats_pair(self):
        assert HandEvaluator.classify([1, 2, 3, 4, 4]) is ComboType.SMALL_STRAIGHT

    def test_large_straight_high(self):
        assert HandEvaluator.classify([6, 5, 4, 3, 2]) is ComboType.LARGE_STRAIGHT

    def test_small_straight_needs_four(self):
        assert HandEvaluator.classify([3, 4, 5]) is not ComboType.SMALL_STRAIGHT

    def test_two_pair_with_four_dice(self):
        result = HandEvaluator.evaluate([1, 1, 2, 2])
        assert result.combo is ComboType.TWO_PAIR
        assert result.score == 61

    def test_single_die(self):
        assert HandEvaluator.classify([2]) is ComboType.ALL_EVEN
        assert HandEvaluator.classify([5]) is ComboType.ALL_ODD

    def test_d8_faces(self):
        assert HandEvaluator.classify([7, 8]) is ComboType.HIGH_ROLL
        assert HandEvaluator.classify([8, 8]) is ComboType.ONE_PAIR


class TestScoring:
    def test_dice_multiplier_applied(self):
        result = HandEvaluator.evaluate([6, 6, 6, 6, 6], dice_multiplier=1.5)
        assert result.score == 1260
        assert result.dice_multiplier == 1.5

    def test_rounds_half_to_even(self):
        # (75 + 16) x 1.5 = 136.5
        assert HandEvaluator.evaluate([1, 2, 3, 4, 6]).score == 136

    def test_calculate_score(self):
        assert HandEvaluator.calculate_score(10, 5, 0.8) == 12
        assert HandEvaluator.calculate_score(180, 30, 4.0, 10.0) == 8400

    def test_bust(self):
        result = HandEvaluator.evaluate([1, 4])
        assert result.is_bust
        assert str(result) == "No Combo/Bust: 12 points"

    def test_pure(self):
        first = HandEvaluator.evaluate([2, 2, 5], 2.0)
        second = HandEvaluator.evaluate([2, 2, 5], 2.0)
        assert first == second


class TestInvalidInput:
    def test_empty_submission_is_invalid(self):
        result = HandEvaluator.evaluate([])
        assert result.combo is ComboType.INVALID
        assert result.combo_name == "Invalid"
        assert result.score == 0
        assert result.is_bust

    @pytest.mark.parametrize("values", [
        [1, 2, 3, 4, 5, 6],
        [0, 3],
        [9],
        [-1],
    ])
    def test_rejected(self, values):
        with pytest.raises(ValueError):
            HandEvaluator.evaluate(values)


class TestSummary:
    def test_summary_lines(self):
        summary = HandEvaluator.evaluate([5, 5, 5, 6, 6]).summary()
        lines = summary.splitlines()

        assert lines[0] == " === RESULT SUMMARY ==="
        assert "Dice: [5, 5, 5, 6, 6]" in lines
        assert "Combo: Full House" in lines
        assert "Base: 100 + Sum: 27 = 127" in lines
        assert "Combo Multiplier: x2.0" in lines
        assert "Final Score: 254" in lines
        assert not any(line.startswith("Dice Multiplier") for line in lines)

    def test_summary_shows_dice_multiplier(self):
        summary = HandEvaluator.evaluate([6], dice_multiplier=1.5).summary()
        assert "Dice Multiplier: x1.5" in summary
