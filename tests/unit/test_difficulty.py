"""
Unit Tests for Difficulty Control

Level stepping, clamping and level <-> bucket mapping.
"""

import pytest

from studypath.assessment.difficulty import (
    bucket_to_level,
    clamp_level,
    level_to_bucket,
    next_difficulty,
    performance_ratio,
)
from studypath.core.models import DifficultyBucket


class TestNextDifficulty:
    """Tests for stepping the difficulty level."""

    def test_raises_above_80_percent(self):
        """Should step up when performance is strictly above 0.8."""
        assert next_difficulty(3, correct_count=9, answered_count=10) == 4

    def test_lowers_below_40_percent(self):
        """Should step down when performance is strictly below 0.4."""
        assert next_difficulty(5, correct_count=1, answered_count=4) == 4

    def test_exact_thresholds_leave_level_unchanged(self):
        """0.8 and 0.4 are not enough to move the level."""
        assert next_difficulty(5, correct_count=4, answered_count=5) == 5
        assert next_difficulty(5, correct_count=2, answered_count=5) == 5

    def test_middle_band_leaves_level_unchanged(self):
        assert next_difficulty(6, correct_count=3, answered_count=5) == 6

    def test_single_correct_answer_raises(self):
        """No minimum sample size: one correct answer is 100%."""
        assert next_difficulty(3, correct_count=1, answered_count=1) == 4

    def test_single_wrong_answer_lowers(self):
        assert next_difficulty(3, correct_count=0, answered_count=1) == 2

    def test_never_exceeds_max(self):
        assert next_difficulty(10, correct_count=10, answered_count=10) == 10

    def test_never_drops_below_min(self):
        assert next_difficulty(1, correct_count=0, answered_count=10) == 1

    def test_moves_at_most_one_step(self):
        for correct in range(0, 11):
            new_level = next_difficulty(5, correct_count=correct, answered_count=10)
            assert abs(new_level - 5) <= 1


class TestPerformanceRatio:
    def test_zero_answers(self):
        assert performance_ratio(0, 0) == 0.0

    def test_ratio(self):
        assert performance_ratio(3, 4) == 0.75


class TestBuckets:
    """Tests for level/bucket mapping."""

    @pytest.mark.parametrize(
        "level,bucket",
        [
            (1, DifficultyBucket.EASY),
            (3, DifficultyBucket.EASY),
            (4, DifficultyBucket.MEDIUM),
            (6, DifficultyBucket.MEDIUM),
            (7, DifficultyBucket.HARD),
            (10, DifficultyBucket.HARD),
        ],
    )
    def test_level_to_bucket(self, level, bucket):
        assert level_to_bucket(level) == bucket

    def test_level_to_bucket_clamps_out_of_range(self):
        assert level_to_bucket(0) == DifficultyBucket.EASY
        assert level_to_bucket(42) == DifficultyBucket.HARD

    def test_bucket_to_level(self):
        assert bucket_to_level("EASY") == 3
        assert bucket_to_level("MEDIUM") == 6
        assert bucket_to_level("HARD") == 9

    def test_unknown_bucket_is_level_5(self):
        assert bucket_to_level(None) == 5
        assert bucket_to_level("EXPERT") == 5

    def test_clamp_level(self):
        assert clamp_level(-3) == 1
        assert clamp_level(7) == 7
        assert clamp_level(11) == 10


class TestDifficultySequences:
    def test_correct_then_wrong_from_level_3(self):
        """Correct then wrong: 3 -> 4 on the first answer, stays 4 at 50%."""
        after_q1 = next_difficulty(3, correct_count=1, answered_count=1)
        after_q2 = next_difficulty(after_q1, correct_count=1, answered_count=2)

        assert after_q1 == 4
        assert after_q2 == 4

    def test_level_stays_in_range_over_long_runs(self):
        for start in range(1, 11):
            level = start
            correct = 0
            for answered in range(1, 40):
                correct += answered % 3 != 0
                level = next_difficulty(level, correct, answered)
                assert 1 <= level <= 10
