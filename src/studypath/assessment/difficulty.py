"""
Difficulty Controller

Maps running performance onto an integer difficulty level (1-10) and the
coarse bucket the question bank is stored at.
"""

from __future__ import annotations

from studypath.core.models import DifficultyBucket

MIN_LEVEL = 1
MAX_LEVEL = 10

# Strict thresholds: exactly 0.8 or 0.4 leaves the level unchanged
RAISE_ABOVE = 0.8
LOWER_BELOW = 0.4

# Representative level shown for a bucket, and for unknown buckets
BUCKET_LEVELS: dict[str, int] = {
    DifficultyBucket.EASY: 3,
    DifficultyBucket.MEDIUM: 6,
    DifficultyBucket.HARD: 9,
}
UNKNOWN_BUCKET_LEVEL = 5


def clamp_level(level: int) -> int:
    """Clamp a difficulty level into [MIN_LEVEL, MAX_LEVEL]."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def performance_ratio(correct_count: int, answered_count: int) -> float:
    """Correct ratio, 0.0 when nothing has been answered."""
    if answered_count <= 0:
        return 0.0
    return correct_count / answered_count


def next_difficulty(current: int, correct_count: int, answered_count: int) -> int:
    """Step the difficulty level by at most one based on overall performance.

    There is no minimum sample size: a single correct first answer already
    raises the level.

    Args:
        current: Current level (1-10)
        correct_count: Correct answers so far, including the latest
        answered_count: Answers so far, including the latest

    Returns:
        New level, always within [1, 10]
    """
    performance = performance_ratio(correct_count, answered_count)
    level = current

    if performance > RAISE_ABOVE and current < MAX_LEVEL:
        level = current + 1
    elif performance < LOWER_BELOW and current > MIN_LEVEL:
        level = current - 1

    return clamp_level(level)


def level_to_bucket(level: int) -> DifficultyBucket:
    """Bucket used to query the bank: 1-3 EASY, 4-6 MEDIUM, 7-10 HARD."""
    level = clamp_level(level)
    if level <= 3:
        return DifficultyBucket.EASY
    if level <= 6:
        return DifficultyBucket.MEDIUM
    return DifficultyBucket.HARD


def bucket_to_level(bucket: str | None) -> int:
    """Representative level for display: EASY 3, MEDIUM 6, HARD 9, otherwise 5."""
    if bucket is None:
        return UNKNOWN_BUCKET_LEVEL
    return BUCKET_LEVELS.get(bucket, UNKNOWN_BUCKET_LEVEL)
