"""
Termination Policy

Decides when an adaptive session has gathered enough evidence.
"""

from __future__ import annotations

from collections.abc import Sequence

STABILITY_WINDOW = 5
STABLE_HIGH = 0.9
STABLE_LOW = 0.1


def should_complete(
    questions_answered: int, max_questions: int, recent_answers: Sequence[bool]
) -> bool:
    """Decide whether the session should stop presenting questions.

    The question quota always wins. Below the quota, the session ends once
    the last ``STABILITY_WINDOW`` answers sit at an extreme (nearly all right
    or nearly all wrong).

    Args:
        questions_answered: Answers recorded on the session
        max_questions: Quota from the assessment config
        recent_answers: Correctness flags in chronological order

    Returns:
        True if the session should complete
    """
    if questions_answered >= max_questions:
        return True

    if len(recent_answers) < STABILITY_WINDOW:
        return False

    window = recent_answers[-STABILITY_WINDOW:]
    ratio = sum(1 for is_correct in window if is_correct) / len(window)

    return ratio >= STABLE_HIGH or ratio <= STABLE_LOW
