"""
Answer Scoring

One correctness rule for every question type: the submitted text is compared
with ``correct_answer`` case-insensitively after trimming. Choice questions
may be answered with an option index, which is resolved to the option text
before comparing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from studypath.core.models import Question


def normalize(text: str) -> str:
    return text.strip().lower()


def resolve_submitted_answer(question: Question, submitted: str) -> str:
    """Translate an option index into the option's text for choice questions.

    Non-numeric submissions, out-of-range indexes and non-choice questions
    are returned unchanged.
    """
    if not question.is_choice or not question.options:
        return submitted

    candidate = submitted.strip()
    # str.isdigit() also accepts superscripts and circled digits, which int() rejects
    if not (candidate.isascii() and candidate.isdigit()):
        return submitted

    index = int(candidate)
    if index >= len(question.options):
        return submitted

    return question.options[index]


def is_answer_correct(question: Question, submitted: str) -> bool:
    """Score a submission against the question's correct answer.

    Questions without a correct answer (e.g. essays awaiting review) score
    as incorrect.
    """
    if question.correct_answer is None:
        return False

    resolved = resolve_submitted_answer(question, submitted)
    return normalize(resolved) == normalize(question.correct_answer)
