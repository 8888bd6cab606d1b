"""
Learning Progress Bookkeeping

Keeps a learner's per-course score and time up to date after answers.
This is auxiliary bookkeeping: a failure here is logged and never allowed to
fail the answer that triggered it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import case, func, select

from studypath.core.models import Answer, LearningProgress, Lesson, Question

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def update_learning_progress(
    db: AsyncSession, user_id: UUID, course_id: UUID, is_correct: bool, time_spent: int
) -> LearningProgress:
    """Create or update progress for (user, course).

    New progress starts at 100 or 0 depending on the first answer. Existing
    progress accumulates time and takes the learner's overall correct
    percentage across the course's answers as its score.
    """
    result = await db.execute(
        select(LearningProgress).where(
            LearningProgress.user_id == user_id, LearningProgress.course_id == course_id
        )
    )
    progress = result.scalar_one_or_none()

    if progress is None:
        progress = LearningProgress(
            user_id=user_id,
            course_id=course_id,
            status="in_progress",
            time_spent=time_spent,
            score=100.0 if is_correct else 0.0,
        )
        db.add(progress)
        return progress

    course_answers = (
        select(Answer.is_correct)
        .join(Question, Question.id == Answer.question_id)
        .join(Lesson, Lesson.id == Question.lesson_id)
        .where(Answer.user_id == user_id, Lesson.course_id == course_id)
        .subquery()
    )
    totals = await db.execute(
        select(
            func.count(),
            func.coalesce(func.sum(case((course_answers.c.is_correct.is_(True), 1), else_=0)), 0),
        ).select_from(course_answers)
    )
    total, correct = totals.one()

    progress.status = "in_progress"
    progress.time_spent = (progress.time_spent or 0) + time_spent
    progress.score = (correct / total) * 100 if total > 0 else 0.0
    return progress


async def record_progress_best_effort(
    db: AsyncSession, user_id: UUID, course_id: UUID, is_correct: bool, time_spent: int
) -> bool:
    """Update and commit progress, swallowing any failure.

    Call this only after the primary operation has committed.

    Returns:
        True if progress was saved
    """
    try:
        await update_learning_progress(db, user_id, course_id, is_correct, time_spent)
        await db.commit()
        return True
    except Exception as e:
        logger.error(
            f"Failed to update learning progress for user {user_id}, course {course_id}: {e}",
            exc_info=True,
        )
        await db.rollback()
        return False
