"""
General Answer Submission

Answers to questions outside an adaptive session (lesson practice). Each user
may answer a given question once on this path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from studypath.assessment.difficulty import bucket_to_level
from studypath.assessment.scoring import is_answer_correct
from studypath.core.exceptions import DuplicateAnswer, NotFound
from studypath.core.models import Answer, Lesson, Question, User

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass
class SubmittedAnswer:
    answer: Answer
    question: Question
    course_id: UUID | None

    @property
    def points_earned(self) -> int:
        return self.question.points if self.answer.is_correct else 0


async def _already_answered(db: AsyncSession, user_id: UUID, question_id: UUID) -> bool:
    existing = await db.execute(
        select(Answer.id).where(
            Answer.user_id == user_id,
            Answer.question_id == question_id,
            Answer.assessment_session_id.is_(None),
        )
    )
    return existing.first() is not None


async def submit_answer(
    db: AsyncSession, user_id: UUID, question_id: UUID, submitted: str, time_spent: int = 0
) -> SubmittedAnswer:
    """Score and store an answer. Does not commit.

    The unique index on general answers backs up the duplicate check when two
    submissions race.

    Raises:
        NotFound: User or question does not exist
        DuplicateAnswer: User already answered this question on this path
    """
    if await db.get(User, user_id) is None:
        raise NotFound(f"User not found with ID: {user_id}")

    question = await db.get(Question, question_id)
    if question is None:
        raise NotFound(f"Question not found with ID: {question_id}")

    if await _already_answered(db, user_id, question_id):
        raise DuplicateAnswer("This question has already been answered")

    course_id = None
    if question.lesson_id is not None:
        lesson = await db.get(Lesson, question.lesson_id)
        course_id = lesson.course_id if lesson else None

    answer = Answer(
        user_id=user_id,
        question_id=question.id,
        content=submitted,
        is_correct=is_answer_correct(question, submitted),
        time_spent=time_spent,
        subject=question.subject,
        topic=question.topic,
        difficulty_level=bucket_to_level(question.difficulty),
    )
    db.add(answer)

    try:
        await db.flush()
    except IntegrityError as e:
        logger.info(f"Concurrent duplicate answer from user {user_id} for question {question_id}")
        raise DuplicateAnswer("This question has already been answered") from e

    logger.debug(f"Recorded answer {answer.id} from user {user_id} (correct={answer.is_correct})")
    return SubmittedAnswer(answer=answer, question=question, course_id=course_id)
