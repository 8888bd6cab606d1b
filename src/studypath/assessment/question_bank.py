"""
Question Bank Accessor

Read-only access to questions at bucket granularity. Sessions never reserve
questions, so concurrent sessions may be handed the same one.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING

from sqlalchemy import select

from studypath.assessment.difficulty import bucket_to_level
from studypath.assessment.results import DEFAULT_TOPIC, legacy_subject_for_difficulty
from studypath.core.models import Question
from studypath.core.schemas.assessments import QuestionOption, QuestionPayload

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from studypath.core.models import DifficultyBucket


class QuestionBank:
    """Selects the next question for a bucket."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_next(
        self, bucket: DifficultyBucket | str, exclude_ids: Collection[UUID] = ()
    ) -> Question | None:
        """Most recently created question in ``bucket`` not in ``exclude_ids``.

        Returns:
            The question, or None when the bucket is exhausted. None is a
            signal to finish the session, not an error.
        """
        stmt = select(Question).where(Question.difficulty == str(bucket))
        if exclude_ids:
            stmt = stmt.where(Question.id.not_in(list(exclude_ids)))

        # id breaks ties between rows created in the same instant
        stmt = stmt.order_by(Question.created_at.desc(), Question.id.desc()).limit(1)

        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, question_id: UUID) -> Question | None:
        return await self.db.get(Question, question_id)


def present_question(question: Question, time_limit: int) -> QuestionPayload:
    """Shape a question for the client.

    Options are paired with their index as a stable id. The correct answer
    and explanation are withheld until the question is answered.
    """
    level = bucket_to_level(question.difficulty)
    options = None
    if question.options:
        options = [
            QuestionOption(id=str(index), text=text) for index, text in enumerate(question.options)
        ]

    return QuestionPayload(
        id=question.id,
        type=question.question_type,
        subject=question.subject or legacy_subject_for_difficulty(level),
        topic=question.topic or DEFAULT_TOPIC,
        difficulty=level,
        content=question.content,
        options=options,
        points=question.points,
        time_limit=time_limit,
    )
