"""
Learning Style API Endpoints

Records learning-style questionnaire results and returns their history.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from studypath.api.deps import ensure_same_user, get_current_user_id
from studypath.core.database import get_db, unit_of_work
from studypath.core.exceptions import NotFound
from studypath.core.models import LearningStyleResult, User
from studypath.core.models.base import utcnow
from studypath.core.schemas.learning_style import LearningStyleResultSchema, LearningStyleSubmit
from studypath.progress import analyze_learning_style

logger = logging.getLogger(__name__)

router = APIRouter()

HISTORY_LIMIT = 20


@router.post(
    "/results", response_model=LearningStyleResultSchema, status_code=status.HTTP_201_CREATED
)
async def record_learning_style(
    submission: LearningStyleSubmit,
    caller_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> LearningStyleResult:
    """Score a completed questionnaire.

    The user's profile learning style is set from their first result only.
    """
    ensure_same_user(caller_id, submission.user_id)
    scores = submission.scores.model_dump()
    analysis = analyze_learning_style(scores)

    async with unit_of_work(db):
        user = await db.get(User, submission.user_id)
        if user is None:
            raise NotFound(f"User not found with ID: {submission.user_id}")

        result = LearningStyleResult(
            user_id=user.id,
            visual_score=scores["visual"],
            auditory_score=scores["auditory"],
            kinesthetic_score=scores["kinesthetic"],
            reading_score=scores["reading"],
            primary_style=analysis.primary_style.value,
            secondary_style=analysis.secondary_style.value if analysis.secondary_style else None,
            answers=submission.answers,
            recommendations=analysis.recommendations,
            study_tips=analysis.study_tips,
            completed_at=utcnow(),
        )
        db.add(result)

        if user.learning_style is None:
            user.learning_style = analysis.primary_style.value
            logger.info(f"Set learning style of user {user.id} to {user.learning_style}")

    return result


@router.get("/users/{user_id}/history", response_model=list[LearningStyleResultSchema])
async def learning_style_history(
    user_id: UUID,
    caller_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[LearningStyleResult]:
    """Most recent learning-style results for a user."""
    ensure_same_user(caller_id, user_id)

    result = await db.execute(
        select(LearningStyleResult)
        .where(LearningStyleResult.user_id == user_id)
        .order_by(desc(LearningStyleResult.completed_at))
        .limit(HISTORY_LIMIT)
    )
    return list(result.scalars().all())
