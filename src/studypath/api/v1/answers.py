"""
Answer API Endpoints

General answer submission (outside adaptive sessions) and answer listing.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import math
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studypath.api.deps import get_current_user_id
from studypath.config import settings
from studypath.core.database import get_db, unit_of_work
from studypath.core.exceptions import NotFound
from studypath.core.models import Answer, Question, User
from studypath.core.schemas.answers import (
    AnswerCreate,
    AnswerCreateResponse,
    AnswerFeedback,
    AnswerListResponse,
    AnswerSchema,
    Pagination,
)
from studypath.core.validation import validate_answer_content, validate_time_spent
from studypath.progress import record_progress_best_effort, submit_answer

router = APIRouter()


@router.post("", response_model=AnswerCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_answer(
    answer_data: AnswerCreate,
    caller_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> AnswerCreateResponse:
    """Answer a question and get immediate feedback."""
    submitted = validate_answer_content(answer_data.answer)
    time_spent = validate_time_spent(answer_data.time_spent, settings.MAX_TIME_SPENT_SECONDS)

    async with unit_of_work(db):
        submission = await submit_answer(
            db, caller_id, answer_data.question_id, submitted, time_spent
        )

    # Built before progress bookkeeping, whose rollback on failure expires loaded objects
    response = AnswerCreateResponse(
        answer=AnswerSchema.model_validate(submission.answer),
        feedback=AnswerFeedback(
            is_correct=submission.answer.is_correct,
            correct_answer=submission.question.correct_answer,
            explanation=submission.question.explanation,
            points_earned=submission.points_earned,
        ),
    )

    if submission.course_id is not None:
        await record_progress_best_effort(
            db, caller_id, submission.course_id, submission.answer.is_correct, time_spent
        )

    return response


@router.get("", response_model=AnswerListResponse)
async def list_answers(
    question_id: UUID | None = None,
    lesson_id: UUID | None = None,
    user_id: UUID | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    caller_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> AnswerListResponse:
    """List answers, newest first. Learners only ever see their own."""
    caller = await db.get(User, caller_id)
    if caller is None:
        raise NotFound(f"User not found with ID: {caller_id}")

    stmt = select(Answer)
    if caller.is_learner:
        stmt = stmt.where(Answer.user_id == caller_id)
    elif user_id is not None:
        stmt = stmt.where(Answer.user_id == user_id)

    if question_id is not None:
        stmt = stmt.where(Answer.question_id == question_id)

    if lesson_id is not None:
        stmt = stmt.join(Question, Question.id == Answer.question_id).where(
            Question.lesson_id == lesson_id
        )

    total = (await db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()

    result = await db.execute(
        stmt.order_by(desc(Answer.created_at)).offset((page - 1) * limit).limit(limit)
    )
    answers = result.scalars().all()

    return AnswerListResponse(
        answers=[AnswerSchema.model_validate(answer) for answer in answers],
        pagination=Pagination(
            page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)
        ),
    )
