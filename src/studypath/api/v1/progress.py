"""
Learning Progress API Endpoints

Read access to per-course progress. Progress is written as a side effect of
answering lesson questions.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import math
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studypath.api.deps import get_current_user_id
from studypath.core.database import get_db
from studypath.core.exceptions import NotFound
from studypath.core.models import Course, LearningProgress, User
from studypath.core.schemas.answers import Pagination
from studypath.core.schemas.progress import (
    CourseSummary,
    LearningProgressListResponse,
    LearningProgressSchema,
)

router = APIRouter()


@router.get("", response_model=LearningProgressListResponse)
async def list_progress(
    course_id: UUID | None = None,
    user_id: UUID | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    caller_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> LearningProgressListResponse:
    """List progress records, most recently updated first.

    Learners only ever see their own; educators and admins may filter by user.
    """
    caller = await db.get(User, caller_id)
    if caller is None:
        raise NotFound(f"User not found with ID: {caller_id}")

    filters = []
    if caller.is_learner:
        filters.append(LearningProgress.user_id == caller_id)
    elif user_id is not None:
        filters.append(LearningProgress.user_id == user_id)

    if course_id is not None:
        filters.append(LearningProgress.course_id == course_id)

    total = (
        await db.execute(select(func.count(LearningProgress.id)).where(*filters))
    ).scalar_one()

    result = await db.execute(
        select(LearningProgress, Course)
        .join(Course, Course.id == LearningProgress.course_id)
        .where(*filters)
        .order_by(desc(LearningProgress.updated_at), LearningProgress.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )

    progress = [
        LearningProgressSchema(
            id=row.id,
            user_id=row.user_id,
            course_id=row.course_id,
            status=row.status,
            time_spent=row.time_spent,
            score=row.score,
            updated_at=row.updated_at,
            course=CourseSummary.model_validate(course),
        )
        for row, course in result.all()
    ]

    return LearningProgressListResponse(
        progress=progress,
        pagination=Pagination(
            page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)
        ),
    )
