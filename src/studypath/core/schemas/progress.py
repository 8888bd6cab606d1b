"""
Learning Progress Pydantic Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .answers import Pagination


class CourseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    subject: str | None = None


class LearningProgressSchema(BaseModel):
    """A learner's progress on one course."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    course_id: UUID
    status: str
    time_spent: int
    score: float
    updated_at: datetime
    course: CourseSummary


class LearningProgressListResponse(BaseModel):
    progress: list[LearningProgressSchema]
    pagination: Pagination
