"""
Answer Pydantic Schemas

Request/response models for the general answer submission endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AnswerCreate(BaseModel):
    """Request schema for answering a question outside an assessment."""

    question_id: UUID
    answer: str | int
    time_spent: int | None = None


class AnswerSchema(BaseModel):
    """Answer response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    question_id: UUID
    assessment_session_id: UUID | None = None
    content: str
    is_correct: bool
    time_spent: int
    created_at: datetime


class AnswerFeedback(BaseModel):
    is_correct: bool
    correct_answer: str | None = None
    explanation: str | None = None
    points_earned: int


class AnswerCreateResponse(BaseModel):
    answer: AnswerSchema
    feedback: AnswerFeedback


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class AnswerListResponse(BaseModel):
    answers: list[AnswerSchema]
    pagination: Pagination

