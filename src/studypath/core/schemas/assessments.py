"""
Assessment Pydantic Schemas

Request/response models for adaptive assessment API endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# Request schemas
class AssessmentStartRequest(BaseModel):
    """Request schema for starting an assessment session."""

    user_id: UUID
    config_id: str = Field(min_length=1, max_length=50)


class AssessmentAnswerSubmit(BaseModel):
    """Request schema for answering the session's pinned question.

    Choice questions may be answered with the option id ("0", "1", ...) or
    with the option text.
    """

    question_id: UUID
    answer: str | int
    time_spent: int | None = Field(default=None, description="Seconds spent on the question")


class RecentAnswer(BaseModel):
    is_correct: bool


class AssessmentNextRequest(BaseModel):
    """Request schema for advancing a session.

    ``answers`` is optional; the session's recorded answers are used when
    it is omitted.
    """

    answers: list[RecentAnswer] | None = None


class AssessmentCompleteRequest(BaseModel):
    time_spent: int | None = Field(default=None, ge=0, description="Total seconds, if tracked")


# Response schemas
class AssessmentConfigSchema(BaseModel):
    """Assessment config response schema."""

    model_config = ConfigDict(from_attributes=True)

    config_id: str
    name: str
    subjects: list[str]
    topics: list[str]
    max_questions: int
    initial_difficulty: int
    time_limit_minutes: int | None = None


class QuestionOption(BaseModel):
    id: str
    text: str


class QuestionPayload(BaseModel):
    """Question as presented to a learner. Never includes the answer."""

    id: UUID
    type: str
    subject: str
    topic: str
    difficulty: int
    content: str
    options: list[QuestionOption] | None = None
    points: int
    time_limit: int


class AssessmentStartResponse(BaseModel):
    session_id: UUID
    question: QuestionPayload


class AssessmentAnswerResponse(BaseModel):
    """Response after answering a question."""

    is_correct: bool
    explanation: str | None = None
    new_difficulty: int
    performance: float


class AssessmentNextResponse(BaseModel):
    is_complete: bool
    question: QuestionPayload | None = None
    result_id: UUID | None = None


class AssessmentSessionSchema(BaseModel):
    """Assessment session response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    config_id: str
    status: str
    started_at: datetime
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancel_reason: str | None = None
    current_difficulty: int
    questions_answered: int
    correct_answers: int
    current_question_id: UUID | None = None
    last_answered_at: datetime | None = None


class TopicBreakdownSchema(BaseModel):
    topic: str
    score: int
    max_score: int
    percentage: float
    questions_answered: int
    correct_answers: int


class SubjectBreakdownSchema(BaseModel):
    subject: str
    score: int
    max_score: int
    percentage: float
    level: str
    topics: list[TopicBreakdownSchema]


class AssessmentResultSchema(BaseModel):
    """Assessment result response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    session_id: UUID
    overall_score: int
    overall_percentage: float
    total_questions: int
    correct_answers: int
    time_spent: int
    subjects: list[SubjectBreakdownSchema]
    recommendations: list[str]
    strengths: list[str]
    weaknesses: list[str]
    next_steps: list[str]
    completed_at: datetime
