"""Pydantic schemas for API validation."""

from .answers import (
    AnswerCreate,
    AnswerCreateResponse,
    AnswerFeedback,
    AnswerListResponse,
    AnswerSchema,
)
from .assessments import (
    AssessmentAnswerResponse,
    AssessmentAnswerSubmit,
    AssessmentCompleteRequest,
    AssessmentConfigSchema,
    AssessmentNextRequest,
    AssessmentNextResponse,
    AssessmentResultSchema,
    AssessmentSessionSchema,
    AssessmentStartRequest,
    AssessmentStartResponse,
    QuestionPayload,
)
from .learning_style import LearningStyleResultSchema, LearningStyleSubmit
from .progress import CourseSummary, LearningProgressListResponse, LearningProgressSchema

__all__ = [
    # Assessments
    "AssessmentStartRequest",
    "AssessmentStartResponse",
    "AssessmentAnswerSubmit",
    "AssessmentAnswerResponse",
    "AssessmentNextRequest",
    "AssessmentNextResponse",
    "AssessmentCompleteRequest",
    "AssessmentConfigSchema",
    "AssessmentSessionSchema",
    "AssessmentResultSchema",
    "QuestionPayload",
    # Answers
    "AnswerCreate",
    "AnswerCreateResponse",
    "AnswerFeedback",
    "AnswerListResponse",
    "AnswerSchema",
    # Learning style
    "LearningStyleSubmit",
    "LearningStyleResultSchema",
    # Progress
    "CourseSummary",
    "LearningProgressSchema",
    "LearningProgressListResponse",
]
