"""
StudyPath SQLAlchemy Models
"""

from .assessments import (
    Answer,
    AssessmentResult,
    AssessmentSession,
    CancelReason,
    SessionStatus,
)
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .courses import Course, Lesson
from .progress import LearningProgress, LearningStyleResult
from .questions import DifficultyBucket, Question, QuestionType
from .users import User

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    # Users
    "User",
    # Courses
    "Course",
    "Lesson",
    # Questions
    "Question",
    "QuestionType",
    "DifficultyBucket",
    # Assessments
    "AssessmentSession",
    "Answer",
    "AssessmentResult",
    "SessionStatus",
    "CancelReason",
    # Progress
    "LearningProgress",
    "LearningStyleResult",
]
