"""
Question Model

Question bank entries. The adaptive engine reads these; authoring and bulk
import happen elsewhere.
"""

from __future__ import annotations

from enum import StrEnum
from uuid import UUID

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class QuestionType(StrEnum):
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    TRUE_FALSE = "true_false"
    ESSAY = "essay"
    FILL_BLANK = "fill_blank"


class DifficultyBucket(StrEnum):
    """Coarse difficulty stored on questions."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


CHOICE_TYPES = frozenset({QuestionType.MULTIPLE_CHOICE, QuestionType.TRUE_FALSE})


class Question(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A single question in the bank.

    ``correct_answer`` is authoritative for scoring every question type.
    ``subject`` and ``topic`` are optional; older rows may lack them.
    """

    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint(
            "question_type IN ('multiple_choice', 'short_answer', 'true_false', 'essay', "
            "'fill_blank')",
            name="check_question_type",
        ),
        CheckConstraint("difficulty IN ('EASY', 'MEDIUM', 'HARD')", name="check_question_bucket"),
        CheckConstraint("points >= 0", name="check_question_points"),
        Index("idx_questions_bucket_created", "difficulty", "created_at"),
        Index("idx_questions_lesson", "lesson_id"),
    )

    lesson_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"), nullable=True
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[str] = mapped_column(String(20), nullable=False)
    difficulty: Mapped[str] = mapped_column(
        String(10), nullable=False, default=DifficultyBucket.MEDIUM.value, comment="EASY/MEDIUM/HARD"
    )
    options: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, comment="Ordered option texts (choice types only)"
    )
    correct_answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    points: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    subject: Mapped[str | None] = mapped_column(String(100), nullable=True)
    topic: Mapped[str | None] = mapped_column(String(100), nullable=True)

    @property
    def is_choice(self) -> bool:
        """Whether answers may arrive as option indexes."""
        return self.question_type in CHOICE_TYPES
