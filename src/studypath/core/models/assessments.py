"""
Assessment Models

Adaptive assessment sessions, the answers recorded against questions, and the
scored result produced when a session completes.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, ensure_utc


class SessionStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CancelReason(StrEnum):
    USER = "user"
    EXPIRED = "expired"
    SUPERSEDED = "superseded"


class AssessmentSession(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One run of the adaptive assessment for one user.

    ``version`` is the optimistic-concurrency column: an UPDATE that finds
    the row at a different version raises ``StaleDataError``.
    """

    __tablename__ = "assessment_sessions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('IN_PROGRESS', 'COMPLETED', 'CANCELLED')", name="check_assessment_status"
        ),
        CheckConstraint(
            "current_difficulty BETWEEN 1 AND 10", name="check_assessment_difficulty_range"
        ),
        CheckConstraint(
            "cancel_reason IS NULL OR cancel_reason IN ('user', 'expired', 'superseded')",
            name="check_assessment_cancel_reason",
        ),
        Index("idx_assessment_sessions_user_status", "user_id", "status"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    config_id: Mapped[str] = mapped_column(String(50), nullable=False)

    # Session state
    status: Mapped[str] = mapped_column(
        String(20), default=SessionStatus.IN_PROGRESS.value, nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancel_reason: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Progress
    current_difficulty: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    questions_answered: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    current_question_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("questions.id", ondelete="SET NULL"),
        nullable=True,
        comment="Question awaiting an answer",
    )
    last_answered_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    @property
    def last_activity_at(self) -> datetime:
        """Most recent answer time, or the start time before any answer."""
        return ensure_utc(self.last_answered_at or self.started_at)  # type: ignore[return-value]

    @property
    def performance(self) -> float:
        """Overall correct ratio so far, 0.0 before the first answer."""
        if self.questions_answered == 0:
            return 0.0
        return self.correct_answers / self.questions_answered


class Answer(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A submitted answer.

    Subject, topic and difficulty level are copied from the question when the
    answer is recorded so results never need to re-derive them.
    """

    __tablename__ = "answers"
    __table_args__ = (
        Index("idx_answers_user_question", "user_id", "question_id"),
        Index("idx_answers_session", "assessment_session_id"),
        # One general (non-session) answer per user and question
        Index(
            "uq_answers_user_question_general",
            "user_id",
            "question_id",
            unique=True,
            postgresql_where=text("assessment_session_id IS NULL"),
            sqlite_where=text("assessment_session_id IS NULL"),
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[UUID] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    assessment_session_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("assessment_sessions.id", ondelete="CASCADE"), nullable=True
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    time_spent: Mapped[int] = mapped_column(Integer, default=0, nullable=False, comment="Seconds")

    subject: Mapped[str | None] = mapped_column(String(100), nullable=True)
    topic: Mapped[str | None] = mapped_column(String(100), nullable=True)
    difficulty_level: Mapped[int | None] = mapped_column(
        SmallInteger, nullable=True, comment="1-10 level of the question when answered"
    )


class AssessmentResult(Base, UUIDPrimaryKeyMixin):
    """Scored outcome of a completed session. Written once, never updated."""

    __tablename__ = "assessment_results"
    __table_args__ = (Index("idx_assessment_results_user", "user_id"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("assessment_sessions.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    overall_score: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, nullable=False)
    time_spent: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    subjects: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    recommendations: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    strengths: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    weaknesses: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    next_steps: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
