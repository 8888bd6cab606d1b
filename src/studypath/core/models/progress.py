"""
Progress Models

Per-course learning progress and learning-style assessment results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class LearningProgress(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A learner's running score and time on one course."""

    __tablename__ = "learning_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_learning_progress_user_course"),
        CheckConstraint(
            "status IN ('not_started', 'in_progress', 'completed')",
            name="check_learning_progress_status",
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    course_id: Mapped[UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="in_progress", nullable=False)
    time_spent: Mapped[int] = mapped_column(Integer, default=0, nullable=False, comment="Seconds")
    score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False, comment="0-100")


class LearningStyleResult(Base, UUIDPrimaryKeyMixin):
    """Outcome of one learning-style questionnaire."""

    __tablename__ = "learning_style_results"
    __table_args__ = (Index("idx_learning_style_results_user", "user_id", "completed_at"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    visual_score: Mapped[int] = mapped_column(Integer, nullable=False)
    auditory_score: Mapped[int] = mapped_column(Integer, nullable=False)
    kinesthetic_score: Mapped[int] = mapped_column(Integer, nullable=False)
    reading_score: Mapped[int] = mapped_column(Integer, nullable=False)

    primary_style: Mapped[str] = mapped_column(String(20), nullable=False)
    secondary_style: Mapped[str | None] = mapped_column(String(20), nullable=True)

    answers: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    recommendations: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    study_tips: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    @property
    def scores(self) -> dict[str, int]:
        return {
            "visual": self.visual_score,
            "auditory": self.auditory_score,
            "kinesthetic": self.kinesthetic_score,
            "reading": self.reading_score,
        }
