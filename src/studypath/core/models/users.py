"""
User Model

Platform users. Credentials and sign-in live with the external identity
provider; this table only holds what the learning features need.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Learner, educator or administrator account."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('learner', 'educator', 'admin')", name="check_user_role"),
        CheckConstraint(
            "learning_style IS NULL OR "
            "learning_style IN ('VISUAL', 'AUDITORY', 'KINESTHETIC', 'READING')",
            name="check_user_learning_style",
        ),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default="learner", nullable=False)
    learning_style: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment="Primary style from first learning-style assessment"
    )

    @property
    def is_learner(self) -> bool:
        """Learners may only read their own answers."""
        return self.role == "learner"
