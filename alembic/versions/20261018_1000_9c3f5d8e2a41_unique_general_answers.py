"""Unique general answer per user and question

Revision ID: 9c3f5d8e2a41
Revises: 4b1e9c2a7d10
Create Date: 2026-10-18 10:00:00.000000+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9c3f5d8e2a41"  # pragma: allowlist secret
down_revision: str | None = "4b1e9c2a7d10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_index(
        "uq_answers_user_question_general",
        "answers",
        ["user_id", "question_id"],
        unique=True,
        postgresql_where=sa.text("assessment_session_id IS NULL"),
        sqlite_where=sa.text("assessment_session_id IS NULL"),
    )


def downgrade() -> None:
    op.drop_index("uq_answers_user_question_general", table_name="answers")
