"""Initial schema: users, courses, question bank, assessments, progress

Revision ID: 4b1e9c2a7d10
Revises:
Create Date: 2026-10-01 09:00:00.000000+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b1e9c2a7d10"  # pragma: allowlist secret
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Creation timestamp (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Last update timestamp (UTC)",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "learning_style",
            sa.String(length=20),
            nullable=True,
            comment="Primary style from first learning-style assessment",
        ),
        *_timestamps(),
        sa.CheckConstraint("role IN ('learner', 'educator', 'admin')", name="check_user_role"),
        sa.CheckConstraint(
            "learning_style IS NULL OR "
            "learning_style IN ('VISUAL', 'AUDITORY', 'KINESTHETIC', 'READING')",
            name="check_user_learning_style",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "lessons",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("course_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_lessons_course", "lessons", ["course_id"])

    op.create_table(
        "questions",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("lesson_id", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("question_type", sa.String(length=20), nullable=False),
        sa.Column("difficulty", sa.String(length=10), nullable=False, comment="EASY/MEDIUM/HARD"),
        sa.Column(
            "options", sa.JSON(), nullable=True, comment="Ordered option texts (choice types only)"
        ),
        sa.Column("correct_answer", sa.Text(), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("topic", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "question_type IN ('multiple_choice', 'short_answer', 'true_false', 'essay', "
            "'fill_blank')",
            name="check_question_type",
        ),
        sa.CheckConstraint(
            "difficulty IN ('EASY', 'MEDIUM', 'HARD')", name="check_question_bucket"
        ),
        sa.CheckConstraint("points >= 0", name="check_question_points"),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_questions_bucket_created", "questions", ["difficulty", "created_at"]
    )
    op.create_index("idx_questions_lesson", "questions", ["lesson_id"])

    op.create_table(
        "assessment_sessions",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("config_id", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "started_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancel_reason", sa.String(length=20), nullable=True),
        sa.Column("current_difficulty", sa.SmallInteger(), nullable=False),
        sa.Column("questions_answered", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column(
            "current_question_id",
            sa.Uuid(),
            nullable=True,
            comment="Question awaiting an answer",
        ),
        sa.Column("last_answered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('IN_PROGRESS', 'COMPLETED', 'CANCELLED')", name="check_assessment_status"
        ),
        sa.CheckConstraint(
            "current_difficulty BETWEEN 1 AND 10", name="check_assessment_difficulty_range"
        ),
        sa.CheckConstraint(
            "cancel_reason IS NULL OR cancel_reason IN ('user', 'expired', 'superseded')",
            name="check_assessment_cancel_reason",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["current_question_id"], ["questions.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_assessment_sessions_user_status", "assessment_sessions", ["user_id", "status"]
    )

    op.create_table(
        "answers",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("question_id", sa.Uuid(), nullable=False),
        sa.Column("assessment_session_id", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("time_spent", sa.Integer(), nullable=False, comment="Seconds"),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("topic", sa.String(length=100), nullable=True),
        sa.Column(
            "difficulty_level",
            sa.SmallInteger(),
            nullable=True,
            comment="1-10 level of the question when answered",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["assessment_session_id"], ["assessment_sessions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_answers_user_question", "answers", ["user_id", "question_id"])
    op.create_index("idx_answers_session", "answers", ["assessment_session_id"])

    op.create_table(
        "assessment_results",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("overall_score", sa.Integer(), nullable=False),
        sa.Column("overall_percentage", sa.Float(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Integer(), nullable=False),
        sa.Column("subjects", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("strengths", sa.JSON(), nullable=False),
        sa.Column("weaknesses", sa.JSON(), nullable=False),
        sa.Column("next_steps", sa.JSON(), nullable=False),
        sa.Column(
            "completed_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["session_id"], ["assessment_sessions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id"),
    )
    op.create_index("idx_assessment_results_user", "assessment_results", ["user_id"])

    op.create_table(
        "learning_progress",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("course_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("time_spent", sa.Integer(), nullable=False, comment="Seconds"),
        sa.Column("score", sa.Float(), nullable=False, comment="0-100"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('not_started', 'in_progress', 'completed')",
            name="check_learning_progress_status",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "course_id", name="uq_learning_progress_user_course"),
    )

    op.create_table(
        "learning_style_results",
        sa.Column("id", sa.Uuid(), nullable=False, comment="UUID primary key"),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("visual_score", sa.Integer(), nullable=False),
        sa.Column("auditory_score", sa.Integer(), nullable=False),
        sa.Column("kinesthetic_score", sa.Integer(), nullable=False),
        sa.Column("reading_score", sa.Integer(), nullable=False),
        sa.Column("primary_style", sa.String(length=20), nullable=False),
        sa.Column("secondary_style", sa.String(length=20), nullable=True),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("study_tips", sa.JSON(), nullable=False),
        sa.Column(
            "completed_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_learning_style_results_user", "learning_style_results", ["user_id", "completed_at"]
    )


def downgrade() -> None:
    op.drop_index("idx_learning_style_results_user", table_name="learning_style_results")
    op.drop_table("learning_style_results")
    op.drop_table("learning_progress")
    op.drop_index("idx_assessment_results_user", table_name="assessment_results")
    op.drop_table("assessment_results")
    op.drop_index("idx_answers_session", table_name="answers")
    op.drop_index("idx_answers_user_question", table_name="answers")
    op.drop_table("answers")
    op.drop_index("idx_assessment_sessions_user_status", table_name="assessment_sessions")
    op.drop_table("assessment_sessions")
    op.drop_index("idx_questions_lesson", table_name="questions")
    op.drop_index("idx_questions_bucket_created", table_name="questions")
    op.drop_table("questions")
    op.drop_index("idx_lessons_course", table_name="lessons")
    op.drop_table("lessons")
    op.drop_table("courses")
    op.drop_table("users")
