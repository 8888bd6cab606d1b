"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, integration and API tests.

Tests run against a throwaway SQLite file by default. Set TEST_DATABASE_URL
to run the same suite against PostgreSQL.
"""

import os

# Must be set before studypath is imported: the app engine reads it at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "local")

from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import configure_mappers  # noqa: E402

from studypath.core.models import (  # noqa: E402
    Base,
    Course,
    Lesson,
    Question,
    User,
)

# Ensure all mappers are configured
configure_mappers()

BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
async def async_engine(tmp_path):
    """Create async engine for testing with a fresh schema."""
    database_url = os.getenv("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    """Factory for additional independent sessions (concurrency tests)."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Create database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def learner(db_session) -> User:
    """A learner account."""
    user = User(email="hana@example.com", name="Hana Sato", role="learner")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def other_learner(db_session) -> User:
    user = User(email="ken@example.com", name="Ken Ito", role="learner")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def educator(db_session) -> User:
    user = User(email="teacher@example.com", name="Ms. Mori", role="educator")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def lesson(db_session) -> Lesson:
    """A lesson inside a math course."""
    course = Course(title="Arithmetic Foundations", subject="Math")
    db_session.add(course)
    await db_session.flush()

    lesson = Lesson(course_id=course.id, title="Adding Fractions")
    db_session.add(lesson)
    await db_session.commit()
    return lesson


@pytest.fixture
def make_question(db_session):
    """Factory creating questions with strictly increasing created_at.

    Later calls produce newer questions, which the bank serves first.
    """
    counter = {"n": 0}

    async def _make(
        difficulty: str = "EASY",
        correct_answer: str | None = "4",
        question_type: str = "short_answer",
        options: list[str] | None = None,
        subject: str | None = "Math",
        topic: str | None = "Basic Calculation",
        lesson_id=None,
        points: int = 1,
        content: str | None = None,
    ) -> Question:
        counter["n"] += 1
        question = Question(
            content=content or f"Question {counter['n']}",
            question_type=question_type,
            difficulty=difficulty,
            options=options,
            correct_answer=correct_answer,
            explanation=f"Explanation {counter['n']}",
            points=points,
            subject=subject,
            topic=topic,
            lesson_id=lesson_id,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db_session.add(question)
        await db_session.commit()
        return question

    return _make
