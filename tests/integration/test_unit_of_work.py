"""
Tests for database session management and the unit-of-work helper.
"""

import pytest
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from studypath.core.database import get_db, unit_of_work
from studypath.core.exceptions import NotFound, SessionExpired
from studypath.core.models import User


class TestGetDb:
    """Test the request-scoped session dependency."""

    async def test_get_db_creates_session(self) -> None:
        async for session in get_db():
            assert isinstance(session, AsyncSession)
            result = await session.execute(text("SELECT 1"))
            assert result.scalar() == 1

    async def test_get_db_propagates_errors(self) -> None:
        with pytest.raises(ValueError):
            async for session in get_db():
                assert isinstance(session, AsyncSession)
                raise ValueError("Test error")


async def _emails(session_factory) -> list[str]:
    async with session_factory() as other:
        result = await other.execute(select(User.email))
        return list(result.scalars().all())


class TestUnitOfWork:
    """Test commit/rollback behaviour of unit_of_work."""

    async def test_commits_on_success(self, db_session, session_factory) -> None:
        async with unit_of_work(db_session):
            db_session.add(User(email="a@example.com", role="learner"))

        assert await _emails(session_factory) == ["a@example.com"]

    async def test_rolls_back_on_error(self, db_session, session_factory) -> None:
        with pytest.raises(NotFound):
            async with unit_of_work(db_session):
                db_session.add(User(email="b@example.com", role="learner"))
                await db_session.flush()
                raise NotFound("missing")

        assert await _emails(session_factory) == []

    async def test_session_expired_still_commits(self, db_session, session_factory) -> None:
        """Work done before SessionExpired is kept."""
        with pytest.raises(SessionExpired):
            async with unit_of_work(db_session):
                db_session.add(User(email="c@example.com", role="learner"))
                raise SessionExpired("idle")

        assert await _emails(session_factory) == ["c@example.com"]
