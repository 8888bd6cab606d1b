"""
Database Engine and Session Management

Async SQLAlchemy engine shared by the application, plus the FastAPI
dependency that hands one session to each request.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError

from studypath.config import settings
from studypath.core.exceptions import ConcurrentModification, SessionExpired

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session, rolling back if the request fails."""
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit everything done inside the block, or nothing.

    - A version conflict on flush or commit becomes ConcurrentModification.
    - SessionExpired commits the expiry it carries, then propagates.
    - Any other exception rolls back.
    """
    try:
        yield db
        await db.commit()
    except StaleDataError as e:
        await db.rollback()
        raise ConcurrentModification(
            "Assessment session was modified by another request, retry"
        ) from e
    except SessionExpired:
        await db.commit()
        raise
    except Exception:
        await db.rollback()
        raise


async def close_db() -> None:
    """Dispose engine connections on shutdown."""
    await engine.dispose()
