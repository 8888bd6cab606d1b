#!/usr/bin/env python3
"""
Session Reaper: cancel abandoned assessment sessions

Marks every IN_PROGRESS assessment session that has been idle longer than the
staleness limit as CANCELLED (reason: expired). Safe to run from cron.

Usage:
    python scripts/expire_sessions.py                  # Use SESSION_STALE_AFTER_MINUTES
    python scripts/expire_sessions.py --minutes=30     # Custom idle limit
    python scripts/expire_sessions.py --dry-run        # Count only, change nothing
"""

import argparse
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from studypath.assessment import expire_stale_sessions
from studypath.config import settings
from studypath.core.logging_setup import configure_logging


async def reap(db_url: str, stale_after: timedelta, dry_run: bool) -> int:
    engine = create_async_engine(db_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_factory() as db:
            expired = await expire_stale_sessions(db, stale_after)
            if dry_run:
                await db.rollback()
            else:
                await db.commit()
            return expired
    finally:
        await engine.dispose()


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Cancel idle assessment sessions")
    parser.add_argument(
        "--minutes",
        type=int,
        default=settings.SESSION_STALE_AFTER_MINUTES,
        help="Idle minutes after which a session expires (default from settings)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report how many sessions would expire without changing them",
    )
    parser.add_argument(
        "--db-url",
        type=str,
        help="Custom database URL (default from settings)",
    )
    args = parser.parse_args()

    if args.minutes < 1:
        parser.error("--minutes must be at least 1")

    configure_logging(settings.LOG_LEVEL)
    db_url = args.db_url or settings.DATABASE_URL

    print(f"Database: {db_url.split('@')[1] if '@' in db_url else db_url}")
    print(f"Idle limit: {args.minutes} minutes")

    expired = await reap(db_url, timedelta(minutes=args.minutes), args.dry_run)

    if args.dry_run:
        print(f"Would expire {expired} sessions (dry run, nothing changed)")
    else:
        print(f"Expired {expired} sessions")


if __name__ == "__main__":
    asyncio.run(main())
