"""
Shared API Dependencies

Caller identity and engine wiring for routers.

Identity is issued by an external provider; the gateway in front of this
service forwards the authenticated user id in the ``X-User-Id`` header.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from datetime import timedelta
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from studypath.assessment import AssessmentConfigRegistry, AssessmentSessionTracker
from studypath.assessment.configs import get_config_registry
from studypath.config import settings
from studypath.core.database import get_db
from studypath.core.exceptions import AuthenticationRequired, Unauthorized


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> UUID:
    """Resolve the authenticated caller.

    Raises:
        AuthenticationRequired: Header missing or not a UUID
    """
    if not x_user_id:
        raise AuthenticationRequired("Authentication required")

    try:
        return UUID(x_user_id)
    except ValueError as e:
        raise AuthenticationRequired("Invalid caller identity") from e


def ensure_same_user(caller_id: UUID, user_id: UUID) -> None:
    """Reject requests made on behalf of another user."""
    if caller_id != user_id:
        raise Unauthorized("Cannot act on behalf of another user")


def get_registry() -> AssessmentConfigRegistry:
    return get_config_registry()


def get_tracker(
    db: AsyncSession = Depends(get_db),
    registry: AssessmentConfigRegistry = Depends(get_registry),
) -> AssessmentSessionTracker:
    return AssessmentSessionTracker(
        db, registry, stale_after=timedelta(minutes=settings.SESSION_STALE_AFTER_MINUTES)
    )
