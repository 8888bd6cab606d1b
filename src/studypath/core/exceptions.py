"""
Application Errors

Every error the service surfaces to callers carries a stable ``code`` and the
HTTP status it maps to. Routers let these propagate; ``main.py`` renders them.
"""

from __future__ import annotations

from fastapi import status


class StudyPathError(Exception):
    """Base class for errors surfaced to API callers."""

    code: str = "server_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Serialize for an error response body."""
        return {"error": self.code, "detail": self.message}


class AuthenticationRequired(StudyPathError):
    """No caller identity was supplied."""

    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class Unauthorized(StudyPathError):
    """Caller identity does not match the user the request acts for."""

    code = "unauthorized"
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(StudyPathError):
    """Referenced session, question, result, user or config does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class SessionMismatch(StudyPathError):
    """Answered question is not the one currently pinned on the session."""

    code = "session_mismatch"
    status_code = status.HTTP_409_CONFLICT


class SessionClosed(StudyPathError):
    """Session is completed, cancelled or expired."""

    code = "session_closed"
    status_code = status.HTTP_409_CONFLICT


class ConcurrentModification(StudyPathError):
    """Another request updated the session first."""

    code = "concurrent_modification"
    status_code = status.HTTP_409_CONFLICT


class DuplicateAnswer(StudyPathError):
    """User already answered this question outside an assessment session."""

    code = "duplicate_answer"
    status_code = status.HTTP_409_CONFLICT


class NoQuestionsAvailable(StudyPathError):
    """Question bank has nothing left for the requested bucket.

    Only fatal when starting a session; mid-session it means "complete".
    """

    code = "no_questions_available"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(StudyPathError):
    """Raised when user input fails validation."""

    code = "validation_error"
    status_code = 422


class SessionExpired(SessionClosed):
    """Session sat idle past the staleness limit and was cancelled.

    The cancellation is committed before this error reaches the caller.
    """

    code = "session_expired"
