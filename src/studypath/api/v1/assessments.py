"""
Assessment API Endpoints

Adaptive assessment sessions: start, answer, next, complete, cancel, results.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import desc, select

from studypath.api.deps import ensure_same_user, get_current_user_id, get_registry, get_tracker
from studypath.assessment import (
    AssessmentConfigRegistry,
    AssessmentSessionTracker,
    present_question,
)
from studypath.config import settings
from studypath.core.database import unit_of_work
from studypath.core.exceptions import NotFound
from studypath.core.models import AssessmentResult, AssessmentSession, SessionStatus
from studypath.core.schemas.assessments import (
    AssessmentAnswerResponse,
    AssessmentAnswerSubmit,
    AssessmentCompleteRequest,
    AssessmentConfigSchema,
    AssessmentNextRequest,
    AssessmentNextResponse,
    AssessmentResultSchema,
    AssessmentSessionSchema,
    AssessmentStartRequest,
    AssessmentStartResponse,
)
from studypath.core.validation import (
    validate_answer_content,
    validate_config_id,
    validate_time_spent,
)

router = APIRouter()


@router.get("/configs", response_model=list[AssessmentConfigSchema])
async def list_configs(
    registry: AssessmentConfigRegistry = Depends(get_registry),
) -> list[AssessmentConfigSchema]:
    """List available assessment configs."""
    return [AssessmentConfigSchema.model_validate(config) for config in registry.list_configs()]


@router.post(
    "/sessions", response_model=AssessmentStartResponse, status_code=status.HTTP_201_CREATED
)
async def start_assessment(
    start_data: AssessmentStartRequest,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentStartResponse:
    """Start an adaptive assessment and return its first question."""
    ensure_same_user(caller_id, start_data.user_id)
    config_id = validate_config_id(start_data.config_id)

    async with unit_of_work(tracker.db):
        session, question = await tracker.start(start_data.user_id, config_id)

    return AssessmentStartResponse(
        session_id=session.id,
        question=present_question(question, settings.QUESTION_TIME_LIMIT_SECONDS),
    )


@router.get("/sessions/{session_id}", response_model=AssessmentSessionSchema)
async def get_assessment_session(
    session_id: UUID,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentSession:
    """Get assessment session state by ID."""
    return await tracker.load_session(session_id, caller_id)


@router.post("/sessions/{session_id}/answers", response_model=AssessmentAnswerResponse)
async def answer_question(
    session_id: UUID,
    answer_data: AssessmentAnswerSubmit,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentAnswerResponse:
    """Answer the question currently pinned on the session."""
    submitted = validate_answer_content(answer_data.answer)
    time_spent = validate_time_spent(answer_data.time_spent, settings.MAX_TIME_SPENT_SECONDS)

    async with unit_of_work(tracker.db):
        session = await tracker.load_session(session_id, caller_id)
        outcome = await tracker.record_answer(
            session, answer_data.question_id, submitted, time_spent
        )

    return AssessmentAnswerResponse(
        is_correct=outcome.is_correct,
        explanation=outcome.explanation,
        new_difficulty=outcome.new_difficulty,
        performance=outcome.performance,
    )


@router.post("/sessions/{session_id}/next", response_model=AssessmentNextResponse)
async def next_question(
    session_id: UUID,
    next_data: AssessmentNextRequest | None = None,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentNextResponse:
    """Get the next question, or complete the session when it is done."""
    recent = None
    if next_data is not None and next_data.answers is not None:
        recent = [answer.is_correct for answer in next_data.answers]

    async with unit_of_work(tracker.db):
        session = await tracker.load_session(session_id, caller_id)
        outcome = await tracker.advance(session, recent)

    if outcome.is_complete or outcome.question is None:
        return AssessmentNextResponse(
            is_complete=True,
            question=None,
            result_id=outcome.result.id if outcome.result else None,
        )

    return AssessmentNextResponse(
        is_complete=False,
        question=present_question(outcome.question, settings.QUESTION_TIME_LIMIT_SECONDS),
    )


@router.post("/sessions/{session_id}/complete", response_model=AssessmentResultSchema)
async def complete_assessment(
    session_id: UUID,
    complete_data: AssessmentCompleteRequest | None = None,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentResult:
    """Complete the session (early, if still in progress) and return its result."""
    time_spent = None
    if complete_data is not None and complete_data.time_spent is not None:
        time_spent = validate_time_spent(complete_data.time_spent, settings.MAX_TIME_SPENT_SECONDS)

    async with unit_of_work(tracker.db):
        session = await tracker.load_session(session_id, caller_id)
        result = await tracker.complete(session, time_spent)

    return result


@router.post("/sessions/{session_id}/cancel", response_model=AssessmentSessionSchema)
async def cancel_assessment(
    session_id: UUID,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentSession:
    """Abandon an in-progress session."""
    async with unit_of_work(tracker.db):
        session = await tracker.load_session(session_id, caller_id)
        await tracker.cancel(session)

    return session


@router.get("/sessions/{session_id}/result", response_model=AssessmentResultSchema)
async def get_assessment_result(
    session_id: UUID,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> AssessmentResult:
    """Get the result of a completed session."""
    session = await tracker.load_session(session_id, caller_id)

    if session.status != SessionStatus.COMPLETED:
        raise NotFound(f"Session has no result yet (status: {session.status})")

    return await tracker.get_result(session)


@router.get("/users/{user_id}/sessions", response_model=list[AssessmentSessionSchema])
async def list_user_sessions(
    user_id: UUID,
    caller_id: UUID = Depends(get_current_user_id),
    tracker: AssessmentSessionTracker = Depends(get_tracker),
) -> list[AssessmentSession]:
    """List a user's assessment sessions, most recent first."""
    ensure_same_user(caller_id, user_id)

    result = await tracker.db.execute(
        select(AssessmentSession)
        .where(AssessmentSession.user_id == user_id)
        .order_by(desc(AssessmentSession.started_at))
    )
    return list(result.scalars().all())
