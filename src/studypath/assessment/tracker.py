"""
Assessment Session Tracker

Runs an adaptive assessment session through its lifecycle:

    start -> {answer -> next}* -> complete
                     \\-> cancel

States: IN_PROGRESS -> COMPLETED | CANCELLED. Nothing leaves a terminal state.

The tracker mutates ORM objects but never commits; the caller wraps each
operation in ``unit_of_work`` so a state transition lands completely or not
at all. Concurrent writers are caught by the session's version column.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from studypath.assessment.difficulty import (
    bucket_to_level,
    level_to_bucket,
    next_difficulty,
    performance_ratio,
)
from studypath.assessment.question_bank import QuestionBank
from studypath.assessment.results import AnsweredItem, synthesize_result
from studypath.assessment.scoring import is_answer_correct
from studypath.assessment.termination import should_complete
from studypath.core.exceptions import (
    NoQuestionsAvailable,
    NotFound,
    SessionClosed,
    SessionExpired,
    SessionMismatch,
    Unauthorized,
)
from studypath.core.models import (
    Answer,
    AssessmentResult,
    AssessmentSession,
    CancelReason,
    SessionStatus,
    User,
)
from studypath.core.models.base import utcnow

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from studypath.assessment.configs import AssessmentConfigRegistry
    from studypath.core.models import Question

logger = logging.getLogger(__name__)

DEFAULT_STALE_AFTER = timedelta(minutes=120)


def mark_cancelled(session: AssessmentSession, reason: CancelReason, now: datetime) -> None:
    """Move a session to CANCELLED and release its pinned question."""
    session.status = SessionStatus.CANCELLED.value
    session.cancel_reason = reason.value
    session.cancelled_at = now
    session.current_question_id = None


@dataclass
class AnswerOutcome:
    answer: Answer
    is_correct: bool
    explanation: str | None
    new_difficulty: int
    performance: float


@dataclass
class AdvanceOutcome:
    is_complete: bool
    question: Question | None = None
    result: AssessmentResult | None = None


class AssessmentSessionTracker:
    """Manages adaptive assessment sessions against the database."""

    def __init__(
        self,
        db: AsyncSession,
        registry: AssessmentConfigRegistry,
        stale_after: timedelta = DEFAULT_STALE_AFTER,
    ):
        """Initialize tracker.

        Args:
            db: Database session
            registry: Assessment config table
            stale_after: Inactivity after which an in-progress session expires
        """
        self.db = db
        self.registry = registry
        self.bank = QuestionBank(db)
        self.stale_after = stale_after

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def load_session(self, session_id: UUID, user_id: UUID) -> AssessmentSession:
        """Fetch a session owned by ``user_id``.

        Raises:
            NotFound: No such session
            Unauthorized: Session belongs to another user
        """
        session = await self.db.get(AssessmentSession, session_id)
        if session is None:
            raise NotFound(f"Assessment session not found with ID: {session_id}")
        if session.user_id != user_id:
            raise Unauthorized("Assessment session belongs to another user")
        return session

    async def session_answers(self, session_id: UUID) -> list[Answer]:
        """Answers recorded on a session, oldest first."""
        result = await self.db.execute(
            select(Answer)
            .where(Answer.assessment_session_id == session_id)
            .order_by(Answer.created_at, Answer.id)
        )
        return list(result.scalars().all())

    async def get_result(self, session: AssessmentSession) -> AssessmentResult:
        result = await self.db.execute(
            select(AssessmentResult).where(AssessmentResult.session_id == session.id)
        )
        assessment_result = result.scalar_one_or_none()
        if assessment_result is None:
            raise NotFound(f"No result found for session {session.id}")
        return assessment_result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(
        self, user_id: UUID, config_id: str
    ) -> tuple[AssessmentSession, Question]:
        """Create a session and pin its first question.

        Any other in-progress session of the user is cancelled as superseded.

        Raises:
            NotFound: Unknown config or user
            NoQuestionsAvailable: Nothing in the bank at the starting bucket
        """
        config = self.registry.get(config_id)

        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFound(f"User not found with ID: {user_id}")

        first_question = await self.bank.fetch_next(level_to_bucket(config.initial_difficulty))
        if first_question is None:
            raise NoQuestionsAvailable(
                f"No questions available at difficulty {config.initial_difficulty}"
            )

        now = utcnow()
        open_sessions = await self.db.execute(
            select(AssessmentSession).where(
                AssessmentSession.user_id == user_id,
                AssessmentSession.status == SessionStatus.IN_PROGRESS.value,
            )
        )
        for previous in open_sessions.scalars().all():
            mark_cancelled(previous, CancelReason.SUPERSEDED, now)

        session = AssessmentSession(
            user_id=user_id,
            config_id=config.config_id,
            status=SessionStatus.IN_PROGRESS.value,
            started_at=now,
            current_difficulty=config.initial_difficulty,
            questions_answered=0,
            correct_answers=0,
            current_question_id=first_question.id,
        )
        self.db.add(session)
        await self.db.flush()

        logger.info(
            f"Started assessment session {session.id} for user {user_id} "
            f"(config={config.config_id}, difficulty={config.initial_difficulty})"
        )
        return session, first_question

    async def record_answer(
        self,
        session: AssessmentSession,
        question_id: UUID,
        submitted: str,
        time_spent: int = 0,
    ) -> AnswerOutcome:
        """Score the answer to the pinned question and update the session.

        The pinned question is consumed: answering it twice fails with
        SessionMismatch until ``advance`` pins the next one.

        Raises:
            SessionClosed: Session is not in progress
            SessionExpired: Session sat idle too long
            SessionMismatch: question_id is not the pinned question
            NotFound: Pinned question no longer exists
        """
        self._ensure_active(session)

        if session.current_question_id is None or session.current_question_id != question_id:
            raise SessionMismatch(
                f"Question {question_id} is not awaiting an answer in session {session.id}"
            )

        question = await self.bank.get(question_id)
        if question is None:
            raise NotFound(f"Question not found with ID: {question_id}")

        is_correct = is_answer_correct(question, submitted)
        now = utcnow()

        answer = Answer(
            user_id=session.user_id,
            question_id=question.id,
            assessment_session_id=session.id,
            content=submitted,
            is_correct=is_correct,
            time_spent=time_spent,
            subject=question.subject,
            topic=question.topic,
            difficulty_level=bucket_to_level(question.difficulty),
        )
        self.db.add(answer)

        session.questions_answered += 1
        if is_correct:
            session.correct_answers += 1
        session.current_difficulty = next_difficulty(
            session.current_difficulty, session.correct_answers, session.questions_answered
        )
        session.current_question_id = None
        session.last_answered_at = now

        await self.db.flush()

        return AnswerOutcome(
            answer=answer,
            is_correct=is_correct,
            explanation=question.explanation,
            new_difficulty=session.current_difficulty,
            performance=performance_ratio(session.correct_answers, session.questions_answered),
        )

    async def advance(
        self,
        session: AssessmentSession,
        recent_answers: Sequence[bool] | None = None,
    ) -> AdvanceOutcome:
        """Pin the next question, or complete the session.

        Completes when the termination policy fires or when the bank has
        nothing left at the session's bucket. If a question is still pinned
        (not yet answered) it is returned again.

        Args:
            session: In-progress session
            recent_answers: Correctness flags in chronological order. Defaults
                to the session's recorded answers.
        """
        self._ensure_active(session)

        if session.current_question_id is not None:
            pending = await self.bank.get(session.current_question_id)
            if pending is not None:
                return AdvanceOutcome(is_complete=False, question=pending)

        config = self.registry.get(session.config_id)
        history = await self.session_answers(session.id)
        if recent_answers is None:
            recent_answers = [answer.is_correct for answer in history]

        if should_complete(session.questions_answered, config.max_questions, recent_answers):
            result = await self._finish(session, history)
            return AdvanceOutcome(is_complete=True, result=result)

        bucket = level_to_bucket(session.current_difficulty)
        question = await self.bank.fetch_next(bucket, {answer.question_id for answer in history})

        if question is None:
            logger.info(f"Question bank exhausted at {bucket} for session {session.id}, completing")
            result = await self._finish(session, history)
            return AdvanceOutcome(is_complete=True, result=result)

        session.current_question_id = question.id
        await self.db.flush()
        return AdvanceOutcome(is_complete=False, question=question)

    async def complete(
        self, session: AssessmentSession, time_spent: int | None = None
    ) -> AssessmentResult:
        """Finish a session and produce its result.

        Completing an already completed session returns the stored result.

        Raises:
            SessionClosed: Session was cancelled
            SessionExpired: Session sat idle too long
        """
        if session.status == SessionStatus.COMPLETED:
            return await self.get_result(session)

        self._ensure_active(session)
        history = await self.session_answers(session.id)
        return await self._finish(session, history, time_spent)

    async def cancel(
        self, session: AssessmentSession, reason: CancelReason = CancelReason.USER
    ) -> AssessmentSession:
        """Cancel an in-progress session.

        Raises:
            SessionClosed: Session already completed or cancelled
        """
        if not session.is_in_progress:
            raise SessionClosed(f"Cannot cancel {session.status} session")

        mark_cancelled(session, reason, utcnow())
        await self.db.flush()
        logger.info(f"Cancelled assessment session {session.id} ({reason})")
        return session

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def is_stale(self, session: AssessmentSession, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return now - session.last_activity_at > self.stale_after

    def _ensure_active(self, session: AssessmentSession) -> None:
        if not session.is_in_progress:
            raise SessionClosed(f"Assessment session is {session.status}")

        if self.is_stale(session):
            mark_cancelled(session, CancelReason.EXPIRED, utcnow())
            logger.info(f"Expired idle assessment session {session.id}")
            raise SessionExpired(
                f"Assessment session {session.id} expired after "
                f"{int(self.stale_after.total_seconds() // 60)} minutes of inactivity"
            )

    async def _finish(
        self,
        session: AssessmentSession,
        history: Sequence[Answer],
        time_spent: int | None = None,
    ) -> AssessmentResult:
        items = [
            AnsweredItem(
                is_correct=answer.is_correct,
                difficulty=answer.difficulty_level or bucket_to_level(None),
                subject=answer.subject,
                topic=answer.topic,
            )
            for answer in history
        ]
        synthesized = synthesize_result(items)
        now = utcnow()

        if time_spent is None:
            time_spent = sum(answer.time_spent for answer in history)

        result = AssessmentResult(
            user_id=session.user_id,
            session_id=session.id,
            overall_score=synthesized.overall_score,
            overall_percentage=synthesized.overall_percentage,
            total_questions=synthesized.total_questions,
            correct_answers=synthesized.correct_answers,
            time_spent=time_spent,
            subjects=synthesized.subjects_as_dicts(),
            recommendations=synthesized.recommendations,
            strengths=synthesized.strengths,
            weaknesses=synthesized.weaknesses,
            next_steps=synthesized.next_steps,
            completed_at=now,
        )
        self.db.add(result)

        session.status = SessionStatus.COMPLETED.value
        session.completed_at = now
        session.current_question_id = None

        await self.db.flush()

        logger.info(
            f"Completed assessment session {session.id}: "
            f"{synthesized.correct_answers}/{synthesized.total_questions} correct "
            f"({synthesized.overall_percentage:.1f}%)"
        )
        return result


async def expire_stale_sessions(
    db: AsyncSession, stale_after: timedelta, now: datetime | None = None
) -> int:
    """Cancel every in-progress session idle for longer than ``stale_after``.

    Does not commit.

    Returns:
        Number of sessions expired
    """
    now = now or utcnow()
    last_activity = func.coalesce(
        AssessmentSession.last_answered_at, AssessmentSession.started_at
    )
    result = await db.execute(
        select(AssessmentSession).where(
            AssessmentSession.status == SessionStatus.IN_PROGRESS.value,
            last_activity < now - stale_after,
        )
    )

    expired = 0
    for session in result.scalars().all():
        mark_cancelled(session, CancelReason.EXPIRED, now)
        expired += 1

    if expired:
        await db.flush()
        logger.info(f"Expired {expired} idle assessment sessions")

    return expired
