"""
Tests for Learning Progress API Endpoints
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from studypath.core.database import get_db
from studypath.core.models import Course, LearningProgress
from studypath.main import app

UPDATED = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
async def client(db_session):
    """Create test client with database dependency override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def add_progress(db_session):
    """Factory storing progress rows, each updated one minute after the last."""
    counter = {"n": 0}

    async def _add(user, course_id, score=50.0, time_spent=120) -> LearningProgress:
        counter["n"] += 1
        progress = LearningProgress(
            user_id=user.id,
            course_id=course_id,
            status="in_progress",
            score=score,
            time_spent=time_spent,
            updated_at=UPDATED + timedelta(minutes=counter["n"]),
        )
        db_session.add(progress)
        await db_session.commit()
        return progress

    return _add


@pytest.fixture
async def second_course(db_session) -> Course:
    course = Course(title="World Geography", subject="Social")
    db_session.add(course)
    await db_session.commit()
    return course


def auth(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


@pytest.mark.asyncio
class TestListProgressAPI:
    """Test GET /api/v1/progress."""

    async def test_answer_progress_is_readable(self, client, learner, lesson, make_question):
        question = await make_question(correct_answer="4", lesson_id=lesson.id)
        answered = await client.post(
            "/api/v1/answers",
            json={"question_id": str(question.id), "answer": "4", "time_spent": 45},
            headers=auth(learner),
        )
        assert answered.status_code == 201

        response = await client.get("/api/v1/progress", headers=auth(learner))

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["total"] == 1
        entry = data["progress"][0]
        assert entry["user_id"] == str(learner.id)
        assert entry["course_id"] == str(lesson.course_id)
        assert entry["status"] == "in_progress"
        assert entry["score"] == 100.0
        assert entry["time_spent"] == 45
        assert entry["course"]["title"] == "Arithmetic Foundations"
        assert entry["course"]["subject"] == "Math"

    async def test_learner_sees_only_own_progress(
        self, client, learner, other_learner, lesson, add_progress
    ):
        await add_progress(learner, lesson.course_id)
        await add_progress(other_learner, lesson.course_id)

        # user_id filter is ignored for learners
        response = await client.get(
            "/api/v1/progress",
            params={"user_id": str(other_learner.id)},
            headers=auth(learner),
        )

        data = response.json()
        assert data["pagination"]["total"] == 1
        assert data["progress"][0]["user_id"] == str(learner.id)

    async def test_educator_filters_by_user_and_course(
        self, client, learner, other_learner, educator, lesson, second_course, add_progress
    ):
        await add_progress(learner, lesson.course_id)
        await add_progress(learner, second_course.id)
        await add_progress(other_learner, lesson.course_id)

        everyone = await client.get("/api/v1/progress", headers=auth(educator))
        one_user = await client.get(
            "/api/v1/progress", params={"user_id": str(learner.id)}, headers=auth(educator)
        )
        one_course = await client.get(
            "/api/v1/progress",
            params={"user_id": str(learner.id), "course_id": str(second_course.id)},
            headers=auth(educator),
        )

        assert everyone.json()["pagination"]["total"] == 3
        assert one_user.json()["pagination"]["total"] == 2
        assert one_course.json()["pagination"]["total"] == 1
        assert one_course.json()["progress"][0]["course"]["title"] == "World Geography"

    async def test_most_recently_updated_first(
        self, client, learner, lesson, second_course, add_progress
    ):
        older = await add_progress(learner, lesson.course_id)
        newer = await add_progress(learner, second_course.id)
        older_id, newer_id = str(older.id), str(newer.id)

        response = await client.get("/api/v1/progress", headers=auth(learner))

        ids = [entry["id"] for entry in response.json()["progress"]]
        assert ids == [newer_id, older_id]

    async def test_pagination(self, client, learner, lesson, second_course, add_progress):
        await add_progress(learner, lesson.course_id)
        await add_progress(learner, second_course.id)

        page_two = await client.get(
            "/api/v1/progress", params={"page": 2, "limit": 1}, headers=auth(learner)
        )

        assert page_two.json()["pagination"] == {
            "page": 2,
            "limit": 1,
            "total": 2,
            "total_pages": 2,
        }
        assert len(page_two.json()["progress"]) == 1

    async def test_empty_list(self, client, learner):
        response = await client.get("/api/v1/progress", headers=auth(learner))

        assert response.status_code == 200
        assert response.json() == {
            "progress": [],
            "pagination": {"page": 1, "limit": 10, "total": 0, "total_pages": 0},
        }

    async def test_requires_identity(self, client):
        response = await client.get("/api/v1/progress")

        assert response.status_code == 401

    async def test_unknown_caller(self, client):
        response = await client.get("/api/v1/progress", headers={"X-User-Id": str(uuid4())})

        assert response.status_code == 404
