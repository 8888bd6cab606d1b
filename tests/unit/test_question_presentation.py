"""
Unit Tests for Question Presentation

What a learner sees of a question before answering it.
"""

from studypath.assessment.question_bank import present_question
from studypath.core.models import Question


class TestPresentQuestion:
    def test_choice_options_get_index_ids(self):
        question = Question(
            content="Capital of Japan?",
            question_type="multiple_choice",
            difficulty="MEDIUM",
            options=["Osaka", "Tokyo", "Kyoto"],
            correct_answer="Tokyo",
            explanation="Tokyo has been the capital since 1868.",
            points=2,
            subject="Social",
            topic="Geography",
        )

        payload = present_question(question, time_limit=300)

        assert payload.id == question.id
        assert payload.type == "multiple_choice"
        assert payload.difficulty == 6
        assert payload.points == 2
        assert payload.time_limit == 300
        assert [(option.id, option.text) for option in payload.options] == [
            ("0", "Osaka"),
            ("1", "Tokyo"),
            ("2", "Kyoto"),
        ]

    def test_answer_and_explanation_withheld(self):
        question = Question(
            content="2 + 2",
            question_type="short_answer",
            difficulty="EASY",
            correct_answer="4",
            points=1,
        )

        data = present_question(question, time_limit=60).model_dump()

        assert "correct_answer" not in data
        assert "explanation" not in data
        assert data["options"] is None

    def test_missing_subject_and_topic_fall_back(self):
        question = Question(
            content="Explain photosynthesis",
            question_type="essay",
            difficulty="HARD",
            subject=None,
            topic=None,
            points=1,
        )

        payload = present_question(question, time_limit=60)

        assert payload.subject == "Social"
        assert payload.topic == "Basic Calculation"
        assert payload.difficulty == 9
