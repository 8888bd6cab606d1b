"""
Unit Tests for Result Synthesis

Breakdowns, recommendations, strengths/weaknesses and next steps.
"""

from studypath.assessment.results import (
    DEFAULT_TOPIC,
    AnsweredItem,
    analyze_subject_performance,
    generate_next_steps,
    legacy_subject_for_difficulty,
    percentage,
    synthesize_result,
)


def _items(*flags: bool, subject: str = "Math", topic: str = "Fractions") -> list[AnsweredItem]:
    return [AnsweredItem(is_correct=flag, difficulty=3, subject=subject, topic=topic) for flag in flags]


class TestPercentage:
    def test_zero_max_score(self):
        assert percentage(0, 0) == 0.0

    def test_percentage_recovers_counts(self):
        """score/max_score round-trips through the percentage."""
        for max_score in range(1, 30):
            for score in range(0, max_score + 1):
                pct = percentage(score, max_score)
                assert round(pct * max_score / 100) == score
                assert 0.0 <= pct <= 100.0


class TestLegacySubjectInference:
    def test_bands(self):
        assert legacy_subject_for_difficulty(1) == "Math"
        assert legacy_subject_for_difficulty(3) == "Math"
        assert legacy_subject_for_difficulty(5) == "Japanese"
        assert legacy_subject_for_difficulty(6) == "Japanese"
        assert legacy_subject_for_difficulty(8) == "Science"
        assert legacy_subject_for_difficulty(9) == "Social"

    def test_item_without_subject_uses_inference_and_default_topic(self):
        item = AnsweredItem(is_correct=True, difficulty=9)
        assert item.resolved_subject == "Social"
        assert item.resolved_topic == DEFAULT_TOPIC


class TestSubjectBreakdown:
    """Tests for grouping answers by subject and topic."""

    def test_groups_in_first_seen_order(self):
        items = [
            AnsweredItem(is_correct=True, difficulty=3, subject="Science", topic="Experiments"),
            AnsweredItem(is_correct=False, difficulty=3, subject="Math", topic="Fractions"),
            AnsweredItem(is_correct=True, difficulty=3, subject="Science", topic="Forces"),
            AnsweredItem(is_correct=True, difficulty=3, subject="Math", topic="Fractions"),
        ]
        subjects = analyze_subject_performance(items)

        assert [s.subject for s in subjects] == ["Science", "Math"]
        science, math = subjects
        assert (science.score, science.max_score) == (2, 2)
        assert [t.topic for t in science.topics] == ["Experiments", "Forces"]
        assert (math.score, math.max_score, math.percentage) == (1, 2, 50.0)
        assert math.topics[0].questions_answered == 2
        assert math.topics[0].correct_answers == 1

    def test_subject_levels(self):
        advanced = analyze_subject_performance(_items(True, True, True, True, False))[0]
        intermediate = analyze_subject_performance(_items(True, True, True, False, False))[0]
        beginner = analyze_subject_performance(_items(True, False, False))[0]

        assert advanced.level == "advanced"
        assert intermediate.level == "intermediate"
        assert beginner.level == "beginner"


class TestSynthesizeResult:
    """Tests for the complete result."""

    def test_empty_answers(self):
        result = synthesize_result([])

        assert result.total_questions == 0
        assert result.overall_percentage == 0.0
        assert result.subjects == []
        assert result.recommendations == [
            "We recommend reviewing the fundamentals from the beginning."
        ]

    def test_perfect_single_subject(self):
        result = synthesize_result(_items(True, True, True, True))

        assert result.overall_score == 4
        assert result.correct_answers == 4
        assert result.overall_percentage == 100.0
        assert result.recommendations[0].startswith("Excellent results!")
        assert (
            "You have a strong grasp of Math and can solve applied problems." in result.strengths
        )
        assert "You understand the Fractions area of Math very well." in result.strengths
        assert result.weaknesses == []
        assert result.next_steps[0] == "Take on applied problems to deepen your understanding."

    def test_weak_subject_recommendations(self):
        result = synthesize_result(_items(True, False, False, False))

        assert "Review the fundamental concepts of Math." in result.recommendations
        assert "Focus your study on these Math topics: Fractions." in result.recommendations
        assert "Your understanding of basic Math concepts needs work." in result.weaknesses
        assert (
            "Your understanding of the Fractions area of Math is not yet sufficient."
            in result.weaknesses
        )
        assert len(result.next_steps) == 5
        assert "Spend more study time on Math and work on it intensively." in result.next_steps

    def test_middle_band_recommends_applied_practice(self):
        result = synthesize_result(_items(True, True, True, False, False))

        assert result.recommendations[0].startswith("Good results.")
        assert (
            "Work on applied Math problems to deepen your understanding." in result.recommendations
        )

    def test_deterministic(self):
        items = _items(True, False, True) + _items(False, True, subject="Science", topic="Forces")
        assert synthesize_result(items) == synthesize_result(list(items))

    def test_subjects_as_dicts(self):
        result = synthesize_result(_items(True, False))
        stored = result.subjects_as_dicts()

        assert stored[0]["subject"] == "Math"
        assert stored[0]["topics"][0]["topic"] == "Fractions"
        assert stored[0]["percentage"] == 50.0


class TestNextSteps:
    def test_weakest_subject_tie_picks_first_seen(self):
        items = _items(True, False, subject="Science", topic="Forces") + _items(True, False)
        steps = generate_next_steps(analyze_subject_performance(items), 50.0)

        assert "Spend more study time on Science and work on it intensively." in steps
        assert "Spend more study time on Math and work on it intensively." not in steps

    def test_no_focus_step_when_all_strong(self):
        steps = generate_next_steps(analyze_subject_performance(_items(True, True)), 100.0)

        assert not any(step.startswith("Spend more study time") for step in steps)
        assert steps[-2:] == [
            "Take the diagnostic test regularly to check your progress.",
            "Keep a review notebook of the questions you got wrong and revisit it regularly.",
        ]
