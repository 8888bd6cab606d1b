"""
Result Synthesizer

Turns a session's answers into a scored result: per-subject and per-topic
breakdowns, recommendations, strengths, weaknesses and next steps.

Everything here is a pure function of the ordered answer list. Subjects and
topics keep first-seen order, so identical input always yields identical
output, text included.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

# Used only when an answer carries no subject/topic of its own
DEFAULT_TOPIC = "Basic Calculation"


def legacy_subject_for_difficulty(level: int) -> str:
    """Infer a subject from a difficulty level.

    Answers recorded before questions carried a subject have only their
    level to go on: 1-3 Math, 4-6 Japanese, 7-8 Science, 9+ Social.
    """
    if level <= 3:
        return "Math"
    if level <= 6:
        return "Japanese"
    if level <= 8:
        return "Science"
    return "Social"


def percentage(score: int, max_score: int) -> float:
    """100 * score / max_score, 0.0 when max_score is 0."""
    if max_score <= 0:
        return 0.0
    return 100 * score / max_score


def level_label(pct: float) -> str:
    if pct >= 80:
        return "advanced"
    if pct >= 60:
        return "intermediate"
    return "beginner"


@dataclass(frozen=True)
class AnsweredItem:
    """One answer as the synthesizer sees it."""

    is_correct: bool
    difficulty: int
    subject: str | None = None
    topic: str | None = None

    @property
    def resolved_subject(self) -> str:
        return self.subject or legacy_subject_for_difficulty(self.difficulty)

    @property
    def resolved_topic(self) -> str:
        return self.topic or DEFAULT_TOPIC


@dataclass
class TopicBreakdown:
    topic: str
    score: int
    max_score: int
    percentage: float
    questions_answered: int
    correct_answers: int


@dataclass
class SubjectBreakdown:
    subject: str
    score: int
    max_score: int
    percentage: float
    level: str
    topics: list[TopicBreakdown] = field(default_factory=list)


@dataclass
class SynthesizedResult:
    overall_score: int
    overall_percentage: float
    total_questions: int
    correct_answers: int
    subjects: list[SubjectBreakdown]
    recommendations: list[str]
    strengths: list[str]
    weaknesses: list[str]
    next_steps: list[str]

    def subjects_as_dicts(self) -> list[dict[str, Any]]:
        """JSON-ready subject breakdowns for storage."""
        return [asdict(subject) for subject in self.subjects]


def analyze_subject_performance(items: Sequence[AnsweredItem]) -> list[SubjectBreakdown]:
    """Group answers by subject, then by topic within each subject."""
    # subject -> [correct, total, {topic -> [correct, total]}]; dicts keep first-seen order
    grouped: dict[str, tuple[list[int], dict[str, list[int]]]] = {}

    for item in items:
        counts, topics = grouped.setdefault(item.resolved_subject, ([0, 0], {}))
        topic_counts = topics.setdefault(item.resolved_topic, [0, 0])

        counts[1] += 1
        topic_counts[1] += 1
        if item.is_correct:
            counts[0] += 1
            topic_counts[0] += 1

    subjects = []
    for subject, ((correct, total), topics) in grouped.items():
        subject_pct = percentage(correct, total)
        subjects.append(
            SubjectBreakdown(
                subject=subject,
                score=correct,
                max_score=total,
                percentage=subject_pct,
                level=level_label(subject_pct),
                topics=[
                    TopicBreakdown(
                        topic=topic,
                        score=topic_correct,
                        max_score=topic_total,
                        percentage=percentage(topic_correct, topic_total),
                        questions_answered=topic_total,
                        correct_answers=topic_correct,
                    )
                    for topic, (topic_correct, topic_total) in topics.items()
                ],
            )
        )

    return subjects


def generate_recommendations(
    subjects: Sequence[SubjectBreakdown], overall_percentage: float
) -> list[str]:
    recommendations: list[str] = []

    if overall_percentage >= 80:
        recommendations.append(
            "Excellent results! Try challenging yourself with more advanced problems."
        )
    elif overall_percentage >= 60:
        recommendations.append(
            "Good results. Focusing on your weaker areas will help you improve further."
        )
    else:
        recommendations.append("We recommend reviewing the fundamentals from the beginning.")

    for subject in subjects:
        if subject.percentage < 50:
            recommendations.append(f"Review the fundamental concepts of {subject.subject}.")
        elif subject.percentage < 70:
            recommendations.append(
                f"Work on applied {subject.subject} problems to deepen your understanding."
            )

    for subject in subjects:
        weak_topics = [topic.topic for topic in subject.topics if topic.percentage < 60]
        if weak_topics:
            recommendations.append(
                f"Focus your study on these {subject.subject} topics: {', '.join(weak_topics)}."
            )

    return recommendations


def identify_strengths_and_weaknesses(
    subjects: Sequence[SubjectBreakdown],
) -> tuple[list[str], list[str]]:
    strengths: list[str] = []
    weaknesses: list[str] = []

    for subject in subjects:
        if subject.percentage >= 80:
            strengths.append(
                f"You have a strong grasp of {subject.subject} and can solve applied problems."
            )
        elif subject.percentage < 50:
            weaknesses.append(
                f"Your understanding of basic {subject.subject} concepts needs work."
            )

        for topic in subject.topics:
            if topic.percentage >= 90:
                strengths.append(
                    f"You understand the {topic.topic} area of {subject.subject} very well."
                )
            elif topic.percentage < 40:
                weaknesses.append(
                    f"Your understanding of the {topic.topic} area of {subject.subject} "
                    "is not yet sufficient."
                )

    return strengths, weaknesses


def generate_next_steps(
    subjects: Sequence[SubjectBreakdown], overall_percentage: float
) -> list[str]:
    next_steps: list[str] = []

    if overall_percentage < 60:
        next_steps.append(
            "Start with a fundamentals workbook and build up your understanding step by step."
        )
        next_steps.append(
            "Get into the habit of checking the explanation as soon as you get stuck."
        )
    else:
        next_steps.append("Take on applied problems to deepen your understanding.")

    if subjects:
        # min() keeps the first subject on ties
        weakest = min(subjects, key=lambda subject: subject.percentage)
        if weakest.percentage < 70:
            next_steps.append(
                f"Spend more study time on {weakest.subject} and work on it intensively."
            )

    next_steps.append("Take the diagnostic test regularly to check your progress.")
    next_steps.append(
        "Keep a review notebook of the questions you got wrong and revisit it regularly."
    )

    return next_steps


def synthesize_result(items: Sequence[AnsweredItem]) -> SynthesizedResult:
    """Score an ordered list of answers.

    Args:
        items: Answers in the order they were given

    Returns:
        SynthesizedResult with breakdowns and all derived text
    """
    total = len(items)
    correct = sum(1 for item in items if item.is_correct)
    overall_pct = percentage(correct, total)

    subjects = analyze_subject_performance(items)
    strengths, weaknesses = identify_strengths_and_weaknesses(subjects)

    return SynthesizedResult(
        overall_score=correct,
        overall_percentage=overall_pct,
        total_questions=total,
        correct_answers=correct,
        subjects=subjects,
        recommendations=generate_recommendations(subjects, overall_pct),
        strengths=strengths,
        weaknesses=weaknesses,
        next_steps=generate_next_steps(subjects, overall_pct),
    )
