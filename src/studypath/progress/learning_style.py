"""
Learning Style Analysis

Derives primary/secondary learning style, recommendations and study tips from
questionnaire scores. Pure functions; persistence happens in the router.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LearningStyle(StrEnum):
    VISUAL = "VISUAL"
    AUDITORY = "AUDITORY"
    KINESTHETIC = "KINESTHETIC"
    READING = "READING"


# Score keys in tie-break order
SCORE_ORDER: tuple[tuple[str, LearningStyle], ...] = (
    ("visual", LearningStyle.VISUAL),
    ("auditory", LearningStyle.AUDITORY),
    ("kinesthetic", LearningStyle.KINESTHETIC),
    ("reading", LearningStyle.READING),
)

# max - min below this counts as a balanced profile
BALANCED_SPREAD = 3

STYLE_NAMES = {
    LearningStyle.VISUAL: "visual",
    LearningStyle.AUDITORY: "auditory",
    LearningStyle.KINESTHETIC: "hands-on",
    LearningStyle.READING: "reading/writing",
}

STYLE_RECOMMENDATIONS = {
    LearningStyle.VISUAL: (
        "Make active use of diagrams and mind maps when you study.",
        "Color-code key points with pens and highlighters to help them stick.",
        "Use videos and other visual materials to deepen your understanding.",
    ),
    LearningStyle.AUDITORY: (
        "Read aloud and repeat material so you learn by hearing it.",
        "Record important content and listen to it repeatedly.",
        "Take part in group discussions and practice explaining ideas out loud.",
    ),
    LearningStyle.KINESTHETIC: (
        "Learn by doing: write things out and build things with your hands.",
        "Try studying while walking or moving around.",
        "Seek out hands-on learning such as experiments and practical work.",
    ),
    LearningStyle.READING: (
        "Make detailed notes and summaries a habit.",
        "Set aside study time in a quiet place where you can concentrate.",
        "Use reference books and in-depth texts to study topics thoroughly.",
    ),
}

STUDY_TIPS = {
    LearningStyle.VISUAL: (
        "Organize what you learn into diagrams or flowcharts",
        "Color-code important points so they stand out visually",
        "Link facts to images or pictures when memorizing",
        "Summarize topics as a short slide presentation",
    ),
    LearningStyle.AUDITORY: (
        "Read material aloud and check it by ear",
        "Record key passages and replay them",
        "Memorize with rhythm or song",
        "Explain the topic to someone else",
    ),
    LearningStyle.KINESTHETIC: (
        "Take handwritten notes while you study",
        "Review while standing up or walking",
        "Use real objects or models to understand ideas",
        "Use gestures to help you remember",
    ),
    LearningStyle.READING: (
        "Summarize important content in your own sentences",
        "Read in a quiet environment where you can focus",
        "Pay attention to the logical structure of the material",
        "Write detailed memos and summaries",
    ),
}


@dataclass
class LearningStyleAnalysis:
    primary_style: LearningStyle
    secondary_style: LearningStyle | None
    recommendations: list[str]
    study_tips: list[str]


def rank_styles(scores: dict[str, int]) -> list[tuple[LearningStyle, int]]:
    """Styles sorted by score, highest first; ties keep SCORE_ORDER."""
    ranked = [(style, scores.get(key, 0)) for key, style in SCORE_ORDER]
    return sorted(ranked, key=lambda pair: pair[1], reverse=True)


def generate_recommendations(
    primary: LearningStyle, secondary: LearningStyle | None, scores: dict[str, int]
) -> list[str]:
    recommendations = list(STYLE_RECOMMENDATIONS[primary])

    if secondary is not None and secondary != primary:
        recommendations.append(
            f"Combining methods from your secondary {STYLE_NAMES[secondary]} style "
            "should make your study even more effective."
        )

    values = [scores.get(key, 0) for key, _ in SCORE_ORDER]
    if max(values) - min(values) < BALANCED_SPREAD:
        recommendations.append(
            "Your learning styles are well balanced, so try mixing a variety of study methods."
        )

    return recommendations


def analyze_learning_style(scores: dict[str, int]) -> LearningStyleAnalysis:
    """Derive the learning-style profile from questionnaire scores.

    Args:
        scores: Mapping with visual, auditory, kinesthetic and reading scores

    Returns:
        Primary style, optional secondary style (only when it scored above
        zero), recommendations and study tips
    """
    ranked = rank_styles(scores)
    primary = ranked[0][0]
    secondary = ranked[1][0] if ranked[1][1] > 0 else None

    return LearningStyleAnalysis(
        primary_style=primary,
        secondary_style=secondary,
        recommendations=generate_recommendations(primary, secondary, scores),
        study_tips=list(STUDY_TIPS[primary]),
    )
