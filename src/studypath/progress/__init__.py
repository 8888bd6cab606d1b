"""
Progress Module

Learning progress bookkeeping, general answer submission and learning-style
analysis.
"""

from .answers import SubmittedAnswer, submit_answer
from .learning_progress import record_progress_best_effort, update_learning_progress
from .learning_style import LearningStyle, LearningStyleAnalysis, analyze_learning_style

__all__ = [
    "LearningStyle",
    "LearningStyleAnalysis",
    "SubmittedAnswer",
    "analyze_learning_style",
    "record_progress_best_effort",
    "submit_answer",
    "update_learning_progress",
]
