"""
Assessment Module

Adaptive assessment engine: difficulty control, question selection,
termination policy, session tracking and result synthesis.
"""

from .configs import AssessmentConfig, AssessmentConfigRegistry, get_config_registry
from .difficulty import bucket_to_level, level_to_bucket, next_difficulty
from .question_bank import QuestionBank, present_question
from .results import AnsweredItem, SynthesizedResult, synthesize_result
from .termination import should_complete
from .tracker import AssessmentSessionTracker, expire_stale_sessions

__all__ = [
    "AnsweredItem",
    "AssessmentConfig",
    "AssessmentConfigRegistry",
    "AssessmentSessionTracker",
    "QuestionBank",
    "SynthesizedResult",
    "bucket_to_level",
    "expire_stale_sessions",
    "get_config_registry",
    "level_to_bucket",
    "next_difficulty",
    "present_question",
    "should_complete",
    "synthesize_result",
]
