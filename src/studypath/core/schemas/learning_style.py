"""
Learning Style Pydantic Schemas
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LearningStyleScores(BaseModel):
    visual: int = Field(ge=0)
    auditory: int = Field(ge=0)
    kinesthetic: int = Field(ge=0)
    reading: int = Field(ge=0)


class LearningStyleSubmit(BaseModel):
    """Request schema for recording a completed learning-style questionnaire."""

    user_id: UUID
    answers: list[dict[str, Any]] = Field(min_length=1)
    scores: LearningStyleScores


class LearningStyleResultSchema(BaseModel):
    """Learning style result response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    scores: LearningStyleScores
    primary_style: str
    secondary_style: str | None = None
    recommendations: list[str]
    study_tips: list[str]
    completed_at: datetime
