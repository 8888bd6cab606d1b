"""
Assessment Config Registry

Lookup table from config id to the subjects, topics, question quota and
starting difficulty of an assessment.

The built-in table covers the two configs the platform ships with. A JSON
file (``ASSESSMENT_CONFIG_PATH``) replaces it wholesale, and tests inject
their own registry through the FastAPI dependency.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from studypath.config import settings
from studypath.core.exceptions import NotFound

logger = logging.getLogger(__name__)


class AssessmentConfig(BaseModel):
    """Static definition of one assessment."""

    model_config = ConfigDict(frozen=True)

    config_id: str = Field(pattern=r"^[a-z][a-z0-9_]{1,49}$")
    name: str
    subjects: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    max_questions: int = Field(ge=1)
    initial_difficulty: int = Field(ge=1, le=10)
    time_limit_minutes: int | None = Field(default=None, ge=1)


DEFAULT_CONFIGS: tuple[AssessmentConfig, ...] = (
    AssessmentConfig(
        config_id="math_basic",
        name="Basic Math Diagnostic",
        subjects=("Math",),
        topics=("Basic Calculation", "Fractions", "Decimals", "Geometry"),
        max_questions=20,
        initial_difficulty=3,
        time_limit_minutes=30,
    ),
    AssessmentConfig(
        config_id="comprehensive",
        name="Comprehensive Diagnostic",
        subjects=("Math", "Japanese", "Science", "Social"),
        topics=("Basic Calculation", "Reading Comprehension", "Experiments", "History"),
        max_questions=40,
        initial_difficulty=4,
        time_limit_minutes=60,
    ),
)


class AssessmentConfigRegistry:
    """In-memory config table with O(1) lookup by id."""

    def __init__(self, configs: Iterable[AssessmentConfig] = DEFAULT_CONFIGS):
        self.configs: dict[str, AssessmentConfig] = {}
        for config in configs:
            if config.config_id in self.configs:
                raise ValueError(f"Duplicate assessment config id: {config.config_id}")
            self.configs[config.config_id] = config

    @classmethod
    def from_file(cls, path: Path) -> AssessmentConfigRegistry:
        """Load configs from a JSON file.

        Expected shape::

            {"configs": [{"config_id": "...", "name": "...", "max_questions": 20,
                          "initial_difficulty": 3, "subjects": [...], "topics": [...]}]}
        """
        if not path.exists():
            raise FileNotFoundError(f"Assessment config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        configs = [AssessmentConfig.model_validate(item) for item in data.get("configs", [])]
        if not configs:
            raise ValueError(f"Assessment config file defines no configs: {path}")

        return cls(configs)

    def get(self, config_id: str) -> AssessmentConfig:
        """Get config by id.

        Raises:
            NotFound: If config_id is not registered
        """
        config = self.configs.get(config_id)
        if config is None:
            raise NotFound(f"Assessment config not found: {config_id}")
        return config

    def list_configs(self) -> list[AssessmentConfig]:
        return [self.configs[key] for key in sorted(self.configs)]

    def __len__(self) -> int:
        return len(self.configs)

    def __contains__(self, config_id: str) -> bool:
        return config_id in self.configs


# Global singleton instance
_registry: AssessmentConfigRegistry | None = None


def get_config_registry(force_reload: bool = False) -> AssessmentConfigRegistry:
    """Get singleton config registry.

    Reads ``settings.ASSESSMENT_CONFIG_PATH`` when set, otherwise uses the
    built-in table.
    """
    global _registry

    if _registry is None or force_reload:
        if settings.ASSESSMENT_CONFIG_PATH is not None:
            _registry = AssessmentConfigRegistry.from_file(settings.ASSESSMENT_CONFIG_PATH)
            logger.info(
                f"Loaded {len(_registry)} assessment configs from "
                f"{settings.ASSESSMENT_CONFIG_PATH}"
            )
        else:
            _registry = AssessmentConfigRegistry()

    return _registry
