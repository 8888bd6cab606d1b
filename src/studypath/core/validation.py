"""
Input validation functions for StudyPath.

All validation functions follow the pattern:
1. Accept raw user input (string, int, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError
"""

import re

from studypath.core.exceptions import ValidationError

MAX_ANSWER_LENGTH = 10_000

# ============================================================================
# Answer Content Validation
# ============================================================================


def validate_answer_content(answer: str | int | None) -> str:
    """
    Validate submitted answer content.

    Integers (option indexes sent by choice-question clients) are accepted
    and converted to their string form.

    Args:
        answer: Raw answer input

    Returns:
        Answer as a string with surrounding whitespace removed

    Raises:
        ValidationError: If the answer is missing or too long
    """
    if answer is None:
        raise ValidationError("Answer is required")

    # bool is an int subclass, but True/False is never a valid answer payload
    if isinstance(answer, bool):
        raise ValidationError("Answer must be text or an option index")

    cleaned = str(answer).strip()

    if cleaned == "":
        raise ValidationError("Answer cannot be empty")

    if len(cleaned) > MAX_ANSWER_LENGTH:
        raise ValidationError(f"Answer cannot exceed {MAX_ANSWER_LENGTH} characters")

    return cleaned


# ============================================================================
# Time Spent Validation
# ============================================================================


def validate_time_spent(seconds: int | None, maximum: int) -> int:
    """
    Validate time spent on a question, in seconds.

    Missing values count as zero, matching clients that do not track time.

    Args:
        seconds: Raw time spent
        maximum: Largest accepted value

    Returns:
        Time spent in whole seconds

    Raises:
        ValidationError: If negative or above maximum
    """
    if seconds is None:
        return 0

    if seconds < 0:
        raise ValidationError("Time spent cannot be negative")

    if seconds > maximum:
        raise ValidationError(f"Time spent cannot exceed {maximum} seconds")

    return seconds


# ============================================================================
# Assessment Config ID Validation
# ============================================================================

CONFIG_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]{1,49}$")


def validate_config_id(config_id: str | None) -> str:
    """
    Validate and normalize an assessment config identifier.

    Accepts lowercase snake_case ids ("math_basic", "comprehensive").
    Input is lowercased and trimmed before matching.

    Args:
        config_id: Raw config id

    Returns:
        Normalized config id

    Raises:
        ValidationError: If the id is empty or malformed
    """
    if config_id is None or config_id.strip() == "":
        raise ValidationError("Config id cannot be empty")

    cleaned = config_id.strip().lower()

    if not CONFIG_ID_PATTERN.match(cleaned):
        raise ValidationError(
            "Config id must start with a letter and contain only letters, digits or underscores"
        )

    return cleaned
