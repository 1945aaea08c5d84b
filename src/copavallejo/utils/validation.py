"""Validation utilities for Copa Vallejo.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import Optional

from copavallejo.constants import (
    ERR_SHIRT_NUMBER_RANGE,
    MINUTE_MAX,
    MINUTE_MIN,
    NATIONAL_ID_MAX_DIGITS,
    NATIONAL_ID_MIN_DIGITS,
    SHIRT_NUMBER_MAX,
    SHIRT_NUMBER_MIN,
)
from copavallejo.exceptions import (
    InvalidMinuteException,
    InvalidNationalIdException,
    InvalidResultException,
    InvalidShirtNumberException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value=None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== National Id Validation ==========


def validate_national_id(national_id: Optional[str]) -> ValidationResult:
    """Validate a national id (cedula).

    Surrounding whitespace is ignored; the id must be made of 6 to 15 digits.

    Args:
        national_id: National id to validate

    Returns:
        ValidationResult with the stripped id as sanitized value

    Example:
        >>> validate_national_id(" 1061234567 ").sanitized_value
        '1061234567'
    """
    if not national_id or not national_id.strip():
        return ValidationResult(
            is_valid=False,
            error_message="National id is required",
        )

    national_id = national_id.strip()
    pattern = rf"^[0-9]{{{NATIONAL_ID_MIN_DIGITS},{NATIONAL_ID_MAX_DIGITS}}}$"

    if re.match(pattern, national_id):
        return ValidationResult(is_valid=True, sanitized_value=national_id)

    return ValidationResult(
        is_valid=False,
        error_message=f"Invalid national id: {national_id}",
    )


def validate_national_id_strict(national_id: Optional[str]) -> str:
    """Validate a national id and raise exception if invalid.

    Returns:
        The sanitized national id

    Raises:
        InvalidNationalIdException: If the id is invalid
    """
    result = validate_national_id(national_id)
    if not result.is_valid:
        raise InvalidNationalIdException(result.error_message)
    return result.sanitized_value


# ========== Shirt Number Validation ==========


def validate_shirt_number(
    number: Optional[int],
    minimum: int = SHIRT_NUMBER_MIN,
    maximum: int = SHIRT_NUMBER_MAX,
) -> ValidationResult:
    """Validate a shirt number against the regulation range.

    Args:
        number: Shirt number to validate
        minimum: Lowest allowed number
        maximum: Highest allowed number

    Returns:
        ValidationResult with validation status
    """
    message = ERR_SHIRT_NUMBER_RANGE.format(minimum=minimum, maximum=maximum)

    if number is None or isinstance(number, bool):
        return ValidationResult(is_valid=False, error_message=message)

    try:
        number_value = int(number)
    except (TypeError, ValueError):
        return ValidationResult(is_valid=False, error_message=message)

    if minimum <= number_value <= maximum:
        return ValidationResult(is_valid=True, sanitized_value=number_value)

    return ValidationResult(is_valid=False, error_message=message)


def validate_shirt_number_strict(
    number: Optional[int],
    minimum: int = SHIRT_NUMBER_MIN,
    maximum: int = SHIRT_NUMBER_MAX,
) -> int:
    """Validate a shirt number and raise exception if invalid.

    Raises:
        InvalidShirtNumberException: If the number is outside the range
    """
    result = validate_shirt_number(number, minimum, maximum)
    if not result.is_valid:
        raise InvalidShirtNumberException(result.error_message)
    return result.sanitized_value


# ========== Match Data Validation ==========


def validate_minute(minute: int) -> None:
    """Check that a goal or card minute lies within the match clock.

    Raises:
        InvalidMinuteException: If the minute is outside 0-120
    """
    if isinstance(minute, bool) or not isinstance(minute, int):
        raise InvalidMinuteException(f"Minute must be an integer, got {minute!r}")
    if not MINUTE_MIN <= minute <= MINUTE_MAX:
        raise InvalidMinuteException(
            f"Minute must be between {MINUTE_MIN} and {MINUTE_MAX}, got {minute}"
        )


def validate_goals(goals_home: int, goals_away: int) -> None:
    """Check that a final score is made of two non-negative integers.

    Raises:
        InvalidResultException: If either count is negative or not an integer
    """
    for label, goals in (("home", goals_home), ("away", goals_away)):
        if isinstance(goals, bool) or not isinstance(goals, int):
            raise InvalidResultException(
                f"Goals for the {label} team must be an integer, got {goals!r}"
            )
        if goals < 0:
            raise InvalidResultException(
                f"Goals for the {label} team cannot be negative, got {goals}"
            )
