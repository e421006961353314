"""Validation utilities for PickleFlow.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import TYPE_CHECKING, Iterable, Optional, Union

from pickleflow.constants import MIN_PLAYERS
from pickleflow.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    InvalidPlayerDataException,
    ScoreValidationException,
)

if TYPE_CHECKING:
    from pickleflow.models.player import Player

_NON_DIGITS = re.compile(r"\D")


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
        sanitized_value: Optional[Union[str, int]] = None,
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


# ========== Score Validation ==========


def sanitize_score(raw: Union[str, int, None]) -> int:
    """Turn raw score input into a non-negative integer.

    Every non-digit character is dropped, so ``"1a1"`` becomes 11 and a
    leading minus sign is ignored. Empty input counts as 0.

    Example:
        >>> sanitize_score(" 11 ")
        11
        >>> sanitize_score("")
        0
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ScoreValidationException(f"Score must be a number: {raw!r}")
    if isinstance(raw, (int, float)):
        return abs(int(raw))
    digits = _NON_DIGITS.sub("", str(raw))
    return int(digits) if digits else 0


# ========== Player Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a player name.

    Args:
        name: Name as typed by the user

    Returns:
        ValidationResult with the stripped name
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Player name is required",
        )
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_player_name_strict(name: Optional[str]) -> str:
    """Validate a player name and return it stripped, or raise.

    Raises:
        InvalidPlayerDataException: If the name is empty
    """
    result = validate_player_name(name)
    if not result.is_valid:
        raise InvalidPlayerDataException(result.error_message)
    return str(result.sanitized_value)


def validate_roster(roster: Iterable["Player"]) -> None:
    """Check a roster can be scheduled.

    Raises:
        InsufficientPlayersException: If there are fewer than four players
        DuplicatePlayerException: If two entries share an id
    """
    seen = set()
    count = 0
    for player in roster:
        count += 1
        if player.id in seen:
            raise DuplicatePlayerException(f"Duplicate player id: {player.id}")
        seen.add(player.id)

    if count < MIN_PLAYERS:
        raise InsufficientPlayersException(count, MIN_PLAYERS)
