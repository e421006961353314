"""Exceptions for use in PickleFlow"""

# PickleFlow
# Copyright (C) 2025  PickleFlow developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class PickleFlowException(Exception):
    """Base exception for all PickleFlow errors.

    All custom exceptions in the library inherit from this class, so a caller
    can surface any PickleFlow error with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(PickleFlowException):
    """Base exception for validation errors."""

    pass


class InsufficientPlayersException(ValidationException):
    """Raised when a schedule is requested for fewer than four players."""

    def __init__(self, player_count: int, minimum: int = 4):
        self.player_count = player_count
        self.minimum = minimum
        super().__init__(
            f"Add at least {minimum} players (roster has {player_count})."
        )


class ScoreValidationException(ValidationException):
    """Raised when a score value cannot be interpreted."""

    pass


# ========== Result Exceptions ==========


class ResultException(PickleFlowException):
    """Base exception for score entry and match completion errors."""

    pass


class TiedScoreException(ResultException):
    """Raised when finalizing a match whose two scores are equal."""

    def __init__(self, match_id: str, score: int):
        self.match_id = match_id
        self.score = score
        super().__init__(f"Scores cannot be tied ({score}-{score} in {match_id}).")


class InvalidResultException(ResultException):
    """Raised when a result entry is invalid (e.g., unknown team number)."""

    pass


class MatchStateException(ResultException):
    """Raised when a match is in the wrong state for the requested operation."""

    pass


class MatchNotFoundException(ResultException):
    """Raised when a requested match does not exist in the round."""

    pass


class RoundNotFoundException(ResultException):
    """Raised when a round index is outside the schedule."""

    pass


# ========== Player Exceptions ==========


class PlayerException(PickleFlowException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when attempting to add a player that already exists."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PickleFlowException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(PickleFlowException):
    """Base exception for resource-related errors."""

    pass


class MalformedImportException(ResourceException):
    """Raised when imported session data is unreadable or missing fields."""

    pass
