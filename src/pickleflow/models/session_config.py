"""SessionConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from pickleflow.constants import (
    DEFAULT_COURT_COUNT,
    DEFAULT_DURATION,
    DEFAULT_NUM_ROUNDS,
    MAX_COURTS,
    MAX_ROUNDS,
)
from pickleflow.exceptions import InvalidConfigurationException


@dataclass
class SessionConfig:
    """Session configuration settings.

    Attributes
    ----------
    court_count : int
        Number of courts available each round.
    num_rounds : int
        Number of rounds to schedule.
    selected_duration : int
        Round length in minutes. Only shown by the countdown display.
    strict_scores : bool
        Reject finalizing a match with tied scores.
    """

    court_count: int = DEFAULT_COURT_COUNT
    num_rounds: int = DEFAULT_NUM_ROUNDS
    selected_duration: int = DEFAULT_DURATION
    strict_scores: bool = True

    def validate(self) -> None:
        """Check the settings are usable for scheduling.

        Raises:
            InvalidConfigurationException: If any value is out of range
        """
        if not 1 <= self.court_count <= MAX_COURTS:
            raise InvalidConfigurationException(
                f"Court count must be between 1 and {MAX_COURTS}: {self.court_count}"
            )
        if not 1 <= self.num_rounds <= MAX_ROUNDS:
            raise InvalidConfigurationException(
                f"Round count must be between 1 and {MAX_ROUNDS}: {self.num_rounds}"
            )
        if self.selected_duration <= 0:
            raise InvalidConfigurationException(
                f"Round duration must be positive: {self.selected_duration}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "courtCount": self.court_count,
            "numRounds": self.num_rounds,
            "selectedDuration": self.selected_duration,
            "strictScores": self.strict_scores,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Deserialize configuration from dictionary."""
        try:
            return cls(
                court_count=int(data.get("courtCount", DEFAULT_COURT_COUNT)),
                num_rounds=int(data.get("numRounds", DEFAULT_NUM_ROUNDS)),
                selected_duration=int(data.get("selectedDuration", DEFAULT_DURATION)),
                strict_scores=bool(data.get("strictScores", True)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationException(
                f"Invalid session settings: {e}"
            ) from e
