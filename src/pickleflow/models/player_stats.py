"""Per-player leaderboard line."""

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


@dataclass
class PlayerStats:
    """Derived statistics for one player. Never stored, always recomputed.

    Attributes
    ----------
    id : int
        Player id.
    name : str
        Player name at the time of computation.
    number : int
        1-based roster position, used as a display label.
    wins, losses : int
        Completed matches won and lost.
    ties : int
        Completed matches that ended level (only when tie checks are off).
    points_for, points_against : int
        Points scored and conceded over completed matches.
    display_rank : int
        Competition rank; tied players share it.
    """

    id: int
    name: str
    number: int
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    display_rank: int = 0

    @property
    def diff(self) -> int:
        return self.points_for - self.points_against

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def ppg(self) -> float:
        """Points per game; 0.0 before the first completed game."""
        if self.games_played == 0:
            return 0.0
        return self.points_for / self.games_played

    def to_dict(self) -> Dict[str, Any]:
        """Serialize stats to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "pointsFor": self.points_for,
            "pointsAgainst": self.points_against,
            "diff": self.diff,
            "gamesPlayed": self.games_played,
            "ppg": round(self.ppg, 2),
            "displayRank": self.display_rank,
        }
