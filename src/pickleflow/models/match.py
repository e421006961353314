"""Match data class."""

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
from typing import Any, Dict, Optional, Tuple

from pickleflow.constants import DEFAULT_SCORE, TEAM_ONE, TEAM_SIZE, TEAM_TWO
from pickleflow.exceptions import MalformedImportException
from pickleflow.models.player import Player
from pickleflow.type_hints import PlayerId, Team
from pickleflow.utils.validation import sanitize_score


@dataclass(frozen=True)
class Match:
    """One 2v2 game on one court within a round.

    Attributes
    ----------
    id : str
        Identifier unique within the schedule, ``r{round_index}-c{court}``.
    court : int
        Court number, 1-based and unique within its round.
    team1 : tuple of Player
        The two players of the first team.
    team2 : tuple of Player
        The two players of the second team.
    score1 : int
        Points scored by team1.
    score2 : int
        Points scored by team2.
    completed : bool
        Whether the result has been finalized.
    """

    id: str
    court: int
    team1: Team
    team2: Team
    score1: int = DEFAULT_SCORE
    score2: int = DEFAULT_SCORE
    completed: bool = False

    @property
    def players(self) -> Tuple[Player, ...]:
        """All four players, team1 first."""
        return self.team1 + self.team2

    @property
    def player_ids(self) -> Tuple[PlayerId, ...]:
        return tuple(p.id for p in self.players)

    @property
    def is_tied(self) -> bool:
        return self.score1 == self.score2

    @property
    def winning_team(self) -> Optional[int]:
        """Team number with the higher score, or None for a tie."""
        if self.score1 > self.score2:
            return TEAM_ONE
        if self.score2 > self.score1:
            return TEAM_TWO
        return None

    def has_player(self, player_id: PlayerId) -> bool:
        return player_id in self.player_ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "court": self.court,
            "team1": [p.to_dict() for p in self.team1],
            "team2": [p.to_dict() for p in self.team2],
            "score1": self.score1,
            "score2": self.score2,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary.

        Scores may be ints or the numeric strings older exports carry.

        Raises:
            MalformedImportException: If a team is not two players or the
                completed flag is not a boolean
        """
        match_id = str(data["id"])
        teams = []
        for key in ("team1", "team2"):
            team = tuple(Player.from_dict(p) for p in data[key])
            if len(team) != TEAM_SIZE:
                raise MalformedImportException(
                    f"Match {match_id} {key} has {len(team)} players, "
                    f"expected {TEAM_SIZE}"
                )
            teams.append(team)

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise MalformedImportException(
                f"Match {match_id} completed flag must be true or false: {completed!r}"
            )

        return cls(
            id=match_id,
            court=int(data["court"]),
            team1=teams[0],
            team2=teams[1],
            score1=sanitize_score(data.get("score1", DEFAULT_SCORE)),
            score2=sanitize_score(data.get("score2", DEFAULT_SCORE)),
            completed=completed,
        )
