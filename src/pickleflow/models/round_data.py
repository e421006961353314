"""Data model for a session round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pickleflow.exceptions import MatchNotFoundException
from pickleflow.models.match import Match
from pickleflow.models.player import Player


@dataclass(frozen=True)
class Round:
    """One timeslot across all courts.

    Player assignments never change once the round is created; only the
    score and completion fields of its matches do, and those updates produce
    a new ``Round`` (see :mod:`pickleflow.scoring`).

    Attributes
    ----------
    number : int
        Round number (1-indexed).
    matches : tuple of Match
        Matches in court order.
    sitting_out : tuple of Player
        Players without a court this round.
    """

    number: int
    matches: Tuple[Match, ...] = field(default_factory=tuple)
    sitting_out: Tuple[Player, ...] = field(default_factory=tuple)

    @property
    def active_players(self) -> List[Player]:
        return [p for m in self.matches for p in m.players]

    @property
    def is_completed(self) -> bool:
        """True once every match of the round has been finalized."""
        return all(m.completed for m in self.matches)

    def find_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def get_match(self, match_id: str) -> Match:
        """Return the match with ``match_id``.

        Raises:
            MatchNotFoundException: If the round has no such match
        """
        match = self.find_match(match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Match {match_id!r} not found in round {self.number}"
            )
        return match

    def with_match(self, updated: Match) -> "Round":
        """Return a copy of this round with ``updated`` replacing its namesake."""
        self.get_match(updated.id)
        return Round(
            number=self.number,
            matches=tuple(updated if m.id == updated.id else m for m in self.matches),
            sitting_out=self.sitting_out,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "number": self.number,
            "matches": [m.to_dict() for m in self.matches],
            "sittingOut": [p.to_dict() for p in self.sitting_out],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round data from dictionary."""
        return cls(
            number=int(data["number"]),
            matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
            sitting_out=tuple(
                Player.from_dict(p) for p in data.get("sittingOut", [])
            ),
        )
