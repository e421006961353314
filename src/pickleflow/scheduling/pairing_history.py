"""Running counters used to balance play time and pairings."""

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

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Sequence

from pickleflow.models import Match, Player, Round
from pickleflow.type_hints import PairKey, PlayerId


def pair_key(player1_id: PlayerId, player2_id: PlayerId) -> PairKey:
    return frozenset({player1_id, player2_id})


@dataclass
class PairingHistory:
    """
    Tracks how often players have played, partnered and faced each other.

    One instance belongs to a single ``generate_schedule`` call and is never
    shared between calls.

    Attributes
    ----------
    play_count : Counter of int
        Games played so far, by player id.
    meet_count : Counter of frozenset of int
        Times two players have been opponents.
    teammate_count : Counter of frozenset of int
        Times two players have been partners.
    """

    play_count: Counter = field(default_factory=Counter)
    meet_count: Counter = field(default_factory=Counter)
    teammate_count: Counter = field(default_factory=Counter)

    def games_played(self, player_id: PlayerId) -> int:
        return self.play_count[player_id]

    def times_met(self, player1_id: PlayerId, player2_id: PlayerId) -> int:
        """How often two players have been on opposite teams."""
        return self.meet_count[pair_key(player1_id, player2_id)]

    def times_partnered(self, player1_id: PlayerId, player2_id: PlayerId) -> int:
        """How often two players have been on the same team."""
        return self.teammate_count[pair_key(player1_id, player2_id)]

    def group_meet_cost(self, candidate: Player, group: Sequence[Player]) -> int:
        """Sum of ``candidate``'s meet counts against everyone in ``group``."""
        return sum(self.times_met(candidate.id, member.id) for member in group)

    def record_match(self, match: Match) -> None:
        """Add a scheduled match to the counters."""
        for player in match.players:
            self.play_count[player.id] += 1
        for team in (match.team1, match.team2):
            self.teammate_count[pair_key(team[0].id, team[1].id)] += 1
        for left in match.team1:
            for right in match.team2:
                self.meet_count[pair_key(left.id, right.id)] += 1

    def spread(self, player_ids: Iterable[PlayerId]) -> int:
        """Largest difference in games played between any two players."""
        counts = [self.play_count[pid] for pid in player_ids]
        if not counts:
            return 0
        return max(counts) - min(counts)

    @classmethod
    def from_rounds(cls, rounds: Iterable[Round]) -> "PairingHistory":
        """Rebuild the counters from an existing schedule."""
        history = cls()
        for round_data in rounds:
            for match in round_data.matches:
                history.record_match(match)
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize counters to dictionary (for reports and debugging)."""
        return {
            "play_count": {str(pid): n for pid, n in sorted(self.play_count.items())},
            "meet_count": [
                [sorted(pair), n] for pair, n in self.meet_count.items() if n
            ],
            "teammate_count": [
                [sorted(pair), n] for pair, n in self.teammate_count.items() if n
            ],
        }
