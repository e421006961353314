"""Leaderboard calculation for sessions.

Standings are ordered win-first:

1. Wins
2. Point differential (points for minus points against)
3. Head-to-head: how often each player beat the other as an opponent
4. Roster order

Display ranks use competition ranking over (wins, diff): players level on
both share a rank even when head-to-head orders them, and the next rank
skips ahead by the size of the tie.
"""

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

import functools
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from pickleflow.constants import TEAM_ONE, TEAM_TWO
from pickleflow.models import Match, Player, PlayerStats, Round
from pickleflow.type_hints import PlayerId
from pickleflow.utils import setup_logger

logger = setup_logger(__name__)


class LeaderboardCalculator:
    """Aggregates completed matches into ordered player statistics.

    The calculator keeps no state between calls; every call starts from the
    roster and walks all rounds again.
    """

    def compute(
        self, roster: Iterable[Player], rounds: Iterable[Round]
    ) -> List[PlayerStats]:
        """Compute the leaderboard.

        Args:
            roster: Players to rank, in roster order
            rounds: Schedule whose completed matches count

        Returns:
            One PlayerStats per roster player, best first. Players without a
            completed game are included with zero stats.
        """
        stats: Dict[PlayerId, PlayerStats] = {}
        for number, player in enumerate(roster, start=1):
            stats[player.id] = PlayerStats(
                id=player.id, name=player.name, number=number
            )

        head_to_head: Counter = Counter()
        completed = 0
        for round_data in rounds:
            for match in round_data.matches:
                if not match.completed:
                    continue
                self._record_match(match, stats, head_to_head)
                completed += 1

        ordered = sorted(
            stats.values(),
            key=functools.cmp_to_key(
                functools.partial(self._compare_players, head_to_head)
            ),
        )
        self._assign_ranks(ordered)

        logger.debug(
            "Leaderboard over %s completed matches for %s players",
            completed,
            len(ordered),
        )
        return ordered

    def _record_match(
        self,
        match: Match,
        stats: Dict[PlayerId, PlayerStats],
        head_to_head: Counter,
    ) -> None:
        """Add one completed match to the running totals."""
        winner = match.winning_team
        sides = (
            (TEAM_ONE, match.team1, match.score1, match.score2),
            (TEAM_TWO, match.team2, match.score2, match.score1),
        )
        for number, team, scored, conceded in sides:
            for player in team:
                line = stats.get(player.id)
                if line is None:
                    # Removed from the roster after the match was played
                    continue
                line.points_for += scored
                line.points_against += conceded
                if winner is None:
                    line.ties += 1
                elif winner == number:
                    line.wins += 1
                else:
                    line.losses += 1

        self._record_head_to_head(match, head_to_head)

    def _record_head_to_head(self, match: Match, head_to_head: Counter) -> None:
        """Credit each winner with a win over each player they beat."""
        if match.winning_team is None:
            return
        if match.winning_team == TEAM_ONE:
            winners, losers = match.team1, match.team2
        else:
            winners, losers = match.team2, match.team1
        for winner in winners:
            for loser in losers:
                head_to_head[(winner.id, loser.id)] += 1

    def head_to_head(
        self, player1_id: PlayerId, player2_id: PlayerId, rounds: Iterable[Round]
    ) -> Tuple[int, int]:
        """Count wins between two players when they were opponents.

        Returns:
            Tuple of (player1 wins over player2, player2 wins over player1)
        """
        tally: Counter = Counter()
        for round_data in rounds:
            for match in round_data.matches:
                if match.completed:
                    self._record_head_to_head(match, tally)
        return tally[(player1_id, player2_id)], tally[(player2_id, player1_id)]

    def _compare_players(
        self, head_to_head: Counter, p1: PlayerStats, p2: PlayerStats
    ) -> int:
        """Compare two players for standings order.

        Returns:
            -1 if p1 ranks higher, 1 if p2 ranks higher, 0 if equal
        """
        if p1.wins != p2.wins:
            return -1 if p1.wins > p2.wins else 1

        if p1.diff != p2.diff:
            return -1 if p1.diff > p2.diff else 1

        p1_beat_p2 = head_to_head[(p1.id, p2.id)]
        p2_beat_p1 = head_to_head[(p2.id, p1.id)]
        if p1_beat_p2 != p2_beat_p1:
            return -1 if p1_beat_p2 > p2_beat_p1 else 1

        return 0

    def _assign_ranks(self, ordered: List[PlayerStats]) -> None:
        """Set competition ranks on an already sorted leaderboard."""
        rank = 1
        for position, line in enumerate(ordered):
            if position > 0:
                previous = ordered[position - 1]
                if (line.wins, line.diff) != (previous.wins, previous.diff):
                    rank = position + 1
            line.display_rank = rank


def compute_leaderboard(
    roster: Iterable[Player], rounds: Iterable[Round]
) -> List[PlayerStats]:
    """Compute ordered player statistics from completed matches."""
    return LeaderboardCalculator().compute(roster, rounds)
