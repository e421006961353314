"""Doubles round-robin scheduler.

Builds every round of a session up front. Two greedy, local rules drive it:

- rest rotation: the players with the fewest games so far get the courts,
  and everyone else sits out;
- pairing diversity: each court is filled around an anchor player with the
  people they have faced least, and the four are split into the two teams
  whose members have partnered least.

Nothing here is a global optimum. Rosters are small (4-24 players) and
approximate fairness over a handful of rounds is the goal.
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

import random
from itertools import groupby
from typing import Iterable, List, Optional, Sequence

from pickleflow.constants import MATCH_ID_FORMAT, PLAYERS_PER_MATCH
from pickleflow.exceptions import InvalidConfigurationException
from pickleflow.models import Match, Player, Round
from pickleflow.scheduling.pairing_history import PairingHistory
from pickleflow.type_hints import Group, TeamSplit
from pickleflow.utils import setup_logger
from pickleflow.utils.validation import validate_roster

logger = setup_logger(__name__)


def active_slots(roster_size: int, court_count: int) -> int:
    """Number of players that get a court each round.

    Always a multiple of four and never more than the courts can hold.
    """
    playable = roster_size - (roster_size % PLAYERS_PER_MATCH)
    return max(0, min(playable, court_count * PLAYERS_PER_MATCH))


def order_by_play_count(
    players: Sequence[Player], history: PairingHistory, rng: random.Random
) -> List[Player]:
    """Sort players by games played (fewest first).

    Players with equal counts are shuffled as a bucket so the same people do
    not keep sitting out when the counts tie.
    """

    def games(p: Player) -> int:
        return history.games_played(p.id)

    ordered: List[Player] = []
    for _, bucket in groupby(sorted(players, key=games), key=games):
        tied = list(bucket)
        rng.shuffle(tied)
        ordered.extend(tied)
    return ordered


def _pick_least_met(
    pool: Sequence[Player],
    group: Sequence[Player],
    history: PairingHistory,
    rng: random.Random,
) -> Player:
    """Player in ``pool`` who has faced the members of ``group`` least."""
    costs = [history.group_meet_cost(candidate, group) for candidate in pool]
    lowest = min(costs)
    return rng.choice([c for c, cost in zip(pool, costs) if cost == lowest])


def form_group(
    available: List[Player], history: PairingHistory, rng: random.Random
) -> Group:
    """Take four players out of ``available`` for the next court.

    The first available player anchors the group; the other three are added
    one at a time, each the least-met candidate against the group so far.
    ``available`` is consumed in place.
    """
    group = [available.pop(0)]
    while len(group) < PLAYERS_PER_MATCH:
        chosen = _pick_least_met(available, group, history, rng)
        available.remove(chosen)
        group.append(chosen)
    return group


def team_splits(group: Sequence[Player]) -> List[TeamSplit]:
    """The three ways of splitting four players into two teams of two."""
    a, b, c, d = group
    return [((a, b), (c, d)), ((a, c), (b, d)), ((a, d), (b, c))]


def split_cost(split: TeamSplit, history: PairingHistory) -> int:
    """How many times the partners in ``split`` have already been teammates."""
    return sum(history.times_partnered(team[0].id, team[1].id) for team in split)


def choose_team_split(
    group: Sequence[Player], history: PairingHistory, rng: random.Random
) -> TeamSplit:
    """Split with the fewest repeat partnerships, ties broken at random."""
    splits = team_splits(group)
    costs = [split_cost(split, history) for split in splits]
    lowest = min(costs)
    return rng.choice([s for s, cost in zip(splits, costs) if cost == lowest])


def _build_round(
    round_index: int,
    roster: Sequence[Player],
    slots: int,
    history: PairingHistory,
    rng: random.Random,
) -> Round:
    ordered = order_by_play_count(roster, history, rng)
    available = ordered[:slots]
    sitting_out = ordered[slots:]

    matches: List[Match] = []
    court = 1
    while len(available) >= PLAYERS_PER_MATCH:
        group = form_group(available, history, rng)
        team1, team2 = choose_team_split(group, history, rng)
        match = Match(
            id=MATCH_ID_FORMAT.format(round_index=round_index, court=court),
            court=court,
            team1=team1,
            team2=team2,
        )
        history.record_match(match)
        matches.append(match)
        court += 1

    # slots is a multiple of four, so this only matters for odd inputs
    sitting_out.extend(available)

    logger.debug(
        "Round %s: %s matches, sitting out: %s",
        round_index + 1,
        len(matches),
        [p.name for p in sitting_out] or "none",
    )
    return Round(
        number=round_index + 1, matches=tuple(matches), sitting_out=tuple(sitting_out)
    )


def generate_schedule(
    roster: Iterable[Player],
    round_count: int,
    court_count: int,
    rng: Optional[random.Random] = None,
) -> List[Round]:
    """Generate every round of a session.

    Args:
        roster: Players to schedule (at least four, unique ids)
        round_count: Number of rounds to produce
        court_count: Courts available each round
        rng: Random source for tie-breaking; pass a seeded ``random.Random``
            for reproducible schedules

    Returns:
        Rounds numbered 1..round_count

    Raises:
        InsufficientPlayersException: If the roster has fewer than four players
        DuplicatePlayerException: If two roster entries share an id
        InvalidConfigurationException: If round or court count is below one
    """
    players = list(roster)
    validate_roster(players)
    if round_count < 1:
        raise InvalidConfigurationException(
            f"Round count must be at least 1: {round_count}"
        )
    if court_count < 1:
        raise InvalidConfigurationException(
            f"Court count must be at least 1: {court_count}"
        )

    rng = rng if rng is not None else random.Random()
    history = PairingHistory()
    slots = active_slots(len(players), court_count)

    rounds = [
        _build_round(round_index, players, slots, history, rng)
        for round_index in range(round_count)
    ]

    logger.info(
        "Generated %s rounds for %s players on %s courts (%s active per round, "
        "play-count spread %s)",
        round_count,
        len(players),
        court_count,
        slots,
        history.spread(p.id for p in players),
    )
    return rounds
