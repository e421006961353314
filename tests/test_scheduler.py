import random

import pytest

from pickleflow.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    InvalidConfigurationException,
)
from pickleflow.models import Player
from pickleflow.scheduling import (
    PairingHistory,
    active_slots,
    choose_team_split,
    generate_schedule,
    pair_key,
    team_splits,
)


def _players(count):
    return [Player(id=i, name=f"Player {i}") for i in range(1, count + 1)]


@pytest.mark.parametrize(
    "roster_size,courts,expected_matches,expected_sitting",
    [
        (4, 1, 1, 0),
        (5, 1, 1, 1),
        (7, 3, 1, 3),
        (8, 3, 2, 0),
        (12, 3, 3, 0),
        (13, 3, 3, 1),
        (14, 2, 2, 6),
        (16, 6, 4, 0),
    ],
)
def test_round_sizes(roster_size, courts, expected_matches, expected_sitting):
    rounds = generate_schedule(
        _players(roster_size), 4, courts, rng=random.Random(7)
    )

    assert len(rounds) == 4
    for round_data in rounds:
        assert len(round_data.matches) == expected_matches
        assert len(round_data.sitting_out) == expected_sitting


def test_active_slots():
    assert active_slots(4, 1) == 4
    assert active_slots(11, 3) == 8
    assert active_slots(12, 2) == 8
    assert active_slots(3, 2) == 0


def test_four_players_single_round():
    players = _players(4)
    rounds = generate_schedule(players, 1, 1, rng=random.Random(1))

    assert len(rounds) == 1
    round_data = rounds[0]
    assert round_data.number == 1
    assert round_data.sitting_out == ()
    assert len(round_data.matches) == 1

    match = round_data.matches[0]
    assert match.id == "r0-c1"
    assert match.court == 1
    assert (match.score1, match.score2) == (0, 0)
    assert not match.completed
    assert sorted(match.player_ids) == [1, 2, 3, 4]
    assert match.has_player(1)
    assert not match.has_player(5)


def test_five_players_rotate_through_the_bench():
    rounds = generate_schedule(_players(5), 5, 1, rng=random.Random(3))

    benched = [r.sitting_out[0].id for r in rounds]
    for round_data in rounds:
        assert len(round_data.matches) == 1
        assert len(round_data.sitting_out) == 1
    assert sorted(benched) == [1, 2, 3, 4, 5]


def test_teams_disjoint_and_nobody_double_booked():
    players = _players(13)
    rounds = generate_schedule(players, 8, 3, rng=random.Random(11))

    for round_data in rounds:
        seen = set()
        for match in round_data.matches:
            team1_ids = {p.id for p in match.team1}
            team2_ids = {p.id for p in match.team2}
            assert len(team1_ids) == 2
            assert len(team2_ids) == 2
            assert not team1_ids & team2_ids
            assert not seen & (team1_ids | team2_ids)
            seen |= team1_ids | team2_ids
        sitting = {p.id for p in round_data.sitting_out}
        assert not seen & sitting
        assert seen | sitting == {p.id for p in players}


def test_match_ids_and_courts_are_sequential():
    rounds = generate_schedule(_players(12), 3, 3, rng=random.Random(5))

    for index, round_data in enumerate(rounds):
        assert round_data.number == index + 1
        assert [m.court for m in round_data.matches] == [1, 2, 3]
        assert [m.id for m in round_data.matches] == [
            f"r{index}-c1",
            f"r{index}-c2",
            f"r{index}-c3",
        ]


def test_four_players_partner_everyone_once_in_three_rounds():
    rounds = generate_schedule(_players(4), 3, 1, rng=random.Random(9))
    history = PairingHistory.from_rounds(rounds)

    for first in range(1, 5):
        for second in range(first + 1, 5):
            assert history.times_partnered(first, second) == 1


def test_same_seed_same_schedule():
    players = _players(10)
    first = generate_schedule(players, 6, 2, rng=random.Random(42))
    second = generate_schedule(players, 6, 2, rng=random.Random(42))

    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_roster_is_not_mutated():
    players = _players(9)
    before = list(players)
    generate_schedule(players, 4, 2, rng=random.Random(2))
    assert players == before


def test_fewer_than_four_players_rejected():
    with pytest.raises(InsufficientPlayersException) as exc_info:
        generate_schedule(_players(3), 4, 1)
    assert exc_info.value.player_count == 3


def test_invalid_counts_rejected():
    with pytest.raises(InvalidConfigurationException):
        generate_schedule(_players(8), 0, 2)
    with pytest.raises(InvalidConfigurationException):
        generate_schedule(_players(8), 4, 0)


def test_duplicate_ids_rejected():
    players = _players(4) + [Player(id=1, name="Someone else")]
    with pytest.raises(DuplicatePlayerException):
        generate_schedule(players, 2, 1)


def test_team_splits_cover_the_group():
    group = _players(4)
    splits = team_splits(group)

    assert len(splits) == 3
    for team1, team2 in splits:
        assert sorted(p.id for p in team1 + team2) == [1, 2, 3, 4]
    assert len({frozenset(p.id for p in team1) for team1, _ in splits}) == 3


def test_choose_team_split_avoids_repeat_partners():
    group = _players(4)
    history = PairingHistory()
    history.teammate_count[pair_key(1, 2)] = 1
    history.teammate_count[pair_key(1, 3)] = 1

    team1, team2 = choose_team_split(group, history, random.Random(0))

    assert {p.id for p in team1} == {1, 4}
    assert {p.id for p in team2} == {2, 3}


def test_history_counts_meetings_across_the_net_only():
    rounds = generate_schedule(_players(4), 1, 1, rng=random.Random(4))
    match = rounds[0].matches[0]
    history = PairingHistory.from_rounds(rounds)

    a, b = match.team1
    c, d = match.team2
    assert history.times_met(a.id, b.id) == 0
    assert history.times_partnered(a.id, b.id) == 1
    assert history.times_met(a.id, c.id) == 1
    assert history.times_met(b.id, d.id) == 1
    assert all(history.games_played(p) == 1 for p in range(1, 5))
