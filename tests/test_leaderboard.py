from pickleflow.models import Match, Player, Round
from pickleflow.standings import LeaderboardCalculator, compute_leaderboard


def _players(count):
    return [Player(id=i, name=f"Player {i}") for i in range(1, count + 1)]


def _played(number, court, team1, team2, score1, score2, completed=True):
    return Match(
        id=f"r{number - 1}-c{court}",
        court=court,
        team1=tuple(team1),
        team2=tuple(team2),
        score1=score1,
        score2=score2,
        completed=completed,
    )


def _single_match_round(number, team1, team2, score1, score2):
    return Round(
        number=number, matches=(_played(number, 1, team1, team2, score1, score2),)
    )


def test_eleven_seven_stats():
    p = _players(4)
    rounds = [_single_match_round(1, p[:2], p[2:], 11, 7)]

    board = {line.id: line for line in compute_leaderboard(p, rounds)}

    for winner in (1, 2):
        line = board[winner]
        assert (line.wins, line.losses) == (1, 0)
        assert (line.points_for, line.points_against, line.diff) == (11, 7, 4)
        assert line.display_rank == 1
    for loser in (3, 4):
        line = board[loser]
        assert (line.wins, line.losses) == (0, 1)
        assert (line.points_for, line.points_against, line.diff) == (7, 11, -4)
        assert line.display_rank == 3


def test_no_completed_matches_gives_zeroed_roster():
    p = _players(6)
    unfinished = Round(
        number=1,
        matches=(_played(1, 1, p[:2], p[2:4], 11, 3, completed=False),),
        sitting_out=tuple(p[4:]),
    )

    board = compute_leaderboard(p, [unfinished])

    assert [line.id for line in board] == [1, 2, 3, 4, 5, 6]
    assert [line.number for line in board] == [1, 2, 3, 4, 5, 6]
    for line in board:
        assert line.games_played == 0
        assert line.points_for == 0
        assert line.display_rank == 1


def test_competition_ranking_skips_after_ties():
    p = _players(8)
    rounds = [
        Round(
            number=1,
            matches=(
                _played(1, 1, p[0:2], p[2:4], 11, 5),
                _played(1, 2, p[4:6], p[6:8], 11, 5),
            ),
        )
    ]

    board = compute_leaderboard(p, rounds)

    assert [line.id for line in board] == [1, 2, 5, 6, 3, 4, 7, 8]
    assert [line.display_rank for line in board] == [1, 1, 1, 1, 5, 5, 5, 5]


def test_head_to_head_breaks_level_records():
    p = {player.id: player for player in _players(6)}
    rounds = [
        _single_match_round(1, (p[4], p[5]), (p[1], p[6]), 11, 9),
        _single_match_round(2, (p[1], p[2]), (p[3], p[6]), 11, 9),
        _single_match_round(3, (p[4], p[3]), (p[2], p[5]), 9, 11),
    ]

    board = compute_leaderboard(list(p.values()), rounds)

    assert [line.id for line in board] == [2, 5, 4, 1, 3, 6]
    assert [line.display_rank for line in board] == [1, 1, 3, 3, 5, 5]
    assert LeaderboardCalculator().head_to_head(4, 1, rounds) == (1, 0)


def test_leaderboard_is_idempotent():
    p = _players(4)
    rounds = [
        _single_match_round(1, p[:2], p[2:], 11, 7),
        _single_match_round(2, (p[0], p[2]), (p[1], p[3]), 4, 11),
    ]

    first = [line.to_dict() for line in compute_leaderboard(p, rounds)]
    second = [line.to_dict() for line in compute_leaderboard(p, rounds)]

    assert first == second


def test_tied_completed_match_counts_as_tie():
    p = _players(4)
    rounds = [_single_match_round(1, p[:2], p[2:], 5, 5)]

    for line in compute_leaderboard(p, rounds):
        assert (line.wins, line.losses, line.ties) == (0, 0, 1)
        assert line.games_played == 1
        assert line.points_for == 5
        assert line.display_rank == 1


def test_players_off_the_roster_are_ignored():
    p = _players(4)
    rounds = [_single_match_round(1, p[:2], p[2:], 11, 7)]

    board = compute_leaderboard(p[:3], rounds)

    assert [line.id for line in board] == [1, 2, 3]
    assert board[2].losses == 1


def test_stats_serialize_with_camel_case_keys():
    p = _players(4)
    line = compute_leaderboard(p, [_single_match_round(1, p[:2], p[2:], 11, 7)])[0]

    data = line.to_dict()
    assert data["pointsFor"] == 11
    assert data["pointsAgainst"] == 7
    assert data["gamesPlayed"] == 1
    assert data["displayRank"] == 1


def test_points_per_game():
    p = _players(4)
    rounds = [
        _single_match_round(1, p[:2], p[2:], 11, 7),
        _single_match_round(2, (p[0], p[2]), (p[1], p[3]), 4, 11),
    ]

    board = {line.id: line for line in compute_leaderboard(p, rounds)}

    assert board[1].ppg == 7.5
    assert board[4].ppg == 9.0
    assert compute_leaderboard(p, [])[0].ppg == 0.0
