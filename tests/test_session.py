import json
import random

import pytest

from pickleflow import Session
from pickleflow.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    InvalidConfigurationException,
    InvalidPlayerDataException,
    MalformedImportException,
    PlayerNotFoundException,
    RoundNotFoundException,
    TiedScoreException,
)
from pickleflow.models import Player, SessionConfig


def _session(count=8, **config):
    players = [Player(id=i, name=f"Player {i}") for i in range(1, count + 1)]
    settings = {"court_count": 2, "num_rounds": 3}
    settings.update(config)
    return Session(
        players=players, config=SessionConfig(**settings), rng=random.Random(17)
    )


def test_new_session_has_default_roster():
    session = Session()

    assert len(session.players) == 12
    assert session.players[0].name == "Alex"
    assert session.rounds == []
    assert session.current_round is None


def test_add_player_strips_name_and_assigns_next_id():
    session = _session(4)
    player = session.add_player("  Dana  ")

    assert player.name == "Dana"
    assert player.id == 5
    assert session.players[-1] == player


def test_add_player_rejects_blank_and_duplicate_names():
    session = _session(4)

    with pytest.raises(InvalidPlayerDataException):
        session.add_player("   ")
    with pytest.raises(DuplicatePlayerException):
        session.add_player("player 1")
    assert len(session.players) == 4


def test_remove_player():
    session = _session(4)

    assert session.remove_player(2)
    assert not session.remove_player(2)
    assert [p.id for p in session.players] == [1, 3, 4]


def test_removed_player_id_is_never_reused():
    session = _session(5, court_count=1, num_rounds=5)
    session.generate_schedule()
    for index, round_data in enumerate(session.rounds):
        for match in round_data.matches:
            session.set_score(match.id, 1, "11", round_index=index)
            session.set_score(match.id, 2, "7", round_index=index)
            session.finalize_match(match.id, round_index=index)

    session.remove_player(5)
    newcomer = session.add_player("Newcomer")

    assert newcomer.id == 6
    line = next(line for line in session.leaderboard() if line.id == newcomer.id)
    assert line.games_played == 0
    assert line.points_for == 0


def test_ids_stay_fresh_without_a_schedule():
    session = _session(4)
    session.remove_player(4)

    assert session.add_player("Dana").id == 5


def test_imported_session_does_not_reuse_scheduled_ids():
    source = _session(5, court_count=1, num_rounds=2)
    source.generate_schedule()
    source.remove_player(5)

    restored = Session.from_json(source.to_json())

    assert restored.add_player("Newcomer").id == 6


def test_rename_player():
    session = _session(4)

    renamed = session.rename_player(3, "Robin")
    assert renamed == Player(id=3, name="Robin")
    assert session.get_player(3).name == "Robin"

    session.rename_player(3, "ROBIN")
    with pytest.raises(DuplicatePlayerException):
        session.rename_player(4, "robin")
    with pytest.raises(PlayerNotFoundException):
        session.rename_player(99, "Nobody")


def test_generate_schedule_uses_settings():
    session = _session(10, court_count=2, num_rounds=5)
    rounds = session.generate_schedule()

    assert len(rounds) == 5
    assert session.current_round is rounds[0]
    assert all(len(r.matches) == 2 for r in rounds)


def test_failed_generation_keeps_existing_schedule():
    session = _session(5)
    rounds = session.generate_schedule()
    session.remove_player(5)
    session.remove_player(4)

    with pytest.raises(InsufficientPlayersException):
        session.generate_schedule()
    assert session.rounds == rounds

    session.config.court_count = 0
    with pytest.raises(InvalidConfigurationException):
        session.generate_schedule()
    assert session.rounds == rounds


def test_regenerating_resets_current_round():
    session = _session()
    session.generate_schedule()
    session.next_round()

    session.generate_schedule()
    assert session.current_round_index == 0


def test_scores_flow_into_leaderboard():
    session = _session()
    session.generate_schedule()
    match = session.current_round.matches[0]

    session.set_score(match.id, 1, "11")
    session.set_score(match.id, 2, "7")
    session.finalize_match(match.id)

    assert session.current_round.get_match(match.id).completed
    board = session.leaderboard()
    leaders = {line.id for line in board if line.wins == 1}
    assert leaders == {p.id for p in match.team1}
    assert board[0].display_rank == 1


def test_strict_session_rejects_ties():
    session = _session()
    session.generate_schedule()
    match = session.current_round.matches[0]
    session.set_score(match.id, 1, "5")
    session.set_score(match.id, 2, "5")

    with pytest.raises(TiedScoreException):
        session.finalize_match(match.id)
    assert not session.current_round.get_match(match.id).completed


def test_relaxed_session_records_ties():
    session = _session(strict_scores=False)
    session.generate_schedule()
    match = session.current_round.matches[0]
    session.set_score(match.id, 1, "5")
    session.set_score(match.id, 2, "5")
    session.finalize_match(match.id)

    tied = [line for line in session.leaderboard() if line.ties == 1]
    assert len(tied) == 4


def test_edit_match_reopens_current_round_match():
    session = _session()
    session.generate_schedule()
    match = session.current_round.matches[1]
    session.set_score(match.id, 1, "3")
    session.set_score(match.id, 2, "11")
    session.finalize_match(match.id)

    session.edit_match(match.id)
    reopened = session.current_round.get_match(match.id)
    assert not reopened.completed
    assert (reopened.score1, reopened.score2) == (3, 11)


def test_next_round_stops_at_the_last_round():
    session = _session(num_rounds=3)
    assert not session.next_round()

    session.generate_schedule()
    assert session.next_round()
    assert session.next_round()
    assert session.is_last_round
    assert not session.next_round()
    assert session.current_round_index == 2
    assert session.current_round.matches[0].id == "r2-c1"


def test_round_lookup_outside_schedule():
    session = _session()
    with pytest.raises(RoundNotFoundException):
        session.set_score("r0-c1", 1, "11")

    session.generate_schedule()
    with pytest.raises(RoundNotFoundException):
        session.get_round(3)


def test_scores_can_target_an_earlier_round():
    session = _session()
    session.generate_schedule()
    session.next_round()

    session.set_score("r0-c1", 1, "11", round_index=0)
    assert session.get_round(0).get_match("r0-c1").score1 == 11
    assert session.current_round.matches[0].score1 == 0


def test_json_round_trip():
    session = _session()
    session.generate_schedule()
    match = session.current_round.matches[0]
    session.set_score(match.id, 1, "11")
    session.set_score(match.id, 2, "9")
    session.finalize_match(match.id)
    session.next_round()

    text = session.to_json()
    assert "exportedAt" in json.loads(text)

    restored = Session.from_json(text)
    assert restored.players == session.players
    assert restored.rounds == session.rounds
    assert restored.config == session.config
    assert restored.current_round_index == 1
    assert [line.to_dict() for line in restored.leaderboard()] == [
        line.to_dict() for line in session.leaderboard()
    ]


def test_failed_import_keeps_state():
    session = _session()
    rounds = session.generate_schedule()
    players = list(session.players)

    with pytest.raises(MalformedImportException):
        session.import_json('{"players": []}')
    with pytest.raises(MalformedImportException):
        Session.from_json("not json at all")

    assert session.rounds == rounds
    assert session.players == players


def test_import_replaces_state():
    source = _session(6, court_count=1, num_rounds=2)
    source.generate_schedule()
    target = _session()

    target.import_json(source.to_json())

    assert target.players == source.players
    assert target.rounds == source.rounds
    assert target.court_count == 1
    assert target.num_rounds == 2
