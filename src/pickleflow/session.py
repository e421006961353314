"""Main Session class - orchestrates roster, schedule, scores and standings.

This is the interface a front end drives: it owns the one piece of mutable
state (roster plus rounds) and delegates every decision to the pure
scheduling, scoring and standings functions.
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
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from pickleflow import scoring
from pickleflow.constants import DEFAULT_PLAYERS
from pickleflow.exceptions import (
    DuplicatePlayerException,
    PickleFlowException,
    PlayerNotFoundException,
    RoundNotFoundException,
)
from pickleflow.models import Player, PlayerStats, Round, SessionConfig, SessionState
from pickleflow.scheduling import generate_schedule
from pickleflow.standings import compute_leaderboard
from pickleflow.type_hints import TeamNumber
from pickleflow.utils import setup_logger
from pickleflow.utils.validation import validate_player_name_strict

logger = setup_logger(__name__)


class Session:
    """One open-play session.

    The Session keeps the roster, the generated rounds and the index of the
    round being played. Rounds are replaced wholesale by every score update
    so a failed update never leaves a half-changed round behind.
    """

    def __init__(
        self,
        players: Optional[Iterable[Player]] = None,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize a new session.

        Args
        ----
        players: Initial roster; the default roster when omitted
        config: Court count, round count, duration and score strictness
        rng: Random source handed to the scheduler
        """
        self.config = config if config is not None else SessionConfig()
        if players is None:
            players = [Player.from_dict(p) for p in DEFAULT_PLAYERS]
        self.players: List[Player] = list(players)
        self.rounds: List[Round] = []
        self.current_round_index = 0
        self._rng = rng
        self._last_player_id = self._highest_known_id()

    # ========== Properties ==========

    @property
    def court_count(self) -> int:
        return self.config.court_count

    @court_count.setter
    def court_count(self, value: int) -> None:
        self.config.court_count = value

    @property
    def num_rounds(self) -> int:
        return self.config.num_rounds

    @num_rounds.setter
    def num_rounds(self, value: int) -> None:
        self.config.num_rounds = value

    @property
    def current_round(self) -> Optional[Round]:
        """The round being played, or None before a schedule exists."""
        if not self.rounds:
            return None
        return self.rounds[self.current_round_index]

    @property
    def is_last_round(self) -> bool:
        return bool(self.rounds) and self.current_round_index == len(self.rounds) - 1

    # ========== Player Management ==========

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def _highest_known_id(self) -> int:
        """Largest id on the roster or anywhere in the schedule."""
        ids = [p.id for p in self.players]
        for round_data in self.rounds:
            ids.extend(p.id for p in round_data.active_players)
            ids.extend(p.id for p in round_data.sitting_out)
        return max(ids, default=0)

    def _next_player_id(self) -> int:
        # Ids of removed players are never handed out again
        self._last_player_id = max(self._last_player_id, self._highest_known_id()) + 1
        return self._last_player_id

    def _check_name_free(self, name: str, ignore_id: Optional[int] = None) -> None:
        folded = name.casefold()
        for player in self.players:
            if player.id != ignore_id and player.name.casefold() == folded:
                raise DuplicatePlayerException(f"Player {name!r} is already registered")

    def add_player(self, name: str) -> Player:
        """Add a player to the roster.

        Args:
            name: Display name; surrounding whitespace is dropped

        Returns:
            The new Player

        Raises:
            InvalidPlayerDataException: If the name is empty
            DuplicatePlayerException: If the name is taken (case-insensitive)
        """
        name = validate_player_name_strict(name)
        self._check_name_free(name)
        player = Player(id=self._next_player_id(), name=name)
        self.players.append(player)
        logger.info(f"Added player: {player.name} ({player.id})")
        return player

    def remove_player(self, player_id: int) -> bool:
        """Remove a player from the roster.

        Existing rounds are left as they are; matches the player already
        played still count for everyone else.

        Returns:
            True if removed, False if not found
        """
        player = self.get_player(player_id)
        if player is None:
            return False
        self.players.remove(player)
        logger.info(f"Removed player: {player.name} ({player_id})")
        return True

    def rename_player(self, player_id: int, name: str) -> Player:
        """Give a player a new display name.

        Raises:
            PlayerNotFoundException: If no player has ``player_id``
            InvalidPlayerDataException: If the name is empty
            DuplicatePlayerException: If another player already uses the name
        """
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotFoundException(f"No player with id {player_id}")
        name = validate_player_name_strict(name)
        self._check_name_free(name, ignore_id=player_id)

        renamed = player.renamed(name)
        self.players[self.players.index(player)] = renamed
        logger.info(f"Renamed player {player_id}: {player.name} -> {name}")
        return renamed

    # ========== Round Management ==========

    def generate_schedule(self) -> List[Round]:
        """Replace the schedule with freshly generated rounds.

        On failure the current schedule is kept untouched.

        Raises:
            InvalidConfigurationException: If the session settings are invalid
            InsufficientPlayersException: If fewer than four players are registered
        """
        self.config.validate()
        try:
            rounds = generate_schedule(
                self.players,
                self.config.num_rounds,
                self.config.court_count,
                rng=self._rng,
            )
        except PickleFlowException as e:
            logger.warning(f"Schedule not generated: {e}")
            raise

        self.rounds = rounds
        self.current_round_index = 0
        logger.info(
            f"New schedule: {len(rounds)} rounds on {self.config.court_count} courts"
        )
        return rounds

    def get_round(self, round_index: Optional[int] = None) -> Round:
        """Get a round by 0-based index (the current round by default).

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        if round_index is None:
            round_index = self.current_round_index
        if not 0 <= round_index < len(self.rounds):
            raise RoundNotFoundException(f"Round index {round_index} does not exist")
        return self.rounds[round_index]

    def next_round(self) -> bool:
        """Move on to the next round.

        Returns:
            True if advanced, False if already on the last round (or no schedule)
        """
        if not self.rounds or self.is_last_round:
            return False
        self.current_round_index += 1
        logger.info(f"Advanced to round {self.current_round_index + 1}")
        return True

    # ========== Result Management ==========

    def _replace_round(self, round_index: Optional[int], updated: Round) -> Round:
        index = self.current_round_index if round_index is None else round_index
        self.rounds[index] = updated
        return updated

    def set_score(
        self,
        match_id: str,
        team: TeamNumber,
        raw_input: Union[str, int],
        round_index: Optional[int] = None,
    ) -> Round:
        """Store a (sanitized) score for one team of a match."""
        round_data = self.get_round(round_index)
        updated = scoring.set_score(round_data, match_id, team, raw_input)
        return self._replace_round(round_index, updated)

    def finalize_match(self, match_id: str, round_index: Optional[int] = None) -> Round:
        """Mark a match completed, honouring the session's tie rule.

        Raises:
            TiedScoreException: In strict mode, if the scores are level
        """
        round_data = self.get_round(round_index)
        try:
            updated = scoring.finalize_match(
                round_data, match_id, strict=self.config.strict_scores
            )
        except PickleFlowException as e:
            logger.warning(f"Could not finalize {match_id}: {e}")
            raise
        return self._replace_round(round_index, updated)

    def edit_match(self, match_id: str, round_index: Optional[int] = None) -> Round:
        """Reopen a completed match for correction."""
        round_data = self.get_round(round_index)
        updated = scoring.edit_match(round_data, match_id)
        return self._replace_round(round_index, updated)

    # ========== Standings ==========

    def leaderboard(self) -> List[PlayerStats]:
        """Current standings over all completed matches."""
        return compute_leaderboard(self.players, self.rounds)

    # ========== Serialization ==========

    def to_state(self, exported_at: Optional[datetime] = None) -> SessionState:
        return SessionState(
            players=list(self.players),
            rounds=list(self.rounds),
            config=self.config,
            current_round=self.current_round_index,
            exported_at=exported_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize session to the export shape."""
        return self.to_state().to_dict()

    def to_json(self) -> str:
        """Export the session, stamped with the current time."""
        return self.to_state(exported_at=datetime.now(timezone.utc)).to_json()

    @classmethod
    def from_state(
        cls, state: SessionState, rng: Optional[random.Random] = None
    ) -> "Session":
        session = cls(players=state.players, config=state.config, rng=rng)
        session.rounds = list(state.rounds)
        session.current_round_index = state.current_round
        return session

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Deserialize session from dictionary.

        Raises:
            MalformedImportException: If required fields are missing
        """
        return cls.from_state(SessionState.from_dict(data))

    @classmethod
    def from_json(cls, text: str) -> "Session":
        """Load an exported session.

        Raises:
            MalformedImportException: If ``text`` is not a valid export
        """
        session = cls.from_state(SessionState.from_json(text))
        logger.info(
            f"Loaded session: {len(session.players)} players, "
            f"{len(session.rounds)} rounds"
        )
        return session

    def import_json(self, text: str) -> None:
        """Replace this session's state with an exported one.

        The current state is kept if the import fails.

        Raises:
            MalformedImportException: If ``text`` is not a valid export
        """
        try:
            state = SessionState.from_json(text)
        except PickleFlowException as e:
            logger.error(f"Import rejected: {e}")
            raise
        self.players = list(state.players)
        self.rounds = list(state.rounds)
        self.config = state.config
        self.current_round_index = state.current_round
        self._last_player_id = self._highest_known_id()
        logger.info(f"Imported session with {len(self.players)} players")
