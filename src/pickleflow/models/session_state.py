"""Exportable snapshot of a session (roster, schedule and settings)."""

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

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from pickleflow.constants import REQUIRED_IMPORT_KEYS
from pickleflow.exceptions import MalformedImportException, PickleFlowException
from pickleflow.models.player import Player
from pickleflow.models.round_data import Round
from pickleflow.models.session_config import SessionConfig


@dataclass
class SessionState:
    """Everything needed to resume, rescore or reschedule a session.

    Attributes
    ----------
    players : list of Player
        The roster, in display order.
    rounds : list of Round
        The current schedule (may be empty).
    config : SessionConfig
        Court count, round count, round duration and score strictness.
    current_round : int
        Index of the round being played (0-based).
    exported_at : datetime or None
        When the snapshot was written, if known.
    """

    players: List[Player] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)
    config: SessionConfig = field(default_factory=SessionConfig)
    current_round: int = 0
    exported_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the flat export shape."""
        data: Dict[str, Any] = {
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
        }
        data.update(self.config.to_dict())
        data["currentRound"] = self.current_round
        if self.exported_at is not None:
            data["exportedAt"] = self.exported_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionState":
        """Deserialize from the flat export shape.

        Raises:
            MalformedImportException: If required fields are missing or unreadable
        """
        if not isinstance(data, dict):
            raise MalformedImportException("Session data must be a JSON object")

        missing = [key for key in REQUIRED_IMPORT_KEYS if key not in data]
        if missing:
            raise MalformedImportException(
                f"Session data is missing required fields: {', '.join(missing)}"
            )

        try:
            players = [Player.from_dict(p) for p in data["players"]]
            rounds = [Round.from_dict(r) for r in data["rounds"]]
            config = SessionConfig.from_dict(data)
            current_round = int(data.get("currentRound", 0))
            exported_at = (
                date_parser.isoparse(data["exportedAt"])
                if data.get("exportedAt")
                else None
            )
        except PickleFlowException as e:
            raise MalformedImportException(f"Invalid session data: {e}") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedImportException(f"Invalid session data: {e!r}") from e

        if rounds:
            current_round = max(0, min(current_round, len(rounds) - 1))
        else:
            current_round = 0

        return cls(
            players=players,
            rounds=rounds,
            config=config,
            current_round=current_round,
            exported_at=exported_at,
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "SessionState":
        """Parse an exported session.

        Raises:
            MalformedImportException: If ``text`` is not valid session JSON
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedImportException(f"Could not parse session file: {e}") from e
        return cls.from_dict(data)
