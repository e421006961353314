"""A player on the session roster."""

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
from typing import Any, Dict

from pickleflow.exceptions import InvalidPlayerDataException


@dataclass(frozen=True)
class Player:
    """
    A registered player.

    Identity is by ``id``: two players with the same name are still different
    players, and a renamed player is still the same one.

    Attributes
    ----------
    id : int
        Unique identifier, stable for the lifetime of the session.
    name : str
        Display name.
    """

    id: int
    name: str

    def renamed(self, name: str) -> "Player":
        """Return a copy of this player with a new name."""
        return Player(id=self.id, name=name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        try:
            player_id = int(data["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidPlayerDataException(f"Invalid player id in {data!r}") from e
        return cls(id=player_id, name=str(data.get("name", "")))
