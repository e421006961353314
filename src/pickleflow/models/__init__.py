from pickleflow.models.match import Match
from pickleflow.models.player import Player
from pickleflow.models.player_stats import PlayerStats
from pickleflow.models.round_data import Round
from pickleflow.models.session_config import SessionConfig
from pickleflow.models.session_state import SessionState

__all__ = [
    "Player",
    "Match",
    "Round",
    "PlayerStats",
    "SessionConfig",
    "SessionState",
]
