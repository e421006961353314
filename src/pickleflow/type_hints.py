"""Type hints used in PickleFlow."""

from typing import FrozenSet, List, Literal, Tuple

# Player identifier (stable for the lifetime of a session)
PlayerId = int

# Which side of a match a score belongs to
TeamNumber = Literal[1, 2]

# Two players on the same side of a match
Team = Tuple["Player", "Player"]

# Unordered pair of player ids, used as a history key
PairKey = FrozenSet[PlayerId]

# A group of four players and one way of splitting it into two teams
Group = List["Player"]
TeamSplit = Tuple[Team, Team]


#  LocalWords:  PairKey TeamSplit
