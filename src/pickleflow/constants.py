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

# --- Constants ---

# Match shape
TEAM_SIZE = 2
PLAYERS_PER_MATCH = 2 * TEAM_SIZE
MIN_PLAYERS = PLAYERS_PER_MATCH

# Default score for a freshly scheduled match
DEFAULT_SCORE = 0

# Team numbers used by score entry
TEAM_ONE = 1
TEAM_TWO = 2

# Session option lists offered to the user
ROUND_OPTIONS = [4, 5, 6, 8, 10, 12]
DURATION_OPTIONS = [10, 15, 20]  # minutes per round
COURT_OPTIONS = [1, 2, 3, 4, 5, 6]

# Session defaults
DEFAULT_COURT_COUNT = 3
DEFAULT_NUM_ROUNDS = 8
DEFAULT_DURATION = 15

# Upper bounds accepted by configuration validation
MAX_COURTS = 32
MAX_ROUNDS = 64

# Default roster for a brand new session
DEFAULT_PLAYERS = [
    {"id": 1, "name": "Alex"},
    {"id": 2, "name": "Jordan"},
    {"id": 3, "name": "Taylor"},
    {"id": 4, "name": "Morgan"},
    {"id": 5, "name": "Casey"},
    {"id": 6, "name": "Riley"},
    {"id": 7, "name": "Quinn"},
    {"id": 8, "name": "Parker"},
    {"id": 9, "name": "Charlie"},
    {"id": 10, "name": "Skyler"},
    {"id": 11, "name": "Sage"},
    {"id": 12, "name": "River"},
]

# Match id format: round index is 0-based, court is 1-based
MATCH_ID_FORMAT = "r{round_index}-c{court}"

# Required keys of an imported session
REQUIRED_IMPORT_KEYS = ("players", "rounds")
