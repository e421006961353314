"""Score entry and match completion.

Every operation takes a round and returns a new one; the input round is
never modified, so a rejected update leaves the caller's state untouched.
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

from dataclasses import replace
from typing import Union

from pickleflow.constants import TEAM_ONE, TEAM_TWO
from pickleflow.exceptions import (
    InvalidResultException,
    MatchStateException,
    TiedScoreException,
)
from pickleflow.models import Round
from pickleflow.type_hints import TeamNumber
from pickleflow.utils import setup_logger
from pickleflow.utils.validation import sanitize_score

logger = setup_logger(__name__)


def set_score(
    round_data: Round, match_id: str, team: TeamNumber, raw_input: Union[str, int]
) -> Round:
    """Store a score for one team of a match.

    Non-digit characters in ``raw_input`` are dropped; empty input stores 0.

    Args:
        round_data: Round containing the match
        match_id: Id of the match to update
        team: 1 for team1's score, 2 for team2's
        raw_input: Score as typed

    Returns:
        A new Round with the score stored

    Raises:
        MatchNotFoundException: If the round has no such match
        InvalidResultException: If ``team`` is not 1 or 2
        MatchStateException: If the match is already completed
    """
    match = round_data.get_match(match_id)
    if team not in (TEAM_ONE, TEAM_TWO):
        raise InvalidResultException(f"Team must be 1 or 2, got {team!r}")
    if match.completed:
        raise MatchStateException(
            f"Match {match_id} is completed; reopen it before changing scores"
        )

    score = sanitize_score(raw_input)
    if team == TEAM_ONE:
        updated = replace(match, score1=score)
    else:
        updated = replace(match, score2=score)

    logger.debug(
        "Round %s, %s: team %s score -> %s", round_data.number, match_id, team, score
    )
    return round_data.with_match(updated)


def finalize_match(round_data: Round, match_id: str, strict: bool = True) -> Round:
    """Mark a match completed.

    Args:
        round_data: Round containing the match
        match_id: Id of the match to finalize
        strict: Reject equal scores (a doubles game cannot end level)

    Returns:
        A new Round with the match completed

    Raises:
        MatchNotFoundException: If the round has no such match
        TiedScoreException: In strict mode, if both scores are equal
    """
    match = round_data.get_match(match_id)
    if match.completed:
        logger.debug("Match %s already completed", match_id)
        return round_data

    if strict and match.is_tied:
        raise TiedScoreException(match_id, match.score1)

    logger.info(
        "Finalized %s (round %s, court %s): %s-%s",
        match_id,
        round_data.number,
        match.court,
        match.score1,
        match.score2,
    )
    return round_data.with_match(replace(match, completed=True))


def edit_match(round_data: Round, match_id: str) -> Round:
    """Reopen a completed match so its scores can be corrected.

    Scores are kept as they were.

    Raises:
        MatchNotFoundException: If the round has no such match
    """
    match = round_data.get_match(match_id)
    if not match.completed:
        return round_data

    logger.info("Reopened %s (round %s)", match_id, round_data.number)
    return round_data.with_match(replace(match, completed=False))
