"""Schedule checker - validation of generated rounds.

Structural criteria (S1-S4) must always hold for a schedule produced by
:func:`pickleflow.scheduling.generate_schedule`. Quality criteria (Q1-Q2)
describe how fair the greedy heuristic managed to be and are reported as
warnings.
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pickleflow.constants import MATCH_ID_FORMAT, PLAYERS_PER_MATCH, TEAM_SIZE
from pickleflow.models import Player, Round
from pickleflow.scheduling import PairingHistory, active_slots
from pickleflow.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of criterion validation."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"


class ViolationType(Enum):
    """Types of criterion violations."""

    STRUCTURAL = "STRUCTURAL"  # S1-S4: Must not violate
    QUALITY = "QUALITY"  # Q1-Q2: Should minimize


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """Get the violation message."""
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for a schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=description,
    )


def _violation(
    criterion: str,
    violation_type: ViolationType,
    description: str,
    details: Dict[str, object],
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=details,
    )


class StructuralCriteriaChecker:
    """Validates structural criteria (S1-S4)."""

    def check_s1_round_size(
        self, rounds: Sequence[Round], roster_size: int, court_count: int
    ) -> CriterionResult:
        """S1: Each round fills exactly the available slots; everyone else sits out."""
        slots = active_slots(roster_size, court_count)
        expected_matches = slots // PLAYERS_PER_MATCH
        expected_sitting = roster_size - slots
        bad_rounds = [
            r.number
            for r in rounds
            if len(r.matches) != expected_matches
            or len(r.sitting_out) != expected_sitting
        ]
        if bad_rounds:
            return _violation(
                "S1",
                ViolationType.STRUCTURAL,
                f"Rounds with wrong size: {bad_rounds}",
                {
                    "rounds": bad_rounds,
                    "expected_matches": expected_matches,
                    "expected_sitting_out": expected_sitting,
                },
            )
        return _compliant(
            "S1",
            f"Every round has {expected_matches} matches and "
            f"{expected_sitting} sitting out",
        )

    def check_s2_no_double_booking(
        self, rounds: Sequence[Round], roster: Sequence[Player]
    ) -> CriterionResult:
        """S2: Every roster player appears exactly once per round."""
        roster_ids = sorted(p.id for p in roster)
        problems = []
        for round_data in rounds:
            seen = [p.id for p in round_data.active_players]
            seen.extend(p.id for p in round_data.sitting_out)
            if sorted(seen) != roster_ids:
                problems.append(round_data.number)
        if problems:
            return _violation(
                "S2",
                ViolationType.STRUCTURAL,
                f"Players missing or booked twice in rounds: {problems}",
                {"rounds": problems},
            )
        return _compliant("S2", "No player is booked twice within a round")

    def check_s3_match_shape(self, rounds: Sequence[Round]) -> CriterionResult:
        """S3: Each match is four distinct players split two against two."""
        malformed = []
        for round_data in rounds:
            for match in round_data.matches:
                if (
                    len(match.team1) != TEAM_SIZE
                    or len(match.team2) != TEAM_SIZE
                    or len(set(match.player_ids)) != PLAYERS_PER_MATCH
                ):
                    malformed.append(match.id)
        if malformed:
            return _violation(
                "S3",
                ViolationType.STRUCTURAL,
                f"Malformed matches: {malformed}",
                {"matches": malformed},
            )
        return _compliant("S3", "All matches are 2v2 with distinct players")

    def check_s4_courts_and_ids(self, rounds: Sequence[Round]) -> CriterionResult:
        """S4: Rounds are numbered 1..R, courts 1..k, ids follow r{i}-c{court}."""
        problems = []
        for index, round_data in enumerate(rounds):
            if round_data.number != index + 1:
                problems.append(f"round {round_data.number} at position {index + 1}")
            for court, match in enumerate(round_data.matches, start=1):
                expected_id = MATCH_ID_FORMAT.format(round_index=index, court=court)
                if match.court != court or match.id != expected_id:
                    problems.append(match.id)
        if problems:
            return _violation(
                "S4",
                ViolationType.STRUCTURAL,
                f"Numbering problems: {problems}",
                {"problems": problems},
            )
        return _compliant("S4", "Rounds, courts and match ids are sequential")


class QualityCriteriaChecker:
    """Validates fairness criteria (Q1-Q2)."""

    def check_q1_play_count_spread(
        self, history: PairingHistory, roster: Sequence[Player], max_spread: int = 1
    ) -> CriterionResult:
        """Q1: Games played differ by at most ``max_spread`` across players."""
        spread = history.spread(p.id for p in roster)
        if spread > max_spread:
            return _violation(
                "Q1",
                ViolationType.QUALITY,
                f"Play-count spread is {spread} (limit {max_spread})",
                {
                    "spread": spread,
                    "play_count": {p.id: history.games_played(p.id) for p in roster},
                },
            )
        return _compliant("Q1", f"Play-count spread is {spread}")

    def check_q2_repeat_partnerships(
        self, history: PairingHistory, roster: Sequence[Player]
    ) -> CriterionResult:
        """Q2: No more repeat partnerships than the roster size forces."""
        n = len(roster)
        unique_pairs = n * (n - 1) // 2
        partnerships = sum(history.teammate_count.values())
        unavoidable = max(0, partnerships - unique_pairs)
        repeats = sum(count - 1 for count in history.teammate_count.values() if count)
        if repeats > unavoidable:
            return _violation(
                "Q2",
                ViolationType.QUALITY,
                f"{repeats} repeat partnerships ({unavoidable} unavoidable)",
                {"repeats": repeats, "unavoidable": unavoidable},
            )
        return _compliant("Q2", f"{repeats} repeat partnerships, all unavoidable")


class ScheduleValidator:
    """Main schedule validator."""

    def __init__(self, max_spread: int = 1):
        self.max_spread = max_spread
        self.structural_checker = StructuralCriteriaChecker()
        self.quality_checker = QualityCriteriaChecker()

    def validate_schedule(
        self,
        roster: Sequence[Player],
        rounds: Sequence[Round],
        court_count: int,
    ) -> ValidationReport:
        """Validate a complete schedule against all criteria."""
        logger.info(
            "Validating schedule: %s rounds, %s players, %s courts",
            len(rounds),
            len(roster),
            court_count,
        )
        roster = list(roster)
        rounds = list(rounds)
        history = PairingHistory.from_rounds(rounds)

        all_results = [
            self.structural_checker.check_s1_round_size(
                rounds, len(roster), court_count
            ),
            self.structural_checker.check_s2_no_double_booking(rounds, roster),
            self.structural_checker.check_s3_match_shape(rounds),
            self.structural_checker.check_s4_courts_and_ids(rounds),
            self.quality_checker.check_q1_play_count_spread(
                history, roster, self.max_spread
            ),
            self.quality_checker.check_q2_repeat_partnerships(history, roster),
        ]

        compliant_count = sum(
            1 for r in all_results if r.status == CriterionStatus.COMPLIANT
        )
        structural_violations = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.STRUCTURAL
        ]
        quality_warnings = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.QUALITY
        ]

        overall_status = (
            CriterionStatus.VIOLATION
            if structural_violations
            else CriterionStatus.COMPLIANT
        )

        if overall_status == CriterionStatus.COMPLIANT:
            summary = (
                f"Structural criteria satisfied; {len(quality_warnings)} "
                "quality criteria flagged"
            )
        else:
            summary = (
                f"Structural violations detected - {len(structural_violations)} "
                f"criteria failed; {len(quality_warnings)} quality warnings"
            )

        logger.info("Schedule validation complete: %s", summary)

        return ValidationReport(
            total_criteria=len(all_results),
            compliant_count=compliant_count,
            violations=structural_violations,
            quality_warnings=quality_warnings,
            overall_status=overall_status,
            summary=summary,
            criteria_results=all_results,
        )


def create_schedule_validator(max_spread: int = 1) -> ScheduleValidator:
    """Create and configure schedule validator instance."""
    return ScheduleValidator(max_spread=max_spread)
