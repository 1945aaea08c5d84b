"""Standings tables and qualifier extraction.

Tables are rebuilt from the stored matches on every call. Nothing here is
cached, so two calls over the same data always give the same table.
"""

# Copa Vallejo
# Copyright (C) 2025  Copa Vallejo developers
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

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from copavallejo.controllers.tournament.schedule_generator import group_draw
from copavallejo.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
    ValidationException,
)
from copavallejo.models import (
    Match,
    MatchStatus,
    Phase,
    PhaseConfig,
    PhaseFormat,
    StandingsRow,
    TiebreakCriterion,
)
from copavallejo.repositories import MatchRepository, PhaseRepository
from copavallejo.type_hints import TeamId
from copavallejo.utils import setup_logger

logger = setup_logger(__name__)

# Criterion -> row value where higher ranks first
_ROW_KEYS: Dict[TiebreakCriterion, Callable[[StandingsRow], int]] = {
    TiebreakCriterion.POINTS: lambda r: r.points,
    TiebreakCriterion.GOAL_DIFFERENCE: lambda r: r.goal_difference,
    TiebreakCriterion.GOALS_FOR: lambda r: r.goals_for,
    TiebreakCriterion.GOALS_AGAINST: lambda r: -r.goals_against,
    TiebreakCriterion.MATCHES_WON: lambda r: r.won,
}


def points_for(scored: int, conceded: int, config: PhaseConfig) -> int:
    if scored > conceded:
        return config.points_win
    if scored < conceded:
        return config.points_loss
    return config.points_draw


def _counted_matches(
    participants: Sequence[TeamId], matches: Iterable[Match]
) -> List[Match]:
    """Finished matches with a result between two participants."""
    members = set(participants)
    counted = []
    for match in matches:
        if match.status != MatchStatus.FINISHED or match.result is None:
            continue
        if match.home_team_id not in members or match.away_team_id not in members:
            logger.warning(
                f"Match {match.id} involves a team outside the phase, skipped"
            )
            continue
        counted.append(match)
    return counted


def _head_to_head_points(
    block: List[StandingsRow], matches: List[Match], config: PhaseConfig
) -> Dict[TeamId, int]:
    """Points each team in ``block`` earned in matches among the block."""
    tied = {row.team_id for row in block}
    points = {team_id: 0 for team_id in tied}
    for match in matches:
        if match.home_team_id in tied and match.away_team_id in tied:
            home, away = match.result.goals_home, match.result.goals_away
            points[match.home_team_id] += points_for(home, away, config)
            points[match.away_team_id] += points_for(away, home, config)
    return points


def _rank(
    block: List[StandingsRow],
    criteria: List[TiebreakCriterion],
    matches: List[Match],
    config: PhaseConfig,
) -> List[StandingsRow]:
    """Order ``block`` by the first criterion, then split ties on the rest.

    Head-to-head is evaluated on the teams still tied at that point, so its
    mini table changes as the block shrinks. Rows that stay level on every
    criterion keep their incoming order.
    """
    if len(block) <= 1 or not criteria:
        return block

    criterion, remaining = criteria[0], criteria[1:]
    if criterion == TiebreakCriterion.HEAD_TO_HEAD:
        h2h = _head_to_head_points(block, matches, config)

        def key(row: StandingsRow) -> int:
            return h2h[row.team_id]

    else:
        key = _ROW_KEYS[criterion]

    ordered = sorted(block, key=key, reverse=True)
    result: List[StandingsRow] = []
    tied: List[StandingsRow] = [ordered[0]]
    for row in ordered[1:]:
        if key(row) == key(tied[0]):
            tied.append(row)
        else:
            result.extend(_rank(tied, remaining, matches, config))
            tied = [row]
    result.extend(_rank(tied, remaining, matches, config))
    return result


def build_table(
    participants: Sequence[TeamId],
    matches: Iterable[Match],
    config: Optional[PhaseConfig] = None,
) -> List[StandingsRow]:
    """Aggregate finished matches into a sorted standings table.

    Args:
        participants: Team ids in phase order; one row each, and the final
            order of teams level on every criterion
        matches: Any matches; only FINISHED ones between participants count
        config: Points scheme and tie-break order

    Returns:
        Rows sorted by the tie-break criteria with 1-based positions
    """
    config = config or PhaseConfig()
    rows = {team_id: StandingsRow(team_id) for team_id in participants}
    counted = _counted_matches(participants, matches)

    for match in counted:
        home, away = match.result.goals_home, match.result.goals_away
        rows[match.home_team_id].record(home, away, points_for(home, away, config))
        rows[match.away_team_id].record(away, home, points_for(away, home, config))

    table = _rank(list(rows.values()), list(config.tiebreak_order), counted, config)
    for position, row in enumerate(table, start=1):
        row.position = position
    return table


class StandingsCalculator:
    """Computes phase tables and stores qualifiers on the phase."""

    def __init__(self, phase_repo: PhaseRepository, match_repo: MatchRepository):
        self.phases = phase_repo
        self.matches = match_repo

    def calculate(self, phase_id: str) -> List[StandingsRow]:
        """Full table of a phase over all its participants."""
        phase = self.phases.require(phase_id)
        return build_table(
            phase.participants, self.matches.find_by_phase(phase_id), phase.config
        )

    def group_tables(self, phase_id: str) -> Dict[str, List[StandingsRow]]:
        """One table per group of a GROUPS phase, keyed by group letter.

        Raises:
            InvalidConfigurationException: If the phase is not a GROUPS phase
            MissingConfigurationException: If numberOfGroups is not set
        """
        phase = self.phases.require(phase_id)
        self._require_groups(phase)
        draw = group_draw(phase.participants, phase.config.number_of_groups)
        matches = self.matches.find_by_phase(phase_id)
        return {
            letter: build_table(
                members, [m for m in matches if m.group == letter], phase.config
            )
            for letter, members in draw.items()
        }

    def get_qualifiers(self, phase_id: str, count: int) -> List[TeamId]:
        """Store and return the top ``count`` teams of the phase table.

        The phase's qualified list is replaced, so repeated calls give the
        same stored list.
        """
        if count < 0:
            raise ValidationException(f"Qualifier count cannot be negative: {count}")
        table = self.calculate(phase_id)
        return self._store_qualifiers(phase_id, [r.team_id for r in table[:count]])

    def get_group_qualifiers(
        self, phase_id: str, per_group: Optional[int] = None
    ) -> List[TeamId]:
        """Store and return the top teams of every group.

        Qualifiers are listed group by group (all of A, then all of B...).
        ``per_group`` defaults to the phase's qualifiersPerGroup.
        """
        phase = self.phases.require(phase_id)
        if per_group is None:
            per_group = phase.config.qualifiers_per_group
        if per_group is None:
            raise MissingConfigurationException(
                "qualifiersPerGroup is not configured for this phase"
            )
        if per_group < 0:
            raise ValidationException(
                f"Qualifier count cannot be negative: {per_group}"
            )
        qualified: List[TeamId] = []
        for table in self.group_tables(phase_id).values():
            qualified.extend(row.team_id for row in table[:per_group])
        return self._store_qualifiers(phase_id, qualified)

    def _store_qualifiers(self, phase_id: str, team_ids: List[TeamId]) -> List[TeamId]:
        phase = self.phases.require(phase_id)
        phase.qualified = list(team_ids)
        self.phases.save(phase)
        logger.info(f"Phase {phase.name}: {len(team_ids)} qualifier(s) stored")
        return list(team_ids)

    @staticmethod
    def _require_groups(phase: Phase) -> None:
        if phase.format != PhaseFormat.GROUPS:
            raise InvalidConfigurationException(
                f"Phase {phase.name} is {phase.format.value}, not a group phase"
            )
        if not phase.config.number_of_groups:
            raise MissingConfigurationException(
                "numberOfGroups is not configured for this phase"
            )
