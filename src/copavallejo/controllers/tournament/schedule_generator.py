"""Schedule generation for league, group and knockout phases.

The pairing functions at module level are pure and work on ordered lists of
team ids. ``ScheduleGenerator`` turns their output into persisted matches.
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

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from copavallejo.constants import GROUP_LETTERS
from copavallejo.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
    PhaseStateException,
)
from copavallejo.models import Match, Phase, PhaseFormat, PhaseStatus
from copavallejo.repositories import MatchRepository, PhaseRepository
from copavallejo.type_hints import GroupDraw, MaybeTeamId, TeamId
from copavallejo.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class PlannedFixture(NamedTuple):
    home: TeamId
    away: TeamId
    matchday: int
    group: Optional[str] = None
    is_knockout: bool = False


@dataclass
class KnockoutDraw:
    fixtures: List[PlannedFixture]
    bye: MaybeTeamId = None


def league_fixtures(
    participants: Sequence[TeamId],
    double_round_robin: bool = False,
    group: Optional[str] = None,
) -> List[PlannedFixture]:
    """Pair every team with every other team once, or twice mirrored.

    For teams at indices ``i < j`` the first leg is ``i`` at home to ``j`` on
    matchday ``i + 1``. The return leg swaps home and away and is played on
    matchday ``n + i``.

    Args:
        participants: Team ids in seeding order
        double_round_robin: Add the mirrored return leg
        group: Group letter stamped on every fixture

    Returns:
        Fixtures ordered by ``i`` then ``j``, first legs before return legs
        for each pair
    """
    n = len(participants)
    fixtures: List[PlannedFixture] = []
    for i in range(n):
        for j in range(i + 1, n):
            home, away = participants[i], participants[j]
            fixtures.append(PlannedFixture(home, away, i + 1, group))
            if double_round_robin:
                fixtures.append(PlannedFixture(away, home, n + i, group))
    return fixtures


def group_draw(participants: Sequence[TeamId], number_of_groups: int) -> GroupDraw:
    """Deal teams into groups in turn: index ``k`` goes to group ``k mod g``.

    Raises:
        InvalidConfigurationException: If the group count is below 1 or
            above the number of available letters
    """
    if not 1 <= number_of_groups <= len(GROUP_LETTERS):
        raise InvalidConfigurationException(
            f"numberOfGroups must be between 1 and {len(GROUP_LETTERS)}"
        )
    groups: GroupDraw = {GROUP_LETTERS[g]: [] for g in range(number_of_groups)}
    for k, team_id in enumerate(participants):
        groups[GROUP_LETTERS[k % number_of_groups]].append(team_id)
    return groups


def group_fixtures(
    participants: Sequence[TeamId],
    number_of_groups: int,
    double_round_robin: bool = False,
) -> List[PlannedFixture]:
    """Round robin inside each group, groups in letter order."""
    fixtures: List[PlannedFixture] = []
    for letter, members in group_draw(participants, number_of_groups).items():
        if len(members) < 2:
            logger.warning(f"Group {letter} has {len(members)} team(s), no fixtures")
        fixtures.extend(league_fixtures(members, double_round_robin, letter))
    return fixtures


def knockout_fixtures(
    participants: Sequence[TeamId], two_legs: bool = False
) -> KnockoutDraw:
    """Pair teams in order: (0, 1), (2, 3), ...

    Every tie is played on matchday 1; with ``two_legs`` the reversed fixture
    follows on matchday 2. With an odd number of teams the last one gets a
    bye.
    """
    fixtures: List[PlannedFixture] = []
    for k in range(0, len(participants) - 1, 2):
        home, away = participants[k], participants[k + 1]
        fixtures.append(PlannedFixture(home, away, 1, is_knockout=True))
        if two_legs:
            fixtures.append(PlannedFixture(away, home, 2, is_knockout=True))
    bye = participants[-1] if len(participants) % 2 == 1 else None
    return KnockoutDraw(fixtures, bye)


class ScheduleGenerator:
    """Builds and persists the matches of a phase.

    Generation is all-or-nothing: either every match is saved and the phase
    moves to IN_PROGRESS, or nothing is stored and the phase is unchanged.
    """

    def __init__(self, phase_repo: PhaseRepository, match_repo: MatchRepository):
        self.phases = phase_repo
        self.matches = match_repo

    def plan(self, phase: Phase) -> List[PlannedFixture]:
        """Check the phase and return its fixtures without saving anything.

        Raises:
            PhaseStateException: If the phase is not CONFIGURING
            InvalidConfigurationException: With fewer than two distinct
                participants
            MissingConfigurationException: For a GROUPS phase without
                numberOfGroups and teamsPerGroup
        """
        if phase.status != PhaseStatus.CONFIGURING:
            raise PhaseStateException(
                f"Phase {phase.name} is {phase.status.value}; "
                "fixtures can only be generated while configuring"
            )
        participants = list(phase.participants)
        if len(participants) < 2:
            raise InvalidConfigurationException(
                f"Phase {phase.name} needs at least 2 participants"
            )
        if len(set(participants)) != len(participants):
            raise InvalidConfigurationException(
                f"Phase {phase.name} lists a team more than once"
            )

        config = phase.config
        if phase.format == PhaseFormat.LEAGUE:
            return league_fixtures(participants, config.double_round_robin)

        if phase.format == PhaseFormat.GROUPS:
            if not config.has_group_setup:
                raise MissingConfigurationException(
                    "A group phase needs numberOfGroups and teamsPerGroup"
                )
            expected = config.number_of_groups * config.teams_per_group
            if expected != len(participants):
                logger.warning(
                    f"Phase {phase.name}: {config.number_of_groups} groups of "
                    f"{config.teams_per_group} expect {expected} teams, "
                    f"got {len(participants)}"
                )
            return group_fixtures(
                participants, config.number_of_groups, config.double_round_robin
            )

        draw = knockout_fixtures(participants, config.double_round_robin)
        if draw.bye is not None:
            logger.info(f"Phase {phase.name}: {draw.bye} receives a bye")
        return draw.fixtures

    def generate(self, phase_id: str) -> List[Match]:
        """Create, save and attach every match of a phase.

        Returns:
            The saved matches in fixture order

        Raises:
            PhaseNotFoundException: If the phase does not exist
            Any exception raised by :meth:`plan` or by the repositories; in
            that case no match remains stored and the phase is unchanged
        """
        phase = self.phases.require(phase_id)
        fixtures = self.plan(phase)
        matches = [self._build_match(phase, fixture) for fixture in fixtures]

        saved: List[str] = []
        try:
            for match in matches:
                self.matches.save(match)
                saved.append(match.id)
        except Exception:
            logger.error(
                f"Saving fixtures of phase {phase.name} failed, "
                f"removing {len(saved)} saved match(es)"
            )
            self._discard(saved)
            raise

        previous: Tuple[List[str], PhaseStatus] = (list(phase.match_ids), phase.status)
        for match in matches:
            phase.add_match_id(match.id)
        phase.status = PhaseStatus.IN_PROGRESS
        try:
            self.phases.save(phase)
        except Exception:
            logger.error(f"Saving phase {phase.name} failed, removing its fixtures")
            phase.match_ids, phase.status = previous
            self._discard(saved)
            raise

        logger.info(
            f"Generated {len(matches)} {phase.format.value} match(es) "
            f"for phase {phase.name}"
        )
        return matches

    def _build_match(self, phase: Phase, fixture: PlannedFixture) -> Match:
        return Match(
            id=generate_id("match"),
            phase_id=phase.id,
            tournament_id=phase.tournament_id,
            home_team_id=fixture.home,
            away_team_id=fixture.away,
            matchday=fixture.matchday,
            group=fixture.group,
            is_knockout=fixture.is_knockout,
        )

    def _discard(self, match_ids: List[str]) -> None:
        for match_id in match_ids:
            self.matches.delete(match_id)
