"""Roster quota and eligibility rules.

Every function here is pure: it takes a player and the counts of the team's
current roster and returns a verdict. Nothing is loaded or saved.
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

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from copavallejo.constants import (
    ERR_AGE_RANGE,
    ERR_EL_DORADO_QUOTA,
    ERR_FOREIGN_MIN_AGE,
    ERR_FOREIGN_QUOTA,
    ERR_FUNDACION_QUOTA,
    ERR_ROSTER_FULL,
)
from copavallejo.models import (
    Player,
    PlayerCategory,
    QuotaGroup,
    Regulation,
    Team,
    ValidationStatus,
)
from copavallejo.utils import setup_logger
from copavallejo.utils.validation import validate_shirt_number

logger = setup_logger(__name__)

QUOTA_MESSAGES: Dict[QuotaGroup, str] = {
    QuotaGroup.FOREIGN: ERR_FOREIGN_QUOTA,
    QuotaGroup.EL_DORADO: ERR_EL_DORADO_QUOTA,
    QuotaGroup.FUNDACION: ERR_FUNDACION_QUOTA,
}


@dataclass
class TeamStats:
    """Counts over a team's registered players.

    Only validated players are counted per quota group and per category.
    """

    total: int = 0
    validated: int = 0
    pending: int = 0
    rejected: int = 0
    by_quota_group: Dict[QuotaGroup, int] = field(
        default_factory=lambda: {group: 0 for group in QuotaGroup}
    )
    by_category: Dict[PlayerCategory, int] = field(default_factory=dict)

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> "TeamStats":
        stats = cls()
        for player in players:
            stats.total += 1
            if player.validation_status == ValidationStatus.PENDING:
                stats.pending += 1
            elif player.validation_status == ValidationStatus.REJECTED:
                stats.rejected += 1
            else:
                stats.validated += 1
                for group in player.quota_groups:
                    stats.by_quota_group[group] += 1
                stats.by_category[player.category] = (
                    stats.by_category.get(player.category, 0) + 1
                )
        return stats

    def quota_count(self, group: QuotaGroup) -> int:
        return self.by_quota_group.get(group, 0)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "validated": self.validated,
            "pending": self.pending,
            "rejected": self.rejected,
            "by_quota_group": {g.value: n for g, n in self.by_quota_group.items()},
            "by_category": {c.value: n for c, n in self.by_category.items()},
        }


@dataclass
class AdmissionResult:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


@dataclass
class RegulationReport:
    """Outcome of a regulation check. ``errors`` lists every violated rule."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


class RosterQuotaEvaluator:
    """Checks players and rosters against a :class:`Regulation`."""

    def __init__(self, regulation: Optional[Regulation] = None):
        self.regulation = regulation or Regulation()

    def can_add_player(self, team: Team) -> AdmissionResult:
        """Whether one more player fits on the team's roster."""
        limit = self.regulation.max_roster_size
        if team.roster_size >= limit:
            return AdmissionResult(False, ERR_ROSTER_FULL.format(limit=limit))
        return AdmissionResult(True)

    def validate_player_against_regulation(
        self,
        player: Player,
        team_stats: TeamStats,
        target_status: ValidationStatus = ValidationStatus.VALIDATED,
        as_of: Optional[date] = None,
    ) -> RegulationReport:
        """Check one player against every rule and collect the violations.

        Quota headroom is only checked when the player is about to become
        VALIDATED, since only validated players count towards a quota. A
        player that is already VALIDATED is taken out of the counts first so
        re-checking a full roster does not flag its own members.

        Args:
            player: Player to check
            team_stats: Counts for the player's team
            target_status: Status the player would move to
            as_of: Day the age is computed on, today when omitted

        Returns:
            RegulationReport with ``valid`` False when any rule is broken
        """
        reg = self.regulation
        errors: List[str] = []

        if target_status == ValidationStatus.VALIDATED:
            own = 1 if player.is_validated else 0
            for group in QuotaGroup:
                if group not in player.quota_groups:
                    continue
                limit = reg.quota_limit(group)
                if team_stats.quota_count(group) - own >= limit:
                    errors.append(QUOTA_MESSAGES[group].format(limit=limit))

        age = player.age_on(as_of)
        if not reg.min_age <= age <= reg.max_age:
            errors.append(ERR_AGE_RANGE.format(minimum=reg.min_age, maximum=reg.max_age))
        if player.is_foreign and age < reg.min_age_foreign:
            errors.append(ERR_FOREIGN_MIN_AGE.format(minimum=reg.min_age_foreign))

        shirt = validate_shirt_number(
            player.shirt_number, reg.shirt_number_min, reg.shirt_number_max
        )
        if not shirt:
            errors.append(shirt.error_message)

        if errors:
            logger.debug(f"Player {player.id} fails regulation: {errors}")
        return RegulationReport(valid=not errors, errors=errors)
