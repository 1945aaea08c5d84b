"""Enumerations shared by the Copa Vallejo models."""

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

from enum import Enum
from typing import Dict, FrozenSet

from copavallejo.constants import (
    TB_GOAL_DIFFERENCE,
    TB_GOALS_AGAINST,
    TB_GOALS_FOR,
    TB_HEAD_TO_HEAD,
    TB_MATCHES_WON,
    TB_POINTS,
    TIEBREAK_ALIASES,
)
from copavallejo.exceptions import InvalidConfigurationException


class ValidationStatus(str, Enum):
    """Review state of a team or a player registration."""

    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    REJECTED = "REJECTED"


# Teams go through the same review cycle as players
TeamStatus = ValidationStatus


class Position(str, Enum):
    GOALKEEPER = "GOALKEEPER"
    DEFENDER = "DEFENDER"
    MIDFIELDER = "MIDFIELDER"
    FORWARD = "FORWARD"


class PlayerCategory(str, Enum):
    """Eligibility category a player registers under."""

    # Residents of the neighbourhood
    RESIDENT_OWNER = "RESIDENT_OWNER"
    RESIDENT_TENANT = "RESIDENT_TENANT"
    RESIDENT_SPOUSE = "RESIDENT_SPOUSE"
    RESIDENT_CHILD = "RESIDENT_CHILD"
    RESIDENT_SON_IN_LAW = "RESIDENT_SON_IN_LAW"

    NON_RESIDENT_OWNER = "NON_RESIDENT_OWNER"
    VALLEJO_POLICE = "VALLEJO_POLICE"

    # I.E. El Dorado school staff
    EL_DORADO_TEACHER = "EL_DORADO_TEACHER"
    EL_DORADO_WORKER = "EL_DORADO_WORKER"

    # Fundación Vallejo staff and families
    FUNDACION_TEACHER = "FUNDACION_TEACHER"
    FUNDACION_WORKER = "FUNDACION_WORKER"
    FUNDACION_PARENT = "FUNDACION_PARENT"


class QuotaGroup(str, Enum):
    """Roster-wide capped groups of player categories."""

    FOREIGN = "FOREIGN"
    EL_DORADO = "EL_DORADO"
    FUNDACION = "FUNDACION"


_NONE: FrozenSet[QuotaGroup] = frozenset()
_FOREIGN = frozenset({QuotaGroup.FOREIGN})
_EL_DORADO = frozenset({QuotaGroup.FOREIGN, QuotaGroup.EL_DORADO})
_FUNDACION = frozenset({QuotaGroup.FOREIGN, QuotaGroup.FUNDACION})

# Every category that is not a resident counts as foreign; institution
# categories are additionally capped by their own group.
CATEGORY_QUOTA_GROUPS: Dict[PlayerCategory, FrozenSet[QuotaGroup]] = {
    PlayerCategory.RESIDENT_OWNER: _NONE,
    PlayerCategory.RESIDENT_TENANT: _NONE,
    PlayerCategory.RESIDENT_SPOUSE: _NONE,
    PlayerCategory.RESIDENT_CHILD: _NONE,
    PlayerCategory.RESIDENT_SON_IN_LAW: _NONE,
    PlayerCategory.NON_RESIDENT_OWNER: _FOREIGN,
    PlayerCategory.VALLEJO_POLICE: _FOREIGN,
    PlayerCategory.EL_DORADO_TEACHER: _EL_DORADO,
    PlayerCategory.EL_DORADO_WORKER: _EL_DORADO,
    PlayerCategory.FUNDACION_TEACHER: _FUNDACION,
    PlayerCategory.FUNDACION_WORKER: _FUNDACION,
    PlayerCategory.FUNDACION_PARENT: _FUNDACION,
}

CATEGORY_LABELS: Dict[PlayerCategory, str] = {
    PlayerCategory.RESIDENT_OWNER: "Resident - Owner",
    PlayerCategory.RESIDENT_TENANT: "Resident - Tenant",
    PlayerCategory.RESIDENT_SPOUSE: "Resident - Spouse",
    PlayerCategory.RESIDENT_CHILD: "Resident - Child",
    PlayerCategory.RESIDENT_SON_IN_LAW: "Resident - Son-in-law",
    PlayerCategory.NON_RESIDENT_OWNER: "Non-resident Owner",
    PlayerCategory.VALLEJO_POLICE: "Vallejo Police Station",
    PlayerCategory.EL_DORADO_TEACHER: "I.E. El Dorado Teacher",
    PlayerCategory.EL_DORADO_WORKER: "I.E. El Dorado Worker",
    PlayerCategory.FUNDACION_TEACHER: "Fundación Vallejo Teacher",
    PlayerCategory.FUNDACION_WORKER: "Fundación Vallejo Worker",
    PlayerCategory.FUNDACION_PARENT: "Fundación Vallejo Parent",
}


def quota_groups_for(category: PlayerCategory) -> FrozenSet[QuotaGroup]:
    """Return the quota groups a player category counts towards."""
    return CATEGORY_QUOTA_GROUPS[PlayerCategory(category)]


def is_foreign(category: PlayerCategory) -> bool:
    """Whether a category is subject to the foreign-player rules."""
    return QuotaGroup.FOREIGN in quota_groups_for(category)


class TournamentStatus(str, Enum):
    CONFIGURING = "CONFIGURING"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class PhaseFormat(str, Enum):
    """Competition format of a phase."""

    LEAGUE = "LEAGUE"
    GROUPS = "GROUPS"
    KNOCKOUT = "KNOCKOUT"

    @classmethod
    def parse(cls, value: str) -> "PhaseFormat":
        """Parse a format, accepting the original registration system's tags."""
        if isinstance(value, cls):
            return value
        aliases = {
            "LIGA": cls.LEAGUE,
            "GRUPOS": cls.GROUPS,
            "ELIMINACION_DIRECTA": cls.KNOCKOUT,
        }
        key = str(value).strip().upper()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise InvalidConfigurationException(f"Unknown phase format: {value!r}")


class PhaseStatus(str, Enum):
    CONFIGURING = "CONFIGURING"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class MatchStatus(str, Enum):
    """Lifecycle states of a match.

    SCHEDULED -> IN_PROGRESS -> FINISHED | CANCELLED | SUSPENDED
    """

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"
    SUSPENDED = "SUSPENDED"


class CardColour(str, Enum):
    YELLOW = "YELLOW"
    RED = "RED"


class TiebreakCriterion(str, Enum):
    """Standings ordering criteria, applied left to right."""

    POINTS = TB_POINTS
    GOAL_DIFFERENCE = TB_GOAL_DIFFERENCE
    GOALS_FOR = TB_GOALS_FOR
    GOALS_AGAINST = TB_GOALS_AGAINST
    MATCHES_WON = TB_MATCHES_WON
    HEAD_TO_HEAD = TB_HEAD_TO_HEAD

    @classmethod
    def parse(cls, value: str) -> "TiebreakCriterion":
        """Parse a criterion tag, accepting the original Spanish tags.

        Raises:
            InvalidConfigurationException: If the tag is unknown
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        key = TIEBREAK_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidConfigurationException(f"Unknown tie-break criterion: {value!r}")
