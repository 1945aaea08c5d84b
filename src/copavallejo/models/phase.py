"""Phase and PhaseConfig data classes."""

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
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from copavallejo.constants import (
    DEFAULT_TIEBREAK_ORDER,
    POINTS_DRAW,
    POINTS_LOSS,
    POINTS_WIN,
)
from copavallejo.exceptions import InvalidConfigurationException
from copavallejo.models.enums import PhaseFormat, PhaseStatus, TiebreakCriterion

# Persisted key -> keys accepted when loading
_CONFIG_KEYS = {
    "pointsWin": ("pointsWin", "puntosVictoria"),
    "pointsDraw": ("pointsDraw", "puntosEmpate"),
    "pointsLoss": ("pointsLoss", "puntosDerrota"),
    "doubleRoundRobin": ("doubleRoundRobin", "partidoIdaVuelta"),
    "tieBreakCriteria": ("tieBreakCriteria", "criteriosDesempate"),
    "numberOfGroups": ("numberOfGroups", "numeroGrupos"),
    "teamsPerGroup": ("teamsPerGroup", "equiposPorGrupo"),
    "qualifiersPerGroup": ("qualifiersPerGroup", "clasificadosPorGrupo"),
}


def _lookup(data: Dict[str, Any], key: str) -> Any:
    for candidate in _CONFIG_KEYS[key]:
        if data.get(candidate) is not None:
            return data[candidate]
    return None


def _parse_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date_parser.isoparse(value).date()


@dataclass
class PhaseConfig:
    """Configuration settings for a phase.

    Attributes:
        points_win: Points awarded for a win
        points_draw: Points awarded for a draw
        points_loss: Points awarded for a loss
        double_round_robin: Play every fixture home and away (two legs in knockout)
        tiebreak_order: Standings criteria in priority order
        number_of_groups: Number of groups (GROUPS format)
        teams_per_group: Expected group size (GROUPS format)
        qualifiers_per_group: Teams advancing from each group (GROUPS format)
    """

    points_win: int = POINTS_WIN
    points_draw: int = POINTS_DRAW
    points_loss: int = POINTS_LOSS
    double_round_robin: bool = False
    tiebreak_order: List[TiebreakCriterion] = field(
        default_factory=lambda: [TiebreakCriterion(c) for c in DEFAULT_TIEBREAK_ORDER]
    )
    number_of_groups: Optional[int] = None
    teams_per_group: Optional[int] = None
    qualifiers_per_group: Optional[int] = None

    def __post_init__(self) -> None:
        self.tiebreak_order = [TiebreakCriterion.parse(c) for c in self.tiebreak_order]
        for name in ("points_win", "points_draw", "points_loss"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationException(f"{name} cannot be negative")
        if self.number_of_groups is not None and self.number_of_groups < 1:
            raise InvalidConfigurationException("numberOfGroups must be at least 1")
        if self.teams_per_group is not None and self.teams_per_group < 2:
            raise InvalidConfigurationException("teamsPerGroup must be at least 2")

    @property
    def has_group_setup(self) -> bool:
        return bool(self.number_of_groups) and bool(self.teams_per_group)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to the persisted camelCase shape."""
        data: Dict[str, Any] = {
            "pointsWin": self.points_win,
            "pointsDraw": self.points_draw,
            "pointsLoss": self.points_loss,
            "doubleRoundRobin": self.double_round_robin,
            "tieBreakCriteria": [c.value for c in self.tiebreak_order],
        }
        if self.number_of_groups is not None:
            data["numberOfGroups"] = self.number_of_groups
        if self.teams_per_group is not None:
            data["teamsPerGroup"] = self.teams_per_group
        if self.qualifiers_per_group is not None:
            data["qualifiersPerGroup"] = self.qualifiers_per_group
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PhaseConfig":
        """Deserialize configuration, defaulting every missing value.

        Both the camelCase keys and the original Spanish keys are accepted.
        An empty tie-break list falls back to the default order.
        """
        data = data or {}
        defaults = cls()

        def pick(key: str, default: Any) -> Any:
            value = _lookup(data, key)
            return default if value is None else value

        criteria = pick("tieBreakCriteria", None) or [
            c.value for c in defaults.tiebreak_order
        ]
        return cls(
            points_win=int(pick("pointsWin", defaults.points_win)),
            points_draw=int(pick("pointsDraw", defaults.points_draw)),
            points_loss=int(pick("pointsLoss", defaults.points_loss)),
            double_round_robin=bool(pick("doubleRoundRobin", False)),
            tiebreak_order=list(criteria),
            number_of_groups=pick("numberOfGroups", None),
            teams_per_group=pick("teamsPerGroup", None),
            qualifiers_per_group=pick("qualifiersPerGroup", None),
        )


@dataclass
class Phase:
    """A stage of a tournament with its own format and match set.

    Attributes:
        id: Document id
        tournament_id: Owning tournament
        name: Display name
        format: LEAGUE, GROUPS or KNOCKOUT
        order: 1-based position within the tournament
        participants: Ordered team ids; order drives pairing and tie order
        config: Points, tie-break and group settings
        status: CONFIGURING -> IN_PROGRESS -> FINISHED
        match_ids: Ids of the phase's matches, in creation order
        qualified: Team ids advancing to the next phase
        start_date: Optional first day
        end_date: Optional last day
    """

    id: str
    tournament_id: str
    name: str
    format: PhaseFormat
    order: int = 1
    participants: List[str] = field(default_factory=list)
    config: PhaseConfig = field(default_factory=PhaseConfig)
    status: PhaseStatus = PhaseStatus.CONFIGURING
    match_ids: List[str] = field(default_factory=list)
    qualified: List[str] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_configuring(self) -> bool:
        return self.status == PhaseStatus.CONFIGURING

    def add_match_id(self, match_id: str) -> None:
        if match_id not in self.match_ids:
            self.match_ids.append(match_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize phase to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "name": self.name,
            "format": self.format.value,
            "order": self.order,
            "participants": list(self.participants),
            "configuration": self.config.to_dict(),
            "status": self.status.value,
            "match_ids": list(self.match_ids),
            "qualified": list(self.qualified),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Phase":
        """Deserialize phase from dictionary."""
        return cls(
            id=data["id"],
            tournament_id=data["tournament_id"],
            name=data.get("name", ""),
            format=PhaseFormat.parse(data["format"]),
            order=int(data.get("order", 1)),
            participants=list(data.get("participants", [])),
            config=PhaseConfig.from_dict(data.get("configuration")),
            status=PhaseStatus(data.get("status", PhaseStatus.CONFIGURING.value)),
            match_ids=list(data.get("match_ids", [])),
            qualified=list(data.get("qualified", [])),
            start_date=_parse_date(data.get("start_date")),
            end_date=_parse_date(data.get("end_date")),
        )
