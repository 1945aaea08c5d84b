"""Tournament data class."""

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

from copavallejo.models.enums import TournamentStatus


@dataclass
class TournamentStatistics:
    total_matches: int = 0
    total_goals: int = 0
    teams: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_matches": self.total_matches,
            "total_goals": self.total_goals,
            "teams": self.teams,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TournamentStatistics":
        data = data or {}
        return cls(
            total_matches=int(data.get("total_matches", 0)),
            total_goals=int(data.get("total_goals", 0)),
            teams=int(data.get("teams", 0)),
        )


@dataclass
class Tournament:
    """A season of the competition.

    Attributes:
        id: Document id
        name: Display name
        year: Season year
        start_date: First day of play
        end_date: Last day of play
        status: CONFIGURING -> IN_PROGRESS -> FINISHED, or CANCELLED
        team_ids: Enrolled teams
        phase_ids: Phases in play order
        current_phase_id: Phase being played
        statistics: Aggregates refreshed on demand
    """

    id: str
    name: str
    year: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TournamentStatus = TournamentStatus.CONFIGURING
    team_ids: List[str] = field(default_factory=list)
    phase_ids: List[str] = field(default_factory=list)
    current_phase_id: Optional[str] = None
    statistics: TournamentStatistics = field(default_factory=TournamentStatistics)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "year": self.year,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "status": self.status.value,
            "team_ids": list(self.team_ids),
            "phase_ids": list(self.phase_ids),
            "current_phase_id": self.current_phase_id,
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""

        def parse_day(value: Any) -> Optional[date]:
            if isinstance(value, str):
                return date_parser.isoparse(value).date()
            return value

        return cls(
            id=data["id"],
            name=data["name"],
            year=int(data["year"]),
            start_date=parse_day(data.get("start_date")),
            end_date=parse_day(data.get("end_date")),
            status=TournamentStatus(
                data.get("status", TournamentStatus.CONFIGURING.value)
            ),
            team_ids=list(data.get("team_ids", [])),
            phase_ids=list(data.get("phase_ids", [])),
            current_phase_id=data.get("current_phase_id"),
            statistics=TournamentStatistics.from_dict(data.get("statistics")),
        )
