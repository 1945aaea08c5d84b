"""Team data class."""

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
from typing import Any, Dict, List, Optional

from copavallejo.models.enums import TeamStatus


@dataclass
class Team:
    """A team registered for the tournament.

    Attributes
    ----------
    id : str
        Document id.
    name : str
        Team name, unique across the system.
    roster : list of str
        Ordered player ids. Maintained by the player registry only.
    status : TeamStatus
        Review state of the registration.
    tournament_id : str or None
        Tournament the team is enrolled in, if any.
    delegate_id : str or None
        User account that manages the team.
    """

    id: str
    name: str
    roster: List[str] = field(default_factory=list)
    status: TeamStatus = TeamStatus.PENDING
    tournament_id: Optional[str] = None
    delegate_id: Optional[str] = None

    @property
    def roster_size(self) -> int:
        return len(self.roster)

    def has_player(self, player_id: str) -> bool:
        return player_id in self.roster

    def add_to_roster(self, player_id: str) -> None:
        """Append a player id, ignoring ids already on the roster."""
        if player_id not in self.roster:
            self.roster.append(player_id)

    def remove_from_roster(self, player_id: str) -> None:
        if player_id in self.roster:
            self.roster.remove(player_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "roster": list(self.roster),
            "status": self.status.value,
            "tournament_id": self.tournament_id,
            "delegate_id": self.delegate_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            roster=list(data.get("roster", [])),
            status=TeamStatus(data.get("status", TeamStatus.PENDING.value)),
            tournament_id=data.get("tournament_id"),
            delegate_id=data.get("delegate_id"),
        )
