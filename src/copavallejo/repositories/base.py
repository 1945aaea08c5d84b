"""Abstract repositories the engines are given at construction."""

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

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar

from dateutil import tz

from copavallejo.exceptions import (
    MatchNotFoundException,
    NotFoundException,
    PhaseNotFoundException,
    PlayerNotFoundException,
    TeamNotFoundException,
    TournamentNotFoundException,
)
from copavallejo.models import Match, MatchStatus, Phase, Player, Team, Tournament

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Document store for one entity type, addressed by id.

    Subclasses implement ``get``, ``save``, ``delete`` and ``all``. ``require``
    is shared and raises the entity's not-found exception.

    Notes
    -----
    - ``save`` inserts or replaces the whole document.
    - Objects returned by ``get`` are detached copies; mutating them has no
      effect until they are saved again.
    """

    not_found: Type[NotFoundException] = NotFoundException
    entity_name: str = "Document"

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """Return the entity or None."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert or replace the entity and return it."""

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Remove the entity. Returns False when it did not exist."""

    @abstractmethod
    def all(self) -> List[T]:
        """Return every entity in insertion order."""

    def require(self, entity_id: str) -> T:
        """Return the entity or raise the repository's not-found exception."""
        entity = self.get(entity_id)
        if entity is None:
            raise self.not_found(f"{self.entity_name} not found: {entity_id}")
        return entity

    def exists(self, entity_id: str) -> bool:
        return self.get(entity_id) is not None


class TeamRepository(Repository[Team]):
    not_found = TeamNotFoundException
    entity_name = "Team"

    def find_by_name(self, name: str) -> Optional[Team]:
        """Case-insensitive lookup by team name."""
        wanted = name.strip().casefold()
        for team in self.all():
            if team.name.strip().casefold() == wanted:
                return team
        return None

    def find_by_tournament(self, tournament_id: str) -> List[Team]:
        return [t for t in self.all() if t.tournament_id == tournament_id]


class PlayerRepository(Repository[Player]):
    not_found = PlayerNotFoundException
    entity_name = "Player"

    def find_by_team(self, team_id: str) -> List[Player]:
        return [p for p in self.all() if p.team_id == team_id]

    def find_by_national_id(self, national_id: str) -> Optional[Player]:
        for player in self.all():
            if player.national_id == national_id:
                return player
        return None


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz.tzlocal())
    return moment


class MatchRepository(Repository[Match]):
    not_found = MatchNotFoundException
    entity_name = "Match"

    def find_by_phase(self, phase_id: str) -> List[Match]:
        return [m for m in self.all() if m.phase_id == phase_id]

    def find_by_tournament(self, tournament_id: str) -> List[Match]:
        return [m for m in self.all() if m.tournament_id == tournament_id]

    def find_by_team(self, team_id: str) -> List[Match]:
        return [m for m in self.all() if m.involves(team_id)]

    def find_by_matchday(self, phase_id: str, matchday: int) -> List[Match]:
        return [m for m in self.find_by_phase(phase_id) if m.matchday == matchday]

    def find_by_group(self, phase_id: str, group: str) -> List[Match]:
        return [m for m in self.find_by_phase(phase_id) if m.group == group]

    def find_upcoming(
        self, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[Match]:
        """Scheduled matches with a kick-off at or after ``now``, soonest first.

        Naive times are read as local time, so stored kick-offs with and
        without an offset compare together.
        """
        now = _aware(now or datetime.now())
        upcoming = [
            m
            for m in self.all()
            if m.status == MatchStatus.SCHEDULED
            and m.scheduled_at is not None
            and _aware(m.scheduled_at) >= now
        ]
        upcoming.sort(key=lambda m: _aware(m.scheduled_at))
        return upcoming[:limit] if limit is not None else upcoming


class PhaseRepository(Repository[Phase]):
    not_found = PhaseNotFoundException
    entity_name = "Phase"

    def find_by_tournament(self, tournament_id: str) -> List[Phase]:
        """Phases of a tournament ordered by their order index."""
        phases = [p for p in self.all() if p.tournament_id == tournament_id]
        return sorted(phases, key=lambda p: p.order)


class TournamentRepository(Repository[Tournament]):
    not_found = TournamentNotFoundException
    entity_name = "Tournament"
