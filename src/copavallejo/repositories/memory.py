"""In-memory repositories backed by serialized documents."""

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

from copy import deepcopy
from typing import Any, Dict, List, Optional

from copavallejo.models import Match, Phase, Player, Team, Tournament
from copavallejo.repositories.base import (
    MatchRepository,
    PhaseRepository,
    PlayerRepository,
    TeamRepository,
    TournamentRepository,
)
from copavallejo.utils import setup_logger

logger = setup_logger(__name__)


class _DocumentMixin:
    """Stores entities as ``to_dict`` documents keyed by id."""

    model: Any = None

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}

    def get(self, entity_id: str) -> Optional[Any]:
        document = self._documents.get(entity_id)
        if document is None:
            return None
        return self.model.from_dict(deepcopy(document))

    def save(self, entity: Any) -> Any:
        self._documents[entity.id] = entity.to_dict()
        logger.debug(f"Saved {self.model.__name__} {entity.id}")
        return entity

    def delete(self, entity_id: str) -> bool:
        if self._documents.pop(entity_id, None) is None:
            return False
        logger.debug(f"Deleted {self.model.__name__} {entity_id}")
        return True

    def all(self) -> List[Any]:
        return [self.model.from_dict(deepcopy(d)) for d in self._documents.values()]

    def __len__(self) -> int:
        return len(self._documents)

    def dump(self) -> List[Dict[str, Any]]:
        """Return a copy of every stored document."""
        return deepcopy(list(self._documents.values()))

    def load(self, documents: List[Dict[str, Any]]) -> None:
        """Replace the contents with the given documents.

        Each document is parsed once so malformed data fails here rather
        than on first access.
        """
        parsed = [self.model.from_dict(deepcopy(d)) for d in documents]
        self._documents = {entity.id: entity.to_dict() for entity in parsed}


class InMemoryTeamRepository(_DocumentMixin, TeamRepository):
    model = Team


class InMemoryPlayerRepository(_DocumentMixin, PlayerRepository):
    model = Player


class InMemoryMatchRepository(_DocumentMixin, MatchRepository):
    model = Match


class InMemoryPhaseRepository(_DocumentMixin, PhaseRepository):
    model = Phase


class InMemoryTournamentRepository(_DocumentMixin, TournamentRepository):
    model = Tournament
