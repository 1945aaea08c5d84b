"""A JSON file holding every repository of one installation."""

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

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from copavallejo.constants import STORE_FILE_EXTENSION
from copavallejo.exceptions import (
    CopaVallejoException,
    FileLoadException,
    FileSaveException,
)
from copavallejo.models import Regulation
from copavallejo.repositories.memory import (
    InMemoryMatchRepository,
    InMemoryPhaseRepository,
    InMemoryPlayerRepository,
    InMemoryTeamRepository,
    InMemoryTournamentRepository,
)
from copavallejo.utils import setup_logger

logger = setup_logger(__name__)

STORE_FORMAT_VERSION = 1


class JsonStore:
    """
    Every repository of one installation, persisted to a single JSON file.

    The file layout is::

        {
          "version": 1,
          "regulation": {...},
          "teams": [...], "players": [...], "tournaments": [...],
          "phases": [...], "matches": [...]
        }

    Parameters
    ----------
    path : str or Path
        Location of the ``.json`` file. It does not need to exist until
        ``load`` is called.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if self.path.suffix != STORE_FILE_EXTENSION:
            logger.warning(
                f"Store file {self.path} does not end in {STORE_FILE_EXTENSION}"
            )
        self.teams = InMemoryTeamRepository()
        self.players = InMemoryPlayerRepository()
        self.tournaments = InMemoryTournamentRepository()
        self.phases = InMemoryPhaseRepository()
        self.matches = InMemoryMatchRepository()
        self.regulation = Regulation()

    @classmethod
    def open(cls, path: Union[str, Path], create: bool = False) -> "JsonStore":
        """Return a store for ``path``, loading it when the file exists.

        Raises:
            FileLoadException: If the file is missing and ``create`` is False,
                or cannot be parsed
        """
        store = cls(path)
        if store.path.exists():
            store.load()
        elif not create:
            raise FileLoadException(f"Store file not found: {store.path}")
        return store

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": STORE_FORMAT_VERSION,
            "regulation": self.regulation.to_dict(),
            "teams": self.teams.dump(),
            "players": self.players.dump(),
            "tournaments": self.tournaments.dump(),
            "phases": self.phases.dump(),
            "matches": self.matches.dump(),
        }

    def load(self, path: Optional[Union[str, Path]] = None) -> None:
        """Replace the repositories' contents with the file's documents.

        Raises:
            FileLoadException: If the file cannot be read or holds invalid data
        """
        source = Path(path) if path else self.path
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FileLoadException(f"Could not read store {source}: {e}") from e

        if not isinstance(data, dict):
            raise FileLoadException(f"Store {source} does not hold a JSON object")
        version = data.get("version", STORE_FORMAT_VERSION)
        if version != STORE_FORMAT_VERSION:
            raise FileLoadException(f"Unsupported store version: {version}")

        try:
            self.regulation = Regulation.from_dict(data.get("regulation", {}))
            self.teams.load(data.get("teams", []))
            self.players.load(data.get("players", []))
            self.tournaments.load(data.get("tournaments", []))
            self.phases.load(data.get("phases", []))
            self.matches.load(data.get("matches", []))
        except (KeyError, TypeError, ValueError, CopaVallejoException) as e:
            raise FileLoadException(f"Malformed document in {source}: {e}") from e

        logger.info(
            f"Loaded store {source}: {len(self.teams)} teams, "
            f"{len(self.players)} players, {len(self.phases)} phases, "
            f"{len(self.matches)} matches"
        )

    def save(self, path: Optional[Union[str, Path]] = None) -> None:
        """Write every repository to the file.

        Raises:
            FileSaveException: If the file cannot be written
        """
        target = Path(path) if path else self.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=4, ensure_ascii=False)
        except OSError as e:
            raise FileSaveException(f"Could not write store {target}: {e}") from e
        logger.info(f"Saved store {target}")
