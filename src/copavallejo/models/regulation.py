"""Regulation data class."""

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
from typing import Any, Dict

from copavallejo.constants import (
    MAX_AGE_GENERAL,
    MAX_EL_DORADO_PLAYERS,
    MAX_FOREIGN_PLAYERS,
    MAX_FUNDACION_PLAYERS,
    MAX_PLAYERS_PER_TEAM,
    MIN_AGE_FOREIGN,
    MIN_AGE_GENERAL,
    SHIRT_NUMBER_MAX,
    SHIRT_NUMBER_MIN,
)
from copavallejo.exceptions import InvalidConfigurationException
from copavallejo.models.enums import QuotaGroup


@dataclass(frozen=True)
class Regulation:
    """Tournament eligibility limits.

    Attributes
    ----------
    max_roster_size : int
        Maximum number of players on a team roster.
    max_foreign : int
        Maximum number of validated foreign players.
    max_el_dorado : int
        Maximum number of validated I.E. El Dorado teachers/workers.
    max_fundacion : int
        Maximum number of validated Fundación Vallejo teachers/workers/parents.
    min_age : int
        Minimum age of any player.
    max_age : int
        Maximum age of any player.
    min_age_foreign : int
        Minimum age of a foreign player.
    shirt_number_min : int
        Lowest shirt number.
    shirt_number_max : int
        Highest shirt number.
    """

    max_roster_size: int = MAX_PLAYERS_PER_TEAM
    max_foreign: int = MAX_FOREIGN_PLAYERS
    max_el_dorado: int = MAX_EL_DORADO_PLAYERS
    max_fundacion: int = MAX_FUNDACION_PLAYERS
    min_age: int = MIN_AGE_GENERAL
    max_age: int = MAX_AGE_GENERAL
    min_age_foreign: int = MIN_AGE_FOREIGN
    shirt_number_min: int = SHIRT_NUMBER_MIN
    shirt_number_max: int = SHIRT_NUMBER_MAX

    def __post_init__(self) -> None:
        if self.min_age > self.max_age:
            raise InvalidConfigurationException(
                f"min_age ({self.min_age}) is greater than max_age ({self.max_age})"
            )
        if self.shirt_number_min > self.shirt_number_max:
            raise InvalidConfigurationException("Shirt number range is empty")
        if self.max_roster_size < 1:
            raise InvalidConfigurationException("max_roster_size must be positive")

    def quota_limit(self, group: QuotaGroup) -> int:
        """Return the cap for a quota group."""
        return {
            QuotaGroup.FOREIGN: self.max_foreign,
            QuotaGroup.EL_DORADO: self.max_el_dorado,
            QuotaGroup.FUNDACION: self.max_fundacion,
        }[group]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize regulation to dictionary."""
        return {
            "max_roster_size": self.max_roster_size,
            "max_foreign": self.max_foreign,
            "max_el_dorado": self.max_el_dorado,
            "max_fundacion": self.max_fundacion,
            "min_age": self.min_age,
            "max_age": self.max_age,
            "min_age_foreign": self.min_age_foreign,
            "shirt_number_min": self.shirt_number_min,
            "shirt_number_max": self.shirt_number_max,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Regulation":
        """Deserialize regulation from dictionary, defaulting missing limits."""
        defaults = cls()
        return cls(
            **{key: int(data.get(key, value)) for key, value in defaults.to_dict().items()}
        )
