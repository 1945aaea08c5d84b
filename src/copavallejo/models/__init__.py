"""Data models for Copa Vallejo."""

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

from copavallejo.models.enums import (
    CardColour,
    MatchStatus,
    PhaseFormat,
    PhaseStatus,
    PlayerCategory,
    Position,
    QuotaGroup,
    TeamStatus,
    TiebreakCriterion,
    TournamentStatus,
    ValidationStatus,
)
from copavallejo.models.match import CardEvent, GoalEvent, Match, MatchResult
from copavallejo.models.phase import Phase, PhaseConfig
from copavallejo.models.player import Player
from copavallejo.models.regulation import Regulation
from copavallejo.models.standings import StandingsRow
from copavallejo.models.team import Team
from copavallejo.models.tournament import Tournament, TournamentStatistics

__all__ = [
    "CardColour",
    "CardEvent",
    "GoalEvent",
    "Match",
    "MatchResult",
    "MatchStatus",
    "Phase",
    "PhaseConfig",
    "PhaseFormat",
    "PhaseStatus",
    "Player",
    "PlayerCategory",
    "Position",
    "QuotaGroup",
    "Regulation",
    "StandingsRow",
    "Team",
    "TeamStatus",
    "TiebreakCriterion",
    "Tournament",
    "TournamentStatistics",
    "TournamentStatus",
    "ValidationStatus",
]
