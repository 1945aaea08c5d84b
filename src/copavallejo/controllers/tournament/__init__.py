"""Phase engine: schedules, matches, standings and tournament flow."""

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

from copavallejo.controllers.tournament.match_engine import MatchEngine
from copavallejo.controllers.tournament.schedule_generator import (
    KnockoutDraw,
    PlannedFixture,
    ScheduleGenerator,
    group_draw,
    group_fixtures,
    knockout_fixtures,
    league_fixtures,
)
from copavallejo.controllers.tournament.standings_calculator import (
    StandingsCalculator,
    build_table,
)
from copavallejo.controllers.tournament.tournament_manager import TournamentManager

__all__ = [
    "KnockoutDraw",
    "MatchEngine",
    "PlannedFixture",
    "ScheduleGenerator",
    "StandingsCalculator",
    "TournamentManager",
    "build_table",
    "group_draw",
    "group_fixtures",
    "knockout_fixtures",
    "league_fixtures",
]
