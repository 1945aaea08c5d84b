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

# --- Constants ---
STORE_FILE_EXTENSION = ".json"
LOG_LEVEL_ENV_VAR = "COPAVALLEJO_LOG_LEVEL"

# Roster regulation
MAX_PLAYERS_PER_TEAM = 16
MIN_PLAYERS_PER_TEAM = 11

# Special player quotas (validated players only)
MAX_FOREIGN_PLAYERS = 3
MAX_EL_DORADO_PLAYERS = 2  # teachers and workers share the cap
MAX_FUNDACION_PLAYERS = 2  # teachers, workers and parents share the cap

# Ages
MIN_AGE_GENERAL = 16
MAX_AGE_GENERAL = 60
MIN_AGE_FOREIGN = 26

# Shirt numbers
SHIRT_NUMBER_MIN = 1
SHIRT_NUMBER_MAX = 20

# National id (cedula) length in digits
NATIONAL_ID_MIN_DIGITS = 6
NATIONAL_ID_MAX_DIGITS = 15

# Match clock
MINUTE_MIN = 0
MINUTE_MAX = 120

# Default points scheme
POINTS_WIN = 3
POINTS_DRAW = 1
POINTS_LOSS = 0

# Tie-break keys
TB_POINTS = "POINTS"
TB_GOAL_DIFFERENCE = "GOAL_DIFFERENCE"
TB_GOALS_FOR = "GOALS_FOR"
TB_GOALS_AGAINST = "GOALS_AGAINST"
TB_MATCHES_WON = "MATCHES_WON"
TB_HEAD_TO_HEAD = "HEAD_TO_HEAD"

# Tags used by the original registration system
TIEBREAK_ALIASES = {
    "PUNTOS": TB_POINTS,
    "DIFERENCIA_GOLES": TB_GOAL_DIFFERENCE,
    "GOLES_FAVOR": TB_GOALS_FOR,
    "GOLES_CONTRA": TB_GOALS_AGAINST,
    "PARTIDOS_GANADOS": TB_MATCHES_WON,
    "ENFRENTAMIENTO_DIRECTO": TB_HEAD_TO_HEAD,
}

# Default display names for tiebreaks
TIEBREAK_NAMES = {
    TB_POINTS: "Points",
    TB_GOAL_DIFFERENCE: "Goal Difference",
    TB_GOALS_FOR: "Goals For",
    TB_GOALS_AGAINST: "Goals Against",
    TB_MATCHES_WON: "Matches Won",
    TB_HEAD_TO_HEAD: "Head-to-Head",
}

# Default order used for sorting if not configured otherwise
DEFAULT_TIEBREAK_ORDER = [
    TB_POINTS,
    TB_GOAL_DIFFERENCE,
    TB_GOALS_FOR,
]

# Group labels for the GROUPS format
GROUP_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Error messages. Templates are formatted with the active regulation limits.
ERR_ROSTER_FULL = "Team already has the maximum of {limit} players"
ERR_FOREIGN_QUOTA = "Team already has the maximum of {limit} foreign players"
ERR_EL_DORADO_QUOTA = (
    "Team already has the maximum of {limit} I.E. El Dorado teachers/workers"
)
ERR_FUNDACION_QUOTA = (
    "Team already has the maximum of {limit} Fundación Vallejo teachers/workers/parents"
)
ERR_AGE_RANGE = "Age must be between {minimum} and {maximum} years"
ERR_FOREIGN_MIN_AGE = "Foreign players must be at least {minimum} years old"
ERR_SHIRT_NUMBER_RANGE = "Shirt number must be between {minimum} and {maximum}"
ERR_DUPLICATE_NATIONAL_ID = "A player with this national id is already registered"
ERR_DUPLICATE_SHIRT_NUMBER = "This shirt number is already taken in the team"
ERR_DUPLICATE_TEAM_NAME = "A team with this name already exists"
