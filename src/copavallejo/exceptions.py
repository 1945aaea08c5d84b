"""Exceptions for use in Copa Vallejo"""

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

from typing import List, Optional


# ========== Base Application Exception ==========


class CopaVallejoException(Exception):
    """Base exception for all Copa Vallejo errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Not Found Exceptions ==========


class NotFoundException(CopaVallejoException):
    """Base exception for references to records that do not exist.

    Callers map this family to a 404-equivalent response.
    """

    pass


class TeamNotFoundException(NotFoundException):
    """Raised when a requested team cannot be found."""

    pass


class PlayerNotFoundException(NotFoundException):
    """Raised when a requested player cannot be found."""

    pass


class MatchNotFoundException(NotFoundException):
    """Raised when a requested match cannot be found."""

    pass


class PhaseNotFoundException(NotFoundException):
    """Raised when a requested phase cannot be found."""

    pass


class TournamentNotFoundException(NotFoundException):
    """Raised when a requested tournament cannot be found."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(CopaVallejoException):
    """Base exception for bad input shape or range."""

    pass


class InvalidShirtNumberException(ValidationException):
    """Raised when a shirt number is outside the allowed range."""

    pass


class InvalidNationalIdException(ValidationException):
    """Raised when a national id is malformed."""

    pass


class InvalidMinuteException(ValidationException):
    """Raised when a goal or card minute is outside 0-120."""

    pass


class InvalidResultException(ValidationException):
    """Raised when a result is invalid (e.g., negative score, bad penalty winner)."""

    pass


class InvalidMatchException(ValidationException):
    """Raised when a match is malformed (e.g., a team playing itself)."""

    pass


class PlayerNotInMatchException(ValidationException):
    """Raised when a player belongs to neither team of a match."""

    pass


class RegulationViolationException(ValidationException):
    """Raised when a player breaks one or more tournament regulations.

    Attributes:
        errors: Every violated rule, in evaluation order
    """

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "Regulation check failed: " + ", ".join(errors))


# ========== State Conflict Exceptions ==========


class StateConflictException(CopaVallejoException):
    """Base exception for business-rule rejections.

    These are never retried automatically.
    """

    pass


class MatchStateException(StateConflictException):
    """Raised when a match is in an invalid state for the requested transition."""

    pass


class PhaseStateException(StateConflictException):
    """Raised when a phase is in an invalid state for the requested operation."""

    pass


class TournamentStateException(StateConflictException):
    """Raised when a tournament is in an invalid state for the requested operation."""

    pass


class PlayerStateException(StateConflictException):
    """Raised when a player cannot be changed in its current validation state."""

    pass


class RosterFullException(StateConflictException):
    """Raised when a team has no room left for another player."""

    pass


class DuplicateShirtNumberException(StateConflictException):
    """Raised when a shirt number is already taken in the team."""

    pass


class DuplicateNationalIdException(StateConflictException):
    """Raised when a national id is already registered."""

    pass


class DuplicateTeamNameException(StateConflictException):
    """Raised when a team name is already registered."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CopaVallejoException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(CopaVallejoException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
