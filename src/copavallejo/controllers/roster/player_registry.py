"""Team and player registration.

This module owns every change to a team's roster. The quota evaluator decides,
the registry loads, checks and persists.
"""

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

from datetime import date, datetime
from typing import Any, List, Optional

from dateutil import parser as date_parser

from copavallejo.constants import (
    ERR_DUPLICATE_NATIONAL_ID,
    ERR_DUPLICATE_SHIRT_NUMBER,
    ERR_DUPLICATE_TEAM_NAME,
)
from copavallejo.controllers.roster.quota_evaluator import (
    RegulationReport,
    RosterQuotaEvaluator,
    TeamStats,
)
from copavallejo.exceptions import (
    DuplicateNationalIdException,
    DuplicateShirtNumberException,
    DuplicateTeamNameException,
    InvalidConfigurationException,
    PlayerStateException,
    RegulationViolationException,
    RosterFullException,
    ValidationException,
)
from copavallejo.models import (
    Player,
    PlayerCategory,
    Position,
    Regulation,
    Team,
    TeamStatus,
    ValidationStatus,
)
from copavallejo.repositories import PlayerRepository, TeamRepository
from copavallejo.utils import generate_id, setup_logger
from copavallejo.utils.validation import (
    validate_national_id_strict,
    validate_shirt_number_strict,
)

logger = setup_logger(__name__)

# Fields a delegate may change on a player that is not yet validated
EDITABLE_PLAYER_FIELDS = (
    "first_name",
    "last_name",
    "national_id",
    "birth_date",
    "shirt_number",
    "category",
    "position",
    "notes",
)


def parse_birth_date(value: Any) -> date:
    """Accept a date, a datetime or an ISO string.

    Raises:
        ValidationException: If the value is not a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(value).date()
    except (TypeError, ValueError):
        raise ValidationException(f"Invalid birth date {value!r}. Use YYYY-MM-DD")


def parse_category(value: Any) -> PlayerCategory:
    try:
        return PlayerCategory(value)
    except ValueError:
        raise ValidationException(f"Unknown player category: {value!r}")


def parse_position(value: Any) -> Position:
    try:
        return Position(value)
    except ValueError:
        raise ValidationException(f"Unknown position: {value!r}")


class PlayerRegistry:
    """Registers teams and players and runs the eligibility review.

    This class is responsible for:
    - Keeping national ids and team names unique
    - Keeping shirt numbers unique among a team's non-rejected players
    - Appending and removing player ids on the team roster
    - Refusing an approval that breaks the regulation
    """

    def __init__(
        self,
        team_repo: TeamRepository,
        player_repo: PlayerRepository,
        regulation: Optional[Regulation] = None,
    ):
        self.teams = team_repo
        self.players = player_repo
        self.evaluator = RosterQuotaEvaluator(regulation)

    @property
    def regulation(self) -> Regulation:
        return self.evaluator.regulation

    # ========== Teams ==========

    def register_team(
        self,
        name: str,
        delegate_id: Optional[str] = None,
        tournament_id: Optional[str] = None,
    ) -> Team:
        """Create a PENDING team with an empty roster.

        Raises:
            ValidationException: If the name is blank
            DuplicateTeamNameException: If another team has the same name
        """
        name = (name or "").strip()
        if not name:
            raise ValidationException("Team name cannot be empty")
        if self.teams.find_by_name(name) is not None:
            raise DuplicateTeamNameException(ERR_DUPLICATE_TEAM_NAME)

        team = Team(
            id=generate_id("team"),
            name=name,
            delegate_id=delegate_id,
            tournament_id=tournament_id,
        )
        self.teams.save(team)
        logger.info(f"Registered team {team.name} ({team.id})")
        return team

    def review_team(self, team_id: str, decision: TeamStatus) -> Team:
        team = self.teams.require(team_id)
        team.status = TeamStatus(decision)
        self.teams.save(team)
        logger.info(f"Team {team.name} marked {team.status.value}")
        return team

    # ========== Players ==========

    def register_player(
        self,
        team_id: str,
        first_name: str,
        last_name: str,
        national_id: str,
        birth_date: date,
        shirt_number: int,
        category: PlayerCategory,
        position: Position = Position.MIDFIELDER,
    ) -> Player:
        """Register a PENDING player and append it to the team roster.

        Age and quotas are not checked here; they are part of the review.

        Raises:
            InvalidNationalIdException: If the national id is malformed
            DuplicateNationalIdException: If the national id is taken
            TeamNotFoundException: If the team does not exist
            RosterFullException: If the roster is at its maximum
            InvalidShirtNumberException: If the number is out of range
            DuplicateShirtNumberException: If the number is taken in the team
        """
        national_id = validate_national_id_strict(national_id)
        if self.players.find_by_national_id(national_id) is not None:
            raise DuplicateNationalIdException(ERR_DUPLICATE_NATIONAL_ID)

        team = self.teams.require(team_id)
        admission = self.evaluator.can_add_player(team)
        if not admission:
            raise RosterFullException(admission.reason)

        shirt_number = validate_shirt_number_strict(
            shirt_number,
            self.regulation.shirt_number_min,
            self.regulation.shirt_number_max,
        )
        self._check_shirt_free(team_id, shirt_number)

        player = Player(
            id=generate_id("player"),
            team_id=team_id,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            national_id=national_id,
            birth_date=parse_birth_date(birth_date),
            shirt_number=shirt_number,
            category=parse_category(category),
            position=parse_position(position),
        )
        self.players.save(player)
        team.add_to_roster(player.id)
        try:
            self.teams.save(team)
        except Exception:
            self.players.delete(player.id)
            raise
        logger.info(
            f"Registered player {player.full_name} #{shirt_number} in team {team.name}"
        )
        return player

    def update_player(self, player_id: str, **changes: Any) -> Player:
        """Change the registration data of a player that is not validated.

        Raises:
            PlayerStateException: If the player is already VALIDATED
            InvalidConfigurationException: If an unknown field is given
            DuplicateShirtNumberException: If the new number is taken
            DuplicateNationalIdException: If the new national id is taken
            ValidationException: If the birth date, category or position is invalid
        """
        player = self.players.require(player_id)
        if player.is_validated:
            raise PlayerStateException(
                f"Player {player.full_name} is validated and cannot be edited"
            )
        unknown = set(changes) - set(EDITABLE_PLAYER_FIELDS)
        if unknown:
            raise InvalidConfigurationException(
                f"Cannot update player fields: {', '.join(sorted(unknown))}"
            )

        if "national_id" in changes:
            national_id = validate_national_id_strict(changes["national_id"])
            other = self.players.find_by_national_id(national_id)
            if other is not None and other.id != player.id:
                raise DuplicateNationalIdException(ERR_DUPLICATE_NATIONAL_ID)
            changes["national_id"] = national_id
        if "shirt_number" in changes:
            number = validate_shirt_number_strict(
                changes["shirt_number"],
                self.regulation.shirt_number_min,
                self.regulation.shirt_number_max,
            )
            if number != player.shirt_number:
                self._check_shirt_free(player.team_id, number, exclude_id=player.id)
            changes["shirt_number"] = number
        if "birth_date" in changes:
            changes["birth_date"] = parse_birth_date(changes["birth_date"])
        if "category" in changes:
            changes["category"] = parse_category(changes["category"])
        if "position" in changes:
            changes["position"] = parse_position(changes["position"])

        for name, value in changes.items():
            setattr(player, name, value)
        self.players.save(player)
        logger.debug(f"Updated player {player.id}: {sorted(changes)}")
        return player

    def delete_player(self, player_id: str) -> None:
        """Remove a player that is not validated and drop it from its roster.

        Raises:
            PlayerStateException: If the player is already VALIDATED
        """
        player = self.players.require(player_id)
        if player.is_validated:
            raise PlayerStateException(
                f"Player {player.full_name} is validated and cannot be deleted"
            )
        team = self.teams.get(player.team_id)
        self.players.delete(player_id)
        if team is not None:
            team.remove_from_roster(player_id)
            self.teams.save(team)
        logger.info(f"Deleted player {player.full_name} ({player_id})")

    # ========== Review ==========

    def review_player(
        self,
        player_id: str,
        decision: ValidationStatus,
        reviewer_id: Optional[str] = None,
        notes: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> Player:
        """Approve or reject a player registration.

        An approval runs the full regulation check against the team's
        current counts. A rejection is always accepted.

        Raises:
            RegulationViolationException: If an approval breaks any rule,
                carrying every violated rule in ``errors``
        """
        decision = ValidationStatus(decision)
        player = self.players.require(player_id)

        if decision == ValidationStatus.VALIDATED:
            report = self.evaluator.validate_player_against_regulation(
                player, self.team_stats(player.team_id), decision, as_of
            )
            if not report:
                logger.warning(
                    f"Approval of {player.full_name} refused: {report.errors}"
                )
                raise RegulationViolationException(report.errors)

        player.validation_status = decision
        player.validated_by = reviewer_id
        player.validated_at = datetime.now()
        if notes is not None:
            player.notes = notes
        self.players.save(player)
        logger.info(f"Player {player.full_name} marked {decision.value}")
        return player

    def check_regulation(
        self, player_id: str, as_of: Optional[date] = None
    ) -> RegulationReport:
        """Dry-run the approval check for a player."""
        player = self.players.require(player_id)
        return self.evaluator.validate_player_against_regulation(
            player,
            self.team_stats(player.team_id),
            ValidationStatus.VALIDATED,
            as_of,
        )

    def team_stats(self, team_id: str) -> TeamStats:
        return TeamStats.from_players(self.players.find_by_team(team_id))

    # ========== Queries ==========

    def players_by_team(self, team_id: str) -> List[Player]:
        """Players of a team in roster order."""
        team = self.teams.require(team_id)
        by_id = {p.id: p for p in self.players.find_by_team(team_id)}
        ordered = [by_id.pop(pid) for pid in team.roster if pid in by_id]
        # Players missing from the roster list go last
        return ordered + list(by_id.values())

    def validated_players(self, team_id: str) -> List[Player]:
        return [p for p in self.players_by_team(team_id) if p.is_validated]

    def pending_players(self, team_id: Optional[str] = None) -> List[Player]:
        players = (
            self.players_by_team(team_id) if team_id else self.players.all()
        )
        return [
            p for p in players if p.validation_status == ValidationStatus.PENDING
        ]

    def _check_shirt_free(
        self, team_id: str, number: int, exclude_id: Optional[str] = None
    ) -> None:
        for other in self.players.find_by_team(team_id):
            if other.id == exclude_id or other.is_rejected:
                continue
            if other.shirt_number == number:
                raise DuplicateShirtNumberException(ERR_DUPLICATE_SHIRT_NUMBER)
