"""Tournament lifecycle, phases and manual fixtures."""

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
from typing import List, Optional, Sequence

from copavallejo.constants import MIN_PLAYERS_PER_TEAM
from copavallejo.controllers.tournament.standings_calculator import (
    StandingsCalculator,
)
from copavallejo.exceptions import (
    MatchStateException,
    PhaseStateException,
    TournamentStateException,
    ValidationException,
)
from copavallejo.models import (
    Match,
    MatchStatus,
    Phase,
    PhaseConfig,
    PhaseFormat,
    PhaseStatus,
    Tournament,
    TournamentStatus,
)
from copavallejo.repositories import (
    MatchRepository,
    PhaseRepository,
    TeamRepository,
    TournamentRepository,
)
from copavallejo.utils import generate_id, setup_logger

logger = setup_logger(__name__)

CLOSED_TOURNAMENT_STATES = (TournamentStatus.FINISHED, TournamentStatus.CANCELLED)


class TournamentManager:
    """Coordinates tournaments, their phases and hand-made fixtures.

    This class is responsible for:
    - Enrolling teams while the tournament is being configured
    - Creating phases and keeping the tournament's phase list in order
    - Moving tournaments and phases through their states
    - Adding and removing single matches and keeping the phase's match list
    """

    def __init__(
        self,
        tournament_repo: TournamentRepository,
        phase_repo: PhaseRepository,
        match_repo: MatchRepository,
        team_repo: TeamRepository,
    ):
        self.tournaments = tournament_repo
        self.phases = phase_repo
        self.matches = match_repo
        self.teams = team_repo
        self.standings = StandingsCalculator(phase_repo, match_repo)

    # ========== Tournaments ==========

    def create_tournament(
        self,
        name: str,
        year: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tournament:
        name = (name or "").strip()
        if not name:
            raise ValidationException("Tournament name cannot be empty")
        if start_date and end_date and end_date < start_date:
            raise ValidationException("Tournament cannot end before it starts")
        tournament = Tournament(
            id=generate_id("tournament"),
            name=name,
            year=year,
            start_date=start_date,
            end_date=end_date,
        )
        self.tournaments.save(tournament)
        logger.info(f"Created tournament {name} {year}")
        return tournament

    def add_team(self, tournament_id: str, team_id: str) -> Tournament:
        """Enroll a team. Only while the tournament is being configured."""
        tournament = self._require_configuring(tournament_id, "add teams")
        team = self.teams.require(team_id)
        if team_id in tournament.team_ids:
            logger.warning(f"Team {team.name} is already enrolled")
            return tournament
        if team.roster_size < MIN_PLAYERS_PER_TEAM:
            logger.warning(
                f"Team {team.name} has {team.roster_size} players, "
                f"fewer than the {MIN_PLAYERS_PER_TEAM} needed to play"
            )
        tournament.team_ids.append(team_id)
        team.tournament_id = tournament_id
        self.tournaments.save(tournament)
        self.teams.save(team)
        logger.info(f"Team {team.name} enrolled in {tournament.name}")
        return tournament

    def remove_team(self, tournament_id: str, team_id: str) -> Tournament:
        tournament = self._require_configuring(tournament_id, "remove teams")
        if team_id not in tournament.team_ids:
            return tournament
        tournament.team_ids.remove(team_id)
        self.tournaments.save(tournament)
        team = self.teams.get(team_id)
        if team is not None and team.tournament_id == tournament_id:
            team.tournament_id = None
            self.teams.save(team)
        logger.info(f"Team {team_id} removed from {tournament.name}")
        return tournament

    def start(self, tournament_id: str) -> Tournament:
        """Open play. The first phase by order becomes the current phase.

        Raises:
            TournamentStateException: If the tournament is not configuring or
                has no phases
        """
        tournament = self._require_configuring(tournament_id, "start it")
        phases = self.phases.find_by_tournament(tournament_id)
        if not phases:
            raise TournamentStateException(
                f"Tournament {tournament.name} needs at least one phase to start"
            )
        tournament.status = TournamentStatus.IN_PROGRESS
        tournament.current_phase_id = phases[0].id
        if tournament.start_date is None:
            tournament.start_date = date.today()
        self.tournaments.save(tournament)
        logger.info(f"Tournament {tournament.name} started with {phases[0].name}")
        return tournament

    def finish(self, tournament_id: str) -> Tournament:
        tournament = self.tournaments.require(tournament_id)
        if tournament.status != TournamentStatus.IN_PROGRESS:
            raise TournamentStateException(
                f"Tournament {tournament.name} is {tournament.status.value}; "
                "only a tournament in progress can finish"
            )
        self._fill_statistics(tournament)
        tournament.status = TournamentStatus.FINISHED
        tournament.end_date = tournament.end_date or date.today()
        self.tournaments.save(tournament)
        logger.info(f"Tournament {tournament.name} finished")
        return tournament

    def cancel(self, tournament_id: str) -> Tournament:
        tournament = self.tournaments.require(tournament_id)
        if tournament.status == TournamentStatus.FINISHED:
            raise TournamentStateException(
                f"Tournament {tournament.name} is finished and cannot be cancelled"
            )
        tournament.status = TournamentStatus.CANCELLED
        self.tournaments.save(tournament)
        logger.info(f"Tournament {tournament.name} cancelled")
        return tournament

    def advance_phase(self, tournament_id: str, phase_id: str) -> Tournament:
        """Make ``phase_id`` the current phase of the tournament."""
        tournament = self.tournaments.require(tournament_id)
        if phase_id not in tournament.phase_ids:
            raise ValidationException(
                f"Phase {phase_id} does not belong to tournament {tournament.name}"
            )
        tournament.current_phase_id = phase_id
        self.tournaments.save(tournament)
        logger.info(f"Tournament {tournament.name} advanced to phase {phase_id}")
        return tournament

    def refresh_statistics(self, tournament_id: str) -> Tournament:
        """Recount matches, goals and enrolled teams and store them."""
        tournament = self.tournaments.require(tournament_id)
        self._fill_statistics(tournament)
        self.tournaments.save(tournament)
        return tournament

    def _fill_statistics(self, tournament: Tournament) -> None:
        matches = self.matches.find_by_tournament(tournament.id)
        stats = tournament.statistics
        stats.total_matches = len(matches)
        stats.total_goals = sum(
            m.result.goals_home + m.result.goals_away
            for m in matches
            if m.status == MatchStatus.FINISHED and m.result is not None
        )
        stats.teams = len(tournament.team_ids)

    # ========== Phases ==========

    def create_phase(
        self,
        tournament_id: str,
        name: str,
        format: PhaseFormat,
        participants: Optional[Sequence[str]] = None,
        config: Optional[PhaseConfig] = None,
        order: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Phase:
        """Create a CONFIGURING phase and append it to the tournament.

        ``order`` defaults to the next position after the existing phases.

        Raises:
            TournamentStateException: If the tournament is finished or cancelled
            TeamNotFoundException: If a participant does not exist
        """
        tournament = self.tournaments.require(tournament_id)
        if tournament.status in CLOSED_TOURNAMENT_STATES:
            raise TournamentStateException(
                f"Tournament {tournament.name} is {tournament.status.value}"
            )
        participants = list(participants or [])
        for team_id in participants:
            self.teams.require(team_id)
            if team_id not in tournament.team_ids:
                logger.warning(
                    f"Team {team_id} is not enrolled in {tournament.name}"
                )
        if order is None:
            order = len(tournament.phase_ids) + 1
        if order < 1:
            raise ValidationException("Phase order must be at least 1")

        phase = Phase(
            id=generate_id("phase"),
            tournament_id=tournament_id,
            name=name,
            format=PhaseFormat.parse(format),
            order=order,
            participants=participants,
            config=config or PhaseConfig(),
            start_date=start_date,
            end_date=end_date,
        )
        self.phases.save(phase)
        tournament.phase_ids.append(phase.id)
        self.tournaments.save(tournament)
        logger.info(
            f"Created {phase.format.value} phase {name} with "
            f"{len(participants)} team(s)"
        )
        return phase

    def finish_phase(self, phase_id: str, qualifiers: Optional[int] = None) -> Phase:
        """Close a phase, optionally storing the top ``qualifiers`` teams.

        Raises:
            PhaseStateException: If the phase is not IN_PROGRESS
        """
        phase = self.phases.require(phase_id)
        if phase.status != PhaseStatus.IN_PROGRESS:
            raise PhaseStateException(
                f"Phase {phase.name} is {phase.status.value}; "
                "only a phase in progress can finish"
            )
        if qualifiers is not None:
            self.standings.get_qualifiers(phase_id, qualifiers)
            phase = self.phases.require(phase_id)
        phase.status = PhaseStatus.FINISHED
        phase.end_date = date.today()
        self.phases.save(phase)
        logger.info(f"Phase {phase.name} finished")
        return phase

    # ========== Matches ==========

    def add_match(
        self,
        phase_id: str,
        home_team_id: str,
        away_team_id: str,
        matchday: Optional[int] = None,
        scheduled_at: Optional[datetime] = None,
        venue: Optional[str] = None,
        referee: Optional[str] = None,
        group: Optional[str] = None,
    ) -> Match:
        """Create a single fixture and append it to its phase.

        Raises:
            PhaseStateException: If the phase is finished
            TeamNotFoundException: If either team does not exist
            ValidationException: If either team is not a phase participant
            InvalidMatchException: If both teams are the same
        """
        phase = self.phases.require(phase_id)
        if phase.status == PhaseStatus.FINISHED:
            raise PhaseStateException(f"Phase {phase.name} is finished")
        for team_id in (home_team_id, away_team_id):
            self.teams.require(team_id)
            if team_id not in phase.participants:
                raise ValidationException(
                    f"Team {team_id} does not take part in phase {phase.name}"
                )

        match = Match(
            id=generate_id("match"),
            phase_id=phase_id,
            tournament_id=phase.tournament_id,
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            matchday=matchday,
            group=group,
            is_knockout=phase.format == PhaseFormat.KNOCKOUT,
            scheduled_at=scheduled_at,
            venue=venue,
            referee=referee,
        )
        self.matches.save(match)
        phase.add_match_id(match.id)
        try:
            self.phases.save(phase)
        except Exception:
            self.matches.delete(match.id)
            raise
        logger.info(f"Added match {match} to phase {phase.name}")
        return match

    def reschedule_match(
        self,
        match_id: str,
        scheduled_at: Optional[datetime] = None,
        venue: Optional[str] = None,
        referee: Optional[str] = None,
        matchday: Optional[int] = None,
    ) -> Match:
        """Change the date, venue, referee or matchday of an open match."""
        match = self.matches.require(match_id)
        if match.status == MatchStatus.FINISHED:
            raise MatchStateException(f"Match {match_id} is finished")
        if scheduled_at is not None:
            match.scheduled_at = scheduled_at
        if venue is not None:
            match.venue = venue
        if referee is not None:
            match.referee = referee
        if matchday is not None:
            match.matchday = matchday
        self.matches.save(match)
        return match

    def delete_match(self, match_id: str) -> None:
        """Delete a match that has not finished and drop it from its phase."""
        match = self.matches.require(match_id)
        if match.status == MatchStatus.FINISHED:
            raise MatchStateException(
                f"Match {match_id} is finished and cannot be deleted"
            )
        self.matches.delete(match_id)
        phase = self.phases.get(match.phase_id)
        if phase is not None and match_id in phase.match_ids:
            phase.match_ids.remove(match_id)
            self.phases.save(phase)
        logger.info(f"Deleted match {match}")

    # ========== Finders ==========

    def matches_by_phase(self, phase_id: str) -> List[Match]:
        return self.matches.find_by_phase(phase_id)

    def matches_by_team(self, team_id: str) -> List[Match]:
        return self.matches.find_by_team(team_id)

    def matches_by_matchday(self, phase_id: str, matchday: int) -> List[Match]:
        return self.matches.find_by_matchday(phase_id, matchday)

    def matches_by_group(self, phase_id: str, group: str) -> List[Match]:
        return self.matches.find_by_group(phase_id, group)

    def upcoming_matches(
        self, now: Optional[datetime] = None, limit: Optional[int] = 10
    ) -> List[Match]:
        return self.matches.find_upcoming(now, limit)

    def _require_configuring(self, tournament_id: str, action: str) -> Tournament:
        tournament = self.tournaments.require(tournament_id)
        if tournament.status != TournamentStatus.CONFIGURING:
            raise TournamentStateException(
                f"Tournament {tournament.name} is {tournament.status.value}; "
                f"cannot {action}"
            )
        return tournament
