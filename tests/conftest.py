from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from copavallejo.controllers.roster import PlayerRegistry, RosterQuotaEvaluator
from copavallejo.controllers.tournament import (
    MatchEngine,
    ScheduleGenerator,
    StandingsCalculator,
    TournamentManager,
)
from copavallejo.models import (
    Match,
    MatchResult,
    MatchStatus,
    Phase,
    PhaseConfig,
    PhaseFormat,
    Player,
    PlayerCategory,
    ValidationStatus,
)
from copavallejo.repositories import (
    InMemoryMatchRepository,
    InMemoryPhaseRepository,
    InMemoryPlayerRepository,
    InMemoryTeamRepository,
    InMemoryTournamentRepository,
)

AS_OF = date(2025, 6, 1)


def born_years_ago(years, as_of=AS_OF):
    """Birth date of someone who turned ``years`` a month before ``as_of``."""
    return as_of - relativedelta(years=years, months=1)


@pytest.fixture
def teams():
    return InMemoryTeamRepository()


@pytest.fixture
def players():
    return InMemoryPlayerRepository()


@pytest.fixture
def matches():
    return InMemoryMatchRepository()


@pytest.fixture
def phases():
    return InMemoryPhaseRepository()


@pytest.fixture
def tournaments():
    return InMemoryTournamentRepository()


@pytest.fixture
def registry(teams, players):
    return PlayerRegistry(teams, players)


@pytest.fixture
def evaluator():
    return RosterQuotaEvaluator()


@pytest.fixture
def engine(matches, players):
    return MatchEngine(matches, players)


@pytest.fixture
def generator(phases, matches):
    return ScheduleGenerator(phases, matches)


@pytest.fixture
def calculator(phases, matches):
    return StandingsCalculator(phases, matches)


@pytest.fixture
def manager(tournaments, phases, matches, teams):
    return TournamentManager(tournaments, phases, matches, teams)


@pytest.fixture
def make_player():
    """Build an unsaved player; keyword arguments override the defaults."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            id=f"player-{n}",
            team_id="team-1",
            first_name="Jugador",
            last_name=str(n),
            national_id=f"{1000000 + n}",
            birth_date=born_years_ago(30),
            shirt_number=(n % 20) + 1,
            category=PlayerCategory.RESIDENT_OWNER,
            validation_status=ValidationStatus.PENDING,
        )
        fields.update(overrides)
        return Player(**fields)

    return _make


@pytest.fixture
def make_phase(phases):
    """Save a CONFIGURING phase with the given format and participants."""

    def _make(format=PhaseFormat.LEAGUE, participants=("A", "B", "C", "D"), **config):
        phase = Phase(
            id=f"phase-{len(phases) + 1}",
            tournament_id="tournament-1",
            name=f"Phase {len(phases) + 1}",
            format=format,
            participants=list(participants),
            config=PhaseConfig(**config),
        )
        phases.save(phase)
        return phase

    return _make


@pytest.fixture
def finished_match():
    """Build a FINISHED match with the given score."""
    counter = {"n": 0}

    def _make(home, away, goals_home, goals_away, phase_id="phase-1", group=None):
        counter["n"] += 1
        return Match(
            id=f"match-{counter['n']}",
            phase_id=phase_id,
            tournament_id="tournament-1",
            home_team_id=home,
            away_team_id=away,
            status=MatchStatus.FINISHED,
            result=MatchResult(goals_home, goals_away),
            group=group,
        )

    return _make
