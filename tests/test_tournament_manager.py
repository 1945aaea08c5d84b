from datetime import datetime, timedelta

import pytest

from copavallejo.exceptions import (
    MatchStateException,
    PhaseStateException,
    TeamNotFoundException,
    TournamentStateException,
    ValidationException,
)
from copavallejo.models import (
    MatchStatus,
    PhaseFormat,
    PhaseStatus,
    Team,
    TournamentStatus,
)


@pytest.fixture
def enrolled(manager, teams, tournaments):
    tournament = manager.create_tournament("Copa Vallejo", 2025)
    for name in ("Alfa", "Beta", "Gamma", "Delta"):
        teams.save(Team(id=name.lower(), name=name))
        manager.add_team(tournament.id, name.lower())
    return tournaments.require(tournament.id)


def test_add_and_remove_teams(manager, enrolled, teams, tournaments):
    assert tournaments.require(enrolled.id).team_ids == ["alfa", "beta", "gamma", "delta"]
    assert teams.require("alfa").tournament_id == enrolled.id

    manager.remove_team(enrolled.id, "delta")

    assert "delta" not in tournaments.require(enrolled.id).team_ids
    assert teams.require("delta").tournament_id is None
    with pytest.raises(TeamNotFoundException):
        manager.add_team(enrolled.id, "nobody")


def test_create_phase_appends_to_tournament(manager, enrolled, tournaments):
    first = manager.create_phase(enrolled.id, "Liga", "LIGA", enrolled.team_ids)
    second = manager.create_phase(enrolled.id, "Final", PhaseFormat.KNOCKOUT)

    stored = tournaments.require(enrolled.id)
    assert stored.phase_ids == [first.id, second.id]
    assert (first.order, second.order) == (1, 2)
    assert first.format == PhaseFormat.LEAGUE
    assert first.status == PhaseStatus.CONFIGURING


def test_start_requires_a_phase(manager, enrolled):
    with pytest.raises(TournamentStateException):
        manager.start(enrolled.id)

    phase = manager.create_phase(enrolled.id, "Liga", PhaseFormat.LEAGUE)
    started = manager.start(enrolled.id)

    assert started.status == TournamentStatus.IN_PROGRESS
    assert started.current_phase_id == phase.id
    with pytest.raises(TournamentStateException):
        manager.add_team(enrolled.id, "alfa")


def test_finish_requires_in_progress(manager, enrolled):
    with pytest.raises(TournamentStateException):
        manager.finish(enrolled.id)
    manager.create_phase(enrolled.id, "Liga", PhaseFormat.LEAGUE)
    manager.start(enrolled.id)

    assert manager.finish(enrolled.id).status == TournamentStatus.FINISHED


def test_advance_phase_checks_membership(manager, enrolled):
    manager.create_phase(enrolled.id, "Liga", PhaseFormat.LEAGUE)
    final = manager.create_phase(enrolled.id, "Final", PhaseFormat.KNOCKOUT)

    assert manager.advance_phase(enrolled.id, final.id).current_phase_id == final.id
    with pytest.raises(ValidationException):
        manager.advance_phase(enrolled.id, "phase-elsewhere")


def test_finish_phase_stores_qualifiers(
    manager, enrolled, generator, engine, phases
):
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, enrolled.team_ids
    )
    with pytest.raises(PhaseStateException):
        manager.finish_phase(phase.id)

    created = generator.generate(phase.id)
    engine.finish(created[0].id, 0, 1)

    finished = manager.finish_phase(phase.id, qualifiers=1)

    assert finished.status == PhaseStatus.FINISHED
    assert finished.qualified == ["beta"]
    assert phases.require(phase.id).qualified == ["beta"]


def test_manual_match_is_attached_and_removed(manager, enrolled, phases, matches):
    phase = manager.create_phase(
        enrolled.id, "Final", PhaseFormat.KNOCKOUT, enrolled.team_ids
    )

    match = manager.add_match(phase.id, "alfa", "beta", matchday=1)

    assert match.is_knockout
    assert phases.require(phase.id).match_ids == [match.id]

    manager.delete_match(match.id)

    assert phases.require(phase.id).match_ids == []
    assert matches.get(match.id) is None


def test_finished_match_cannot_be_deleted(manager, enrolled, engine):
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, enrolled.team_ids
    )
    match = manager.add_match(phase.id, "alfa", "beta")
    engine.finish(match.id, 2, 0)

    with pytest.raises(MatchStateException):
        manager.delete_match(match.id)
    with pytest.raises(MatchStateException):
        manager.reschedule_match(match.id, venue="Cancha 2")


def test_refresh_statistics(manager, enrolled, engine):
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, enrolled.team_ids
    )
    first = manager.add_match(phase.id, "alfa", "beta")
    manager.add_match(phase.id, "gamma", "delta")
    engine.finish(first.id, 3, 2)

    stats = manager.refresh_statistics(enrolled.id).statistics

    assert (stats.total_matches, stats.total_goals, stats.teams) == (2, 5, 4)


def test_match_finders(manager, enrolled):
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, enrolled.team_ids
    )
    now = datetime(2025, 3, 1, 10, 0)
    early = manager.add_match(
        phase.id, "alfa", "beta", matchday=1, scheduled_at=now + timedelta(days=1)
    )
    late = manager.add_match(
        phase.id, "gamma", "alfa", matchday=2, scheduled_at=now + timedelta(days=8)
    )
    manager.add_match(phase.id, "beta", "delta", matchday=2, group="A")

    assert len(manager.matches_by_phase(phase.id)) == 3
    assert [m.id for m in manager.matches_by_team("alfa")] == [early.id, late.id]
    assert len(manager.matches_by_matchday(phase.id, 2)) == 2
    assert len(manager.matches_by_group(phase.id, "A")) == 1
    upcoming = manager.upcoming_matches(now=now)
    assert [m.id for m in upcoming] == [early.id, late.id]
    assert all(m.status == MatchStatus.SCHEDULED for m in upcoming)


def test_manual_match_needs_phase_participants(manager, enrolled, teams, phases):
    teams.save(Team(id="visitante", name="Visitante"))
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, ["alfa", "beta", "gamma"]
    )

    with pytest.raises(ValidationException):
        manager.add_match(phase.id, "alfa", "visitante")
    with pytest.raises(ValidationException):
        manager.add_match(phase.id, "delta", "alfa")

    assert phases.require(phase.id).match_ids == []
    assert manager.matches_by_phase(phase.id) == []


def test_manual_matches_keep_the_played_total(manager, enrolled, engine, calculator):
    phase = manager.create_phase(
        enrolled.id, "Liga", PhaseFormat.LEAGUE, enrolled.team_ids
    )
    first = manager.add_match(phase.id, "alfa", "beta")
    second = manager.add_match(phase.id, "gamma", "alfa")
    engine.finish(first.id, 2, 0)
    engine.finish(second.id, 1, 1)

    table = calculator.calculate(phase.id)

    assert sum(row.played for row in table) == 4
