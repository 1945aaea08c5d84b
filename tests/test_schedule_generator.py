from itertools import combinations

import pytest

from copavallejo.controllers.tournament import (
    ScheduleGenerator,
    group_draw,
    knockout_fixtures,
    league_fixtures,
)
from copavallejo.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
    PhaseStateException,
)
from copavallejo.models import Phase, PhaseFormat, PhaseStatus
from copavallejo.repositories import InMemoryMatchRepository, InMemoryPhaseRepository

TEAMS = ["T1", "T2", "T3", "T4", "T5", "T6"]


class FailingMatchRepository(InMemoryMatchRepository):
    """Match repository whose n-th save raises."""

    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = fail_on
        self.saves = 0

    def save(self, entity):
        self.saves += 1
        if self.saves == self.fail_on:
            raise OSError("disk full")
        return super().save(entity)


class FailingPhaseRepository(InMemoryPhaseRepository):
    def __init__(self):
        super().__init__()
        self.armed = False

    def save(self, entity):
        if self.armed:
            raise OSError("disk full")
        return super().save(entity)


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
def test_league_pairs_every_team_once(n):
    fixtures = league_fixtures(TEAMS[:n])

    assert len(fixtures) == n * (n - 1) // 2
    pairs = {frozenset((f.home, f.away)) for f in fixtures}
    assert pairs == {frozenset(p) for p in combinations(TEAMS[:n], 2)}


def test_league_double_round_robin_mirrors_each_fixture():
    fixtures = league_fixtures(TEAMS[:4], double_round_robin=True)

    assert len(fixtures) == 12
    ordered = {(f.home, f.away) for f in fixtures}
    for home, away in combinations(TEAMS[:4], 2):
        assert (home, away) in ordered
        assert (away, home) in ordered


def test_league_matchdays_follow_team_index():
    fixtures = league_fixtures(["A", "B", "C"], double_round_robin=True)

    assert [(f.home, f.away, f.matchday) for f in fixtures] == [
        ("A", "B", 1),
        ("B", "A", 3),
        ("A", "C", 1),
        ("C", "A", 3),
        ("B", "C", 2),
        ("C", "B", 4),
    ]


def test_group_draw_deals_in_turn():
    assert group_draw(TEAMS, 2) == {"A": ["T1", "T3", "T5"], "B": ["T2", "T4", "T6"]}


def test_knockout_pairs_in_order_with_bye():
    draw = knockout_fixtures(TEAMS[:5])

    assert [(f.home, f.away) for f in draw.fixtures] == [("T1", "T2"), ("T3", "T4")]
    assert all(f.is_knockout and f.matchday == 1 for f in draw.fixtures)
    assert draw.bye == "T5"


def test_knockout_two_legs():
    draw = knockout_fixtures(TEAMS[:4], two_legs=True)

    assert [(f.home, f.away, f.matchday) for f in draw.fixtures] == [
        ("T1", "T2", 1),
        ("T2", "T1", 2),
        ("T3", "T4", 1),
        ("T4", "T3", 2),
    ]
    assert draw.bye is None


def test_generate_league_attaches_matches(generator, make_phase, phases, matches):
    phase = make_phase(PhaseFormat.LEAGUE, TEAMS[:4])

    created = generator.generate(phase.id)

    stored = phases.require(phase.id)
    assert len(created) == 6
    assert stored.status == PhaseStatus.IN_PROGRESS
    assert stored.match_ids == [m.id for m in created]
    assert len(matches.find_by_phase(phase.id)) == 6
    assert all(m.tournament_id == phase.tournament_id for m in created)


def test_generate_groups_tags_letters(generator, make_phase):
    phase = make_phase(
        PhaseFormat.GROUPS, TEAMS, number_of_groups=2, teams_per_group=3
    )

    created = generator.generate(phase.id)

    assert len(created) == 6
    assert {m.group for m in created} == {"A", "B"}
    group_a = {m.home_team_id for m in created if m.group == "A"} | {
        m.away_team_id for m in created if m.group == "A"
    }
    assert group_a == {"T1", "T3", "T5"}


def test_generate_knockout(generator, make_phase):
    phase = make_phase(PhaseFormat.KNOCKOUT, TEAMS)

    created = generator.generate(phase.id)

    assert len(created) == 3
    assert all(m.is_knockout for m in created)


def test_generate_preconditions(generator, make_phase, matches):
    with pytest.raises(InvalidConfigurationException):
        generator.generate(make_phase(participants=["T1"]).id)
    with pytest.raises(MissingConfigurationException):
        generator.generate(make_phase(PhaseFormat.GROUPS, TEAMS).id)

    phase = make_phase()
    generator.generate(phase.id)
    with pytest.raises(PhaseStateException):
        generator.generate(phase.id)
    assert len(matches) == 6


def test_generate_is_atomic_when_a_match_save_fails(phases, make_phase):
    match_repo = FailingMatchRepository(fail_on=3)
    generator = ScheduleGenerator(phases, match_repo)
    phase = make_phase(PhaseFormat.LEAGUE, TEAMS[:4])

    with pytest.raises(OSError):
        generator.generate(phase.id)

    assert len(match_repo) == 0
    stored = phases.require(phase.id)
    assert stored.status == PhaseStatus.CONFIGURING
    assert stored.match_ids == []


def test_generate_is_atomic_when_the_phase_save_fails(matches):
    phase_repo = FailingPhaseRepository()
    generator = ScheduleGenerator(phase_repo, matches)
    phase_repo.save(
        Phase(
            id="p",
            tournament_id="t",
            name="Liga",
            format=PhaseFormat.LEAGUE,
            participants=TEAMS[:3],
        )
    )
    phase_repo.armed = True

    with pytest.raises(OSError):
        generator.generate("p")

    assert len(matches) == 0
    assert phase_repo.require("p").status == PhaseStatus.CONFIGURING
