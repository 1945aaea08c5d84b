from datetime import date

import pytest

from copavallejo.exceptions import InvalidConfigurationException, InvalidMatchException
from copavallejo.models import (
    Match,
    MatchResult,
    MatchStatus,
    PhaseFormat,
    Player,
    PlayerCategory,
    Regulation,
    TiebreakCriterion,
)
from copavallejo.utils.validation import validate_national_id, validate_shirt_number


def _finished(goals_home, goals_away, penalty_winner=None):
    return Match(
        id="m",
        phase_id="p",
        tournament_id="t",
        home_team_id="home",
        away_team_id="away",
        status=MatchStatus.FINISHED,
        result=MatchResult(goals_home, goals_away, penalty_winner),
        is_knockout=penalty_winner is not None,
    )


def test_winner_derivation():
    assert _finished(3, 1).winner() == "home"
    assert _finished(0, 2).winner() == "away"
    assert _finished(2, 2).winner() is None
    assert _finished(2, 2).is_draw
    assert _finished(1, 1, "away").winner() == "away"


def test_unfinished_match_has_no_winner():
    match = _finished(3, 0)
    match.status = MatchStatus.IN_PROGRESS
    assert match.winner() is None


def test_match_needs_two_teams():
    with pytest.raises(InvalidMatchException):
        Match(id="m", phase_id="p", tournament_id="t", home_team_id="x", away_team_id="x")


def test_age_is_in_completed_years():
    player = Player(
        id="p",
        team_id="t",
        first_name="Ana",
        last_name="Gómez",
        national_id="123456",
        birth_date=date(2000, 6, 2),
        shirt_number=1,
        category=PlayerCategory.RESIDENT_CHILD,
    )
    assert player.age_on(date(2025, 6, 1)) == 24
    assert player.age_on(date(2025, 6, 2)) == 25
    assert not player.is_foreign


def test_enum_parsing_accepts_original_tags():
    assert PhaseFormat.parse("eliminacion_directa") == PhaseFormat.KNOCKOUT
    assert PhaseFormat.parse(PhaseFormat.GROUPS) == PhaseFormat.GROUPS
    assert TiebreakCriterion.parse("DIFERENCIA_GOLES") == TiebreakCriterion.GOAL_DIFFERENCE
    with pytest.raises(InvalidConfigurationException):
        PhaseFormat.parse("SWISS")


def test_regulation_from_partial_dict():
    regulation = Regulation.from_dict({"max_foreign": 5})
    assert regulation.max_foreign == 5
    assert regulation.max_roster_size == 16
    with pytest.raises(InvalidConfigurationException):
        Regulation(min_age=40, max_age=30)


@pytest.mark.parametrize(
    "value, valid",
    [("123456", True), (" 123456789012345 ", True), ("12345", False), ("12a456", False), ("", False)],
)
def test_national_id_format(value, valid):
    assert validate_national_id(value).is_valid is valid


def test_shirt_number_range():
    assert validate_shirt_number(1)
    assert validate_shirt_number(20)
    assert not validate_shirt_number(0)
    assert not validate_shirt_number(21)
    assert not validate_shirt_number(True)
