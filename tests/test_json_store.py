import json
from datetime import datetime, timedelta

import pytest

from copavallejo.exceptions import FileLoadException, InvalidConfigurationException
from copavallejo.models import (
    Match,
    MatchResult,
    MatchStatus,
    Phase,
    PhaseConfig,
    PhaseFormat,
    Regulation,
    Team,
    TiebreakCriterion,
)
from copavallejo.repositories import JsonStore


def test_save_and_load_round_trip(tmp_path, make_player):
    path = tmp_path / "copa.json"
    store = JsonStore(path)
    store.regulation = Regulation(max_foreign=4)
    store.teams.save(Team(id="team-1", name="Alfa", roster=["player-1"]))
    store.players.save(make_player())
    store.phases.save(
        Phase(
            id="phase-1",
            tournament_id="t",
            name="Grupos",
            format=PhaseFormat.GROUPS,
            participants=["team-1", "team-2"],
            config=PhaseConfig(number_of_groups=1, teams_per_group=2),
        )
    )
    store.matches.save(
        Match(
            id="m1",
            phase_id="phase-1",
            tournament_id="t",
            home_team_id="team-1",
            away_team_id="team-2",
            status=MatchStatus.FINISHED,
            result=MatchResult(1, 1, "team-2"),
            is_knockout=True,
        )
    )
    store.save()

    loaded = JsonStore.open(path)

    assert loaded.regulation.max_foreign == 4
    assert loaded.teams.require("team-1").roster == ["player-1"]
    assert loaded.players.require("player-1").birth_date == store.players.require(
        "player-1"
    ).birth_date
    assert loaded.phases.require("phase-1").config.number_of_groups == 1
    assert loaded.matches.require("m1").winner() == "team-2"


def test_persisted_shapes_are_camel_case(tmp_path):
    path = tmp_path / "copa.json"
    store = JsonStore(path)
    store.phases.save(
        Phase(id="p", tournament_id="t", name="Liga", format=PhaseFormat.LEAGUE)
    )
    store.matches.save(
        Match(
            id="m",
            phase_id="p",
            tournament_id="t",
            home_team_id="a",
            away_team_id="b",
            status=MatchStatus.FINISHED,
            result=MatchResult(2, 0),
        )
    )
    store.save()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["phases"][0]["configuration"] == {
        "pointsWin": 3,
        "pointsDraw": 1,
        "pointsLoss": 0,
        "doubleRoundRobin": False,
        "tieBreakCriteria": ["POINTS", "GOAL_DIFFERENCE", "GOALS_FOR"],
    }
    assert data["matches"][0]["result"] == {"goalsHome": 2, "goalsAway": 0}


def test_spanish_configuration_keys_are_accepted():
    config = PhaseConfig.from_dict(
        {
            "puntosVictoria": 2,
            "partidoIdaVuelta": True,
            "criteriosDesempate": ["PUNTOS", "GOLES_CONTRA"],
            "numeroGrupos": 2,
            "equiposPorGrupo": 4,
            "clasificadosPorGrupo": 2,
        }
    )

    assert config.points_win == 2
    assert config.points_draw == 1
    assert config.double_round_robin
    assert config.tiebreak_order == [
        TiebreakCriterion.POINTS,
        TiebreakCriterion.GOALS_AGAINST,
    ]
    assert (config.number_of_groups, config.teams_per_group) == (2, 4)
    assert config.qualifiers_per_group == 2


def test_unknown_criterion_is_a_configuration_error():
    with pytest.raises(InvalidConfigurationException):
        PhaseConfig.from_dict({"tieBreakCriteria": ["COIN_TOSS"]})


def test_missing_file(tmp_path):
    with pytest.raises(FileLoadException):
        JsonStore.open(tmp_path / "absent.json")
    store = JsonStore.open(tmp_path / "new.json", create=True)
    assert len(store.teams) == 0


def test_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(FileLoadException):
        JsonStore.open(path)

    path.write_text(json.dumps({"teams": [{"name": "no id"}]}), encoding="utf-8")
    with pytest.raises(FileLoadException):
        JsonStore.open(path)


def test_repository_returns_detached_copies():
    store = JsonStore("copa.json")
    store.teams.save(Team(id="t", name="Alfa"))

    copy = store.teams.require("t")
    copy.add_to_roster("p1")

    assert store.teams.require("t").roster == []


def test_upcoming_mixes_offset_and_local_kickoffs(tmp_path):
    path = tmp_path / "copa.json"
    soon = datetime.now() + timedelta(days=2)
    document = {
        "version": 1,
        "matches": [
            {
                "id": "utc",
                "phase_id": "p",
                "tournament_id": "t",
                "home_team_id": "a",
                "away_team_id": "b",
                "scheduled_at": "2999-01-01T15:00:00Z",
            },
            {
                "id": "local",
                "phase_id": "p",
                "tournament_id": "t",
                "home_team_id": "c",
                "away_team_id": "d",
                "scheduled_at": soon.isoformat(),
            },
            {
                "id": "past",
                "phase_id": "p",
                "tournament_id": "t",
                "home_team_id": "a",
                "away_team_id": "c",
                "scheduled_at": "2000-01-01T15:00:00+00:00",
            },
        ],
    }
    path.write_text(json.dumps(document), encoding="utf-8")

    upcoming = JsonStore.open(path).matches.find_upcoming()

    assert [m.id for m in upcoming] == ["local", "utc"]
