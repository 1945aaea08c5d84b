import pytest

from copavallejo.cli import main
from copavallejo.models import (
    MatchStatus,
    Phase,
    PhaseFormat,
    PlayerCategory,
    Team,
)
from copavallejo.repositories import JsonStore

from conftest import AS_OF, born_years_ago


@pytest.fixture
def store_path(tmp_path, make_player):
    path = tmp_path / "copa.json"
    store = JsonStore(path)
    for team_id, name in [("a", "Alfa"), ("b", "Beta"), ("c", "Gamma")]:
        store.teams.save(Team(id=team_id, name=name))
    store.phases.save(
        Phase(
            id="liga",
            tournament_id="t",
            name="Liga",
            format=PhaseFormat.LEAGUE,
            participants=["a", "b", "c"],
        )
    )
    store.players.save(
        make_player(
            id="young",
            team_id="a",
            category=PlayerCategory.VALLEJO_POLICE,
            birth_date=born_years_ago(24),
        )
    )
    store.save()
    return path


def test_generate_then_standings(store_path, capsys):
    assert main(["--store", str(store_path), "generate", "liga"]) == 0
    assert "3 match(es) generated" in capsys.readouterr().out

    store = JsonStore.open(store_path)
    assert len(store.phases.require("liga").match_ids) == 3
    assert all(m.status == MatchStatus.SCHEDULED for m in store.matches.all())

    assert main(["--store", str(store_path), "standings", "liga"]) == 0
    out = capsys.readouterr().out
    assert "Pts" in out
    assert "Gamma" in out


def test_generate_twice_fails(store_path, capsys):
    main(["--store", str(store_path), "generate", "liga"])
    assert main(["--store", str(store_path), "generate", "liga"]) == 1
    assert "Error" in capsys.readouterr().err


def test_qualifiers_are_stored(store_path):
    assert main(["--store", str(store_path), "qualifiers", "liga", "2"]) == 0
    assert JsonStore.open(store_path).phases.require("liga").qualified == ["a", "b"]


def test_regulation_reports_errors(store_path, capsys):
    code = main(
        [
            "--store",
            str(store_path),
            "regulation",
            "young",
            "--as-of",
            AS_OF.isoformat(),
        ]
    )

    assert code == 2
    out = capsys.readouterr().out
    assert "not eligible" in out
    assert "26" in out


def test_missing_store(tmp_path):
    assert main(["--store", str(tmp_path / "none.json"), "standings", "liga"]) == 1
