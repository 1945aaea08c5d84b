from copavallejo.controllers.roster import RosterQuotaEvaluator, TeamStats
from copavallejo.models import (
    PlayerCategory,
    QuotaGroup,
    Regulation,
    Team,
    ValidationStatus,
)
from copavallejo.models.enums import CATEGORY_QUOTA_GROUPS, quota_groups_for

from conftest import AS_OF, born_years_ago

VALIDATED = ValidationStatus.VALIDATED


def _team_with(size):
    return Team(id="team-1", name="Los Pinos", roster=[f"p{i}" for i in range(size)])


def test_can_add_player_refuses_only_at_roster_limit(evaluator):
    assert evaluator.can_add_player(_team_with(15)).allowed
    full = evaluator.can_add_player(_team_with(16))
    assert not full.allowed
    assert "16" in full.reason
    assert not evaluator.can_add_player(_team_with(17))


def test_can_add_player_uses_configured_limit():
    evaluator = RosterQuotaEvaluator(Regulation(max_roster_size=12))
    assert evaluator.can_add_player(_team_with(11))
    assert not evaluator.can_add_player(_team_with(12))


def test_every_non_resident_category_is_foreign():
    residents = {c for c in PlayerCategory if c.value.startswith("RESIDENT_")}
    for category in PlayerCategory:
        foreign = QuotaGroup.FOREIGN in quota_groups_for(category)
        assert foreign == (category not in residents)
    assert set(CATEGORY_QUOTA_GROUPS) == set(PlayerCategory)


def test_institution_categories_count_towards_two_groups():
    assert quota_groups_for(PlayerCategory.EL_DORADO_TEACHER) == {
        QuotaGroup.FOREIGN,
        QuotaGroup.EL_DORADO,
    }
    assert quota_groups_for(PlayerCategory.FUNDACION_PARENT) == {
        QuotaGroup.FOREIGN,
        QuotaGroup.FUNDACION,
    }


def test_team_stats_only_counts_validated_players_in_quotas(make_player):
    roster = [
        make_player(category=PlayerCategory.VALLEJO_POLICE, validation_status=VALIDATED),
        make_player(category=PlayerCategory.EL_DORADO_WORKER, validation_status=VALIDATED),
        make_player(category=PlayerCategory.EL_DORADO_WORKER),
        make_player(validation_status=ValidationStatus.REJECTED),
    ]
    stats = TeamStats.from_players(roster)

    assert (stats.total, stats.validated, stats.pending, stats.rejected) == (4, 2, 1, 1)
    assert stats.quota_count(QuotaGroup.FOREIGN) == 2
    assert stats.quota_count(QuotaGroup.EL_DORADO) == 1
    assert stats.quota_count(QuotaGroup.FUNDACION) == 0
    assert stats.by_category[PlayerCategory.EL_DORADO_WORKER] == 1


def test_young_foreign_player_fails_age_rule_and_older_one_passes(
    evaluator, make_player
):
    stats = TeamStats()
    young = make_player(
        category=PlayerCategory.NON_RESIDENT_OWNER, birth_date=born_years_ago(24)
    )
    older = make_player(
        category=PlayerCategory.NON_RESIDENT_OWNER, birth_date=born_years_ago(27)
    )

    young_report = evaluator.validate_player_against_regulation(
        young, stats, VALIDATED, AS_OF
    )
    assert not young_report.valid
    assert any("26" in error for error in young_report.errors)

    older_report = evaluator.validate_player_against_regulation(
        older, stats, VALIDATED, AS_OF
    )
    assert older_report.valid
    assert older_report.errors == []


def test_general_age_range(evaluator, make_player):
    stats = TeamStats()
    for age, ok in [(15, False), (16, True), (60, True), (61, False)]:
        report = evaluator.validate_player_against_regulation(
            make_player(birth_date=born_years_ago(age)), stats, VALIDATED, AS_OF
        )
        assert report.valid is ok, age


def test_quota_full_blocks_validation_but_not_pending(evaluator, make_player):
    roster = [
        make_player(category=PlayerCategory.VALLEJO_POLICE, validation_status=VALIDATED)
        for _ in range(3)
    ]
    stats = TeamStats.from_players(roster)
    candidate = make_player(category=PlayerCategory.NON_RESIDENT_OWNER)

    report = evaluator.validate_player_against_regulation(
        candidate, stats, VALIDATED, AS_OF
    )
    assert not report.valid
    assert report.errors == ["Team already has the maximum of 3 foreign players"]

    pending = evaluator.validate_player_against_regulation(
        candidate, stats, ValidationStatus.PENDING, AS_OF
    )
    assert pending.valid


def test_validated_player_is_not_counted_against_itself(evaluator, make_player):
    roster = [
        make_player(category=PlayerCategory.FUNDACION_TEACHER, validation_status=VALIDATED)
        for _ in range(2)
    ]
    stats = TeamStats.from_players(roster)

    report = evaluator.validate_player_against_regulation(
        roster[0], stats, VALIDATED, AS_OF
    )
    assert report.valid


def test_every_violation_is_reported(evaluator, make_player):
    roster = [
        make_player(category=PlayerCategory.EL_DORADO_TEACHER, validation_status=VALIDATED)
        for _ in range(2)
    ] + [make_player(category=PlayerCategory.VALLEJO_POLICE, validation_status=VALIDATED)]
    stats = TeamStats.from_players(roster)
    candidate = make_player(
        category=PlayerCategory.EL_DORADO_WORKER,
        birth_date=born_years_ago(20),
        shirt_number=25,
    )

    report = evaluator.validate_player_against_regulation(
        candidate, stats, VALIDATED, AS_OF
    )

    assert len(report.errors) == 4
    assert "foreign" in report.errors[0]
    assert "El Dorado" in report.errors[1]
    assert "26" in report.errors[2]
    assert "Shirt number" in report.errors[3]
