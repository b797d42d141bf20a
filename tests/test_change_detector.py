"""Tests for missing-team detection."""

from src.api.schemas import Team
from src.pipeline.change_detector import find_missing_teams, build_change_summary


def make_team(team_id, number=None, organization="Org"):
    return Team(id=team_id, number=number or f"{team_id}A", organization=organization)


class TestFindMissingTeams:
    def test_one_team_dropped(self):
        a = make_team(1, "A")
        b = make_team(2, "B")
        missing = find_missing_teams([a, b], [make_team(1, "A")])
        assert [t.number for t in missing] == ["B"]
        assert missing[0] is b

    def test_same_roster_nothing_missing(self):
        teams = [make_team(1), make_team(2), make_team(3)]
        assert find_missing_teams(teams, teams) == []

    def test_empty_comparison_reports_everyone(self):
        teams = [make_team(1), make_team(2)]
        assert find_missing_teams(teams, []) == teams

    def test_empty_previous(self):
        assert find_missing_teams([], [make_team(1)]) == []

    def test_preserves_previous_order(self):
        previous = [make_team(5), make_team(3), make_team(9), make_team(1)]
        missing = find_missing_teams(previous, [make_team(3)])
        assert [t.id for t in missing] == [5, 9, 1]

    def test_identity_is_id_only(self):
        previous = [make_team(1, "A", organization="Old School")]
        current = [make_team(1, "Z", organization="New School")]
        assert find_missing_teams(previous, current) == []

    def test_duplicate_ids_in_comparison(self):
        current = [make_team(1, "A"), make_team(1, "A2"), make_team(2)]
        missing = find_missing_teams([make_team(1), make_team(3)], current)
        assert [t.id for t in missing] == [3]

    def test_new_teams_are_not_reported(self):
        missing = find_missing_teams([make_team(1)], [make_team(1), make_team(2)])
        assert missing == []

    def test_inputs_not_mutated(self):
        previous = [make_team(1), make_team(2)]
        current = [make_team(2)]
        find_missing_teams(previous, current)
        assert [t.id for t in previous] == [1, 2]
        assert [t.id for t in current] == [2]


class TestBuildSummary:
    def test_summary_counts(self):
        previous = [make_team(1), make_team(2), make_team(3)]
        current = [make_team(2), make_team(3), make_team(4), make_team(5)]
        missing = find_missing_teams(previous, current)
        summary = build_change_summary(previous, current, missing)
        assert summary == {"previous_count": 3, "current_count": 4, "missing_count": 1}
