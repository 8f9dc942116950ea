import io
import json
import zipfile
from datetime import datetime, timezone

import pytest

from app.application.api import (
    list_organization_results,
    list_user_results,
    record_to_result,
    result_from_answers,
    save_assessment_result,
    summarize_team_results,
)
from app.domain.enums import LeadershipFamily, LeadershipType
from app.domain.models import AssessmentResult
from app.domain.services import breakdown_from_totals
from app.utils.exports import make_json_export_payload, make_xlsx_export_bytes

WHEN = datetime(2026, 6, 1, tzinfo=timezone.utc)


def make_result(idx, totals, family=LeadershipFamily.CONNECTORS, kind=LeadershipType.MENTOR):
    return AssessmentResult(
        id=f"r-{idx}",
        session_id=f"s-{idx}",
        user_id=f"u-{idx}",
        scores=breakdown_from_totals(totals),
        leadership_family=family,
        leadership_type=kind,
        completed_at=WHEN,
    )


class TestTeamSummary:
    def test_empty_team(self):
        summary = summarize_team_results([])
        assert summary.completed_count == 0
        assert summary.overall_percentage == 0
        assert summary.strengths == []

    def test_averages_round_half_up(self):
        results = [
            make_result(1, [41] + [10] * 12),
            make_result(2, [40] + [11] * 12, LeadershipFamily.DRIVERS, LeadershipType.CATALYST),
        ]
        summary = summarize_team_results(results)
        assert summary.completed_count == 2
        # (41 + 40) / 2 = 40.5 and (10 + 11) / 2 = 10.5
        assert summary.metric_averages["SA"] == 41
        assert summary.metric_averages["ER"] == 11
        assert summary.metric_percentages["SA"] == 51
        assert summary.metric_percentages["ER"] == 14
        # (41 + 12 * 11) / 1040
        assert summary.overall_percentage == 17

    def test_distributions(self):
        results = [
            make_result(1, [0] * 13),
            make_result(2, [0] * 13),
            make_result(3, [0] * 13, LeadershipFamily.DRIVERS, LeadershipType.CATALYST),
        ]
        summary = summarize_team_results(results)
        assert summary.family_distribution == {
            "REGULATORS": 0,
            "CONNECTORS": 2,
            "DRIVERS": 1,
            "STRATEGISTS": 0,
        }
        assert summary.type_distribution == {"MENTOR": 2, "CATALYST": 1}

    def test_strengths_and_growth_areas(self):
        totals = [40, 70, 10, 60, 20, 30, 0, 50, 80, 5, 45, 55, 35]
        summary = summarize_team_results([make_result(1, totals)])
        assert summary.strengths == ["T", "SR", "E"]
        assert summary.growth_areas == ["EX", "PS", "M"]

    def test_ties_keep_metric_order(self):
        summary = summarize_team_results([make_result(1, [8] * 13)])
        assert summary.strengths == ["SA", "SR", "M"]
        assert summary.growth_areas == ["ER", "TS", "CQ"]


class TestPersistence:
    def test_save_and_list(self, db, best_answers):
        result, responses = result_from_answers("u-1", best_answers)
        outcome = save_assessment_result(db, result, organization_id="org-1", responses=responses)
        assert outcome.success is True
        assert outcome.assessment_id == result.id
        assert outcome.clear_organization_context is True

        [record] = list_user_results(db, "u-1")
        assert record.overall_percentage == 83
        assert len(record.responses) == 20
        assert list_organization_results(db, "org-1")[0].id == result.id

        restored = record_to_result(record)
        assert restored.scores.totals == result.scores.totals
        assert restored.leadership_type == LeadershipType.CULTURAL_ARCHITECT

    def test_save_without_organization(self, db):
        result, _ = result_from_answers("u-2", [{"scenario_id": "scenario-1", "choice": "C"}])
        outcome = save_assessment_result(db, result)
        assert outcome.success is True
        assert outcome.clear_organization_context is False
        assert list_organization_results(db, "org-1") == []

    def test_failed_save_is_reported_not_raised(self, db):
        result, _ = result_from_answers("u-3", [])
        assert save_assessment_result(db, result).success is True
        again = save_assessment_result(db, result)
        assert again.success is False
        assert again.error
        assert again.clear_organization_context is False
        assert len(list_user_results(db, "u-3")) == 1


class TestExports:
    @pytest.fixture
    def results(self):
        return [
            make_result(1, [40] * 13),
            make_result(2, [20] * 13, LeadershipFamily.REGULATORS, LeadershipType.ANCHOR),
        ]

    def test_json_payload(self, results):
        payload = json.loads(make_json_export_payload("org-9", results))
        assert payload["organization_id"] == "org-9"
        assert payload["summary"]["completed_count"] == 2
        assert payload["summary"]["metric_averages"]["SA"] == 30
        assert payload["results"][0]["AssessmentID"] == "r-1"
        assert payload["results"][1]["Type"] == "ANCHOR"
        assert payload["results"][0]["CompletedAt"].startswith("2026-06-01")

    def test_xlsx_workbook(self, results):
        data = make_xlsx_export_bytes(results)
        with zipfile.ZipFile(io.BytesIO(data)) as workbook:
            names = workbook.namelist()
            book = workbook.read("xl/workbook.xml").decode("utf-8")
            strings = workbook.read("xl/sharedStrings.xml").decode("utf-8")
        assert "xl/worksheets/sheet2.xml" in names
        assert 'name="Results"' in book
        assert 'name="Team Summary"' in book
        assert "r-1" in strings
        assert "ANCHOR" in strings

    def test_xlsx_empty_organization(self):
        data = make_xlsx_export_bytes([])
        assert data[:2] == b"PK"
