from pathlib import Path
import json
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.schemas.report import REPORT_SECTIONS
from careerpath.services.report_structure import missing_sections, structure_report
from careerpath.services.sample_report import generate_sample_report


def test_wrong_typed_sections_become_empty_sections():
    report = structure_report({"executiveSummary": "oops", "skillMapping": [1, 2], "quickTips": None})

    for section in REPORT_SECTIONS:
        assert isinstance(report[section], dict)
    assert report["executiveSummary"] == {
        "summary": "",
        "careerGoal": "",
        "fitScore": {"score": 0, "outOf": 10, "description": ""},
        "keyFindings": [],
    }
    assert report["skillMapping"]["sfiaSkills"] == []
    assert report["timestamp"].endswith("Z")
    assert "+00:00" not in report["timestamp"]


def test_positional_rows_are_accepted():
    report = structure_report(
        {
            "skillGapAnalysis": {
                "keyGaps": [["Python", "Level 2", 5, 3, "High", "Build a project"]],
            },
            "skillMapping": {"sfiaSkills": [["Programming", "4", "Writes production code"]]},
        }
    )

    assert report["skillGapAnalysis"]["keyGaps"] == [
        {
            "skill": "Python",
            "currentLevel": 2,
            "requiredLevel": 5,
            "gap": 3,
            "priority": "High",
            "improvementSuggestion": "Build a project",
        }
    ]
    assert report["skillMapping"]["sfiaSkills"][0]["proficiency"] == 4
    assert report["skillMapping"]["sfiaSkills"][0]["category"] == ""


def test_json_text_envelopes_and_legacy_names():
    raw = json.dumps({"report": {"gapAnalysis": {"targetRole": "Data Engineer"}, "timestamp": "2026-01-01T00:00:00Z"}})

    report = structure_report(raw)

    assert report["skillGapAnalysis"]["targetRole"] == "Data Engineer"
    assert report["timestamp"] == "2026-01-01T00:00:00Z"


def test_invalid_json_still_yields_full_shape():
    report = structure_report("{not json")

    assert set(REPORT_SECTIONS) <= set(report)
    assert report["growthTrajectory"]["shortTerm"]["salary"]["currency"] == "USD"


def test_missing_sections_lists_absent_or_wrong_typed_sections():
    absent = missing_sections({"executiveSummary": {}, "skillMapping": "text"})

    assert "executiveSummary" not in absent
    assert "skillMapping" in absent
    assert len(absent) == len(REPORT_SECTIONS) - 1


def test_sample_report_is_complete_and_personalized():
    request_data = {
        "professionalLevel": "Senior",
        "currentSkills": "Negotiation, Budgeting",
        "careerHistory": "Account Manager at Globex (5 years)",
        "desiredRole": "Cloud Engineer",
        "state": "Texas",
        "country": "United States",
    }

    sample = generate_sample_report(request_data)
    report = structure_report(sample)

    assert missing_sections(sample) == []
    assert report["executiveSummary"]["careerGoal"] == "Cloud Engineer"
    assert report["careerPathwayOptions"]["currentRole"] == "Account Manager"
    assert report["skillGapAnalysis"]["keyStrengths"][0]["skill"] == "Negotiation"


def test_non_finite_numbers_become_zero():
    report = structure_report(
        {
            "executiveSummary": {"fitScore": {"score": float("nan")}},
            "skillMapping": {"sfiaSkills": [{"skill": "SQL", "proficiency": float("inf")}]},
        }
    )

    assert report["executiveSummary"]["fitScore"]["score"] == 0
    assert report["skillMapping"]["sfiaSkills"][0]["proficiency"] == 0
