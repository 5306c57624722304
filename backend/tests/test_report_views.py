from pathlib import Path
import copy
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.services import report_views as views
from careerpath.services.report_structure import structure_report
from careerpath.services.sample_report import generate_sample_report


@pytest.mark.parametrize("section", [None, "garbage", [], 42, {}])
def test_every_renderer_tolerates_missing_or_wrong_typed_sections(section):
    for key, renderer in views.SECTION_RENDERERS:
        rendered = renderer(section)
        assert rendered["title"]
        assert rendered["available"] is False, key


def test_missing_executive_summary_uses_fallback_text():
    rendered = views.render_executive_summary(None)

    assert rendered["summary"] == views.DATA_NOT_AVAILABLE
    assert rendered["career_goal"] == views.NOT_SPECIFIED
    assert rendered["fit_score"]["percent"] == 0
    assert rendered["key_findings"] == {"items": [], "placeholder": views.NO_DATA}


def test_fit_score_percentage():
    rendered = views.render_executive_summary({"fitScore": {"score": 7, "outOf": 10}})

    assert rendered["fit_score"]["percent"] == 70.0
    assert rendered["fit_score"]["description"] == views.NOT_SPECIFIED


@pytest.mark.parametrize(
    "value, expected",
    [
        ("$90,000 - $120,000", 90000),
        ("$90,000", 90000),
        ("USD 75,500", 75500),
        ("$95k", 95000),
        (110000, 110000),
        ("Competitive", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_salary(value, expected):
    assert views.parse_salary(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3), ("Level 3", 3), ("advanced", 3), ("Expert", 4), (9, 5), ("unknown", 0), (None, 0)],
)
def test_parse_level(value, expected):
    assert views.parse_level(value) == expected


def test_skill_gap_widths():
    rendered = views.render_skill_gap_analysis({"keyGaps": [{"skill": "SQL", "currentLevel": 2, "requiredLevel": 5}]})

    gap = rendered["key_gaps"]["items"][0]
    assert gap["current_width"] == 40
    assert gap["required_width"] == 100
    assert gap["gap"] == 3
    assert gap["suggestion"] == views.NO_DATA
    assert rendered["radar"] == [{"skill": "SQL", "current": 2, "required": 5, "full_mark": 5}]


def test_positional_gap_rows_render():
    rendered = views.render_skill_gap_analysis({"keyGaps": [["Python", 1, 4, 3, "High", "Practice"]]})

    gap = rendered["key_gaps"]["items"][0]
    assert gap["skill"] == "Python"
    assert gap["priority"] == "High"
    assert gap["required_width"] == 80


def test_radar_falls_back_to_chart_data():
    section = {
        "currentProficiencyData": {"labels": ["SQL", "Python"], "datasets": [{"label": "Current", "data": [2, 3]}]},
        "gapAnalysisData": {
            "labels": ["SQL", "Python"],
            "datasets": [{"label": "Current", "data": [2, 3]}, {"label": "Required", "data": [4, 5]}],
        },
    }

    points = views.skill_gap_radar(section)

    assert [(p["skill"], p["current"], p["required"]) for p in points] == [("SQL", 2, 4), ("Python", 3, 5)]


def test_salary_progression_from_loose_strings():
    section = {
        "potentialSalaryProgression": [
            {"stage": "Entry", "timeframe": "Year 1", "salary": "$75,000 - $95,000"},
            {"stage": "Senior", "timeframe": "Year 5", "salary": "negotiable"},
        ]
    }

    points = views.salary_progression(section)

    assert [point["value"] for point in points] == [75000, 0]


def test_salary_progression_falls_back_to_stage_salaries():
    section = {"shortTerm": {"timeline": "1 year", "salary": {"min": 60000, "max": 70000, "currency": "USD"}}}

    points = views.salary_progression(section)

    assert points == [{"stage": "Short Term", "timeframe": "1 year", "salary": "USD 60,000 - 70,000", "value": 60000}]


def test_similar_roles_accept_alternate_field_names():
    rendered = views.render_similar_roles(
        {"roles": [{"title": "ML Engineer", "skillsOverlap": 80, "description": "Close match", "salaryRange": "$120k"}]}
    )

    role = rendered["roles"]["items"][0]
    assert role["role"] == "ML Engineer"
    assert role["similarity_score"] == 80
    assert role["summary"] == "Close match"
    assert role["average_salary"] == "$120k"


def test_render_report_does_not_mutate_input():
    report = generate_sample_report({"desiredRole": "Data Analyst"})
    before = copy.deepcopy(report)

    rendered = views.render_report(report)

    assert report == before
    assert [section["key"] for section in rendered["sections"]] == [key for key, _ in views.SECTION_RENDERERS]
    assert all(section["available"] for section in rendered["sections"])
    growth = next(section for section in rendered["sections"] if section["key"] == "growthTrajectory")
    assert growth["salary_progression"]["items"][0]["value"] == 75000


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_render_as_zero(value):
    assert views.parse_salary(value) == 0
    assert views.parse_level(value) == 0
    assert views.level_width(value) == 0

    growth = views.render_growth_trajectory({"potentialSalaryProgression": [{"stage": "Now", "salary": value}]})
    summary = views.render_executive_summary({"fitScore": {"score": value, "outOf": value}})

    assert growth["salary_progression"]["items"][0]["value"] == 0
    assert summary["fit_score"]["score"] == 0
    assert summary["fit_score"]["out_of"] == 10


def test_word_levels_survive_structuring():
    raw = {
        "skillMapping": {"sfiaSkills": [{"skill": "Programming", "proficiency": "Advanced"}]},
        "skillGapAnalysis": {
            "keyGaps": [{"skill": "Leadership", "currentLevel": "Intermediate", "requiredLevel": "Expert"}]
        },
        "learningRoadmap": {"skillsProgression": [{"skill": "SQL", "startLevel": "beginner", "targetLevel": "Level 4"}]},
    }

    report = structure_report(raw)
    mapping = views.render_skill_mapping(report["skillMapping"])
    gaps = views.render_skill_gap_analysis(report["skillGapAnalysis"])
    roadmap = views.render_learning_roadmap(report["learningRoadmap"])

    assert report["skillMapping"]["sfiaSkills"][0]["proficiency"] == 3
    assert mapping["frameworks"][0]["items"][0]["proficiency"] == 3
    assert mapping["frameworks"][0]["items"][0]["width"] == 60
    gap = gaps["key_gaps"]["items"][0]
    assert (gap["current_level"], gap["required_level"]) == (2, 4)
    progression = roadmap["skills_progression"]["items"][0]
    assert (progression["start_level"], progression["target_level"]) == (1, 4)
