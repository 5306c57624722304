"""Display models for the Career Analysis Report.

Each ``render_*`` function takes one report section exactly as it arrived
(possibly ``None``, possibly the wrong type, possibly half-filled) and returns
a plain dict ready for a template or chart library. Nothing here raises on
bad data or mutates its input; missing values become fallback text. Chart
series are derived from scratch on every call.
"""
from __future__ import annotations

import math
import re
from typing import Any, Callable

from careerpath.schemas.report import MAX_LEVEL, parse_level

NOT_SPECIFIED = "Not specified"
DATA_NOT_AVAILABLE = "Data not available"
NO_DATA = "No data available"

_SALARY_RE = re.compile(r"(\d[\d,]*(?:\.\d+)?)\s*([kKmM])?")
_DIGITS_RE = re.compile(r"\d+(?:\.\d+)?")


# -- value helpers ---------------------------------------------------------

def _section(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any, fallback: str = NOT_SPECIFIED) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return fallback


def _strings(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [_text(entry, "") for entry in value if _text(entry, "")]


def _rows(value: Any, positional: tuple[str, ...] = ()) -> list[dict[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    rows: list[dict[str, Any]] = []
    for entry in value:
        if isinstance(entry, dict):
            rows.append(entry)
        elif positional and isinstance(entry, (list, tuple)):
            rows.append(dict(zip(positional, entry)))
    return rows


def _number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else default
    if isinstance(value, str):
        match = _DIGITS_RE.search(value.replace(",", ""))
        if match:
            number = float(match.group())
            if not math.isfinite(number):
                return default
            return int(number) if number.is_integer() else number
    return default


def _block(items: list[Any]) -> dict[str, Any]:
    return {"items": items, "placeholder": None if items else NO_DATA}


def parse_salary(value: Any) -> int:
    """Leading numeric value of a loosely formatted salary.

    "$90,000 - $120,000" and "$90,000" both give 90000, "$95k" gives 95000,
    anything unparsable gives 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    if not isinstance(value, str):
        return 0
    match = _SALARY_RE.search(value)
    if not match:
        return 0
    try:
        amount = float(match.group(1).replace(",", ""))
    except ValueError:
        return 0
    suffix = (match.group(2) or "").lower()
    if suffix == "k":
        amount *= 1_000
    elif suffix == "m":
        amount *= 1_000_000
    if not math.isfinite(amount):
        return 0
    return int(amount)


def level_width(level: Any) -> float:
    """Progress-bar width in percent for a level on the 0-5 scale."""
    numeric = min(MAX_LEVEL, max(0, _number(level)))
    return round(numeric / MAX_LEVEL * 100, 1)


# -- sections --------------------------------------------------------------

def render_executive_summary(section: Any) -> dict[str, Any]:
    data = _section(section)
    fit = _section(data.get("fitScore"))
    score = _number(fit.get("score"))
    out_of = _number(fit.get("outOf"), 10) or 10
    return {
        "title": "Executive Summary",
        "available": bool(data),
        "summary": _text(data.get("summary"), DATA_NOT_AVAILABLE),
        "career_goal": _text(data.get("careerGoal")),
        "fit_score": {
            "score": score,
            "out_of": out_of,
            "percent": round(min(100.0, max(0.0, score / out_of * 100)), 1),
            "description": _text(fit.get("description")),
        },
        "key_findings": _block(_strings(data.get("keyFindings"))),
    }


SKILL_FRAMEWORKS = (
    ("sfiaSkills", "SFIA 9"),
    ("digCompSkills", "DigComp 2.2"),
    ("otherSkills", "Other Skills"),
)


def _framework_row(row: dict[str, Any]) -> dict[str, Any]:
    level = parse_level(row.get("proficiency", row.get("level")))
    return {
        "skill": _text(row.get("skill") or row.get("competence")),
        "proficiency": level,
        "width": level_width(level),
        "description": _text(row.get("description"), NO_DATA),
        "category": _text(row.get("category")),
    }


def render_skill_mapping(section: Any) -> dict[str, Any]:
    data = _section(section)
    frameworks = []
    for key, label in SKILL_FRAMEWORKS:
        rows = _rows(data.get(key), ("skill", "proficiency", "description"))
        frameworks.append(
            {
                "key": key,
                "label": label,
                **_block([_framework_row(row) for row in rows]),
            }
        )
    return {
        "title": "Skill Mapping",
        "available": bool(data),
        "skills_analysis": _text(data.get("skillsAnalysis"), DATA_NOT_AVAILABLE),
        "frameworks": frameworks,
    }


GAP_FIELDS = ("skill", "currentLevel", "requiredLevel", "gap", "priority", "improvementSuggestion")
STRENGTH_FIELDS = ("skill", "currentLevel", "requiredLevel", "advantage", "leverageSuggestion")


def _gap_row(row: dict[str, Any]) -> dict[str, Any]:
    current = parse_level(row.get("currentLevel"))
    required = parse_level(row.get("requiredLevel"))
    gap = _number(row.get("gap"), required - current)
    return {
        "skill": _text(row.get("skill")),
        "current_level": current,
        "required_level": required,
        "gap": gap,
        "priority": _text(row.get("priority")),
        "suggestion": _text(row.get("improvementSuggestion"), NO_DATA),
        "current_width": level_width(current),
        "required_width": level_width(required),
    }


def _strength_row(row: dict[str, Any]) -> dict[str, Any]:
    current = parse_level(row.get("currentLevel"))
    required = parse_level(row.get("requiredLevel"))
    return {
        "skill": _text(row.get("skill")),
        "current_level": current,
        "required_level": required,
        "advantage": _number(row.get("advantage"), current - required),
        "suggestion": _text(row.get("leverageSuggestion"), NO_DATA),
        "current_width": level_width(current),
        "required_width": level_width(required),
    }


def _first_dataset(chart: Any, keyword: str | None = None) -> list[Any]:
    datasets = _rows(_section(chart).get("datasets"))
    if not datasets:
        return []
    if keyword:
        for dataset in datasets:
            if keyword in _text(dataset.get("label"), "").lower():
                return dataset.get("data") if isinstance(dataset.get("data"), list) else []
        dataset = datasets[-1]
    else:
        dataset = datasets[0]
    return dataset.get("data") if isinstance(dataset.get("data"), list) else []


def skill_gap_radar(section: Any) -> list[dict[str, Any]]:
    """Radar-chart points for current vs required level per skill."""
    data = _section(section)
    points = []
    for row in _rows(data.get("keyGaps"), GAP_FIELDS) + _rows(data.get("keyStrengths"), STRENGTH_FIELDS):
        points.append(
            {
                "skill": _text(row.get("skill")),
                "current": parse_level(row.get("currentLevel")),
                "required": parse_level(row.get("requiredLevel")),
                "full_mark": MAX_LEVEL,
            }
        )
    if points:
        return points

    current_chart = data.get("currentProficiencyData")
    labels = _strings(_section(current_chart).get("labels"))
    if not labels:
        labels = _strings(_section(data.get("gapAnalysisData")).get("labels"))
    current_values = _first_dataset(current_chart)
    required_values = _first_dataset(data.get("gapAnalysisData"), "required")
    for index, label in enumerate(labels):
        points.append(
            {
                "skill": label,
                "current": parse_level(current_values[index] if index < len(current_values) else None),
                "required": parse_level(required_values[index] if index < len(required_values) else None),
                "full_mark": MAX_LEVEL,
            }
        )
    return points


def render_skill_gap_analysis(section: Any) -> dict[str, Any]:
    data = _section(section)
    return {
        "title": "Skill Gap Analysis",
        "available": bool(data),
        "target_role": _text(data.get("targetRole")),
        "ai_analysis": _text(data.get("aiAnalysis"), DATA_NOT_AVAILABLE),
        "key_gaps": _block([_gap_row(row) for row in _rows(data.get("keyGaps"), GAP_FIELDS)]),
        "key_strengths": _block(
            [_strength_row(row) for row in _rows(data.get("keyStrengths"), STRENGTH_FIELDS)]
        ),
        "radar": skill_gap_radar(data),
    }


def render_career_pathway_options(section: Any) -> dict[str, Any]:
    data = _section(section)
    steps = [
        {
            "number": index,
            "step": _text(row.get("step")),
            "timeframe": _text(row.get("timeframe")),
            "description": _text(row.get("description"), NO_DATA),
        }
        for index, row in enumerate(_rows(data.get("pathwaySteps"), ("step", "timeframe", "description")), start=1)
    ]
    university = [
        {
            "degree": _text(row.get("degree")),
            "duration": _text(row.get("duration")),
            "institutions": _strings(row.get("institutions")),
            "outcomes": _strings(row.get("outcomes")),
        }
        for row in _rows(data.get("universityPathway"))
    ]
    vocational = [
        {
            "certification": _text(row.get("certification")),
            "duration": _text(row.get("duration")),
            "providers": _strings(row.get("providers")),
            "outcomes": _strings(row.get("outcomes")),
        }
        for row in _rows(data.get("vocationalPathway"))
    ]
    return {
        "title": "Career Pathway Options",
        "available": bool(data),
        "current_role": _text(data.get("currentRole")),
        "target_role": _text(data.get("targetRole")),
        "timeframe": _text(data.get("timeframe")),
        "description": _text(data.get("pathwayDescription"), DATA_NOT_AVAILABLE),
        "steps": _block(steps),
        "university_pathway": _block(university),
        "vocational_pathway": _block(vocational),
        "ai_insights": _text(data.get("aiInsights"), DATA_NOT_AVAILABLE),
    }


def _development_row(row: dict[str, Any]) -> dict[str, Any]:
    current = parse_level(row.get("currentLevel"))
    target = parse_level(row.get("targetLevel"))
    return {
        "skill": _text(row.get("skill")),
        "current_level": current,
        "target_level": target,
        "current_width": level_width(current),
        "target_width": level_width(target),
        "timeframe": _text(row.get("timeframe")),
        "resources": _strings(row.get("resources")),
    }


def render_development_plan(section: Any) -> dict[str, Any]:
    data = _section(section)
    development_fields = ("skill", "currentLevel", "targetLevel", "timeframe", "resources")
    to_acquire = [
        {
            "skill": _text(row.get("skill")),
            "reason": _text(row.get("reason"), NO_DATA),
            "timeframe": _text(row.get("timeframe")),
            "resources": _strings(row.get("resources")),
        }
        for row in _rows(data.get("skillsToAcquire"), ("skill", "reason", "timeframe", "resources"))
    ]
    return {
        "title": "Development Plan",
        "available": bool(data),
        "overview": _text(data.get("overview"), DATA_NOT_AVAILABLE),
        "technical_skills": _block(
            [_development_row(row) for row in _rows(data.get("technicalSkills"), development_fields)]
        ),
        "soft_skills": _block(
            [_development_row(row) for row in _rows(data.get("softSkills"), development_fields)]
        ),
        "skills_to_acquire": _block(to_acquire),
    }


def render_educational_programs(section: Any) -> dict[str, Any]:
    data = _section(section)
    programs = [
        {
            "name": _text(row.get("name")),
            "provider": _text(row.get("provider")),
            "duration": _text(row.get("duration")),
            "format": _text(row.get("format")),
            "skills_covered": _strings(row.get("skillsCovered")),
            "description": _text(row.get("description"), NO_DATA),
        }
        for row in _rows(data.get("recommendedPrograms"))
    ]
    projects = [
        {
            "title": _text(row.get("title")),
            "description": _text(row.get("description"), NO_DATA),
            "skills_developed": _strings(row.get("skillsDeveloped")),
            "difficulty": _text(row.get("difficulty") or row.get("difficultyLevel")),
            "time_estimate": _text(row.get("timeEstimate") or row.get("completionTime") or row.get("timeline")),
        }
        for row in _rows(data.get("projectIdeas") or data.get("suggestedProjects"))
    ]
    return {
        "title": "Educational Programs",
        "available": bool(data),
        "introduction": _text(data.get("introduction"), DATA_NOT_AVAILABLE),
        "programs": _block(programs),
        "projects": _block(projects),
    }


def _resource_links(value: Any) -> list[dict[str, str]]:
    return [
        {
            "type": _text(row.get("type")),
            "name": _text(row.get("name")),
            "link": _text(row.get("link") or row.get("url"), ""),
        }
        for row in _rows(value)
    ]


def render_learning_roadmap(section: Any) -> dict[str, Any]:
    data = _section(section)
    phases = [
        {
            "number": index,
            "phase": _text(row.get("phase")),
            "timeframe": _text(row.get("timeframe")),
            "focus": _text(row.get("focus") or ", ".join(_strings(row.get("focusAreas"))), NOT_SPECIFIED),
            "milestones": _strings(row.get("milestones")),
            "resources": _resource_links(row.get("resources") or row.get("keyResources")),
        }
        for index, row in enumerate(_rows(data.get("phases") or data.get("learningPhases") or data.get("roadmapPhases")), start=1)
    ]
    progression = []
    for row in _rows(data.get("skillsProgression")):
        start = parse_level(row.get("startLevel"))
        target = parse_level(row.get("targetLevel"))
        progression.append(
            {
                "skill": _text(row.get("skill")),
                "start_level": start,
                "target_level": target,
                "start_width": level_width(start),
                "target_width": level_width(target),
                "milestones": _strings(row.get("milestones")),
            }
        )
    return {
        "title": "Learning Roadmap",
        "available": bool(data),
        "overview": _text(data.get("overview") or data.get("roadmapOverview") or data.get("introduction"), DATA_NOT_AVAILABLE),
        "phases": _block(phases),
        "skills_progression": _block(progression),
    }


def render_similar_roles(section: Any) -> dict[str, Any]:
    data = _section(section)
    roles = [
        {
            "role": _text(row.get("role") or row.get("title")),
            "similarity_score": _number(row.get("similarityScore", row.get("skillsOverlap"))),
            "key_skill_overlap": _strings(row.get("keySkillOverlap") or row.get("requiredSkills")),
            "additional_skills_needed": _strings(row.get("additionalSkillsNeeded")),
            "summary": _text(row.get("summary") or row.get("description"), NO_DATA),
            "average_salary": _text(row.get("averageSalary") or row.get("salaryRange")),
        }
        for row in _rows(data.get("roles"))
    ]
    return {
        "title": "Similar Roles",
        "available": bool(data),
        "introduction": _text(data.get("introduction"), DATA_NOT_AVAILABLE),
        "roles": _block(roles),
    }


def render_quick_tips(section: Any) -> dict[str, Any]:
    data = _section(section)
    quick_wins = [
        {
            "tip": _text(row.get("tip")),
            "timeframe": _text(row.get("timeframe")),
            "impact": _text(row.get("impact")),
        }
        for row in _rows(data.get("quickWins"))
    ]
    return {
        "title": "Quick Tips",
        "available": bool(data),
        "introduction": _text(data.get("introduction"), DATA_NOT_AVAILABLE),
        "quick_wins": _block(quick_wins),
        "industry_insights": _block(_strings(data.get("industryInsights"))),
        "daily_learning_tips": _block(_strings(data.get("dailyLearningTips"))),
        "interview_preparation_tips": _block(_strings(data.get("interviewPreparationTips"))),
        "networking_recommendations": _block(_strings(data.get("networkingRecommendations"))),
    }


GROWTH_STAGES = (
    ("shortTerm", "shortTermGoals", "Short Term"),
    ("mediumTerm", "mediumTermGoals", "Medium Term"),
    ("longTerm", "longTermGoals", "Long Term"),
)


def salary_progression(section: Any) -> list[dict[str, Any]]:
    """Salary series for the growth chart, parsed from loose strings when needed."""
    data = _section(section)
    points = [
        {
            "stage": _text(row.get("stage")),
            "timeframe": _text(row.get("timeframe")),
            "salary": _text(row.get("salary"), DATA_NOT_AVAILABLE),
            "value": parse_salary(row.get("salary")),
        }
        for row in _rows(data.get("potentialSalaryProgression"), ("stage", "timeframe", "salary"))
    ]
    if points:
        return points
    for key, _, label in GROWTH_STAGES:
        stage = _section(data.get(key))
        salary = _section(stage.get("salary"))
        if not salary:
            continue
        low = parse_salary(salary.get("min"))
        high = parse_salary(salary.get("max"))
        currency = _text(salary.get("currency"), "USD")
        points.append(
            {
                "stage": label,
                "timeframe": _text(stage.get("timeline")),
                "salary": f"{currency} {low:,} - {high:,}" if high else f"{currency} {low:,}",
                "value": low,
            }
        )
    return points


def render_growth_trajectory(section: Any) -> dict[str, Any]:
    data = _section(section)
    stages = []
    for key, goals_key, label in GROWTH_STAGES:
        stage = _section(data.get(key))
        goals = _section(data.get(goals_key))
        stages.append(
            {
                "label": label,
                "role": _text(stage.get("role")),
                "timeline": _text(stage.get("timeline") or goals.get("timeframe")),
                "responsibilities": _strings(stage.get("responsibilities")),
                "skills_required": _strings(stage.get("skillsRequired")),
                "goals": _strings(goals.get("goals")),
                "metrics": _strings(goals.get("metrics")),
            }
        )
    return {
        "title": "Growth Trajectory",
        "available": bool(data),
        "introduction": _text(data.get("introduction"), DATA_NOT_AVAILABLE),
        "stages": stages,
        "salary_progression": _block(salary_progression(data)),
    }


def render_learning_path_roadmap(section: Any) -> dict[str, Any]:
    data = _section(section)
    trajectory = [
        {
            "stage": _text(row.get("stage") or row.get("milestone")),
            "timeframe": _text(row.get("timeframe")),
            "role": _text(row.get("role")),
            "skills": _strings(row.get("skills")),
            "milestones": _strings(row.get("milestones") or row.get("description")),
        }
        for row in _rows(data.get("careerTrajectory") or data.get("timelineData"))
    ]
    skill_focus = [
        {
            "skill": _text(row.get("skill")),
            "priority": _text(row.get("priority")),
            "resources": _resource_links(row.get("resources")),
        }
        for row in _rows(data.get("skillFocus"))
    ]
    return {
        "title": "Learning Path Roadmap",
        "available": bool(data),
        "overview": _text(data.get("overview"), DATA_NOT_AVAILABLE),
        "trajectory": _block(trajectory),
        "skill_focus": _block(skill_focus),
    }


SECTION_RENDERERS: tuple[tuple[str, Callable[[Any], dict[str, Any]]], ...] = (
    ("executiveSummary", render_executive_summary),
    ("skillMapping", render_skill_mapping),
    ("skillGapAnalysis", render_skill_gap_analysis),
    ("careerPathwayOptions", render_career_pathway_options),
    ("developmentPlan", render_development_plan),
    ("educationalPrograms", render_educational_programs),
    ("learningRoadmap", render_learning_roadmap),
    ("similarRoles", render_similar_roles),
    ("quickTips", render_quick_tips),
    ("growthTrajectory", render_growth_trajectory),
    ("learningPathRoadmap", render_learning_path_roadmap),
)


def render_report(report: Any) -> dict[str, Any]:
    data = _section(report)
    return {
        "timestamp": _text(data.get("timestamp"), ""),
        "sections": [
            {"key": key, **renderer(data.get(key))}
            for key, renderer in SECTION_RENDERERS
        ],
    }
