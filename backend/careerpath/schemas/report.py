"""Career Analysis Report models.

The report comes back from a language model, so nothing about it can be
trusted: sections may be missing, strings may arrive as numbers, levels as
"Level 3", and rows in the older positional form. These models accept all of
that and always produce the full shape with empty defaults.
"""
import math
import re
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

MAX_LEVEL = 5

LEVEL_TERMS = {
    "novice": 1,
    "basic": 1,
    "foundation": 1,
    "beginner": 1,
    "initial": 1,
    "intermediate": 2,
    "practitioner": 2,
    "applied": 2,
    "advanced": 3,
    "experienced": 3,
    "proficient": 3,
    "expert": 4,
    "senior": 4,
    "authority": 4,
    "master": 5,
    "leading": 5,
    "strategic": 5,
    "principal": 5,
}

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_DIGITS_RE = re.compile(r"\d+(?:\.\d+)?")


def parse_level(value: Any, default: int = 0) -> int:
    """Map a proficiency value ("Level 3", "advanced", 4.0) onto the 0-5 scale."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return default
        return int(round(min(MAX_LEVEL, max(0, value))))
    if not isinstance(value, str):
        return default
    match = _DIGITS_RE.search(value)
    if match:
        return int(round(min(MAX_LEVEL, max(1, float(match.group())))))
    lowered = value.lower()
    for term, level in LEVEL_TERMS.items():
        if term in lowered:
            return level
    return default


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float, bool)):
        return str(value)
    return ""


def _coerce_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        match = _NUMBER_RE.search(value.replace(",", ""))
        if not match:
            return 0
        number = float(match.group())
    else:
        return 0
    if not math.isfinite(number):
        return 0
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _coerce_text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    out: list[str] = []
    for entry in value:
        text = _coerce_text(entry)
        if text:
            out.append(text)
    return out


def _coerce_number_list(value: Any) -> list[int | float]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_coerce_number(entry) for entry in value]


def _coerce_rows(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        return []
    return [entry for entry in value if isinstance(entry, (dict, list, tuple))]


Text = Annotated[str, BeforeValidator(_coerce_text)]
Number = Annotated[int | float, BeforeValidator(_coerce_number)]
Level = Annotated[int, BeforeValidator(parse_level)]
TextList = Annotated[list[str], BeforeValidator(_coerce_text_list)]
NumberList = Annotated[list[int | float], BeforeValidator(_coerce_number_list)]


def Rows(model: type) -> Any:
    return Annotated[list[model], BeforeValidator(_coerce_rows)]


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # Wire names, in order, for rows that arrive as arrays instead of objects.
    positional_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _accept_loose_input(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data
        if isinstance(data, (list, tuple)) and cls.positional_fields:
            return dict(zip(cls.positional_fields, data))
        if not isinstance(data, dict):
            return {}
        return data

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class FitScore(ReportModel):
    score: Number = 0
    out_of: Number = 10
    description: Text = ""


class ExecutiveSummary(ReportModel):
    summary: Text = ""
    career_goal: Text = ""
    fit_score: FitScore = Field(default_factory=FitScore)
    key_findings: TextList = Field(default_factory=list)


class FrameworkSkill(ReportModel):
    positional_fields = ("skill", "proficiency", "description", "category")

    skill: Text = ""
    proficiency: Level = 0
    description: Text = ""
    category: Text = ""


class SkillMapping(ReportModel):
    skills_analysis: Text = ""
    sfia_skills: Rows(FrameworkSkill) = Field(default_factory=list)
    dig_comp_skills: Rows(FrameworkSkill) = Field(default_factory=list)
    other_skills: Rows(FrameworkSkill) = Field(default_factory=list)


class ChartDataset(ReportModel):
    label: Text = ""
    data: NumberList = Field(default_factory=list)


class ChartData(ReportModel):
    labels: TextList = Field(default_factory=list)
    datasets: Rows(ChartDataset) = Field(default_factory=list)


class SkillGap(ReportModel):
    positional_fields = (
        "skill",
        "currentLevel",
        "requiredLevel",
        "gap",
        "priority",
        "improvementSuggestion",
    )

    skill: Text = ""
    current_level: Level = 0
    required_level: Level = 0
    gap: Number = 0
    priority: Text = ""
    improvement_suggestion: Text = ""


class SkillStrength(ReportModel):
    positional_fields = ("skill", "currentLevel", "requiredLevel", "advantage", "leverageSuggestion")

    skill: Text = ""
    current_level: Level = 0
    required_level: Level = 0
    advantage: Number = 0
    leverage_suggestion: Text = ""


class SkillGapAnalysis(ReportModel):
    target_role: Text = ""
    current_proficiency_data: ChartData = Field(default_factory=ChartData)
    gap_analysis_data: ChartData = Field(default_factory=ChartData)
    ai_analysis: Text = ""
    key_gaps: Rows(SkillGap) = Field(default_factory=list)
    key_strengths: Rows(SkillStrength) = Field(default_factory=list)


class PathwayStep(ReportModel):
    positional_fields = ("step", "timeframe", "description")

    step: Text = ""
    timeframe: Text = ""
    description: Text = ""


class UniversityPathway(ReportModel):
    degree: Text = ""
    institutions: TextList = Field(default_factory=list)
    duration: Text = ""
    outcomes: TextList = Field(default_factory=list)


class VocationalPathway(ReportModel):
    certification: Text = ""
    providers: TextList = Field(default_factory=list)
    duration: Text = ""
    outcomes: TextList = Field(default_factory=list)


class CareerPathwayOptions(ReportModel):
    pathway_description: Text = ""
    current_role: Text = ""
    target_role: Text = ""
    timeframe: Text = ""
    pathway_steps: Rows(PathwayStep) = Field(default_factory=list)
    university_pathway: Rows(UniversityPathway) = Field(default_factory=list)
    vocational_pathway: Rows(VocationalPathway) = Field(default_factory=list)
    ai_insights: Text = ""


class DevelopmentSkill(ReportModel):
    positional_fields = ("skill", "currentLevel", "targetLevel", "timeframe", "resources")

    skill: Text = ""
    current_level: Level = 0
    target_level: Level = 0
    timeframe: Text = ""
    resources: TextList = Field(default_factory=list)


class SkillToAcquire(ReportModel):
    positional_fields = ("skill", "reason", "timeframe", "resources")

    skill: Text = ""
    reason: Text = ""
    timeframe: Text = ""
    resources: TextList = Field(default_factory=list)


class DevelopmentPlan(ReportModel):
    overview: Text = ""
    technical_skills: Rows(DevelopmentSkill) = Field(default_factory=list)
    soft_skills: Rows(DevelopmentSkill) = Field(default_factory=list)
    skills_to_acquire: Rows(SkillToAcquire) = Field(default_factory=list)


class Program(ReportModel):
    name: Text = ""
    provider: Text = ""
    duration: Text = ""
    format: Text = ""
    skills_covered: TextList = Field(default_factory=list)
    description: Text = ""


class ProjectIdea(ReportModel):
    title: Text = ""
    description: Text = ""
    skills_developed: TextList = Field(default_factory=list)
    difficulty: Text = ""
    time_estimate: Text = ""


class EducationalPrograms(ReportModel):
    introduction: Text = ""
    recommended_programs: Rows(Program) = Field(default_factory=list)
    project_ideas: Rows(ProjectIdea) = Field(default_factory=list)


class PhaseResource(ReportModel):
    type: Text = ""
    name: Text = ""
    link: Text = ""


class LearningPhase(ReportModel):
    phase: Text = ""
    timeframe: Text = ""
    focus: Text = ""
    milestones: TextList = Field(default_factory=list)
    resources: Rows(PhaseResource) = Field(default_factory=list)


class SkillProgression(ReportModel):
    skill: Text = ""
    start_level: Level = 0
    target_level: Level = 0
    milestones: TextList = Field(default_factory=list)


class LearningRoadmap(ReportModel):
    overview: Text = ""
    phases: Rows(LearningPhase) = Field(default_factory=list)
    skills_progression: Rows(SkillProgression) = Field(default_factory=list)


class SimilarRole(ReportModel):
    role: Text = ""
    similarity_score: Number = 0
    key_skill_overlap: TextList = Field(default_factory=list)
    additional_skills_needed: TextList = Field(default_factory=list)
    summary: Text = ""
    average_salary: Text = ""


class SimilarRoles(ReportModel):
    introduction: Text = ""
    roles: Rows(SimilarRole) = Field(default_factory=list)


class QuickWin(ReportModel):
    tip: Text = ""
    timeframe: Text = ""
    impact: Text = ""


class QuickTips(ReportModel):
    introduction: Text = ""
    quick_wins: Rows(QuickWin) = Field(default_factory=list)
    industry_insights: TextList = Field(default_factory=list)


class SalaryRange(ReportModel):
    min: Number = 0
    max: Number = 0
    currency: Text = "USD"


class GrowthStage(ReportModel):
    role: Text = ""
    timeline: Text = ""
    responsibilities: TextList = Field(default_factory=list)
    skills_required: TextList = Field(default_factory=list)
    salary: SalaryRange = Field(default_factory=SalaryRange)


class SalaryPoint(ReportModel):
    positional_fields = ("stage", "timeframe", "salary")

    stage: Text = ""
    timeframe: Text = ""
    salary: Text = ""


class GrowthTrajectory(ReportModel):
    introduction: Text = ""
    short_term: GrowthStage = Field(default_factory=GrowthStage)
    medium_term: GrowthStage = Field(default_factory=GrowthStage)
    long_term: GrowthStage = Field(default_factory=GrowthStage)
    potential_salary_progression: Rows(SalaryPoint) = Field(default_factory=list)


class TrajectoryStage(ReportModel):
    stage: Text = ""
    timeframe: Text = ""
    role: Text = ""
    skills: TextList = Field(default_factory=list)
    milestones: TextList = Field(default_factory=list)


class LearningPathRoadmap(ReportModel):
    overview: Text = ""
    career_trajectory: Rows(TrajectoryStage) = Field(default_factory=list)


class CareerAnalysisReport(ReportModel):
    executive_summary: ExecutiveSummary = Field(default_factory=ExecutiveSummary)
    skill_mapping: SkillMapping = Field(default_factory=SkillMapping)
    skill_gap_analysis: SkillGapAnalysis = Field(default_factory=SkillGapAnalysis)
    career_pathway_options: CareerPathwayOptions = Field(default_factory=CareerPathwayOptions)
    development_plan: DevelopmentPlan = Field(default_factory=DevelopmentPlan)
    educational_programs: EducationalPrograms = Field(default_factory=EducationalPrograms)
    learning_roadmap: LearningRoadmap = Field(default_factory=LearningRoadmap)
    similar_roles: SimilarRoles = Field(default_factory=SimilarRoles)
    quick_tips: QuickTips = Field(default_factory=QuickTips)
    growth_trajectory: GrowthTrajectory = Field(default_factory=GrowthTrajectory)
    learning_path_roadmap: LearningPathRoadmap = Field(default_factory=LearningPathRoadmap)
    timestamp: Text = ""


REPORT_SECTIONS = tuple(
    field.alias or name
    for name, field in CareerAnalysisReport.model_fields.items()
    if name != "timestamp"
)
