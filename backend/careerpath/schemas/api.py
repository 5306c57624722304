from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from uuid import UUID
from datetime import datetime
from typing import Any, Dict, List, Optional


class SkillOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    description: Optional[str] = None
    difficulty: Optional[str] = None
    time_to_learn: Optional[str] = None
    popularity: int = 0
    future_demand: Optional[str] = None


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    category: str
    description: Optional[str] = None
    average_salary: Optional[str] = None
    demand_outlook: Optional[str] = None
    popularity: int = 0


class IndustryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    description: Optional[str] = None
    growth_rate: float = 0.0
    average_salary: int = 0
    job_count: int = 0
    popularity: int = 0


class RoleSkillOut(SkillOut):
    importance: str
    level_required: int
    context: Optional[str] = None


class SearchAllOut(BaseModel):
    skills: List[SkillOut] = Field(default_factory=list)
    roles: List[RoleOut] = Field(default_factory=list)
    industries: List[IndustryOut] = Field(default_factory=list)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SkillToLearnIn(CamelModel):
    skill: str = Field(min_length=1)
    current_level: str | int
    target_level: str | int
    context: str = ""
    learning_style: Optional[str] = None


class LearningResourcesIn(CamelModel):
    skills: List[SkillToLearnIn] = Field(min_length=1)
    preferred_types: Optional[List[str]] = None
    max_results: int = Field(default=5, ge=1, le=20)


class PathStepOut(CamelModel):
    model_config = ConfigDict(extra="allow")

    step: int | str
    resources: List[Dict[str, Any]] = Field(default_factory=list)
    milestone: str = ""
    estimated_time_to_complete: str = ""


class LearningPathOut(CamelModel):
    model_config = ConfigDict(extra="allow")

    skill: str
    description: str
    recommended_sequence: List[PathStepOut] = Field(default_factory=list)


class SaveAnalysisIn(CamelModel):
    report: Optional[Dict[str, Any]] = None
    request_data: Optional[Dict[str, Any]] = None


class RenderReportIn(BaseModel):
    report: Any = None


class SavedAnalysisSummaryOut(BaseModel):
    id: UUID
    desired_role: Optional[str] = None
    professional_level: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime


class SavedAnalysisOut(BaseModel):
    id: UUID
    report: Dict[str, Any]
    request_data: Dict[str, Any]
    created_at: datetime
