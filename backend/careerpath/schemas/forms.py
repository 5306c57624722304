"""Client-side form schemas for career data submitted by users.

Every field defaults to an empty value so that a missing field produces the
same user-facing message as a blank one. Messages are attached through
``PydanticCustomError`` so they surface verbatim as inline field errors.
"""
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

PROFESSIONAL_LEVELS = (
    "Entry-Level",
    "Junior",
    "Mid-Level",
    "Senior",
    "Lead",
    "Manager",
    "Director",
    "Executive",
)
MAX_SKILLS = 50
MAX_DESIRED_ROLE_CHARS = 250
DEFAULT_MAX_RESULTS = 5

FormT = TypeVar("FormT", bound=BaseModel)


def _require_length(value: str, minimum: int, message: str) -> str:
    if len(value.strip()) < minimum:
        raise PydanticCustomError("string_too_short", message)
    return value.strip()


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class LearningResourcesForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    skill: str = ""
    current_level: str = Field(default="", alias="currentLevel")
    target_level: str = Field(default="", alias="targetLevel")
    context: str = ""
    learning_style: Optional[str] = Field(default=None, alias="learningStyle")
    resource_type: Optional[str] = Field(default=None, alias="resourceType")

    @field_validator("skill")
    @classmethod
    def check_skill(cls, value: str) -> str:
        return _require_length(value, 2, "Skill name must be at least 2 characters")

    @field_validator("current_level")
    @classmethod
    def check_current_level(cls, value: str) -> str:
        return _require_length(value, 1, "Please select your current level")

    @field_validator("target_level")
    @classmethod
    def check_target_level(cls, value: str) -> str:
        return _require_length(value, 1, "Please select your target level")

    @field_validator("context")
    @classmethod
    def check_context(cls, value: str) -> str:
        return _require_length(value, 10, "Context must be at least 10 characters")

    @field_validator("learning_style", "resource_type")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return _optional(value)

    def skill_payload(self) -> dict[str, Any]:
        payload = {
            "skill": self.skill,
            "currentLevel": self.current_level,
            "targetLevel": self.target_level,
            "context": self.context,
        }
        if self.learning_style:
            payload["learningStyle"] = self.learning_style
        return payload

    def recommendation_payload(self, max_results: int = DEFAULT_MAX_RESULTS) -> dict[str, Any]:
        return {
            "skills": [self.skill_payload()],
            "preferredTypes": [self.resource_type] if self.resource_type else None,
            "maxResults": max_results,
        }

    def learning_path_payload(self) -> dict[str, Any]:
        return self.skill_payload()


class CareerAnalysisForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    professional_level: str = Field(default="", alias="professionalLevel")
    current_skills: str = Field(default="", alias="currentSkills")
    educational_background: str = Field(default="", alias="educationalBackground")
    career_history: str = Field(default="", alias="careerHistory")
    desired_role: str = Field(default="", alias="desiredRole")
    state: str = ""
    country: str = ""

    @field_validator("professional_level")
    @classmethod
    def check_professional_level(cls, value: str) -> str:
        if value.strip() not in PROFESSIONAL_LEVELS:
            raise PydanticCustomError(
                "professional_level",
                "Please select your professional level",
            )
        return value.strip()

    @field_validator("current_skills")
    @classmethod
    def check_current_skills(cls, value: str) -> str:
        value = _require_length(value, 2, "Please list at least one of your current skills")
        if len(split_skills(value)) > MAX_SKILLS:
            raise PydanticCustomError(
                "too_many_skills",
                "Current skills exceed the maximum limit of {limit} skills.",
                {"limit": MAX_SKILLS},
            )
        return value

    @field_validator("educational_background")
    @classmethod
    def check_education(cls, value: str) -> str:
        return _require_length(value, 2, "Please describe your educational background")

    @field_validator("career_history")
    @classmethod
    def check_career_history(cls, value: str) -> str:
        return _require_length(value, 2, "Please describe your career history")

    @field_validator("desired_role")
    @classmethod
    def check_desired_role(cls, value: str) -> str:
        value = _require_length(value, 2, "Please enter your desired role")
        if len(value) > MAX_DESIRED_ROLE_CHARS:
            raise PydanticCustomError(
                "desired_role_too_long",
                "Desired role exceeds the maximum limit of {limit} characters.",
                {"limit": MAX_DESIRED_ROLE_CHARS},
            )
        return value

    @field_validator("state")
    @classmethod
    def check_state(cls, value: str) -> str:
        return _require_length(value, 2, "Please enter your state or region")

    @field_validator("country")
    @classmethod
    def check_country(cls, value: str) -> str:
        return _require_length(value, 2, "Please enter your country")

    def payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


def split_skills(text: str) -> list[str]:
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def field_errors(exc: ValidationError) -> dict[str, str]:
    """First error message per field, keyed by the field's wire name."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        key = str(loc[0])
        errors.setdefault(key, error["msg"])
    return errors


def validate_form(model: type[FormT], data: Any) -> tuple[FormT | None, dict[str, str]]:
    try:
        return model.model_validate(data or {}), {}
    except ValidationError as exc:
        return None, field_errors(exc)
