from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.schemas.forms import (
    CareerAnalysisForm,
    LearningResourcesForm,
    split_skills,
    validate_form,
)

VALID_RESOURCES = {
    "skill": "Python",
    "currentLevel": "beginner",
    "targetLevel": "advanced",
    "context": "I want to move into data analysis work",
}

VALID_ANALYSIS = {
    "professionalLevel": "Mid-Level",
    "currentSkills": "Project management, Stakeholder management, SQL",
    "educationalBackground": "BSc Business Administration",
    "careerHistory": "Product Manager at Acme (3 years)",
    "desiredRole": "Data Scientist",
    "state": "California",
    "country": "United States",
}


def test_one_character_skill_is_rejected_with_message():
    form, errors = validate_form(LearningResourcesForm, {**VALID_RESOURCES, "skill": "P"})

    assert form is None
    assert errors["skill"] == "Skill name must be at least 2 characters"


def test_missing_levels_and_short_context_report_each_field():
    form, errors = validate_form(LearningResourcesForm, {"skill": "SQL", "context": "short"})

    assert form is None
    assert errors["currentLevel"] == "Please select your current level"
    assert errors["targetLevel"] == "Please select your target level"
    assert errors["context"] == "Context must be at least 10 characters"


def test_valid_resources_form_builds_request_payloads():
    form, errors = validate_form(
        LearningResourcesForm,
        {**VALID_RESOURCES, "learningStyle": "visual", "resourceType": "course"},
    )

    assert errors == {}
    payload = form.recommendation_payload(3)
    assert payload["maxResults"] == 3
    assert payload["preferredTypes"] == ["course"]
    assert payload["skills"] == [
        {
            "skill": "Python",
            "currentLevel": "beginner",
            "targetLevel": "advanced",
            "context": "I want to move into data analysis work",
            "learningStyle": "visual",
        }
    ]
    assert form.learning_path_payload()["skill"] == "Python"


def test_blank_resource_type_means_no_preference():
    form, _ = validate_form(LearningResourcesForm, {**VALID_RESOURCES, "resourceType": "  "})

    assert form.resource_type is None
    assert form.recommendation_payload()["preferredTypes"] is None


def test_career_analysis_payload_uses_wire_names():
    form, errors = validate_form(CareerAnalysisForm, VALID_ANALYSIS)

    assert errors == {}
    assert form.payload() == VALID_ANALYSIS


def test_unknown_professional_level_is_rejected():
    _, errors = validate_form(CareerAnalysisForm, {**VALID_ANALYSIS, "professionalLevel": "Wizard"})

    assert errors["professionalLevel"] == "Please select your professional level"


def test_more_than_fifty_skills_is_rejected():
    skills = ", ".join(f"Skill {index}" for index in range(51))

    _, errors = validate_form(CareerAnalysisForm, {**VALID_ANALYSIS, "currentSkills": skills})

    assert errors["currentSkills"] == "Current skills exceed the maximum limit of 50 skills."


def test_desired_role_longer_than_250_characters_is_rejected():
    _, errors = validate_form(CareerAnalysisForm, {**VALID_ANALYSIS, "desiredRole": "x" * 251})

    assert errors["desiredRole"] == "Desired role exceeds the maximum limit of 250 characters."


def test_split_skills_ignores_blank_entries():
    assert split_skills("Python, , SQL ,") == ["Python", "SQL"]
    assert split_skills("") == []
