import logging
from typing import Any
from uuid import uuid4

from sqlalchemy.orm import Session

from careerpath.services.ai import call_json_llm

logger = logging.getLogger(__name__)

RESOURCE_CURATOR_PROMPT = (
    "You are an expert learning resource curator with extensive knowledge of educational "
    "platforms, courses, books, and other learning materials. You only recommend real, "
    "existing resources that are currently available. Respond with a JSON object whose keys "
    "are skill names and whose values are arrays of resources. Each resource has title, type "
    "(course, book, tutorial, video, podcast, article, practice, certification), provider, "
    "url (\"N/A\" if not applicable), description, estimatedHours, difficulty (beginner, "
    "intermediate, advanced, expert), costType (free, freemium, paid, subscription), tags, "
    "relevanceScore (1-10) and matchReason."
)

LEARNING_PATH_PROMPT = (
    "You are an expert learning path designer specializing in skill development. You create "
    "structured, effective learning paths using real, currently available resources. Respond "
    "with a JSON object containing skill, description and recommendedSequence: 3-5 steps, "
    "each with step (number), resources (2-3 resources shaped like "
    "{title, type, provider, url, description, estimatedHours, difficulty, costType, "
    "matchReason}), milestone and estimatedTimeToComplete."
)


def _resource_id() -> str:
    return f"resource-{uuid4().hex[:9]}"


def _placeholder_resource(match_reason: str) -> dict[str, Any]:
    return {
        "id": _resource_id(),
        "title": "Resource unavailable",
        "type": "article",
        "provider": "Unknown",
        "url": "N/A",
        "description": "No description available",
        "estimatedHours": 1,
        "difficulty": "beginner",
        "costType": "free",
        "tags": [],
        "relevanceScore": 5,
        "matchReason": match_reason,
    }


def normalize_resource(resource: Any, skill: str) -> dict[str, Any]:
    """Fill every field a resource card needs, keeping whatever the model supplied."""
    if not isinstance(resource, dict):
        return _placeholder_resource(f"Default resource for {skill}")
    tags = resource.get("tags")
    return {
        **resource,
        "id": resource.get("id") or _resource_id(),
        "title": resource.get("title") or "Untitled Resource",
        "type": resource.get("type") or "article",
        "provider": resource.get("provider") or "Unknown",
        "url": resource.get("url") or "N/A",
        "description": resource.get("description") or "No description available",
        "estimatedHours": resource.get("estimatedHours") or 10,
        "difficulty": resource.get("difficulty") or "beginner",
        "costType": resource.get("costType") or "free",
        "tags": tags if isinstance(tags, list) else [],
        "relevanceScore": resource.get("relevanceScore") or 7,
        "matchReason": resource.get("matchReason") or f"Recommended for learning {skill}",
    }


def _describe_skill(skill: dict[str, Any]) -> dict[str, Any]:
    described = {
        "skill": skill["skill"],
        "currentLevel": skill["currentLevel"],
        "targetLevel": skill["targetLevel"],
        "context": skill["context"],
    }
    if skill.get("learningStyle"):
        described["learningStyle"] = skill["learningStyle"]
    return described


def get_resource_recommendations(
    skills: list[dict[str, Any]],
    preferred_types: list[str] | None = None,
    max_results: int = 5,
    *,
    db: Session | None = None,
    user_id: str | None = None,
) -> dict[str, list[dict[str, Any]]]:
    if not skills:
        raise ValueError("At least one skill is required")

    payload: dict[str, Any] = {
        "skills": [_describe_skill(skill) for skill in skills],
        "resourcesPerSkill": max_results,
    }
    if preferred_types:
        payload["preferredTypes"] = list(preferred_types)

    try:
        raw = call_json_llm(
            RESOURCE_CURATOR_PROMPT,
            payload,
            db=db,
            user_id=user_id,
            feature="learning_resources",
        )
    except RuntimeError as exc:
        logger.exception("Learning resource recommendation failed")
        raise RuntimeError(f"Failed to get learning resources: {exc}") from exc

    recommendations: dict[str, list[dict[str, Any]]] = {}
    for skill, resources in raw.items():
        if not isinstance(resources, list):
            recommendations[skill] = []
            continue
        recommendations[skill] = [normalize_resource(resource, skill) for resource in resources]
    return recommendations


def _normalize_step(step: Any, index: int) -> dict[str, Any] | None:
    if not isinstance(step, dict):
        return None
    resources = step.get("resources")
    if not isinstance(resources, list):
        resources = []
    normalized = []
    for resource in resources:
        if isinstance(resource, dict):
            normalized.append({**resource, "id": resource.get("id") or _resource_id()})
        else:
            normalized.append(_placeholder_resource("Added as fallback"))
    return {
        **step,
        "step": step.get("step") or index,
        "resources": normalized,
        "milestone": str(step.get("milestone") or ""),
        "estimatedTimeToComplete": str(step.get("estimatedTimeToComplete") or ""),
    }


def generate_learning_path(
    skill: str,
    current_level: str | int,
    target_level: str | int,
    context: str,
    learning_style: str | None = None,
    *,
    db: Session | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    payload = _describe_skill(
        {
            "skill": skill,
            "currentLevel": current_level,
            "targetLevel": target_level,
            "context": context,
            "learningStyle": learning_style,
        }
    )
    try:
        raw = call_json_llm(
            LEARNING_PATH_PROMPT,
            payload,
            db=db,
            user_id=user_id,
            feature="learning_path",
        )
    except RuntimeError as exc:
        logger.exception("Learning path generation failed for %s", skill)
        raise RuntimeError(f"Failed to generate learning path: {exc}") from exc

    sequence = raw.get("recommendedSequence")
    if not isinstance(sequence, list):
        sequence = []
    steps = [_normalize_step(step, index) for index, step in enumerate(sequence, start=1)]

    return {
        **raw,
        "skill": str(raw.get("skill") or skill),
        "description": str(raw.get("description") or f"Learning path for {skill}"),
        "recommendedSequence": [step for step in steps if step is not None],
    }
