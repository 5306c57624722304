from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from careerpath.api.deps import get_db, get_optional_user_id
from careerpath.core.ratelimit import analysis_rate_limiter
from careerpath.schemas.api import LearningPathOut, LearningResourcesIn, SkillToLearnIn
from careerpath.services.ai import ai_is_configured
from careerpath.services.learning_resources import generate_learning_path, get_resource_recommendations

router = APIRouter()


def _rate_limit_key(request: Request, user_id: str | None) -> str:
    if user_id:
        return f"user:{user_id}"
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


def _require_ai() -> None:
    if not ai_is_configured():
        raise HTTPException(status_code=503, detail="AI provider is not configured")


@router.post("/learning-resources", response_model=Dict[str, List[Dict[str, Any]]])
def learning_resources(
    payload: LearningResourcesIn,
    request: Request,
    user_id: str | None = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    analysis_rate_limiter.check(_rate_limit_key(request, user_id) + ":resources")
    _require_ai()
    try:
        return get_resource_recommendations(
            [skill.model_dump(by_alias=True) for skill in payload.skills],
            payload.preferred_types,
            payload.max_results,
            db=db,
            user_id=user_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RuntimeError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/learning-path", response_model=LearningPathOut)
def learning_path(
    payload: SkillToLearnIn,
    request: Request,
    user_id: str | None = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    analysis_rate_limiter.check(_rate_limit_key(request, user_id) + ":path")
    _require_ai()
    try:
        return generate_learning_path(
            payload.skill,
            payload.current_level,
            payload.target_level,
            payload.context,
            payload.learning_style,
            db=db,
            user_id=user_id,
        )
    except RuntimeError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
