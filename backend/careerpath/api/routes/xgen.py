import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from careerpath.api.deps import get_current_user_id, get_db, get_optional_user_id
from careerpath.core.ratelimit import analysis_rate_limiter
from careerpath.schemas.api import RenderReportIn, SaveAnalysisIn, SavedAnalysisOut, SavedAnalysisSummaryOut
from careerpath.schemas.forms import CareerAnalysisForm, validate_form
from careerpath.services.ai import ai_is_configured, generate_career_analysis
from careerpath.services.report_views import render_report
from careerpath.services.saved_analyses import delete_analysis, get_analysis, list_analyses, save_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/xgen")

REQUIRED_ANALYSIS_FIELDS = (
    "professionalLevel",
    "currentSkills",
    "educationalBackground",
    "careerHistory",
    "desiredRole",
    "state",
    "country",
)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def missing_fields(payload: Dict[str, Any]) -> list[str]:
    missing = []
    for field in REQUIRED_ANALYSIS_FIELDS:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


@router.post("/analyze")
def analyze_career(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    user_id: str | None = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    missing = missing_fields(payload)
    if missing:
        return _message(400, f"Missing required fields: {', '.join(missing)}")

    form, errors = validate_form(CareerAnalysisForm, payload)
    if form is None:
        return _message(400, "; ".join(errors.values()))

    host = request.client.host if request.client else "unknown"
    analysis_rate_limiter.check(f"user:{user_id}" if user_id else f"ip:{host}")

    request_data = form.payload()
    try:
        report, source = generate_career_analysis(request_data, db=db, user_id=user_id)
    except RuntimeError as exc:
        logger.exception("Career analysis failed for %s", request_data["desiredRole"])
        return _message(502 if ai_is_configured() else 503, str(exc))

    return {
        "message": "Career analysis completed successfully",
        "report": report,
        "requestData": request_data,
        "source": source,
    }


@router.post("/render")
def render_unsaved_report(payload: RenderReportIn):
    return render_report(payload.report)


@router.post("/save", status_code=201)
def save_career_analysis(
    payload: SaveAnalysisIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not payload.report or not payload.request_data:
        return _message(400, "Missing report or request data")
    analysis = save_analysis(db, user_id, payload.report, payload.request_data)
    return {"message": "Career analysis saved successfully", "id": str(analysis.id)}


@router.get("/analyses", response_model=list[SavedAnalysisSummaryOut])
def saved_analyses(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    summaries = []
    for analysis in list_analyses(db, user_id):
        request_data = analysis.request_data or {}
        summaries.append(
            {
                "id": analysis.id,
                "desired_role": request_data.get("desiredRole") or analysis.desired_role,
                "professional_level": request_data.get("professionalLevel"),
                "state": request_data.get("state"),
                "country": request_data.get("country"),
                "created_at": analysis.created_at,
            }
        )
    return summaries


@router.get("/analyses/{analysis_id}", response_model=SavedAnalysisOut)
def saved_analysis_detail(
    analysis_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        analysis = get_analysis(db, user_id, analysis_id)
    except ValueError:
        return _message(404, "Career analysis not found")
    return {
        "id": analysis.id,
        "report": analysis.report,
        "request_data": analysis.request_data,
        "created_at": analysis.created_at,
    }


@router.get("/analyses/{analysis_id}/view")
def saved_analysis_view(
    analysis_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        analysis = get_analysis(db, user_id, analysis_id)
    except ValueError:
        return _message(404, "Career analysis not found")
    return render_report(analysis.report)


@router.delete("/analyses/{analysis_id}")
def delete_saved_analysis(
    analysis_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        delete_analysis(db, user_id, analysis_id)
    except ValueError:
        return _message(404, "Career analysis not found")
    return {"message": "Career analysis deleted successfully"}
