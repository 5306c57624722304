import logging
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from careerpath.models.entities import CareerAnalysis
from careerpath.services.report_structure import structure_report

logger = logging.getLogger(__name__)

MAX_LISTED_ANALYSES = 50


def save_analysis(
    db: Session,
    user_id: str,
    report: Any,
    request_data: dict[str, Any] | None,
) -> CareerAnalysis:
    if report is None:
        raise ValueError("Report is required")
    request_data = request_data or {}
    analysis = CareerAnalysis(
        user_id=user_id,
        desired_role=(str(request_data.get("desiredRole") or "")[:250] or None),
        report=structure_report(report),
        request_data=request_data,
    )
    db.add(analysis)
    db.commit()
    db.refresh(analysis)
    logger.info("Saved career analysis %s for user %s", analysis.id, user_id)
    return analysis


def list_analyses(db: Session, user_id: str, limit: int = MAX_LISTED_ANALYSES) -> list[CareerAnalysis]:
    return (
        db.query(CareerAnalysis)
        .filter(CareerAnalysis.user_id == user_id)
        .order_by(CareerAnalysis.created_at.desc())
        .limit(limit)
        .all()
    )


def get_analysis(db: Session, user_id: str, analysis_id: UUID) -> CareerAnalysis:
    analysis = (
        db.query(CareerAnalysis)
        .filter(CareerAnalysis.id == analysis_id)
        .filter(CareerAnalysis.user_id == user_id)
        .one_or_none()
    )
    if not analysis:
        raise ValueError("Analysis not found")
    return analysis


def delete_analysis(db: Session, user_id: str, analysis_id: UUID) -> None:
    analysis = get_analysis(db, user_id, analysis_id)
    db.delete(analysis)
    db.commit()
