from fastapi import APIRouter
from sqlalchemy import text

from careerpath.core.config import settings
from careerpath.core.database import engine
from careerpath.services.ai import ai_is_configured, get_active_ai_model, get_active_ai_provider

router = APIRouter(prefix="/meta")


@router.get("/ai")
def ai_meta():
    return {
        "ai_enabled": ai_is_configured(),
        "model": get_active_ai_model(),
        "provider": get_active_ai_provider(),
        "fallback_to_sample": settings.ai_fallback_to_sample,
    }


@router.get("/health")
def health_meta():
    db_ok = False
    db_error = None
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        db_error = str(exc)
    return {
        "ok": db_ok,
        "database": {"ok": db_ok, "error": db_error},
        "ai": {
            "enabled": ai_is_configured(),
            "provider": get_active_ai_provider(),
            "model": get_active_ai_model(),
            "fallback_to_sample": settings.ai_fallback_to_sample,
        },
    }
