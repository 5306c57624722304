from fastapi import Header, HTTPException

from careerpath.core.database import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return user_id


def get_optional_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    return (x_user_id or "").strip() or None
