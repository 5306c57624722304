from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from careerpath.api.deps import get_db
from careerpath.models.entities import Industry, Role, Skill
from careerpath.schemas.api import IndustryOut, RoleOut, RoleSkillOut, SearchAllOut, SkillOut
from careerpath.services.catalog import (
    DEFAULT_POPULAR_LIMIT,
    list_entities,
    popular_entities,
    search_all,
    search_entities,
    skills_for_role,
)

router = APIRouter()


@router.get("/skills", response_model=list[SkillOut])
def list_skills(db: Session = Depends(get_db)):
    return list_entities(db, Skill)


@router.get("/skills/popular", response_model=list[SkillOut])
def popular_skills(limit: int = Query(DEFAULT_POPULAR_LIMIT), db: Session = Depends(get_db)):
    return popular_entities(db, Skill, limit)


@router.get("/skills/search", response_model=list[SkillOut])
def search_skills(query: str | None = None, db: Session = Depends(get_db)):
    return search_entities(db, Skill, query)


@router.get("/roles", response_model=list[RoleOut])
def list_roles(db: Session = Depends(get_db)):
    return list_entities(db, Role)


@router.get("/roles/popular", response_model=list[RoleOut])
def popular_roles(limit: int = Query(DEFAULT_POPULAR_LIMIT), db: Session = Depends(get_db)):
    return popular_entities(db, Role, limit)


@router.get("/roles/search", response_model=list[RoleOut])
def search_roles(query: str | None = None, db: Session = Depends(get_db)):
    return search_entities(db, Role, query)


@router.get("/roles/{role_id}/skills", response_model=list[RoleSkillOut])
def role_skills(role_id: UUID, db: Session = Depends(get_db)):
    try:
        return skills_for_role(db, role_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/industries", response_model=list[IndustryOut])
def list_industries(db: Session = Depends(get_db)):
    return list_entities(db, Industry)


@router.get("/industries/popular", response_model=list[IndustryOut])
def popular_industries(limit: int = Query(DEFAULT_POPULAR_LIMIT), db: Session = Depends(get_db)):
    return popular_entities(db, Industry, limit)


@router.get("/industries/search", response_model=list[IndustryOut])
def search_industries(query: str | None = None, db: Session = Depends(get_db)):
    return search_entities(db, Industry, query)


@router.get("/search", response_model=SearchAllOut)
def search_catalog(query: str | None = None, db: Session = Depends(get_db)):
    return search_all(db, query)
