from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from careerpath.models.entities import Industry, Role, RoleSkill, Skill

SEARCH_LIMIT = 10
DEFAULT_POPULAR_LIMIT = 10
MAX_POPULAR_LIMIT = 50

# Column used as the display name of each catalog entity.
_NAME_COLUMNS = {
    Skill: Skill.name,
    Role: Role.title,
    Industry: Industry.name,
}


def _name_column(model):
    return _NAME_COLUMNS[model]


def _escape_like(query: str) -> str:
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_entities(db: Session, model) -> list:
    return db.query(model).order_by(_name_column(model).asc()).all()


def popular_entities(db: Session, model, limit: int = DEFAULT_POPULAR_LIMIT) -> list:
    limit = max(1, min(limit, MAX_POPULAR_LIMIT))
    return (
        db.query(model)
        .order_by(model.popularity.desc(), _name_column(model).asc())
        .limit(limit)
        .all()
    )


def search_entities(db: Session, model, query: str | None, *, include_description: bool = True) -> list:
    """Case-insensitive substring search over name, category and description.

    A blank query matches nothing. At most ``SEARCH_LIMIT`` rows, name-ordered.
    """
    term = (query or "").strip()
    if not term:
        return []
    pattern = f"%{_escape_like(term)}%"
    columns = [_name_column(model), model.category]
    if include_description:
        columns.append(model.description)
    return (
        db.query(model)
        .filter(or_(*(column.ilike(pattern, escape="\\") for column in columns)))
        .order_by(_name_column(model).asc())
        .limit(SEARCH_LIMIT)
        .all()
    )


def search_all(db: Session, query: str | None) -> dict[str, list]:
    # The combined search box only matches names and categories.
    return {
        "skills": search_entities(db, Skill, query, include_description=False),
        "roles": search_entities(db, Role, query, include_description=False),
        "industries": search_entities(db, Industry, query, include_description=False),
    }


def skills_for_role(db: Session, role_id: UUID) -> list[dict]:
    role = db.get(Role, role_id)
    if not role:
        raise ValueError("Role not found")
    rows = (
        db.query(RoleSkill, Skill)
        .join(Skill, Skill.id == RoleSkill.skill_id)
        .filter(RoleSkill.role_id == role_id)
        .order_by(RoleSkill.level_required.desc(), Skill.name.asc())
        .all()
    )
    return [
        {
            "id": skill.id,
            "name": skill.name,
            "category": skill.category,
            "description": skill.description,
            "difficulty": skill.difficulty,
            "time_to_learn": skill.time_to_learn,
            "popularity": skill.popularity,
            "future_demand": skill.future_demand,
            "importance": role_skill.importance,
            "level_required": role_skill.level_required,
            "context": role_skill.context,
        }
        for role_skill, skill in rows
    ]
