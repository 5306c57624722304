from uuid import uuid4
from datetime import datetime
from sqlalchemy import JSON, Column, String, Text, Integer, DateTime, ForeignKey, Float, Uuid
from sqlalchemy.orm import relationship
from careerpath.core.database import Base


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(160), unique=True, nullable=False)
    category = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    difficulty = Column(String(40), nullable=True)
    time_to_learn = Column(String(80), nullable=True)
    popularity = Column(Integer, default=0, nullable=False)
    future_demand = Column(String(40), nullable=True)


class Role(Base):
    __tablename__ = "roles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    title = Column(String(160), unique=True, nullable=False)
    category = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    average_salary = Column(String(80), nullable=True)
    demand_outlook = Column(String(40), nullable=True)
    popularity = Column(Integer, default=0, nullable=False)


class Industry(Base):
    __tablename__ = "industries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(160), unique=True, nullable=False)
    category = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    growth_rate = Column(Float, default=0.0, nullable=False)
    average_salary = Column(Integer, default=0, nullable=False)
    job_count = Column(Integer, default=0, nullable=False)
    popularity = Column(Integer, default=0, nullable=False)


class RoleSkill(Base):
    __tablename__ = "role_skills"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    role_id = Column(Uuid(as_uuid=True), ForeignKey("roles.id"), nullable=False, index=True)
    skill_id = Column(Uuid(as_uuid=True), ForeignKey("skills.id"), nullable=False)
    importance = Column(String(16), nullable=False, default="medium")
    level_required = Column(Integer, nullable=False, default=3)
    context = Column(Text, nullable=True)

    role = relationship("Role")
    skill = relationship("Skill")


class CareerAnalysis(Base):
    __tablename__ = "career_analyses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(String(120), nullable=False, index=True)
    desired_role = Column(String(250), nullable=True)
    report = Column(JSON, nullable=False)
    request_data = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class AiAuditLog(Base):
    __tablename__ = "ai_audit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(String(120), nullable=True, index=True)
    feature = Column(String(80), nullable=False)
    prompt_input = Column(JSON, nullable=True)
    model = Column(String(120), nullable=True)
    output = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
