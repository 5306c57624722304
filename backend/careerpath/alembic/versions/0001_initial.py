"""Initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-01 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "skills",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False, unique=True),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("difficulty", sa.String(length=40), nullable=True),
        sa.Column("time_to_learn", sa.String(length=80), nullable=True),
        sa.Column("popularity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("future_demand", sa.String(length=40), nullable=True),
    )

    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=160), nullable=False, unique=True),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("average_salary", sa.String(length=80), nullable=True),
        sa.Column("demand_outlook", sa.String(length=40), nullable=True),
        sa.Column("popularity", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "industries",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False, unique=True),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("growth_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("average_salary", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("job_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("popularity", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "role_skills",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey("roles.id"), nullable=False),
        sa.Column("skill_id", sa.Uuid(), sa.ForeignKey("skills.id"), nullable=False),
        sa.Column("importance", sa.String(length=16), nullable=False, server_default="medium"),
        sa.Column("level_required", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("context", sa.Text(), nullable=True),
    )

    op.create_table(
        "career_analyses",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=120), nullable=False),
        sa.Column("desired_role", sa.String(length=250), nullable=True),
        sa.Column("report", sa.JSON(), nullable=False),
        sa.Column("request_data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "ai_audit_logs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=120), nullable=True),
        sa.Column("feature", sa.String(length=80), nullable=False),
        sa.Column("prompt_input", sa.JSON(), nullable=True),
        sa.Column("model", sa.String(length=120), nullable=True),
        sa.Column("output", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_index("ix_role_skills_role_id", "role_skills", ["role_id"])
    op.create_index("ix_career_analyses_user_id", "career_analyses", ["user_id"])
    op.create_index("ix_ai_audit_logs_user_id", "ai_audit_logs", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_ai_audit_logs_user_id", table_name="ai_audit_logs")
    op.drop_index("ix_career_analyses_user_id", table_name="career_analyses")
    op.drop_index("ix_role_skills_role_id", table_name="role_skills")

    op.drop_table("ai_audit_logs")
    op.drop_table("career_analyses")
    op.drop_table("role_skills")
    op.drop_table("industries")
    op.drop_table("roles")
    op.drop_table("skills")
