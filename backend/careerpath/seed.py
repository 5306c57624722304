import logging

from sqlalchemy.orm import Session
from careerpath.core.config import settings
from careerpath.core.database import Base, SessionLocal, engine
from careerpath.core.logging import configure_logging
from careerpath.models.entities import Industry, Role, RoleSkill, Skill

logger = logging.getLogger(__name__)


# name: (category, description, difficulty, time_to_learn, popularity, future_demand)
SKILLS = {
    "Python": ("Programming", "General-purpose language used for data analysis, automation and backend services.", "intermediate", "3-6 months", 95, "high"),
    "SQL": ("Data", "Querying and modeling relational databases.", "beginner", "1-3 months", 90, "high"),
    "Machine Learning": ("Data Science", "Building predictive models from data.", "advanced", "6-12 months", 85, "very high"),
    "Statistics": ("Data Science", "Descriptive and inferential statistics for decision making.", "intermediate", "3-6 months", 70, "high"),
    "Data Visualization": ("Data", "Communicating insights through charts and dashboards.", "beginner", "1-3 months", 75, "high"),
    "Cloud Computing": ("Infrastructure", "Deploying and operating workloads on AWS, Azure or GCP.", "intermediate", "3-6 months", 88, "very high"),
    "Project Management": ("Business", "Planning, scheduling and delivering projects.", "intermediate", "3-6 months", 80, "medium"),
    "Stakeholder Communication": ("Soft Skills", "Explaining technical work to non-technical audiences.", "beginner", "ongoing", 65, "high"),
    "Cybersecurity Fundamentals": ("Security", "Threats, controls and secure configuration basics.", "intermediate", "3-6 months", 78, "very high"),
    "JavaScript": ("Programming", "Language of the web, used for front-end and Node.js back-ends.", "intermediate", "3-6 months", 92, "high"),
}

# title: (category, description, average_salary, demand_outlook, popularity)
ROLES = {
    "Data Scientist": ("Data Science", "Builds models and analyses that guide product and business decisions.", "$95,000 - $140,000", "high", 90),
    "Data Analyst": ("Data", "Turns raw data into reports, dashboards and recommendations.", "$65,000 - $95,000", "high", 85),
    "Cloud Engineer": ("Infrastructure", "Designs and runs cloud infrastructure.", "$100,000 - $145,000", "very high", 80),
    "Project Manager": ("Business", "Leads cross-functional projects from kickoff to delivery.", "$80,000 - $120,000", "medium", 70),
    "Security Analyst": ("Security", "Monitors, detects and responds to security incidents.", "$75,000 - $115,000", "very high", 75),
    "Full-Stack Developer": ("Software", "Builds web applications across front-end and back-end.", "$85,000 - $130,000", "high", 88),
}

# name: (category, description, growth_rate, average_salary, job_count, popularity)
INDUSTRIES = {
    "Information Technology": ("Technology", "Software, services and infrastructure.", 6.5, 105000, 4200000, 95),
    "Healthcare": ("Health", "Hospitals, clinics, health technology and life sciences.", 5.1, 82000, 18000000, 85),
    "Financial Services": ("Finance", "Banking, insurance and investment management.", 3.2, 98000, 6300000, 80),
    "Education": ("Public Sector", "Schools, universities and education technology.", 2.4, 61000, 8900000, 60),
    "Renewable Energy": ("Energy", "Solar, wind and grid modernization.", 8.9, 78000, 1200000, 70),
}

# role: [(skill, importance, level_required, context)]
ROLE_SKILLS = {
    "Data Scientist": [
        ("Python", "high", 4, "Primary language for modeling and experimentation."),
        ("Machine Learning", "high", 4, "Model selection, training and evaluation."),
        ("Statistics", "high", 4, "Experiment design and inference."),
        ("SQL", "medium", 3, "Pulling and shaping training data."),
        ("Stakeholder Communication", "medium", 3, "Presenting findings to decision makers."),
    ],
    "Data Analyst": [
        ("SQL", "high", 4, "Daily querying and reporting."),
        ("Data Visualization", "high", 4, "Dashboards and reporting."),
        ("Statistics", "medium", 3, "Interpreting trends."),
        ("Python", "low", 2, "Automating repetitive analysis."),
    ],
    "Cloud Engineer": [
        ("Cloud Computing", "high", 5, "Designing and operating cloud environments."),
        ("Python", "medium", 3, "Infrastructure automation."),
        ("Cybersecurity Fundamentals", "medium", 3, "Secure configuration and IAM."),
    ],
    "Project Manager": [
        ("Project Management", "high", 4, "Planning and delivery."),
        ("Stakeholder Communication", "high", 4, "Status reporting and alignment."),
    ],
    "Security Analyst": [
        ("Cybersecurity Fundamentals", "high", 4, "Threat detection and response."),
        ("Cloud Computing", "medium", 3, "Securing cloud workloads."),
        ("Python", "low", 2, "Scripting investigations."),
    ],
    "Full-Stack Developer": [
        ("JavaScript", "high", 4, "Front-end and Node.js services."),
        ("SQL", "medium", 3, "Application data models."),
        ("Cloud Computing", "medium", 3, "Deploying applications."),
    ],
}


def get_or_create(session: Session, model, defaults=None, **kwargs):
    instance = session.query(model).filter_by(**kwargs).one_or_none()
    if instance:
        return instance
    params = dict(kwargs)
    if defaults:
        params.update(defaults)
    instance = model(**params)
    session.add(instance)
    session.flush()
    return instance


def seed_catalog(session: Session) -> None:
    skills = {}
    for name, (category, description, difficulty, time_to_learn, popularity, future_demand) in SKILLS.items():
        skills[name] = get_or_create(
            session,
            Skill,
            name=name,
            defaults={
                "category": category,
                "description": description,
                "difficulty": difficulty,
                "time_to_learn": time_to_learn,
                "popularity": popularity,
                "future_demand": future_demand,
            },
        )

    roles = {}
    for title, (category, description, average_salary, demand_outlook, popularity) in ROLES.items():
        roles[title] = get_or_create(
            session,
            Role,
            title=title,
            defaults={
                "category": category,
                "description": description,
                "average_salary": average_salary,
                "demand_outlook": demand_outlook,
                "popularity": popularity,
            },
        )

    for name, (category, description, growth_rate, average_salary, job_count, popularity) in INDUSTRIES.items():
        get_or_create(
            session,
            Industry,
            name=name,
            defaults={
                "category": category,
                "description": description,
                "growth_rate": growth_rate,
                "average_salary": average_salary,
                "job_count": job_count,
                "popularity": popularity,
            },
        )

    for title, requirements in ROLE_SKILLS.items():
        for skill_name, importance, level_required, context in requirements:
            get_or_create(
                session,
                RoleSkill,
                role_id=roles[title].id,
                skill_id=skills[skill_name].id,
                defaults={
                    "importance": importance,
                    "level_required": level_required,
                    "context": context,
                },
            )


def seed():
    configure_logging(settings.log_level)
    # Local SQLite databases are created on the fly; Postgres goes through alembic.
    if settings.database_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_catalog(session)
        session.commit()
        logger.info(
            "Seeded catalog: %d skills, %d roles, %d industries",
            len(SKILLS),
            len(ROLES),
            len(INDUSTRIES),
        )
    finally:
        session.close()


if __name__ == "__main__":
    seed()
