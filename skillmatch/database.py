"""
Local portal store.

Uses SQLite with SQLAlchemy for the two collections the matcher reads:
job postings and per-user skills.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, create_engine, func
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class JobRecord(Base):
    """Job posting row."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    level = Column(String)  # Entry Level, Mid Level, Senior
    job_type = Column("type", String)
    track = Column(String)
    skills = Column(JSON, nullable=False, default=list)
    location = Column(String, nullable=False, default="")
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    description = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "level": self.level,
            "type": self.job_type,
            "track": self.track,
            "skills": list(self.skills or []),
            "location": self.location,
            "salary_min": self.salary_min,
            "salary_max": self.salary_max,
            "description": self.description,
        }


class UserSkill(Base):
    """A skill declared by one user."""

    __tablename__ = "user_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    skill_name = Column(String(255), nullable=False)
    proficiency = Column(String, nullable=False, default="Beginner")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "skill_name": self.skill_name,
            "proficiency": self.proficiency,
        }


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def add_job(session, record: Dict[str, Any]) -> JobRecord:
    """Insert a validated job record and return the stored row."""
    job = JobRecord(
        title=record["title"],
        company=record["company"],
        level=record.get("level"),
        job_type=record.get("type"),
        track=record.get("track"),
        skills=list(record.get("skills") or []),
        location=record.get("location") or "",
        salary_min=record.get("salary_min"),
        salary_max=record.get("salary_max"),
        description=record.get("description"),
    )
    session.add(job)
    session.commit()
    return job


def get_job(session, job_id: int) -> Optional[JobRecord]:
    return session.get(JobRecord, job_id)


def list_jobs(session) -> List[JobRecord]:
    """All postings, newest first."""
    return (
        session.query(JobRecord)
        .order_by(JobRecord.created_at.desc(), JobRecord.id.desc())
        .all()
    )


def upsert_user_skill(session, user_id: int, skill_name: str, proficiency: str = "Beginner") -> UserSkill:
    """
    Add a skill for a user, or update its proficiency if the user already
    holds a skill with the same name (case-insensitive).
    """
    name = skill_name.strip()
    existing = (
        session.query(UserSkill)
        .filter(UserSkill.user_id == user_id)
        .filter(func.lower(UserSkill.skill_name) == name.lower())
        .first()
    )
    if existing is not None:
        existing.proficiency = proficiency
        session.commit()
        return existing

    skill = UserSkill(user_id=user_id, skill_name=name, proficiency=proficiency)
    session.add(skill)
    session.commit()
    return skill


def list_user_skills(session, user_id: int) -> List[UserSkill]:
    return (
        session.query(UserSkill)
        .filter(UserSkill.user_id == user_id)
        .order_by(UserSkill.id)
        .all()
    )
