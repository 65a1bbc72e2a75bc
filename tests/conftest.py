"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from skillmatch.logger import get_logger, reset_logger
from skillmatch.models import CandidateProfile, JobPosting, Skill


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger into the test's tmp dir."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def candidate() -> CandidateProfile:
    """React at Intermediate, SQL at Beginner: aptitude 1.5."""
    return CandidateProfile(skills=(
        Skill("React", "Intermediate"),
        Skill("SQL", "Beginner"),
    ))


@pytest.fixture
def mid_level_job() -> JobPosting:
    return JobPosting(
        id=1,
        title="Full Stack Developer",
        company="Acme",
        level="Mid Level",
        skills=("React", "Node", "SQL"),
        location="Dhaka",
    )


@pytest.fixture
def job_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Frontend Developer",
            "company": "Acme",
            "level": "Entry Level",
            "skills": ["React", "CSS"],
            "location": "Remote",
            "salary_min": 30000,
            "salary_max": 50000,
        },
        {
            "id": 2,
            "title": "Backend Engineer",
            "company": "Beta",
            "level": "Senior",
            "skills": ["Go", "Kubernetes", "SQL"],
            "location": "Dhaka",
        },
        {
            "id": 3,
            "title": "Data Analyst",
            "company": "Gamma",
            "level": "Mid Level",
            "skills": ["SQL", "Excel"],
            "location": "Chittagong",
        },
    ]


@pytest.fixture
def skill_records() -> List[Dict[str, Any]]:
    return [
        {"id": 10, "user_id": 7, "skill_name": "react", "proficiency": "Expert"},
        {"id": 11, "user_id": 7, "skill_name": "SQL", "proficiency": "Intermediate"},
        {"id": 12, "user_id": 8, "skill_name": "Go", "proficiency": "Professional"},
    ]


@pytest.fixture
def jobs_file(tmp_path, job_records) -> Path:
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps(job_records))
    return path


@pytest.fixture
def skills_file(tmp_path, skill_records) -> Path:
    path = tmp_path / "skills.json"
    path.write_text(json.dumps(skill_records))
    return path
