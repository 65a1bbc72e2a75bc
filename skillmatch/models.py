"""
Value types passed between the matching components.

Everything here is computed per request and never persisted; the records
they are built from belong to the portal's data layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from .levels import JobLevel, ProficiencyLevel, parse_job_level, parse_proficiency


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_tags(value: Any) -> Tuple[str, ...]:
    """Coerce a stored skills column into an ordered tuple of tags."""
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                value = text.strip("[]").split(",")
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(tag).strip() for tag in value if tag is not None and str(tag).strip())


@dataclass(frozen=True)
class Skill:
    name: str
    proficiency: Union[ProficiencyLevel, str, None] = ProficiencyLevel.BEGINNER

    def __post_init__(self):
        level = parse_proficiency(self.proficiency) or ProficiencyLevel.BEGINNER
        object.__setattr__(self, "proficiency", level)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Skill":
        """Build from a ``{id, skill_name, proficiency}`` user-skill record."""
        return cls(name=_as_text(record.get("skill_name")), proficiency=record.get("proficiency"))


@dataclass(frozen=True)
class CandidateProfile:
    skills: Tuple[Skill, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "skills", tuple(self.skills or ()))

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "CandidateProfile":
        return cls(skills=tuple(Skill.from_record(r) for r in records))


@dataclass(frozen=True)
class JobPosting:
    id: Any
    title: str = ""
    company: str = ""
    level: Union[JobLevel, str, None] = None
    skills: Tuple[str, ...] = ()
    location: str = ""
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    description: Optional[str] = None
    job_type: Optional[str] = None
    track: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "level", parse_job_level(self.level))
        object.__setattr__(self, "skills", tuple(self.skills or ()))

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "JobPosting":
        """Build from a portal job record, applying the field defaults."""
        return cls(
            id=record.get("id"),
            title=_as_text(record.get("title")),
            company=_as_text(record.get("company")),
            level=record.get("level"),
            skills=_as_tags(record.get("skills")),
            location=_as_text(record.get("location")),
            salary_min=_as_int(record.get("salary_min")),
            salary_max=_as_int(record.get("salary_max")),
            description=record.get("description"),
            job_type=record.get("type"),
            track=record.get("track"),
        )


def match_label(total: int) -> str:
    """Badge tier shown next to a match percentage."""
    if total >= 80:
        return "Excellent"
    if total >= 60:
        return "Good"
    return "Fair"


@dataclass(frozen=True)
class MatchBreakdown:
    total: int = 0
    skill_score: int = 0
    experience_score: int = 0
    track_score: int = 0
    matched_skills: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def label(self) -> str:
        return match_label(self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "skill_score": self.skill_score,
            "experience_score": self.experience_score,
            "track_score": self.track_score,
            "matched_skills": sorted(self.matched_skills),
            "label": self.label,
        }


EMPTY_BREAKDOWN = MatchBreakdown()


@dataclass(frozen=True)
class RankedRecommendation:
    job: JobPosting
    breakdown: MatchBreakdown

    def to_dict(self) -> Dict[str, Any]:
        job = self.job
        return {
            "id": job.id,
            "title": job.title,
            "company": job.company,
            "location": job.location,
            "level": job.level.label if job.level else None,
            **self.breakdown.to_dict(),
        }
