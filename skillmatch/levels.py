"""
Ordered level scales shared by every matching surface.

Both the dashboard widget and the job listing resolve labels through the
tables below; nothing else should redefine them.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .normalize import normalize_label


class ProficiencyLevel(IntEnum):
    """Self-declared skill proficiency. The value is the rank."""

    BEGINNER = 1
    INTERMEDIATE = 2
    EXPERT = 3
    PROFESSIONAL = 4

    @property
    def label(self) -> str:
        return _PROFICIENCY_LABELS[self]


class JobLevel(IntEnum):
    """Seniority required by a posting. The value is the rank."""

    ENTRY_LEVEL = 1
    MID_LEVEL = 2
    SENIOR = 3

    @property
    def label(self) -> str:
        return _JOB_LEVEL_LABELS[self]


_PROFICIENCY_LABELS = {
    ProficiencyLevel.BEGINNER: "Beginner",
    ProficiencyLevel.INTERMEDIATE: "Intermediate",
    ProficiencyLevel.EXPERT: "Expert",
    ProficiencyLevel.PROFESSIONAL: "Professional",
}

_JOB_LEVEL_LABELS = {
    JobLevel.ENTRY_LEVEL: "Entry Level",
    JobLevel.MID_LEVEL: "Mid Level",
    JobLevel.SENIOR: "Senior",
}

PROFICIENCY_RANKS: Mapping[ProficiencyLevel, int] = MappingProxyType(
    {level: int(level) for level in ProficiencyLevel}
)
JOB_LEVEL_RANKS: Mapping[JobLevel, int] = MappingProxyType(
    {level: int(level) for level in JobLevel}
)

# Rank used whenever a label is missing or not recognised
DEFAULT_RANK = 1

_PROFICIENCY_BY_KEY = MappingProxyType(
    {normalize_label(label): level for level, label in _PROFICIENCY_LABELS.items()}
)
_JOB_LEVEL_BY_KEY = MappingProxyType(
    {normalize_label(label): level for level, label in _JOB_LEVEL_LABELS.items()}
)

PROFICIENCY_LABELS = tuple(_PROFICIENCY_LABELS[level] for level in ProficiencyLevel)
JOB_LEVEL_LABELS = tuple(_JOB_LEVEL_LABELS[level] for level in JobLevel)


def parse_proficiency(value: Union[ProficiencyLevel, str, None]) -> Optional[ProficiencyLevel]:
    """Return the matching level, or None when the label is unknown."""
    if isinstance(value, ProficiencyLevel):
        return value
    if not isinstance(value, str):
        return None
    return _PROFICIENCY_BY_KEY.get(normalize_label(value))


def parse_job_level(value: Union[JobLevel, str, None]) -> Optional[JobLevel]:
    """Return the matching level, or None when the label is unknown."""
    if isinstance(value, JobLevel):
        return value
    if not isinstance(value, str):
        return None
    return _JOB_LEVEL_BY_KEY.get(normalize_label(value))
