"""
Proficiency resolution: labels to ranks, ranks to a single aptitude figure,
and the aptitude back to a display label.
"""

from collections import Counter
from typing import Dict, Iterable, Union

from .levels import (
    DEFAULT_RANK,
    JOB_LEVEL_RANKS,
    PROFICIENCY_RANKS,
    JobLevel,
    ProficiencyLevel,
    parse_job_level,
    parse_proficiency,
)
from .models import CandidateProfile, Skill

NO_APTITUDE_LABEL = "N/A"

# Evaluated top to bottom, first match wins
_LABEL_THRESHOLDS = (
    (3.5, ProficiencyLevel.PROFESSIONAL),
    (2.5, ProficiencyLevel.EXPERT),
    (1.5, ProficiencyLevel.INTERMEDIATE),
)


def rank(level: Union[ProficiencyLevel, str, None]) -> int:
    """Rank of a proficiency label; unknown or missing labels rank 1."""
    parsed = parse_proficiency(level)
    if parsed is None:
        return DEFAULT_RANK
    return PROFICIENCY_RANKS[parsed]


def job_level_rank(level: Union[JobLevel, str, None]) -> int:
    """Rank of a job seniority label; unknown or missing labels rank 1."""
    parsed = parse_job_level(level)
    if parsed is None:
        return DEFAULT_RANK
    return JOB_LEVEL_RANKS[parsed]


def average_aptitude(skills: Iterable[Skill]) -> float:
    """
    Mean proficiency rank across all declared skills.

    Returns 0.0 when there are no skills. That value means "no data" and
    is deliberately below the lowest real aptitude of 1.
    """
    ranks = [rank(s.proficiency) for s in skills]
    if not ranks:
        return 0.0
    return sum(ranks) / len(ranks)


def label_for(aptitude: float) -> str:
    for threshold, level in _LABEL_THRESHOLDS:
        if aptitude >= threshold:
            return level.label
    if aptitude > 0:
        return ProficiencyLevel.BEGINNER.label
    return NO_APTITUDE_LABEL


def skill_level_label(candidate: CandidateProfile) -> str:
    """Label summarising a candidate's overall skill level."""
    return label_for(average_aptitude(candidate.skills))


def proficiency_counts(skills: Iterable[Skill]) -> Dict[str, int]:
    """Number of skills held at each proficiency level, keyed by label."""
    counts = Counter(rank(s.proficiency) for s in skills)
    return {level.label: counts.get(int(level), 0) for level in ProficiencyLevel}
