"""
Scores one candidate against one job posting.

The total is split into three bounded parts:

    skill overlap     0-60   share of the posting's tags the candidate holds
    experience        0-20   candidate aptitude against the posting's level
    track             0-20   breadth bonus once at least one tag matched

Given identical inputs the breakdown is always identical.
"""

import math
from typing import List

from .models import EMPTY_BREAKDOWN, CandidateProfile, JobPosting, MatchBreakdown
from .normalize import normalize_skill_name
from .proficiency import average_aptitude, job_level_rank

SKILL_WEIGHT = 60
EXPERIENCE_WEIGHT = 20
TRACK_WEIGHT = 20

# Experience credit by how far the candidate sits below the required rank
NEAR_GAP_SCORE = 12
WEAK_GAP_SCORE = 5

PARTIAL_TRACK_SCORE = 10
TRACK_COVERAGE = 0.5


def round_half_up(value: float) -> int:
    """Round .5 upwards like the portal front end did, not to even."""
    return int(math.floor(value + 0.5))


def job_skill_tags(job: JobPosting) -> List[str]:
    """Normalized tags in posting order; blanks dropped, repeats kept."""
    return [key for key in (normalize_skill_name(tag) for tag in job.skills) if key]


def experience_score(aptitude: float, required: int) -> int:
    if aptitude >= required:
        return EXPERIENCE_WEIGHT
    gap = required - aptitude
    if gap <= 1:
        return NEAR_GAP_SCORE
    if gap <= 2:
        return WEAK_GAP_SCORE
    return 0


def score(candidate: CandidateProfile, job: JobPosting) -> MatchBreakdown:
    if not candidate.skills:
        return EMPTY_BREAKDOWN

    held = {normalize_skill_name(s.name) for s in candidate.skills}
    held.discard("")
    tags = job_skill_tags(job)

    # Repeated tags count once per occurrence
    hits = [tag for tag in tags if tag in held]
    skill_points = 0
    if tags:
        skill_points = round_half_up(len(hits) / len(tags) * SKILL_WEIGHT)

    exp_points = experience_score(average_aptitude(candidate.skills), job_level_rank(job.level))

    track_points = 0
    if hits:
        track_points = TRACK_WEIGHT if len(hits) >= TRACK_COVERAGE * len(tags) else PARTIAL_TRACK_SCORE

    return MatchBreakdown(
        total=skill_points + exp_points + track_points,
        skill_score=skill_points,
        experience_score=exp_points,
        track_score=track_points,
        matched_skills=frozenset(hits),
    )
