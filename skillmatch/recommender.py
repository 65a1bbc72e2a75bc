"""Ranks a job catalog for one candidate."""

from typing import List, Optional, Sequence

from .matcher import score
from .models import CandidateProfile, JobPosting, RankedRecommendation

DEFAULT_LIMIT = 3


def recommend(
    candidate: CandidateProfile,
    jobs: Sequence[JobPosting],
    limit: Optional[int] = DEFAULT_LIMIT,
) -> List[RankedRecommendation]:
    """
    Score every posting and return the best ``limit`` of them.

    Postings are sorted by total, highest first. Equal totals keep their
    catalog order. ``limit=None`` returns the whole sorted catalog and a
    non-positive limit returns an empty list. The input is never modified.

    Args:
        candidate: Profile whose skills are scored
        jobs: Job catalog, in the order it was listed
        limit: Maximum number of recommendations

    Returns:
        List of RankedRecommendation, best match first
    """
    if limit is not None and limit <= 0:
        return []

    ranked = [RankedRecommendation(job=job, breakdown=score(candidate, job)) for job in jobs]
    # sorted() is stable, reverse=True included
    ranked = sorted(ranked, key=lambda r: r.breakdown.total, reverse=True)

    if limit is None:
        return ranked
    return ranked[:limit]
