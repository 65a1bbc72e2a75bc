"""
Adapters that fetch the matcher's two input collections.

The job catalog and a candidate's skill records are fetched concurrently.
A failed fetch is logged and replaced by an empty collection so the
recommendation still renders; scoring only starts once both have settled.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests
from sqlalchemy.exc import SQLAlchemyError

from .database import get_session, list_jobs, list_user_skills
from .logger import get_logger
from .models import CandidateProfile, JobPosting, RankedRecommendation
from .recommender import DEFAULT_LIMIT, recommend
from .retry import (
    RetryError,
    TransientHTTPError,
    exponential_backoff,
    is_transient_error,
    should_retry_http_status,
)
from .storage import load_records, unwrap_records

JOBS = "jobs"
USER_SKILLS = "user-skills"

Record = Dict[str, Any]


class SourceError(ValueError):
    """A collection could not be fetched; the message is user-readable."""
    pass


class PortalSource(ABC):
    name = "source"

    @abstractmethod
    def fetch_jobs(self) -> List[Record]:
        """All job records, newest first."""

    @abstractmethod
    def fetch_user_skills(self, user_id) -> List[Record]:
        """Skill records belonging to ``user_id``."""


class ApiSource(PortalSource):
    """Portal REST API: ``GET /jobs`` and ``GET /user-skills?user_id=``."""

    name = "api"

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

        self._get_with_retry = exponential_backoff(
            max_retries=max_retries,
            base_delay=base_delay,
            exceptions=(
                requests.exceptions.Timeout,
                requests.exceptions.ConnectionError,
                TransientHTTPError,
            ),
            on_retry=self._log_retry,
        )(self._get)

    def _log_retry(self, attempt: int, error: Exception, delay: float):
        get_logger().warning("Portal API retry", attempt=attempt, error=str(error), delay=delay)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        resp = self.session.get(url, params=params, timeout=self.timeout)
        if should_retry_http_status(resp.status_code):
            raise TransientHTTPError(resp.status_code, url)
        resp.raise_for_status()
        return resp.json()

    def _fetch(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        try:
            payload = self._get_with_retry(path, params)
        except RetryError as e:
            raise SourceError(f"Portal API unavailable ({path}): {e.__cause__}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "HTTPError"
            raise SourceError(f"Portal API request failed ({status}): {path}") from e
        except requests.exceptions.JSONDecodeError as e:
            raise SourceError(f"Portal API returned invalid JSON: {path}") from e
        except requests.exceptions.RequestException as e:
            raise SourceError(f"Portal API request error: {e}") from e

        try:
            return unwrap_records(payload)
        except ValueError as e:
            raise SourceError(f"Portal API returned unexpected payload: {path}") from e

    def fetch_jobs(self) -> List[Record]:
        return self._fetch("/jobs")

    def fetch_user_skills(self, user_id) -> List[Record]:
        return self._fetch("/user-skills", params={"user_id": user_id})


class DatabaseSource(PortalSource):
    """Local SQLite store created by ``init-db``."""

    name = "database"

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    def _query(self, fn: Callable) -> List[Record]:
        if not self.db_path.exists():
            raise SourceError(f"Database not found: {self.db_path}")
        session = get_session(self.db_path)
        try:
            return [row.to_record() for row in fn(session)]
        except SQLAlchemyError as e:
            raise SourceError(f"Database query failed: {e}") from e
        finally:
            session.close()

    def fetch_jobs(self) -> List[Record]:
        return self._query(list_jobs)

    def fetch_user_skills(self, user_id) -> List[Record]:
        return self._query(lambda session: list_user_skills(session, int(user_id)))


class FileSource(PortalSource):
    """
    JSON exports. Skill records without a ``user_id`` are treated as
    belonging to whichever candidate is asked for.
    """

    name = "file"

    def __init__(self, jobs_path: Optional[Path] = None, skills_path: Optional[Path] = None):
        self.jobs_path = Path(jobs_path) if jobs_path else None
        self.skills_path = Path(skills_path) if skills_path else None

    def _load(self, path: Optional[Path]) -> List[Record]:
        if path is None:
            return []
        try:
            return load_records(path)
        except (OSError, ValueError) as e:
            raise SourceError(f"Could not read {path}: {e}") from e

    def fetch_jobs(self) -> List[Record]:
        return self._load(self.jobs_path)

    def fetch_user_skills(self, user_id) -> List[Record]:
        return [
            r for r in self._load(self.skills_path)
            if r.get("user_id") is None or str(r.get("user_id")) == str(user_id)
        ]


async def _fetch_soft(collection: str, fetch: Callable, *args) -> List[Record]:
    logger = get_logger()
    logger.record_fetch_attempt(collection)
    try:
        records = await asyncio.to_thread(fetch, *args)
    except Exception as e:
        logger.record_fetch_failure(collection, type(e).__name__)
        logger.warning(
            f"Fetching {collection} failed; continuing without it",
            error=str(e),
            transient=is_transient_error(e),
        )
        return []
    logger.record_fetch_success(collection)
    logger.debug(f"Fetched {collection}", count=len(records))
    return records


async def _no_records() -> List[Record]:
    return []


async def gather_inputs(source: PortalSource, user_id=None) -> Tuple[CandidateProfile, List[JobPosting]]:
    """
    Fetch the job catalog and the candidate's skills concurrently.

    Args:
        source: Where to read both collections from
        user_id: Candidate identifier; None means an anonymous visitor

    Returns:
        Tuple of (candidate profile, job catalog in source order)
    """
    skills_fetch = (
        _fetch_soft(USER_SKILLS, source.fetch_user_skills, user_id)
        if user_id is not None
        else _no_records()
    )
    job_records, skill_records = await asyncio.gather(
        _fetch_soft(JOBS, source.fetch_jobs),
        skills_fetch,
    )
    candidate = CandidateProfile.from_records(skill_records)
    jobs = [JobPosting.from_record(r) for r in job_records]
    return candidate, jobs


async def load_recommendations(
    source: PortalSource,
    user_id=None,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> List[RankedRecommendation]:
    """Fetch both collections, then rank the catalog for the candidate."""
    candidate, jobs = await gather_inputs(source, user_id)
    ranked = recommend(candidate, jobs, limit)
    get_logger().record_scoring(len(jobs), len(ranked))
    return ranked


def find_job(jobs: Sequence[JobPosting], job_id) -> Optional[JobPosting]:
    """Look a posting up by id, comparing ids as strings."""
    for job in jobs:
        if str(job.id) == str(job_id):
            return job
    return None
