"""Batch matcher: scores every candidate against one job.

Data flow for one run:
  1. Per-job lock
  2. Resolve job (owner-scoped) → JobNotFoundError
  3. Fetch candidate pool → CandidateFetchError
  4. Delete previous matches for the job (full replace)
  5. Per candidate, sequentially: pace → assess → persist
  6. Summary with the top-N matches by score
"""

import logging
import sqlite3
from datetime import datetime

from pydantic import ValidationError

from src.core.config import MatchingConfig, Settings
from src.core.db import delete_matches, fetch_candidates, get_job, insert_match
from src.core.errors import (
    CandidateFetchError,
    JobNotFoundError,
    MatchGenerationError,
    PersistenceError,
)
from src.core.schemas import (
    BatchSummary,
    CandidateProfile,
    JobPosting,
    SkippedCandidate,
    StoredMatch,
    TopMatch,
)
from src.matching.assessor import Assessor, LLMMatchAssessor
from src.matching.generation import StructuredGenerator
from src.pipeline.locks import JobLocks
from src.pipeline.pacer import Pacer

logger = logging.getLogger(__name__)

# Shared by every BatchMatcher in the process unless one is injected.
_job_locks = JobLocks()


class BatchMatcher:
    """Runs an Assessor over the candidate pool for one job at a time.

    Usage::

        matcher = BatchMatcher(conn, assessor, settings.matching)
        summary = await matcher.run_batch("job-1", owner_id="user-1")
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        assessor: Assessor,
        config: MatchingConfig | None = None,
        *,
        pacer: Pacer | None = None,
        locks: JobLocks | None = None,
    ) -> None:
        self._conn = conn
        self._assessor = assessor
        self._config = config or MatchingConfig()
        self._pacer = pacer or Pacer(self._config.pacing_interval_seconds)
        self._locks = locks or _job_locks

    async def run_batch(self, job_id: str, owner_id: str) -> BatchSummary:
        """Match every candidate in scope against the job and persist results.

        Raises:
            JobNotFoundError: job_id does not resolve to a job owned by owner_id.
            CandidateFetchError: the candidate pool could not be read.
            PersistenceError: previous matches for the job could not be cleared.
        """
        async with self._locks.hold(job_id):
            return await self._run(job_id, owner_id)

    async def _run(self, job_id: str, owner_id: str) -> BatchSummary:
        started_at = datetime.now()

        job = get_job(self._conn, job_id, owner_id)
        if job is None:
            raise JobNotFoundError(job_id, owner_id)

        candidates = self._fetch_candidates(owner_id)
        logger.info(
            "Matching %d candidates (scope=%s) against job '%s'",
            len(candidates), self._config.candidate_scope, job_id,
        )

        try:
            removed = delete_matches(self._conn, job_id)
        except sqlite3.Error as e:
            msg = f"Could not clear previous matches for job '{job_id}': {e}"
            raise PersistenceError(msg) from e
        logger.debug("Cleared %d previous matches for job '%s'", removed, job_id)

        matches: list[TopMatch] = []
        skipped: list[SkippedCandidate] = []

        for candidate in candidates:
            await self._pacer.wait()
            match = await self._match_one(candidate, job, skipped)
            if match is not None:
                matches.append(match)

        finished_at = datetime.now()
        logger.info(
            "Job '%s': %d/%d matches created, %d skipped",
            job_id, len(matches), len(candidates), len(skipped),
        )

        # sorted() is stable: equal scores keep processing order.
        top = sorted(matches, key=lambda m: m.score, reverse=True)[: self._config.top_n]
        return BatchSummary(
            job_id=job_id,
            total_candidates=len(candidates),
            matches_created=len(matches),
            top_matches=top,
            skipped=skipped,
            started_at=started_at,
            finished_at=finished_at,
        )

    def _fetch_candidates(self, owner_id: str) -> list[CandidateProfile]:
        scope_owner = owner_id if self._config.candidate_scope == "owner" else None
        try:
            return fetch_candidates(self._conn, owner_id=scope_owner)
        except (sqlite3.Error, ValidationError) as e:
            msg = f"Could not load candidate pool: {e}"
            raise CandidateFetchError(msg) from e

    async def _match_one(
        self,
        candidate: CandidateProfile,
        job: JobPosting,
        skipped: list[SkippedCandidate],
    ) -> TopMatch | None:
        """Assess and persist one candidate. Failures are logged and recorded."""
        logger.debug("Matching candidate '%s' to job '%s'", candidate.id, job.id)
        try:
            result = await self._assessor.assess(candidate, job)
        except (MatchGenerationError, ValueError) as e:
            logger.warning(
                "Assessment failed for candidate '%s' on job '%s' - skipping",
                candidate.id, job.id,
                exc_info=True,
            )
            skipped.append(
                SkippedCandidate(candidate_id=candidate.id, stage="assess", reason=str(e))
            )
            return None

        stored = StoredMatch(
            job_id=job.id,
            candidate_id=candidate.id,
            owner_id=job.owner_id,
            match_score=result.overall_score,
            match_details=result,
        )
        try:
            insert_match(self._conn, stored)
        except sqlite3.Error as e:
            logger.warning(
                "Could not store match for candidate '%s' on job '%s' - skipping",
                candidate.id, job.id,
                exc_info=True,
            )
            skipped.append(
                SkippedCandidate(candidate_id=candidate.id, stage="persist", reason=str(e))
            )
            return None

        return TopMatch(
            candidate_id=candidate.id,
            candidate_name=candidate.full_name,
            score=result.overall_score,
            details=result,
        )


async def run_matching(
    settings: Settings,
    conn: sqlite3.Connection,
    job_id: str,
    owner_id: str,
    *,
    assessor: Assessor | None = None,
    locks: JobLocks | None = None,
) -> BatchSummary:
    """Run one batch for job_id using the assessor configured in settings.

    Concurrent calls for the same job_id are serialized through the
    process-wide lock registry (or through locks, when given).
    """
    if assessor is None:
        assessor = LLMMatchAssessor(StructuredGenerator.from_config(settings.llm))
    matcher = BatchMatcher(conn, assessor, settings.matching, locks=locks)
    return await matcher.run_batch(job_id, owner_id)
