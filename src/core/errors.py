"""Error taxonomy for batch matching.

Only JobNotFoundError and CandidateFetchError (plus a failure to clear the
previous match set) abort a batch run. MatchGenerationError and per-candidate
PersistenceError are caught at the batch loop boundary.
"""


class MatchingError(Exception):
    """Base class for matching errors."""


class JobNotFoundError(MatchingError):
    """The job does not exist or is not owned by the caller."""

    def __init__(self, job_id: str, owner_id: str) -> None:
        self.job_id = job_id
        self.owner_id = owner_id
        super().__init__(f"Job '{job_id}' not found for owner '{owner_id}'")


class CandidateFetchError(MatchingError):
    """The candidate pool could not be read."""


class MatchGenerationError(MatchingError):
    """The structured-generation call failed or returned an invalid result."""


class PersistenceError(MatchingError):
    """A match row could not be written or cleared."""
