"""SQLite database layer for candidates, jobs, and stored matches."""

import sqlite3
from datetime import datetime
from pathlib import Path

from src.core.schemas import CandidateProfile, JobPosting, MatchResult, StoredMatch

_CANDIDATES_TABLE = """
CREATE TABLE IF NOT EXISTS candidates (
    id              TEXT PRIMARY KEY,
    owner_id        TEXT,
    full_name       TEXT NOT NULL,
    profile_json    TEXT NOT NULL,
    created_at      TEXT NOT NULL
);
"""

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id              TEXT PRIMARY KEY,
    owner_id        TEXT NOT NULL,
    title           TEXT NOT NULL,
    posting_json    TEXT NOT NULL,
    created_at      TEXT NOT NULL
);
"""

_MATCHES_TABLE = """
CREATE TABLE IF NOT EXISTS matches (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    job_id          TEXT    NOT NULL,
    candidate_id    TEXT    NOT NULL,
    owner_id        TEXT    NOT NULL,
    match_score     INTEGER NOT NULL,
    match_details   TEXT    NOT NULL,
    created_at      TEXT    NOT NULL,
    UNIQUE(job_id, candidate_id)
);
"""

_MATCHES_INDEX = "CREATE INDEX IF NOT EXISTS idx_matches_job ON matches (job_id, match_score)"


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_CANDIDATES_TABLE)
    conn.execute(_JOBS_TABLE)
    conn.execute(_MATCHES_TABLE)
    conn.execute(_MATCHES_INDEX)
    conn.commit()
    return conn


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------


def save_candidate(conn: sqlite3.Connection, profile: CandidateProfile) -> None:
    """Insert a candidate profile, replacing the stored copy if the id exists."""
    conn.execute(
        """
        INSERT INTO candidates (id, owner_id, full_name, profile_json, created_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            owner_id = excluded.owner_id,
            full_name = excluded.full_name,
            profile_json = excluded.profile_json
        """,
        (
            profile.id,
            profile.owner_id,
            profile.full_name,
            profile.model_dump_json(by_alias=True),
            profile.created_at.isoformat(),
        ),
    )
    conn.commit()


def fetch_candidates(
    conn: sqlite3.Connection,
    owner_id: str | None = None,
) -> list[CandidateProfile]:
    """Return candidate profiles, most recently created first.

    With owner_id set, only candidates uploaded by that owner are returned.
    """
    if owner_id is None:
        rows = conn.execute(
            "SELECT profile_json FROM candidates ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
    else:
        rows = conn.execute(
            """
            SELECT profile_json FROM candidates
            WHERE owner_id = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (owner_id,),
        ).fetchall()
    return [CandidateProfile.model_validate_json(row["profile_json"]) for row in rows]


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


def save_job(conn: sqlite3.Connection, job: JobPosting) -> None:
    """Insert a job posting, replacing the stored copy if the id exists."""
    conn.execute(
        """
        INSERT INTO jobs (id, owner_id, title, posting_json, created_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            owner_id = excluded.owner_id,
            title = excluded.title,
            posting_json = excluded.posting_json
        """,
        (
            job.id,
            job.owner_id,
            job.title,
            job.model_dump_json(by_alias=True),
            job.created_at.isoformat(),
        ),
    )
    conn.commit()


def get_job(conn: sqlite3.Connection, job_id: str, owner_id: str) -> JobPosting | None:
    """Return the job if it exists and belongs to owner_id, else None."""
    row = conn.execute(
        "SELECT posting_json FROM jobs WHERE id = ? AND owner_id = ?",
        (job_id, owner_id),
    ).fetchone()
    if row is None:
        return None
    return JobPosting.model_validate_json(row["posting_json"])


def delete_job(conn: sqlite3.Connection, job_id: str, owner_id: str) -> bool:
    """Delete a job and its stored matches. Returns True if the job existed."""
    cursor = conn.execute(
        "DELETE FROM jobs WHERE id = ? AND owner_id = ?", (job_id, owner_id),
    )
    if cursor.rowcount:
        conn.execute("DELETE FROM matches WHERE job_id = ?", (job_id,))
    conn.commit()
    return cursor.rowcount > 0


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------


def delete_matches(conn: sqlite3.Connection, job_id: str) -> int:
    """Delete every stored match for a job. Returns the number of rows removed."""
    cursor = conn.execute("DELETE FROM matches WHERE job_id = ?", (job_id,))
    conn.commit()
    return cursor.rowcount


def insert_match(conn: sqlite3.Connection, stored: StoredMatch) -> int:
    """Persist one match. Returns the row ID.

    Raises sqlite3.IntegrityError if (job_id, candidate_id) is already stored.
    """
    cursor = conn.execute(
        """
        INSERT INTO matches
            (job_id, candidate_id, owner_id, match_score, match_details, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            stored.job_id,
            stored.candidate_id,
            stored.owner_id,
            stored.match_score,
            stored.match_details.model_dump_json(by_alias=True),
            stored.created_at.isoformat(),
        ),
    )
    conn.commit()
    return cursor.lastrowid or 0


def list_matches(conn: sqlite3.Connection, job_id: str) -> list[StoredMatch]:
    """Return stored matches for a job, highest score first."""
    rows = conn.execute(
        """
        SELECT job_id, candidate_id, owner_id, match_score, match_details, created_at
        FROM matches
        WHERE job_id = ?
        ORDER BY match_score DESC, id ASC
        """,
        (job_id,),
    ).fetchall()
    return [
        StoredMatch(
            job_id=row["job_id"],
            candidate_id=row["candidate_id"],
            owner_id=row["owner_id"],
            match_score=row["match_score"],
            match_details=MatchResult.model_validate_json(row["match_details"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
        for row in rows
    ]


def match_stats(conn: sqlite3.Connection, owner_id: str) -> tuple[int, int]:
    """Return (match count, average score rounded half-up) for an owner's jobs."""
    row = conn.execute(
        "SELECT COUNT(*) AS n, AVG(match_score) AS avg FROM matches WHERE owner_id = ?",
        (owner_id,),
    ).fetchone()
    if not row["n"]:
        return (0, 0)
    return (row["n"], int(row["avg"] + 0.5))

