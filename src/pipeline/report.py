"""Presentation helpers for batch summaries and stored matches."""

import json

from src.core.schemas import BatchSummary, StoredMatch
from src.matching.aggregator import score_band


def export_summary_json(summary: BatchSummary) -> str:
    """Export a batch summary as the JSON body served to API clients."""
    data = {
        "message": "Candidate matching completed",
        "jobId": summary.job_id,
        "totalCandidates": summary.total_candidates,
        "matchesCreated": summary.matches_created,
        "matches": [
            {
                "candidateId": m.candidate_id,
                "candidateName": m.candidate_name,
                "score": m.score,
                "details": m.details.model_dump(mode="json", by_alias=True),
            }
            for m in summary.top_matches
        ],
        "skipped": [
            {"candidateId": s.candidate_id, "stage": s.stage, "reason": s.reason}
            for s in summary.skipped
        ],
    }
    return json.dumps(data, indent=2)


def format_summary(summary: BatchSummary) -> str:
    """Human-readable summary for the CLI."""
    elapsed = (summary.finished_at - summary.started_at).total_seconds()
    lines = [
        f"Job '{summary.job_id}': {summary.matches_created}/{summary.total_candidates} "
        f"candidates matched in {elapsed:.1f}s",
    ]
    for rank, m in enumerate(summary.top_matches, start=1):
        lines.append(f"  {rank:>2}. {m.candidate_name} ({m.candidate_id}): "
                     f"{m.score} [{score_band(m.score)}]")
    if summary.skipped:
        lines.append(f"  {len(summary.skipped)} skipped:")
        for s in summary.skipped:
            lines.append(f"    - {s.candidate_id} ({s.stage}): {s.reason}")
    return "\n".join(lines)


def format_matches(matches: list[StoredMatch]) -> str:
    """Human-readable listing of stored matches, already ordered by score."""
    if not matches:
        return "No matches stored. Run: python main.py match --job-id <id> --owner <id>"
    lines = []
    for m in matches:
        details = m.match_details
        lines.append(
            f"{m.candidate_id}: {m.match_score} [{score_band(m.match_score)}] "
            f"skills={details.skills_match.score} "
            f"experience={details.experience_match.score} "
            f"education={details.education_match.score} "
            f"location={details.location_match.score} "
            f"culture={details.cultural_fit.score}"
        )
        if details.skills_match.missing_skills:
            lines.append(f"    missing: {', '.join(details.skills_match.missing_skills)}")
    return "\n".join(lines)
