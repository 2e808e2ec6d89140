"""CLI entry point for the candidate matcher."""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from src.core.config import Settings
from src.core.db import init_db, list_matches, match_stats, save_candidate, save_job
from src.core.errors import CandidateFetchError, JobNotFoundError, PersistenceError
from src.core.schemas import CandidateProfile, JobPosting
from src.pipeline.batch_matcher import run_matching
from src.pipeline.report import export_summary_json, format_matches, format_summary


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser = argparse.ArgumentParser(
        description="Candidate matcher - score parsed resumes against job descriptions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- add-candidate ---
    cand_parser = subparsers.add_parser(
        "add-candidate", parents=[common], help="Store a parsed candidate profile",
    )
    cand_parser.add_argument("--file", required=True, help="Candidate profile YAML")
    cand_parser.add_argument("--owner", help="Uploader id (overrides the file)")

    # --- add-job ---
    job_parser = subparsers.add_parser(
        "add-job", parents=[common], help="Store a job description",
    )
    job_parser.add_argument("--file", required=True, help="Job posting YAML")
    job_parser.add_argument("--owner", help="Job owner id (overrides the file)")

    # --- match ---
    match_parser = subparsers.add_parser(
        "match", parents=[common], help="Score all candidates against one job",
    )
    match_parser.add_argument("--job-id", required=True, help="Job to match")
    match_parser.add_argument("--owner", required=True, help="Id of the job owner")
    match_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export the summary to format (json)",
    )

    # --- matches ---
    list_parser = subparsers.add_parser(
        "matches", parents=[common], help="List stored matches for a job",
    )
    list_parser.add_argument("--job-id", required=True, help="Job to list")

    # --- stats ---
    stats_parser = subparsers.add_parser(
        "stats", parents=[common], help="Match count and average score for an owner",
    )
    stats_parser.add_argument("--owner", required=True, help="Owner id")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the file is absent."""
    try:
        return Settings.from_yaml(path)
    except FileNotFoundError:
        logging.getLogger(__name__).info("No config at %s - using defaults", path)
        return Settings()


def cmd_add_candidate(args: argparse.Namespace, settings: Settings) -> None:
    profile = CandidateProfile.from_yaml(args.file, owner_id=args.owner)
    conn = init_db(settings.database.path)
    save_candidate(conn, profile)
    conn.close()
    print(f"Stored candidate '{profile.id}' ({profile.full_name})")


def cmd_add_job(args: argparse.Namespace, settings: Settings) -> None:
    job = JobPosting.from_yaml(args.file, owner_id=args.owner)
    conn = init_db(settings.database.path)
    save_job(conn, job)
    conn.close()
    print(f"Stored job '{job.id}' ({job.title}) for owner '{job.owner_id}'")


def cmd_match(args: argparse.Namespace, settings: Settings) -> None:
    conn = init_db(settings.database.path)
    try:
        summary = asyncio.run(run_matching(settings, conn, args.job_id, args.owner))
    finally:
        conn.close()

    print(format_summary(summary))
    if args.export == "json":
        print(f"\n{export_summary_json(summary)}")


def cmd_matches(args: argparse.Namespace, settings: Settings) -> None:
    conn = init_db(settings.database.path)
    matches = list_matches(conn, args.job_id)
    conn.close()
    print(format_matches(matches))


def cmd_stats(args: argparse.Namespace, settings: Settings) -> None:
    conn = init_db(settings.database.path)
    count, average = match_stats(conn, args.owner)
    conn.close()
    print(f"Owner '{args.owner}': {count} matches, average score {average}")


_COMMANDS = {
    "add-candidate": cmd_add_candidate,
    "add-job": cmd_add_job,
    "match": cmd_match,
    "matches": cmd_matches,
    "stats": cmd_stats,
}


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ValidationError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        _COMMANDS[args.command](args, settings)
    except JobNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (CandidateFetchError, PersistenceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
