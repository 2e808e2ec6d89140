"""Tests for the command-line entry point."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml

from main import load_settings, main, parse_args

REPO_ROOT = Path(__file__).parent.parent.parent
SAMPLES_DIR = REPO_ROOT / "config" / "samples"
FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({
        "database": {"path": str(tmp_path / "matcher.db")},
        "llm": {"provider": "groq"},
        "matching": {"pacing_interval_seconds": 0},
    }))
    return path


def _mock_provider() -> MagicMock:
    provider = MagicMock()
    provider.provider_id = "fake"
    provider.complete.return_value = (FIXTURES_DIR / "sample_match_response.json").read_text()
    return provider


def _seed(config_path: Path) -> None:
    main(["add-candidate", "--config", str(config_path),
          "--file", str(SAMPLES_DIR / "candidate.yaml")])
    main(["add-job", "--config", str(config_path),
          "--file", str(SAMPLES_DIR / "job.yaml")])


class TestParseArgs:
    def test_match_command(self) -> None:
        args = parse_args(["match", "--job-id", "j1", "--owner", "o1", "--export", "json", "-v"])
        assert args.command == "match"
        assert args.job_id == "j1"
        assert args.owner == "o1"
        assert args.export == "json"
        assert args.verbose is True
        assert args.config == "config/settings.yaml"

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])

    def test_match_requires_owner(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["match", "--job-id", "j1"])


class TestLoadSettings:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(str(tmp_path / "absent.yaml"))
        assert settings.llm.provider == "groq"
        assert settings.matching.top_n == 10


class TestCommands:
    def test_add_candidate_and_job(self, config_path: Path,
                                   capsys: pytest.CaptureFixture[str]) -> None:
        _seed(config_path)
        out = capsys.readouterr().out
        assert "Stored candidate 'cand-ada' (Ada Lovelace)" in out
        assert "Stored job 'job-data-eng' (Senior Data Engineer) for owner 'recruiter-1'" in out

    def test_match_and_list(self, config_path: Path,
                            capsys: pytest.CaptureFixture[str]) -> None:
        _seed(config_path)
        capsys.readouterr()

        with patch("src.matching.generation.get_provider", return_value=_mock_provider()):
            main(["match", "--config", str(config_path),
                  "--job-id", "job-data-eng", "--owner", "recruiter-1", "--export", "json"])

        out = capsys.readouterr().out
        assert "Job 'job-data-eng': 1/1 candidates matched" in out
        assert "1. Ada Lovelace (cand-ada): 84 [strong]" in out
        payload = json.loads(out[out.index("{"):])
        assert payload["matchesCreated"] == 1
        assert payload["matches"][0]["details"]["overallScore"] == 84

        main(["matches", "--config", str(config_path), "--job-id", "job-data-eng"])
        assert capsys.readouterr().out.startswith("cand-ada: 84 [strong]")

        main(["stats", "--config", str(config_path), "--owner", "recruiter-1"])
        assert "Owner 'recruiter-1': 1 matches, average score 84" in capsys.readouterr().out

    def test_matches_empty(self, config_path: Path,
                           capsys: pytest.CaptureFixture[str]) -> None:
        main(["matches", "--config", str(config_path), "--job-id", "nothing"])
        assert "No matches stored." in capsys.readouterr().out


class TestExitCodes:
    def test_unknown_job_exits_2(self, config_path: Path,
                                 capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "--config", str(config_path),
                  "--job-id", "missing", "--owner", "recruiter-1"])
        assert exc_info.value.code == 2
        assert "Job 'missing' not found for owner 'recruiter-1'" in capsys.readouterr().err

    def test_missing_candidate_file_exits_1(self, config_path: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["add-candidate", "--config", str(config_path),
                  "--file", str(tmp_path / "nope.yaml")])
        assert exc_info.value.code == 1

    def test_invalid_config_exits_1(self, tmp_path: Path,
                                    capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("matching:\n  top_n: 0\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["stats", "--config", str(bad), "--owner", "o"])
        assert exc_info.value.code == 1
        assert "Error loading config" in capsys.readouterr().err
