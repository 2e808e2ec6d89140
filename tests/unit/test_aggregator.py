"""Tests for weighted score aggregation and score bands."""

import json
import math
from pathlib import Path

import pytest

from src.core.schemas import MatchResult
from src.matching.aggregator import (
    CATEGORY_WEIGHTS,
    aggregate,
    aggregate_result,
    score_band,
    weights_instruction,
    with_recomputed_score,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _result(**scores: int) -> MatchResult:
    data = json.loads((FIXTURES_DIR / "sample_match_response.json").read_text())
    keys = {
        "skills": "skillsMatch",
        "experience": "experienceMatch",
        "education": "educationMatch",
        "location": "locationMatch",
        "cultural_fit": "culturalFit",
    }
    for name, value in scores.items():
        if name == "overall":
            data["overallScore"] = value
        else:
            data[keys[name]]["score"] = value
    return MatchResult.model_validate(data)


class TestWeights:
    def test_sum_to_one(self) -> None:
        assert math.isclose(sum(CATEGORY_WEIGHTS.values()), 1.0)

    def test_values(self) -> None:
        assert CATEGORY_WEIGHTS == {
            "skills": 0.40,
            "experience": 0.30,
            "education": 0.15,
            "location": 0.10,
            "cultural_fit": 0.05,
        }

    def test_instruction_names_every_weight(self) -> None:
        text = weights_instruction()
        for fragment in ("Skills 40%", "Experience 30%", "Education 15%",
                         "Location 10%", "Cultural Fit 5%"):
            assert fragment in text


class TestAggregate:
    def test_worked_example(self) -> None:
        # 36 + 24 + 15 + 5 + 3.5 = 83.5 -> 84
        assert aggregate(90, 80, 100, 50, 70) == 84

    def test_half_rounds_up(self) -> None:
        # 0.05 * 10 = 0.5 -> 1
        assert aggregate(0, 0, 0, 0, 10) == 1
        # 40*0.4 + 0*... + 10*0.05 = 16.5 -> 17
        assert aggregate(40, 0, 0, 0, 10) == 17

    def test_bounds(self) -> None:
        assert aggregate(0, 0, 0, 0, 0) == 0
        assert aggregate(100, 100, 100, 100, 100) == 100

    def test_deterministic(self) -> None:
        assert aggregate(73, 41, 88, 12, 99) == aggregate(73, 41, 88, 12, 99)

    def test_output_always_in_range(self) -> None:
        for s in range(0, 101, 7):
            for e in range(0, 101, 11):
                value = aggregate(s, e, 100 - s, e, 100 - e)
                assert 0 <= value <= 100

    @pytest.mark.parametrize("bad", [-1, 101, 50.5, True])
    def test_out_of_contract_rejected(self, bad: object) -> None:
        with pytest.raises(ValueError, match="skills score must be an integer"):
            aggregate(bad, 50, 50, 50, 50)  # type: ignore[arg-type]

    def test_error_names_category(self) -> None:
        with pytest.raises(ValueError, match="cultural_fit"):
            aggregate(50, 50, 50, 50, 200)


class TestRecompute:
    def test_aggregate_result(self) -> None:
        assert aggregate_result(_result()) == 84

    def test_overwrites_generator_score(self) -> None:
        result = _result(overall=80)
        recomputed = with_recomputed_score(result)
        assert recomputed.overall_score == 84
        assert recomputed.skills_match == result.skills_match
        assert result.overall_score == 80  # original untouched

    def test_same_object_when_consistent(self) -> None:
        result = _result(overall=84)
        assert with_recomputed_score(result) is result


class TestScoreBand:
    @pytest.mark.parametrize(
        ("score", "band"),
        [(100, "strong"), (80, "strong"), (79, "moderate"), (60, "moderate"),
         (59, "weak"), (0, "weak")],
    )
    def test_bands(self, score: int, band: str) -> None:
        assert score_band(score) == band
