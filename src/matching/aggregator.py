"""Weighted aggregation of the five category scores into one overall score.

The same weight table renders the scoring instructions embedded in the match
prompt, so the generator is told exactly what this module computes.
"""

from src.core.schemas import MatchResult

# Integer percentages; they sum to exactly 100.
_WEIGHT_PERCENT: dict[str, int] = {
    "skills": 40,
    "experience": 30,
    "education": 15,
    "location": 10,
    "cultural_fit": 5,
}

CATEGORY_WEIGHTS: dict[str, float] = {k: v / 100 for k, v in _WEIGHT_PERCENT.items()}

_CATEGORY_LABELS: dict[str, str] = {
    "skills": "Skills",
    "experience": "Experience",
    "education": "Education",
    "location": "Location",
    "cultural_fit": "Cultural Fit",
}

STRONG_MATCH = 80
MODERATE_MATCH = 60


def aggregate(
    skills: int,
    experience: int,
    education: int,
    location: int,
    cultural_fit: int,
) -> int:
    """Return round-half-up of the weighted sum of the category scores.

    Raises ValueError if any score is not an integer in [0, 100].

    >>> aggregate(90, 80, 100, 50, 70)
    84
    """
    scores = {
        "skills": skills,
        "experience": experience,
        "education": education,
        "location": location,
        "cultural_fit": cultural_fit,
    }
    for name, value in scores.items():
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            msg = f"{name} score must be an integer in [0, 100], got {value!r}"
            raise ValueError(msg)

    weighted = sum(scores[k] * pct for k, pct in _WEIGHT_PERCENT.items())
    # weighted is in hundredths; +50 then floor-divide rounds .5 up
    return (weighted + 50) // 100


def aggregate_result(result: MatchResult) -> int:
    """Recompute the overall score of a MatchResult from its category scores."""
    return aggregate(
        result.skills_match.score,
        result.experience_match.score,
        result.education_match.score,
        result.location_match.score,
        result.cultural_fit.score,
    )


def with_recomputed_score(result: MatchResult) -> MatchResult:
    """Return a copy of result whose overall_score is the local aggregate."""
    overall = aggregate_result(result)
    if overall == result.overall_score:
        return result
    return result.model_copy(update={"overall_score": overall})


def weights_instruction() -> str:
    """Render the weight table as used in the scoring instructions."""
    parts = [f"{_CATEGORY_LABELS[k]} {pct}%" for k, pct in _WEIGHT_PERCENT.items()]
    return f"Weighted average ({', '.join(parts)})"


def score_band(score: int) -> str:
    """Bucket a score into strong / moderate / weak."""
    if score >= STRONG_MATCH:
        return "strong"
    if score >= MODERATE_MATCH:
        return "moderate"
    return "weak"
