"""Core data models for candidate-job matching.

All models are frozen. Field names are snake_case; camelCase aliases are
accepted on input so documents produced by the resume parser validate as-is.
"""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Score = Annotated[int, Field(ge=0, le=100, strict=True)]


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        v = v.strip()
        if v and v.lower() not in seen:
            seen.add(v.lower())
            out.append(v)
    return out


def _load_yaml(path: str | Path, kind: str) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        msg = f"{kind} file not found: {path}"
        raise FileNotFoundError(msg)
    return yaml.safe_load(path.read_text()) or {}


# ---------------------------------------------------------------------------
# Candidate profile
# ---------------------------------------------------------------------------


class PersonalInfo(_Frozen):
    full_name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = Field(default=None, alias="linkedIn")
    website: str | None = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "full_name must not be empty"
            raise ValueError(msg)
        return v.strip()


class WorkExperience(_Frozen):
    company: str
    position: str
    start_date: str
    end_date: str | None = None  # None = current position
    description: str = ""
    achievements: list[str] = Field(default_factory=list)


class Education(_Frozen):
    institution: str
    degree: str
    field: str | None = None
    graduation_date: str | None = None


class Skills(_Frozen):
    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)

    @field_validator("technical", "soft", "languages")
    @classmethod
    def unique_skills(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class CandidateProfile(_Frozen):
    """Structured snapshot of one parsed resume."""

    id: str
    owner_id: str | None = None
    personal_info: PersonalInfo
    summary: str | None = None
    experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def full_name(self) -> str:
        return self.personal_info.full_name

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "CandidateProfile":
        """Load a candidate profile from a YAML file."""
        raw = _load_yaml(path, "Candidate profile")
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(raw)


# ---------------------------------------------------------------------------
# Job posting
# ---------------------------------------------------------------------------


class JobPosting(_Frozen):
    """Structured snapshot of one job description."""

    id: str
    owner_id: str
    title: str
    company: str = ""
    location: str = ""
    employment_type: str = ""
    experience_level: str = ""
    description: str
    # Order is priority; duplicates are tolerated.
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    education_requirements: str | None = None
    experience_requirements: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("title", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "title and description must not be empty"
            raise ValueError(msg)
        return v.strip()

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "JobPosting":
        """Load a job posting from a YAML file."""
        raw = _load_yaml(path, "Job posting")
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(raw)


# ---------------------------------------------------------------------------
# Match result
# ---------------------------------------------------------------------------


class SkillsMatch(_Frozen):
    score: Score
    matched_skills: list[str]
    missing_skills: list[str]
    explanation: str


class ExperienceMatch(_Frozen):
    score: Score
    relevant_experience: list[str]
    experience_gap: str | None = None
    explanation: str


class EducationMatch(_Frozen):
    score: Score
    meets_requirements: bool
    explanation: str


class LocationMatch(_Frozen):
    score: Score
    compatible: bool
    explanation: str


class CulturalFit(_Frozen):
    score: Score
    strengths: list[str]
    concerns: list[str] | None = None
    explanation: str


class MatchResult(_Frozen):
    """Five-category assessment of one candidate against one job."""

    overall_score: Score
    skills_match: SkillsMatch
    experience_match: ExperienceMatch
    education_match: EducationMatch
    location_match: LocationMatch
    cultural_fit: CulturalFit
    recommendations: list[str]
    summary: str


class StoredMatch(_Frozen):
    """Persisted (job, candidate) association."""

    job_id: str
    candidate_id: str
    owner_id: str
    match_score: Score
    match_details: MatchResult
    created_at: datetime = Field(default_factory=datetime.now)


# ---------------------------------------------------------------------------
# Batch run summary
# ---------------------------------------------------------------------------


class TopMatch(_Frozen):
    candidate_id: str
    candidate_name: str
    score: Score
    details: MatchResult


class SkippedCandidate(_Frozen):
    candidate_id: str
    stage: Literal["assess", "persist"]
    reason: str


class BatchSummary(_Frozen):
    """Outcome of matching every candidate against one job."""

    job_id: str
    total_candidates: int = Field(ge=0)
    matches_created: int = Field(ge=0)
    top_matches: list[TopMatch] = Field(default_factory=list)
    skipped: list[SkippedCandidate] = Field(default_factory=list)
    started_at: datetime
    finished_at: datetime

    @property
    def partial(self) -> bool:
        """True when at least one candidate contributed no match."""
        return self.matches_created < self.total_candidates
