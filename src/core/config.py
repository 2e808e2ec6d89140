"""Configuration models and YAML loader for the candidate matcher."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

CandidateScope = Literal["all", "owner"]


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/matcher.db"


class LLMConfig(BaseModel):
    """Structured-generation backend used by the match assessor."""

    provider: str = "groq"
    model: str | None = None
    max_tokens: int = Field(default=2048, ge=256)
    temperature: float = Field(default=0.2, ge=0.0, le=1.0)

    @field_validator("provider")
    @classmethod
    def provider_lowercase(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            msg = "provider must not be empty"
            raise ValueError(msg)
        return v


class MatchingConfig(BaseModel):
    """Batch matching behaviour.

    candidate_scope:
        ``all`` scores every candidate in the system against the job (shared
        pool across recruiters). ``owner`` restricts the pool to candidates
        uploaded by the job owner.
    """

    pacing_interval_seconds: float = Field(default=0.1, ge=0.0)
    top_n: int = Field(default=10, ge=1, le=100)
    candidate_scope: CandidateScope = "all"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
