"""Match assessor: one candidate against one job via structured generation."""

import logging
from typing import Protocol, runtime_checkable

from src.core.errors import MatchGenerationError
from src.core.schemas import CandidateProfile, JobPosting, MatchResult
from src.matching.aggregator import weights_instruction, with_recomputed_score
from src.matching.generation import StructuredGenerator

logger = logging.getLogger(__name__)


@runtime_checkable
class Assessor(Protocol):
    """Anything that can score one candidate against one job."""

    async def assess(self, candidate: CandidateProfile, job: JobPosting) -> MatchResult:
        ...


def _bullets(lines: list[str], empty: str) -> str:
    return "\n".join(lines) if lines else empty


def _candidate_section(candidate: CandidateProfile) -> str:
    info = candidate.personal_info
    experience = [
        f"- {exp.position} at {exp.company} "
        f"({exp.start_date} - {exp.end_date or 'Present'}): {exp.description}"
        for exp in candidate.experience
    ]
    education = [
        f"- {edu.degree} in {edu.field or 'N/A'} from {edu.institution}"
        for edu in candidate.education
    ]
    return (
        "CANDIDATE PROFILE:\n"
        f"Name: {info.full_name}\n"
        f"Location: {info.location or 'Not specified'}\n\n"
        f"Summary: {candidate.summary or 'No summary provided'}\n\n"
        f"Experience:\n{_bullets(experience, '- None listed')}\n\n"
        f"Education:\n{_bullets(education, '- None listed')}\n\n"
        f"Technical Skills: {', '.join(candidate.skills.technical) or 'None listed'}\n"
        f"Soft Skills: {', '.join(candidate.skills.soft) or 'None listed'}\n"
    )


def _job_section(job: JobPosting) -> str:
    return (
        "JOB DESCRIPTION:\n"
        f"Title: {job.title}\n"
        f"Company: {job.company or 'Not specified'}\n"
        f"Location: {job.location or 'Not specified'}\n"
        f"Type: {job.employment_type or 'Not specified'}\n"
        f"Experience Level: {job.experience_level or 'Not specified'}\n\n"
        f"Description: {job.description}\n\n"
        f"Required Skills: {', '.join(job.required_skills) or 'None specified'}\n"
        f"Preferred Skills: {', '.join(job.preferred_skills) or 'None specified'}\n\n"
        f"Education Requirements: {job.education_requirements or 'Not specified'}\n"
        f"Experience Requirements: {job.experience_requirements or 'Not specified'}\n"
    )


def _scoring_instructions() -> str:
    return (
        "SCORING INSTRUCTIONS:\n"
        f"- Overall Score: {weights_instruction()}\n"
        "- Skills Match: Compare technical and soft skills, prioritize required skills\n"
        "- Experience Match: Evaluate relevant work experience, industry background, "
        "and career progression\n"
        "- Education Match: Check if education meets minimum requirements\n"
        "- Location Match: Consider remote work options, relocation willingness, "
        "and geographic compatibility\n"
        "- Cultural Fit: Assess based on company culture, values, and candidate background\n\n"
        "Provide specific, actionable recommendations for both the candidate and recruiter.\n"
        "Be honest about gaps while highlighting strengths."
    )


def build_match_prompt(candidate: CandidateProfile, job: JobPosting) -> str:
    """Assemble the match request from candidate and job data."""
    return (
        "Analyze how well this candidate matches the job description. "
        "Provide detailed scoring and explanations.\n\n"
        f"{_candidate_section(candidate)}\n"
        f"{_job_section(job)}\n"
        f"{_scoring_instructions()}"
    )


class LLMMatchAssessor:
    """Production assessor backed by an LLM structured generator.

    The generator's overall score is advisory: it is always replaced by the
    local weighted aggregate of the category scores.
    """

    def __init__(self, generator: StructuredGenerator) -> None:
        self._generator = generator

    async def assess(self, candidate: CandidateProfile, job: JobPosting) -> MatchResult:
        """Score one candidate against one job.

        Raises:
            ValueError: If the candidate name or job title/description is blank.
            MatchGenerationError: If generation fails or the reply does not
                conform to the MatchResult schema.
        """
        if not candidate.personal_info.full_name.strip():
            msg = f"Candidate '{candidate.id}' has no full name"
            raise ValueError(msg)
        if not job.title.strip() or not job.description.strip():
            msg = f"Job '{job.id}' needs a title and description"
            raise ValueError(msg)

        prompt = build_match_prompt(candidate, job)
        try:
            generated = await self._generator.generate(prompt, MatchResult)
        except MatchGenerationError:
            raise
        except Exception as e:
            msg = f"Match generation failed for candidate '{candidate.id}': {e}"
            raise MatchGenerationError(msg) from e

        result = with_recomputed_score(generated)
        if result.overall_score != generated.overall_score:
            logger.info(
                "Overall score for '%s' recomputed: generator=%d local=%d",
                candidate.id, generated.overall_score, result.overall_score,
            )
        return result
