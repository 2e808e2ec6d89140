"""Anthropic Claude backend for match assessments."""

import logging
import os

from src.matching.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """Sends a match prompt to Claude and returns its JSON reply.

    The MatchResult schema travels in the system prompt. Claude has no
    JSON response mode, so replies may arrive wrapped in markdown fences.
    """

    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str:
        return "ANTHROPIC_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str,
        max_tokens: int = 2048,
        temperature: float = 0.2,
    ) -> str:
        api_key = os.environ.get(self.env_var)
        if not api_key:
            msg = f"{self.env_var} environment variable is required"
            raise ValueError(msg)

        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for the anthropic provider. "
                "Install with: pip install 'candidate-matcher[anthropic]'"
            )
            raise ImportError(msg) from None

        assessment_model = model or self.default_model
        logger.debug(
            "Requesting match assessment from %s (prompt %d chars, max_tokens=%d)",
            assessment_model, len(prompt), max_tokens,
        )
        reply = anthropic.Anthropic(api_key=api_key).messages.create(
            model=assessment_model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )

        return reply.content[0].text  # type: ignore[union-attr]
