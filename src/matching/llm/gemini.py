"""Google Gemini backend for match assessments (google-genai SDK)."""

import logging
import os

from src.matching.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Sends a match prompt to Gemini with the reply MIME type pinned to JSON."""

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    @property
    def env_var(self) -> str:
        return "GOOGLE_API_KEY"

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
            from google import genai
            from google.genai import types as genai_types
        except ImportError:
            msg = (
                "google-genai is required for the gemini provider. "
                "Install with: pip install 'candidate-matcher[gemini]'"
            )
            raise ImportError(msg) from None

        assessment_model = model or self.default_model
        generation_config = genai_types.GenerateContentConfig(
            system_instruction=system,
            max_output_tokens=max_tokens,
            temperature=temperature,
            response_mime_type="application/json",
        )
        logger.debug(
            "Requesting match assessment from %s (prompt %d chars, max_tokens=%d)",
            assessment_model, len(prompt), max_tokens,
        )
        reply = genai.Client(api_key=api_key).models.generate_content(
            model=assessment_model,
            contents=prompt,
            config=generation_config,
        )

        # An empty reply (e.g. a safety block) surfaces as a parse failure.
        return reply.text or ""
