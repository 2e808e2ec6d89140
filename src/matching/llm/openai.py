"""OpenAI and OpenAI-compatible providers (Groq, local Ollama)."""

import logging
import os

from src.matching.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM provider using the OpenAI chat completions API.

    Subclasses point the same client at OpenAI-compatible endpoints by
    overriding ``base_url`` and the key lookup.
    """

    base_url: str | None = None
    json_mode = True

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str | None:
        return "OPENAI_API_KEY"

    def _api_key(self) -> str:
        env_var = self.env_var
        if env_var is None:
            return self.provider_id
        api_key = os.environ.get(env_var)
        if not api_key:
            msg = f"{env_var} environment variable is required"
            raise ValueError(msg)
        return api_key

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str,
        max_tokens: int = 2048,
        temperature: float = 0.2,
    ) -> str:
        api_key = self._api_key()

        try:
            import openai
        except ImportError:
            msg = (
                f"openai is required for the {self.provider_id} provider. "
                "Install with: pip install 'candidate-matcher[openai]'"
            )
            raise ImportError(msg) from None

        client = openai.OpenAI(api_key=api_key, base_url=self.base_url)
        use_model = model or self.default_model

        kwargs: dict[str, object] = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        logger.info("Sending match request to %s (%s)...", self.provider_id, use_model)
        response = client.chat.completions.create(
            model=use_model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )

        return response.choices[0].message.content or ""


class GroqProvider(OpenAIProvider):
    """Groq-hosted open models via the OpenAI-compatible endpoint."""

    base_url = "https://api.groq.com/openai/v1"

    @property
    def provider_id(self) -> str:
        return "groq"

    @property
    def default_model(self) -> str:
        return "llama-3.3-70b-versatile"

    @property
    def env_var(self) -> str | None:
        return "GROQ_API_KEY"


class OllamaProvider(OpenAIProvider):
    """Local Ollama instance via the OpenAI-compatible endpoint."""

    base_url = "http://localhost:11434/v1"
    json_mode = False

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> str | None:
        return None
