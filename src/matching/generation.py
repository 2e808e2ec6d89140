"""Schema-constrained generation on top of a plain-text LLM provider.

The provider is asked for a JSON object matching the target model's JSON
schema; the reply is decoded and validated against that model. Anything short
of a valid instance is a MatchGenerationError. There is no internal retry.
"""

import asyncio
import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from src.core.config import LLMConfig
from src.core.errors import MatchGenerationError
from src.matching.llm import LLMProvider, get_provider, parse_json_payload

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SYSTEM_TEMPLATE = (
    "You are a senior technical recruiter assessing candidate-job fit.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation) that validates "
    "against this JSON schema. Every score is an integer from 0 to 100. "
    "Use the exact camelCase property names.\n\n"
    "{schema}"
)


def system_instruction(output_model: type[BaseModel]) -> str:
    """Build the system instruction carrying output_model's JSON schema."""
    schema = json.dumps(output_model.model_json_schema(by_alias=True), indent=2)
    return _SYSTEM_TEMPLATE.format(schema=schema)


class StructuredGenerator:
    """Turns a prompt into a validated pydantic model via an LLM provider."""

    def __init__(self, provider: LLMProvider, config: LLMConfig | None = None) -> None:
        self._provider = provider
        self._config = config or LLMConfig()

    @classmethod
    def from_config(cls, config: LLMConfig) -> "StructuredGenerator":
        return cls(get_provider(config.provider), config)

    @property
    def provider_id(self) -> str:
        return self._provider.provider_id

    def generate_sync(self, prompt: str, output_model: type[ModelT]) -> ModelT:
        """Blocking variant of generate()."""
        try:
            raw = self._provider.complete(
                prompt,
                model=self._config.model,
                system=system_instruction(output_model),
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
        except Exception as e:
            msg = f"{self._provider.provider_id} request failed: {e}"
            raise MatchGenerationError(msg) from e

        try:
            data = parse_json_payload(raw)
            return output_model.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.debug("Rejected %s response: %.500s", self._provider.provider_id, raw)
            msg = f"{self._provider.provider_id} returned a non-conforming {output_model.__name__}: {e}"
            raise MatchGenerationError(msg) from e

    async def generate(self, prompt: str, output_model: type[ModelT]) -> ModelT:
        """Run the blocking SDK call in a worker thread and validate the reply."""
        return await asyncio.to_thread(self.generate_sync, prompt, output_model)
