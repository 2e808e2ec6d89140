"""Abstract base class for LLM providers and shared response handling."""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def parse_json_payload(raw_text: str) -> dict[str, Any]:
    """Decode a JSON object from an LLM response.

    Handles markdown-wrapped JSON (```json ... ```) and plain JSON.
    Raises ValueError if the text is not a JSON object.
    """
    cleaned = _FENCE_OPEN.sub("", raw_text.strip())
    cleaned = _FENCE_CLOSE.sub("", cleaned)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        msg = f"Failed to parse LLM response as JSON: {e}"
        raise ValueError(msg) from e

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return data


class LLMProvider(ABC):
    """Base class that every LLM provider must implement."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'anthropic')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str,
        max_tokens: int = 2048,
        temperature: float = 0.2,
    ) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: User message.
            model: Override the provider's default model. None uses default.
            system: System instruction (carries the output JSON schema).
            max_tokens: Upper bound on generated tokens.
            temperature: Sampling temperature.

        Returns:
            Raw text response from the LLM (expected to be JSON).
        """
