"""LLM provider registry with lazy loading.

Usage:
    from src.matching.llm import get_provider

    provider = get_provider("groq")
    raw = provider.complete(prompt, system=instructions)
"""

import importlib

from src.matching.llm.base import LLMProvider, parse_json_payload

__all__ = ["LLMProvider", "available_providers", "get_provider", "parse_json_payload"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("src.matching.llm.anthropic", "AnthropicProvider"),
    "openai": ("src.matching.llm.openai", "OpenAIProvider"),
    "groq": ("src.matching.llm.openai", "GroqProvider"),
    "ollama": ("src.matching.llm.openai", "OllamaProvider"),
    "gemini": ("src.matching.llm.gemini", "GeminiProvider"),
}


def get_provider(name: str) -> LLMProvider:
    """Instantiate and return an LLM provider by name.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown LLM provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls()  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
