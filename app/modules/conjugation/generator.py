"""Text generation capability backed by pydantic-ai.

The generation service only needs ``generate(prompt) -> text``; parsing and
validation of the returned text happen downstream. Provider imports are kept
lazy to avoid import-time errors when credentials are missing.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic_ai import Agent
from pydantic_ai.exceptions import UnexpectedModelBehavior

from app.core.config import GenerationSettings, settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> Optional[str]: ...


def _build_openai_model(gen: GenerationSettings):
    """Build OpenAI chat model (lazy import)."""
    if not gen.openai_api_key:
        raise RuntimeError(
            "OpenAI API key not configured. Set OPENAI_API_KEY in your environment."
        )
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    provider = OpenAIProvider(api_key=gen.openai_api_key)
    return OpenAIChatModel(gen.openai_model, provider=provider)


def _build_google_model(gen: GenerationSettings):
    """Build Google Gemini model for pydantic-ai (lazy import)."""
    if not gen.gemini_api_key:
        raise RuntimeError(
            "Gemini API key not configured. Set GEMINI_API_KEY in your environment."
        )
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=gen.gemini_api_key)
    return GoogleModel(gen.gemini_model, provider=provider)


def _build_openrouter_model(gen: GenerationSettings):
    """Build OpenRouter model via OpenAI-compatible provider (lazy import)."""
    if not gen.openrouter_api_key:
        raise RuntimeError(
            "OpenRouter API key not configured. Set OPENROUTER_API_KEY in your environment."
        )
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    provider = OpenAIProvider(
        api_key=gen.openrouter_api_key,
        base_url="https://openrouter.ai/api/v1",
    )
    return OpenAIChatModel(gen.openrouter_model, provider=provider)


def build_model_by_settings(gen: Optional[GenerationSettings] = None):
    gen = gen or settings.generation
    provider = (gen.model_provider or "openai").lower()
    if provider == "google":
        return _build_google_model(gen)
    if provider == "openrouter":
        return _build_openrouter_model(gen)
    if provider == "openai":
        return _build_openai_model(gen)
    raise RuntimeError(f"Unknown MODEL_PROVIDER: {gen.model_provider!r}")


class AgentTextGenerator:
    """Plain-text pydantic-ai agent; the whole prompt goes in one user turn."""

    def __init__(self, model=None) -> None:
        self._model = model
        self._agent: Optional[Agent[None, str]] = None

    def _get_agent(self) -> Agent[None, str]:
        if self._agent is None:
            model = self._model if self._model is not None else build_model_by_settings()
            self._agent = Agent[None, str](model=model, output_type=str)
        return self._agent

    async def generate(self, prompt: str) -> Optional[str]:
        try:
            res = await self._get_agent().run(prompt)
        except UnexpectedModelBehavior as e:
            logger.warning("Model returned no usable output: %s", e)
            return None
        text = res.output
        if not text or not text.strip():
            return None
        return text
