"""Chat models usable as external classifiers, addressed by short alias."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from scorer_utils import get_settings

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel


class Provider(StrEnum):
    """LLM provider identifiers."""

    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    GROQ = "groq"


@dataclass(frozen=True)
class ModelConfig:
    """One chat model and the classifier tasks it is trusted with."""

    alias: str
    full_name: str
    provider: Provider
    tasks: frozenset[str] = frozenset({"bot", "sentiment"})
    # Replies are a single {"label", "score"} object
    max_tokens: int = 128


_MODELS = (
    ModelConfig("claude-haiku-4.5", "claude-haiku-4-5-20251001", Provider.ANTHROPIC),
    ModelConfig("claude-sonnet-4.5", "claude-sonnet-4-5-20250929", Provider.ANTHROPIC),
    ModelConfig("gemini-flash-2.0", "gemini-2.0-flash", Provider.GOOGLE),
    ModelConfig(
        "meta-maverick-17b",
        "meta-llama/llama-4-maverick-17b-128e-instruct",
        Provider.GROQ,
        tasks=frozenset({"sentiment"}),
    ),
)


class ModelRegistry:
    """Alias -> ModelConfig lookup and LangChain chat model factory.

    Aliases are what settings (INFERENCE_MODEL) and logs carry; full names
    only go to the provider API.
    """

    def __init__(self, models: tuple[ModelConfig, ...] = _MODELS) -> None:
        self._models = {model.alias: model for model in models}

    def resolve(self, alias: str) -> ModelConfig:
        """Resolve a model alias to its configuration.

        Raises:
            ValueError: If alias is not found in registry.
        """
        try:
            return self._models[alias]
        except KeyError:
            available = ", ".join(self.available_models())
            msg = f"Unknown model alias: {alias}. Available: {available}"
            raise ValueError(msg) from None

    def get_chat_model(self, alias: str, *, timeout: float | None = None) -> BaseChatModel:
        """Instantiate a deterministic (temperature 0) chat model.

        API keys come from Settings when set there, otherwise the provider
        client falls back to its own environment variable.

        Raises:
            ValueError: If alias is unknown.
        """
        config = self.resolve(alias)
        settings = get_settings()
        common: dict[str, Any] = {"model": config.full_name, "temperature": 0.0, "timeout": timeout}

        if config.provider == Provider.ANTHROPIC:
            from langchain_anthropic import ChatAnthropic

            if settings.anthropic_api_key is not None:
                common["api_key"] = settings.anthropic_api_key
            return ChatAnthropic(max_tokens=config.max_tokens, **common)

        if config.provider == Provider.GOOGLE:
            from langchain_google_genai import ChatGoogleGenerativeAI

            if settings.gemini_api_key is not None:
                common["google_api_key"] = settings.gemini_api_key
            return ChatGoogleGenerativeAI(max_output_tokens=config.max_tokens, **common)

        from langchain_groq import ChatGroq

        if settings.groq_api_key is not None:
            common["api_key"] = settings.groq_api_key
        return ChatGroq(max_tokens=config.max_tokens, **common)

    def available_models(self) -> list[str]:
        """Sorted aliases of every registered model."""
        return sorted(self._models)

    def models_by_provider(self, provider: Provider) -> list[ModelConfig]:
        """Models served by one provider."""
        return [m for m in self._models.values() if m.provider == provider]

    def models_for_task(self, task: str) -> list[ModelConfig]:
        """Models trusted with a classifier task ("bot" or "sentiment")."""
        return [m for m in self._models.values() if task in m.tasks]


@lru_cache(maxsize=1)
def get_registry() -> ModelRegistry:
    """Get cached model registry instance."""
    return ModelRegistry()
