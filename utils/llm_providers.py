"""
Thin adapter layer over LLM provider SDKs (OpenAI, Anthropic).

Each provider exposes the same ``generate`` call so the fun-fact
service never imports provider-specific code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict

from config.settings import Settings

logger = logging.getLogger(__name__)


class BaseLLMProvider(ABC):
    """Common interface that every concrete provider implements."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 1.0,
        model: str | None = None,
        max_tokens: int = 8192,
    ) -> str:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# OpenAI
# ═══════════════════════════════════════════════════════════════════════════════


class OpenAIProvider(BaseLLMProvider):
    def __init__(self, api_key: str, default_model: str = "gpt-4o-mini"):
        from openai import AsyncOpenAI

        self.client = AsyncOpenAI(api_key=api_key)
        self.default_model = default_model

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 1.0,
        model: str | None = None,
        max_tokens: int = 8192,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=model or self.default_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


# ═══════════════════════════════════════════════════════════════════════════════
# Anthropic
# ═══════════════════════════════════════════════════════════════════════════════


class AnthropicProvider(BaseLLMProvider):
    def __init__(self, api_key: str, default_model: str = "claude-3-5-sonnet-20241022"):
        from anthropic import AsyncAnthropic

        self.client = AsyncAnthropic(api_key=api_key)
        self.default_model = default_model

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 1.0,
        model: str | None = None,
        max_tokens: int = 8192,
    ) -> str:
        response = await self.client.messages.create(
            model=model or self.default_model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════════════════════

_provider_cache: Dict[str, BaseLLMProvider] = {}


def get_llm_provider(
    provider_name: str,
    settings: Settings,
    *,
    default_model: str | None = None,
) -> BaseLLMProvider:
    """
    Return (and cache) an LLM provider instance.

    Parameters
    ----------
    provider_name : "openai" | "anthropic"
    settings      : source of the API keys.
    default_model : override the default model for this provider instance.
    """

    cache_key = f"{provider_name}:{default_model or 'default'}"
    if cache_key in _provider_cache:
        return _provider_cache[cache_key]

    if provider_name == "openai":
        instance = OpenAIProvider(
            api_key=settings.openai_api_key,
            default_model=default_model or "gpt-4o-mini",
        )
    elif provider_name == "anthropic":
        instance = AnthropicProvider(
            api_key=settings.anthropic_api_key or "",
            default_model=default_model or "claude-3-5-sonnet-20241022",
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {provider_name}")

    logger.info("Created %s provider (model=%s)", provider_name, instance.default_model)
    _provider_cache[cache_key] = instance
    return instance
