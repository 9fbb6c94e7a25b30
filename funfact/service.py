"""
Fun-fact generation — a black-box call to the configured LLM.
"""

from __future__ import annotations

import logging
from typing import Optional

from auth.errors import AppError, ValidationError
from config.settings import Settings
from funfact.prompts import FunFactPrompts
from utils.llm_providers import BaseLLMProvider

logger = logging.getLogger(__name__)


class FunFactGenerationError(AppError):
    default_message = "Failed to generate fun fact"


class FunFactService:
    def __init__(self, llm_provider: BaseLLMProvider, settings: Settings) -> None:
        self.llm = llm_provider
        self.settings = settings

    async def generate(self, category: Optional[str]) -> str:
        """
        Return the model's fun-fact text for ``category``.

        Raises ``ValidationError`` for a blank category and
        ``FunFactGenerationError`` when the model returns nothing.
        Provider exceptions propagate unchanged.
        """
        category = (category or "").strip()
        if not category:
            raise ValidationError("Category is required")

        text = await self.llm.generate(
            FunFactPrompts.fun_fact_prompt(category),
            temperature=self.settings.funfact_temperature,
            max_tokens=self.settings.funfact_max_tokens,
        )
        text = (text or "").strip()
        if not text:
            logger.warning("Model returned no fun fact for category %r", category)
            raise FunFactGenerationError()

        logger.info("Generated fun fact for category %r (%d chars)", category, len(text))
        return text
