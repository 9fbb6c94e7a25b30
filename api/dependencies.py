"""
FastAPI dependencies for the non-auth routes.
"""

from __future__ import annotations

from fastapi import Depends

from auth.dependencies import get_settings
from config.settings import Settings
from funfact.service import FunFactService
from utils.llm_providers import BaseLLMProvider, get_llm_provider


def get_funfact_llm(settings: Settings = Depends(get_settings)) -> BaseLLMProvider:
    return get_llm_provider(
        settings.funfact_model_provider,
        settings,
        default_model=settings.funfact_model,
    )


def get_funfact_service(
    llm: BaseLLMProvider = Depends(get_funfact_llm),
    settings: Settings = Depends(get_settings),
) -> FunFactService:
    return FunFactService(llm, settings)
