"""
REST API routes outside the auth core: health text, user lookup and
fun-fact generation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from api.dependencies import get_funfact_service
from auth.dependencies import get_current_claims, get_user_repository
from auth.errors import AppError
from auth.schemas import PublicUser
from database.users import UserRepository
from funfact.service import FunFactService

logger = logging.getLogger(__name__)

router = APIRouter()


class FunFactRequest(BaseModel):
    category: Optional[str] = None


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Server is running fine!"


@router.get("/user/{user_id}", response_model=PublicUser)
async def get_user(
    user_id: int,
    claims: Dict[str, Any] = Depends(get_current_claims),
    repository: UserRepository = Depends(get_user_repository),
):
    """Look up a registered user by id. Requires a valid bearer token."""
    user = await repository.find_by_id(user_id)
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "User not found"},
        )
    logger.debug("User %s looked up by %s", user_id, claims.get("id"))
    return PublicUser(**user.to_public())


@router.post("/generatefunfact")
async def generate_fun_fact(
    req: FunFactRequest,
    service: FunFactService = Depends(get_funfact_service),
):
    """Ask the model for ten fun facts about a waste category."""
    try:
        fun_fact = await service.generate(req.category)
    except AppError as exc:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
    except Exception:
        logger.exception("Error generating fun fact")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    return {"funFact": fun_fact}
