"""
Pydantic models for the auth endpoints and the service layer.

Request fields are optional at the schema level so that a missing field
reaches the service and gets the same error shape as any other
validation failure.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


# ── Requests ───────────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ── Service results ────────────────────────────────────────────────────


class PublicUser(BaseModel):
    id: int
    username: str
    email: str


class LoginResult(BaseModel):
    username: str
    email: str
    token: str


# ── Responses ──────────────────────────────────────────────────────────


class RegisterResponse(BaseModel):
    message: str
    data: PublicUser


class LoginResponse(BaseModel):
    message: str
    username: Optional[str] = None
    email: Optional[str] = None
    token: Optional[str] = None
