"""
SQLAlchemy ORM models for the credential store.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_public(self) -> dict:
        """Fields safe to hand back to a client; never the hash."""
        return {"id": self.id, "username": self.username, "email": self.email}

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
