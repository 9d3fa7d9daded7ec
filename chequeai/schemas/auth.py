"""
Auth and user profile schemas.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime


class UserEnvelope(BaseModel):
    user: UserOut


class UserMessageEnvelope(BaseModel):
    message: str
    user: UserOut


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None


class UserStats(BaseModel):
    total_checks: int = 0
    checks_with_payee: int = 0
    latest_check_at: Optional[datetime] = None


class UserStatsEnvelope(BaseModel):
    stats: UserStats
