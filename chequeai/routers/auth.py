"""
Registration, login and profile lookup.

POST /api/auth/register
POST /api/auth/login
GET  /api/auth/profile
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from chequeai.auth import create_access_token, get_current_user, hash_password, verify_password
from chequeai.database import get_db
from chequeai.models import UserModel
from chequeai.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserEnvelope,
    UserMessageEnvelope,
    UserOut,
)

logger = logging.getLogger(__name__)
router = APIRouter()

MIN_PASSWORD_LENGTH = 6


def transform_user(model: UserModel) -> UserOut:
    return UserOut(
        id=model.id,
        username=model.username,
        email=model.email,
        created_at=model.created_at,
    )


# ── POST /api/auth/register ──────────────────────────────────────────────
@router.post("/auth/register", response_model=UserMessageEnvelope, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    username = req.username.strip()
    email = req.email.strip().lower()

    if not username or not email or not req.password:
        raise HTTPException(status_code=400, detail="Username, email and password are required")
    if req.password != req.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if len(req.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    existing = db.query(UserModel).filter(
        or_(UserModel.username == username, UserModel.email == email)
    ).first()
    if existing:
        logger.warning("Registration rejected, user exists: %s / %s", username, email)
        raise HTTPException(status_code=400, detail="User with this username or email already exists")

    user = UserModel(username=username, email=email, password_hash=hash_password(req.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, username)

    return UserMessageEnvelope(message="Registration successful! Please log in.", user=transform_user(user))


# ── POST /api/auth/login ─────────────────────────────────────────────────
@router.post("/auth/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    identifier = req.username.strip()
    if not identifier or not req.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    user = db.query(UserModel).filter(
        or_(UserModel.username == identifier, UserModel.email == identifier.lower())
    ).first()
    if not user or not verify_password(req.password, user.password_hash):
        logger.warning("Failed login for %s", identifier)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("User %s logged in", user.id)
    return TokenResponse(
        message="Login successful",
        token=create_access_token(user),
        user=transform_user(user),
    )


# ── GET /api/auth/profile ────────────────────────────────────────────────
@router.get("/auth/profile", response_model=UserEnvelope)
def profile(user: UserModel = Depends(get_current_user)):
    return UserEnvelope(user=transform_user(user))
