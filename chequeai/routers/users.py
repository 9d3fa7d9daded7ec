"""
User profile endpoints.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from chequeai import store
from chequeai.auth import get_current_user
from chequeai.database import get_db
from chequeai.extraction import extract_check_information
from chequeai.models import UserModel
from chequeai.routers.auth import transform_user
from chequeai.schemas import ProfileUpdate, UserMessageEnvelope, UserStats, UserStatsEnvelope

logger = logging.getLogger(__name__)
router = APIRouter()


# ── GET /api/user/stats ──────────────────────────────────────────────────
@router.get("/user/stats", response_model=UserStatsEnvelope)
def user_stats(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    checks = store.list_by_owner(db, user.id)
    with_payee = sum(1 for c in checks if extract_check_information(c).payee_name)
    return UserStatsEnvelope(
        stats=UserStats(
            total_checks=len(checks),
            checks_with_payee=with_payee,
            latest_check_at=checks[0].created_at if checks else None,
        )
    )


# ── PUT /api/user/profile ────────────────────────────────────────────────
@router.put("/user/profile", response_model=UserMessageEnvelope)
def update_profile(
    req: ProfileUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    username = req.username.strip() if req.username else user.username
    email = req.email.strip().lower() if req.email else user.email

    clash = db.query(UserModel).filter(
        UserModel.id != user.id,
        or_(UserModel.username == username, UserModel.email == email),
    ).first()
    if clash:
        raise HTTPException(status_code=400, detail="Username or email already in use")

    user.username = username
    user.email = email
    db.commit()
    db.refresh(user)
    logger.info("Updated profile for user %s", user.id)
    return UserMessageEnvelope(message="Profile updated successfully", user=transform_user(user))
