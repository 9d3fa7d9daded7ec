"""
Cheque API endpoints.

GET    /api/checks                                  — list the caller's cheques
GET    /api/checks/{id}                             — one cheque
POST   /api/checks/extract                          — upload image → Gemini → store
POST   /api/checks/insert-sample                    — store a fixed sample cheque
PUT    /api/checks/{id}/update-extracted-data       — overwrite fields manually
POST   /api/checks/{id}/insert-extracted-data       — same, from the insert form
GET    /api/checks/{id}/export-csv                  — CSV download
GET    /api/checks/{id}/export-pdf                  — PDF download
DELETE /api/checks/{id}                             — delete cheque and its image

Cheques owned by another user are reported as not found.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from chequeai import exports, storage, store
from chequeai.auth import get_current_user
from chequeai.config import settings
from chequeai.database import get_db
from chequeai.extraction import display_check
from chequeai.extraction.gemini import ExtractionError, GeminiChequeExtractor, get_extractor
from chequeai.models import BankCheckModel, UserModel
from chequeai.schemas import (
    CheckEnvelope,
    CheckListEnvelope,
    CheckMessageEnvelope,
    CheckResponse,
    ExtractedDataRequest,
    MessageResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

SAMPLE_CHECK = {
    "micr_code": "056111 063-978⑆ 1007928",
    "cheque_date": "07 November 2017",
    "amount_number": "8.01",
    "amount_words": "EIGHT DOLLARS AND ONE CENT",
    "payee_name": "JULIUS EVENTS COLLEGE PTY LTD",
    "account_number": "",
    "anti_fraud_features": (
        "Watermark (likely, based on the background pattern), microprinting "
        "(possibly, but not clearly visible in the provided image), "
        "'Not Negotiable' printed on the cheque."
    ),
}
SAMPLE_IMAGE_FILENAME = "sample-check.jpg"


def transform_check(model: BankCheckModel) -> CheckResponse:
    """BankCheckModel → CheckResponse, with the reconciled display attached."""
    return CheckResponse(
        id=model.id,
        user_id=model.user_id,
        micr_code=model.micr_code,
        cheque_date=model.cheque_date,
        amount_number=model.amount_number,
        amount_words=model.amount_words,
        currency_name=model.currency_name,
        payee_name=model.payee_name,
        account_number=model.account_number,
        anti_fraud_features=model.anti_fraud_features,
        image_filename=model.image_filename,
        extracted_text=model.extracted_text,
        created_at=model.created_at,
        display=display_check(model),
    )


def _get_owned_or_404(db: Session, check_id: int, user: UserModel) -> BankCheckModel:
    check = store.get_by_id(db, check_id, user.id)
    if not check:
        logger.warning("Check not found: %s (user %s)", check_id, user.id)
        raise HTTPException(status_code=404, detail="Check not found")
    return check


# ── GET /api/checks ──────────────────────────────────────────────────────
@router.get("/checks", response_model=CheckListEnvelope)
def list_checks(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = store.list_by_owner(db, user.id)
    logger.info("Found %d checks for user %s", len(rows), user.id)
    return CheckListEnvelope(checks=[transform_check(r) for r in rows])


# ── POST /api/checks/extract ─────────────────────────────────────────────
@router.post("/checks/extract", response_model=CheckMessageEnvelope, status_code=status.HTTP_201_CREATED)
def extract_check(
    file: Optional[UploadFile] = File(None),
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    extractor: GeminiChequeExtractor = Depends(get_extractor),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not storage.allowed_image(file.filename, file.content_type):
        raise HTTPException(status_code=400, detail="Only image files are allowed!")

    data = file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="File too large")
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")

    stored_name = storage.save_image(data, file.filename)
    logger.info("Extract: user=%s  file=%s  len=%d", user.id, stored_name, len(data))

    try:
        result = extractor.extract(data, file.content_type or "image/jpeg")
    except ExtractionError as e:
        storage.delete_image(stored_name)
        raise HTTPException(status_code=500, detail={"message": e.message, "details": e.details})

    check = store.insert(
        db,
        user.id,
        result.model_dump(exclude={"extracted_text"}),
        image_filename=stored_name,
        extracted_text=result.extracted_text,
    )
    return CheckMessageEnvelope(
        message="Check information extracted successfully using Gemini AI!",
        check=transform_check(check),
    )


# ── POST /api/checks/insert-sample ───────────────────────────────────────
@router.post("/checks/insert-sample", response_model=CheckMessageEnvelope, status_code=status.HTTP_201_CREATED)
def insert_sample(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check = store.insert(
        db,
        user.id,
        {**SAMPLE_CHECK, "currency_name": "USD"},
        image_filename=SAMPLE_IMAGE_FILENAME,
        extracted_text=json.dumps(SAMPLE_CHECK, ensure_ascii=False),
    )
    return CheckMessageEnvelope(
        message="Sample check data inserted successfully!",
        check=transform_check(check),
    )


# ── GET /api/checks/{check_id} ───────────────────────────────────────────
@router.get("/checks/{check_id}", response_model=CheckEnvelope)
def get_check(
    check_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CheckEnvelope(check=transform_check(_get_owned_or_404(db, check_id, user)))


def _apply_extracted_data(
    check_id: int,
    req: ExtractedDataRequest,
    user: UserModel,
    db: Session,
) -> BankCheckModel:
    if req.extracted_data is None:
        raise HTTPException(status_code=400, detail="Extracted data is required")

    check = store.update_extracted(
        db, check_id, user.id, req.extracted_data.model_dump(exclude_unset=True)
    )
    if not check:
        raise HTTPException(status_code=404, detail="Check not found")
    return check


# ── PUT /api/checks/{check_id}/update-extracted-data ─────────────────────
@router.put("/checks/{check_id}/update-extracted-data", response_model=CheckMessageEnvelope)
def update_extracted_data(
    check_id: int,
    req: ExtractedDataRequest,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check = _apply_extracted_data(check_id, req, user, db)
    return CheckMessageEnvelope(
        message="Extracted data updated successfully!",
        check=transform_check(check),
    )


# ── POST /api/checks/{check_id}/insert-extracted-data ────────────────────
@router.post("/checks/{check_id}/insert-extracted-data", response_model=CheckMessageEnvelope)
def insert_extracted_data(
    check_id: int,
    req: ExtractedDataRequest,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check = _apply_extracted_data(check_id, req, user, db)
    return CheckMessageEnvelope(
        message="Extracted data inserted successfully!",
        check=transform_check(check),
    )


# ── GET /api/checks/{check_id}/export-csv ────────────────────────────────
@router.get("/checks/{check_id}/export-csv")
def export_csv(
    check_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check = _get_owned_or_404(db, check_id, user)
    return Response(
        content=exports.render_csv(check),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{exports.csv_filename(check)}"'},
    )


# ── GET /api/checks/{check_id}/export-pdf ────────────────────────────────
@router.get("/checks/{check_id}/export-pdf")
def export_pdf(
    check_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check = _get_owned_or_404(db, check_id, user)
    return Response(
        content=exports.render_pdf(check),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{exports.pdf_filename(check)}"'},
    )


# ── DELETE /api/checks/{check_id} ────────────────────────────────────────
@router.delete("/checks/{check_id}", response_model=MessageResponse)
def delete_check(
    check_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not store.delete(db, check_id, user.id):
        raise HTTPException(status_code=404, detail="Check not found")
    return MessageResponse(message="Check deleted successfully")
