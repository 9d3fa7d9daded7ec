"""
Record store — owner-scoped access to ``bank_checks``.

Every operation takes the owner id explicitly. A record owned by someone
else is reported exactly like a missing one.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from chequeai.extraction.reconciler import SEMANTIC_FIELDS
from chequeai.models import BankCheckModel
from chequeai import storage

logger = logging.getLogger(__name__)

STORED_FIELDS: tuple[str, ...] = SEMANTIC_FIELDS + ("currency_name",)


def get_by_id(db: Session, check_id: int, owner_id: int) -> Optional[BankCheckModel]:
    return (
        db.query(BankCheckModel)
        .filter(BankCheckModel.id == check_id, BankCheckModel.user_id == owner_id)
        .first()
    )


def list_by_owner(db: Session, owner_id: int) -> list[BankCheckModel]:
    return (
        db.query(BankCheckModel)
        .filter(BankCheckModel.user_id == owner_id)
        .order_by(BankCheckModel.created_at.desc(), BankCheckModel.id.desc())
        .all()
    )


def insert(
    db: Session,
    owner_id: int,
    fields: Mapping[str, Any],
    image_filename: Optional[str] = None,
    extracted_text: Optional[str] = None,
) -> BankCheckModel:
    record = BankCheckModel(
        user_id=owner_id,
        image_filename=image_filename,
        extracted_text=extracted_text,
        **{name: fields.get(name) for name in STORED_FIELDS},
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Stored check %s for user %s", record.id, owner_id)
    return record


def update_extracted(
    db: Session,
    check_id: int,
    owner_id: int,
    fields: Mapping[str, Any],
) -> Optional[BankCheckModel]:
    """Rewrite the structured columns and ``extracted_text`` together.

    ``extracted_text`` becomes the JSON of *fields* as submitted; the
    currency column is left alone.
    """
    record = get_by_id(db, check_id, owner_id)
    if record is None:
        return None

    for name in SEMANTIC_FIELDS:
        value = fields.get(name)
        setattr(record, name, "" if value is None else str(value))
    record.extracted_text = json.dumps(dict(fields), ensure_ascii=False)

    db.commit()
    db.refresh(record)
    logger.info("Updated extracted data for check %s", check_id)
    return record


def delete(db: Session, check_id: int, owner_id: int) -> bool:
    record = get_by_id(db, check_id, owner_id)
    if record is None:
        return False

    storage.delete_image(record.image_filename)
    db.delete(record)
    db.commit()
    logger.info("Deleted check %s", check_id)
    return True
