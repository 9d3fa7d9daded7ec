"""
SQLAlchemy model for extracted bank cheques.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from chequeai.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BankCheckModel(Base):
    """One row per extraction attempt or manual insert."""
    __tablename__ = "bank_checks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # 구조화된 필드 (각각 비어 있을 수 있음)
    micr_code = Column(String)
    cheque_date = Column(String)
    amount_number = Column(String)
    amount_words = Column(String)
    currency_name = Column(String)
    payee_name = Column(String)
    account_number = Column(String)
    anti_fraud_features = Column(Text)

    image_filename = Column(String)
    extracted_text = Column(Text)  # raw model output, usually JSON
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
