"""
User accounts.
"""
from sqlalchemy import Column, DateTime, Integer, String

from chequeai.database import Base
from chequeai.models.cheque import _utcnow


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
