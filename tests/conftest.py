"""
Shared pytest fixtures — in‑memory SQLite + FastAPI TestClient.
"""
import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="chequeai-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DIR", _TMP)
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP, "uploads"))
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from chequeai.auth import create_access_token, hash_password  # noqa: E402
from chequeai.database import Base, get_db  # noqa: E402
from chequeai.extraction.gemini import ExtractionError, build_extraction, get_extractor  # noqa: E402
from chequeai.main import app  # noqa: E402
from chequeai.models import UserModel  # noqa: E402  — register models

# StaticPool ensures all connections share the same in-memory database
_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_Session = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)

CHEQUE_REPLY = (
    "```json\n"
    '{"micr_code": "056111 063-978 1007928", "cheque_date": "07 November 2017", '
    '"amount_number": "8.01", "amount_words": "EIGHT DOLLARS AND ONE CENT", '
    '"payee_name": "JULIUS EVENTS COLLEGE PTY LTD", "account_number": "", '
    '"anti_fraud_features": "Watermark"}\n'
    "```"
)


class FakeExtractor:
    """Stands in for the Gemini client: returns *reply* or raises *error*."""

    def __init__(self, reply=CHEQUE_REPLY, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def extract(self, image_bytes, mime_type="image/jpeg"):
        self.calls.append((len(image_bytes), mime_type))
        if self.error is not None:
            raise self.error
        return build_extraction(self.reply)


@pytest.fixture(autouse=True)
def _reset_tables():
    Base.metadata.create_all(bind=_ENGINE)
    yield
    Base.metadata.drop_all(bind=_ENGINE)


@pytest.fixture()
def db():
    session = _Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def extractor():
    return FakeExtractor()


@pytest.fixture()
def client(db, extractor):
    def _override():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _override
    app.dependency_overrides[get_extractor] = lambda: extractor
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, username="alice", email="alice@example.com", password="secret123"):
    user = UserModel(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def user(db):
    return make_user(db)


@pytest.fixture()
def other_user(db):
    return make_user(db, username="bob", email="bob@example.com")


@pytest.fixture()
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture()
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user)}"}


@pytest.fixture()
def failing_extractor(extractor):
    extractor.error = ExtractionError("API quota exceeded", "Please try again later or check your API usage limits.")
    return extractor
