"""
Bank Check AI backend — FastAPI application entry‑point.
"""
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from chequeai.config import settings
from chequeai.database import Base, SessionLocal, engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure data dirs + tables exist
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    # Import models so Base.metadata knows about them
    import chequeai.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", settings.DATABASE_URL)
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; /api/checks/extract will fail")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Bank Check AI",
    description="Cheque image → Gemini extraction → stored, reconciled cheque records",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/")
async def root():
    return {"service": "Bank Check AI", "version": "0.1.0", "status": "running"}


@app.get("/api/health")
async def health_check():
    return {
        "message": "Bank Check AI Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": "healthy",
    }


@app.get("/api/test-db")
def test_db():
    db = SessionLocal()
    try:
        row = db.execute(text("SELECT 1 AS test")).mappings().first()
    except SQLAlchemyError as e:
        logger.error("Database test failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail={"message": "Database connection failed", "error": str(e)},
        )
    finally:
        db.close()
    return {"message": "Database connection successful", "test": dict(row)}


# ── Register API routers ─────────────────────────────────────────────────
from chequeai.routers.auth import router as auth_router  # noqa: E402
from chequeai.routers.checks import router as checks_router  # noqa: E402
from chequeai.routers.users import router as users_router  # noqa: E402

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(users_router, prefix="/api", tags=["User"])
app.include_router(checks_router, prefix="/api", tags=["Checks"])
