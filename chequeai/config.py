"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # 데이터베이스
    DATABASE_URL: str = "sqlite:///./data/chequeai.db"

    # 보안
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # 환경
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # 파일 저장
    DATA_DIR: str = "./data"
    UPLOAD_DIR: str = "./data/uploads"
    MAX_UPLOAD_BYTES: int = 16 * 1024 * 1024

    # Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
