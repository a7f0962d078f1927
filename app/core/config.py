# app/core/config.py
from os import environ
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def _default_database_url() -> str:
    # Postgres credentials in the environment win; otherwise a local SQLite file
    if all(key in environ for key in ("DB_USER", "DB_PWD", "DB_HOST", "DB_NAME")):
        return (
            f"postgresql+asyncpg://{environ['DB_USER']}:{environ['DB_PWD']}"
            f"@{environ['DB_HOST']}:5432/{environ['DB_NAME']}"
        )
    return "sqlite+aiosqlite:///./diyetim.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DEPLOY_PHASE: str = "local"
    LOG_LEVEL: str = "INFO"
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent

    API_PREFIX: str = "/api"
    DATABASE_URL: str = _default_database_url()

    JWT_SECRET: str = "diyetim-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024
    UPLOAD_DEFAULT_FOLDER: str = "dietcim"

    TELEGRAM_BOT_NAME: str = "DietTrackerProBot"
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_POLL_TIMEOUT: int = 30

    CORS_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


settings = Settings()
