# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"
BASE_DIR = Path(__file__).parent

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./attendance_portal.db"

    # Session cookie signing
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "portal_session"
    SESSION_COOKIE_SECURE: bool = False

    # Honour X-Forwarded-For when running behind a reverse proxy
    TRUST_PROXY: bool = True

    # Predefined accounts inserted at startup
    SEED_USERS_FILE: str = str(BASE_DIR / "data" / "seed_users.json")
    SEED_ON_STARTUP: bool = True

    FRONTEND_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    ATTENDANCE_HISTORY_DEFAULT: int = 30
    LOGIN_HISTORY_DEFAULT: int = 50

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def database_url(self) -> str:
        # SQLAlchemy requires the postgresql:// scheme
        url = self.DATABASE_URL
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

settings = Settings()
