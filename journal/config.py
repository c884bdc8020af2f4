"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = "sqlite:///./journal.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440  # 24 hours

    # Screenshots
    upload_dir: Path = PROJECT_ROOT / "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}


settings = Settings()
