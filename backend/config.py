# backend/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL
from typing import Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

SQLITE_FALLBACK_URL = "sqlite:///./macgarden.db"


class Settings(BaseSettings):
    # MySQL connection parts (same variables the storefront has always used)
    DB_HOST: Optional[str] = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_PORT: int = 3306
    DB_NAME: str = "mac_garden"

    # Full URL override (Azure / Heroku style), takes precedence over DB_* parts
    DATABASE_URL: Optional[str] = None

    # Connection pool ceiling shared by all requests
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 30

    PORT: int = 3000
    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # When true, sales may drive stock below zero (legacy storefront behaviour)
    ALLOW_NEGATIVE_STOCK: bool = False

    BCRYPT_ROUNDS: int = 12

    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # SQLAlchemy requires the postgresql:// scheme
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql://", 1)
            return url
        if self.DB_HOST:
            return URL.create(
                "mysql+pymysql",
                username=self.DB_USER,
                password=self.DB_PASSWORD or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return SQLITE_FALLBACK_URL


settings = Settings()
