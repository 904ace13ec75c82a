# dental_api/core/config.py

from functools import lru_cache
import urllib.parse

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from .env; ignore unknown keys so extra lines don't crash startup
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Postgres ---
    # DATABASE_URL wins when set (Render/Heroku style); otherwise compose from parts
    DATABASE_URL: str | None = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "dental"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    DB_ECHO: bool = False
    DB_AUTO_CREATE: bool = True

    # --- Security ---
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ADMIN_PASSWORD: str | None = None
    ADMIN_TOKEN_TTL_HOURS: int = 12
    USER_TOKEN_TTL_HOURS: int = 24
    RESERVATION_TOKEN_TTL_MINUTES: int = 60

    # --- Uploads ---
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # --- Monitoring & Logging ---
    APP_ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    LOG_REQUESTS: bool = False
    MAX_LOG_LENGTH: int = 200

    ALLOWED_CORS_ORIGINS: str = "*"  # comma-separated list, e.g. "http://localhost:3000,https://clinic.example"

    # Async URI (SQLAlchemy engine)
    @property
    def async_db_uri(self) -> str:
        if self.DATABASE_URL:
            return _with_driver(self.DATABASE_URL, "postgresql+asyncpg")
        pwd = urllib.parse.quote_plus(self.POSTGRES_PASSWORD)
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{pwd}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Sync URI (Alembic)
    @property
    def sync_db_uri(self) -> str:
        if self.DATABASE_URL:
            if self.DATABASE_URL.startswith("sqlite+aiosqlite"):
                return self.DATABASE_URL.replace("sqlite+aiosqlite", "sqlite", 1)
            return _with_driver(self.DATABASE_URL, "postgresql+psycopg2")
        pwd = urllib.parse.quote_plus(self.POSTGRES_PASSWORD)
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{pwd}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() in ("development", "dev", "local")

    @property
    def has_default_secret(self) -> bool:
        return self.JWT_SECRET == "change-me"


def _with_driver(url: str, driver: str) -> str:
    """Swap a bare postgres scheme for an explicit driver; leave other URLs (sqlite) alone."""
    scheme, sep, rest = url.partition("://")
    if scheme in ("postgres", "postgresql") or scheme.startswith("postgresql+"):
        return f"{driver}{sep}{rest}"
    return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
