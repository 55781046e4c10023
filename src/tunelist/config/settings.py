"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database connection settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./tunelist.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Log all SQL statements")
    pool_pre_ping: bool = Field(default=True, description="Test connections on checkout")
    # Pool settings only apply to PostgreSQL - SQLite ignores them
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_recycle: int = Field(default=3600, ge=-1)


class APISettings(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ObservabilitySettings(BaseModel):
    """Logging settings."""

    log_json_format: bool = Field(
        default=False, description="Emit JSON logs (recommended for production)"
    )
    log_request_body: bool = Field(
        default=False, description="Log request bodies in the request middleware"
    )


# Hey future me, nested sections come from env vars with "__" as delimiter:
# DATABASE__URL=postgresql+asyncpg://... or OBSERVABILITY__LOG_JSON_FORMAT=true.
# Tests build Settings(database={"url": "sqlite+aiosqlite:///:memory:"}) directly.
class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="tunelist")
    app_env: Literal["development", "testing", "production"] = Field(
        default="development"
    )
    log_level: str = Field(default="INFO")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    def _get_sqlite_db_path(self) -> Path | None:
        """Return the SQLite file path, or None for in-memory/non-SQLite URLs."""
        url = self.database.url
        if not url.startswith("sqlite"):
            return None
        _, _, path = url.partition(":///")
        if not path or path == ":memory:" or ":memory:" in url:
            return None
        return Path(path)

    def ensure_directories(self) -> None:
        """Create the parent directory of the SQLite database file if needed."""
        db_path = self._get_sqlite_db_path()
        if db_path is not None and str(db_path.parent) != ".":
            db_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (also used as a FastAPI dependency)."""
    return Settings()
