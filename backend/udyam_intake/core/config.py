"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
BUNDLED_SCHEMA_PATH = PACKAGE_ROOT / "assets" / "udyam_steps.json"


class Settings(BaseSettings):
    # ── Database ──────────────────────────────
    POSTGRES_USER: str = "udyam_user"
    POSTGRES_PASSWORD: str = "udyam_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "udyam_db"

    # Full URL override (e.g. sqlite+aiosqlite:///./local.db for local runs)
    SQLALCHEMY_DATABASE_URI: str = ""

    DB_CREATE_TABLES: bool = True
    DB_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """Async URL for app runtime (asyncpg unless overridden)."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # ── Form schema source ────────────────────
    # Explicit path wins; otherwise the scraper output, then the bundled asset.
    SCHEMA_PATH: str = ""
    SCRAPER_OUTPUT_PATH: str = "../scraper/output/udyam_steps.json"

    @property
    def schema_candidates(self) -> list[Path]:
        """Ordered list of schema files to try."""
        if self.SCHEMA_PATH:
            return [Path(self.SCHEMA_PATH)]
        return [Path(self.SCRAPER_OUTPUT_PATH), BUNDLED_SCHEMA_PATH]

    # ── Submission policy ─────────────────────
    # When true, /submit also enforces the strict rules of the submitted step.
    SUBMIT_ENFORCE_STEP_RULES: bool = False

    # ── Postal lookup ─────────────────────────
    POSTAL_LOOKUP_BASE_URL: str = "https://api.postalpincode.in"
    POSTAL_LOOKUP_TIMEOUT: float = 5.0

    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = ""
    LOG_JSON: bool = False
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    @property
    def log_level(self) -> str:
        """Explicit LOG_LEVEL, else DEBUG in development and INFO elsewhere."""
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "DEBUG" if self.APP_ENV == "development" else "INFO"

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
