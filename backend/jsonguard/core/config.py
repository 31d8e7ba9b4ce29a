"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = ""
    LOG_JSON: bool = False

    # ── Fetching ──────────────────────────────
    FETCH_BASE_URL: str = ""
    FETCH_TIMEOUT_SECONDS: float = 30.0
    FETCH_USER_AGENT: str = "jsonguard/0.1"
    FETCH_ALLOWED_HOSTS: list[str] = []       # hosts the API may fetch absolute URLs from

    # ── Reporting ─────────────────────────────
    REPORT_TITLE: str = "JSON validation"

    @property
    def effective_log_level(self) -> str:
        """Explicit LOG_LEVEL wins, otherwise DEBUG in development."""
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "DEBUG" if self.APP_ENV == "development" else "INFO"

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
