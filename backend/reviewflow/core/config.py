"""
Pydantic Settings: centralized configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings

from reviewflow.core.constants import (
    ALLOWED_DOCUMENT_EXTENSIONS,
    ERROR_AUTO_CLEAR_SECONDS,
    MAX_DOCUMENT_BYTES,
)


class Settings(BaseSettings):
    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = ""

    # ── Card gateway ──────────────────────────
    GATEWAY_BASE_URL: str = "https://api.stripe.com"
    GATEWAY_PUBLIC_KEY: str = ""

    # ── Payment backend / document storage ────
    BACKEND_BASE_URL: str = "http://localhost:8000"

    # ── AI review service ─────────────────────
    AI_SERVICE_BASE_URL: str = "http://localhost:8001"
    AI_SERVICE_API_KEY: str = ""

    # ── Network ───────────────────────────────
    # Applied to every outbound call; None disables the timeout.
    NETWORK_TIMEOUT_SECONDS: float | None = 30.0

    # ── Upload workflow ───────────────────────
    ERROR_AUTO_CLEAR_SECONDS: float = ERROR_AUTO_CLEAR_SECONDS
    MAX_DOCUMENT_BYTES: int = MAX_DOCUMENT_BYTES
    ALLOWED_DOCUMENT_EXTENSIONS: list[str] = list(ALLOWED_DOCUMENT_EXTENSIONS)

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "DEBUG" if self.APP_ENV == "development" else "INFO"


settings = Settings()
