# backend/consultation_portal/core/config.py
import json
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BRAND_NAME


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


DEFAULT_ALLOWED_EMAIL_DOMAINS = "gmail.com,sru.edu.in"


class Settings(BaseSettings):
    # Credential signing
    secret_key: SecretStr = Field(
        default=SecretStr("change-me-in-production"),
        description="Secret key for JWT tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 1 day

    # Persistent store
    database_url: str = Field(
        default="sqlite:///./consultation_portal.db",
        alias="DATABASE_URL",
        description="SQLAlchemy URL of the persistent store",
    )

    # Registration / login domain allow-list (comma separated or JSON list)
    allowed_email_domains_raw: str = Field(
        default=DEFAULT_ALLOWED_EMAIL_DOMAINS,
        alias="ALLOWED_EMAIL_DOMAINS",
        description="Email domains accepted for registration and login",
    )

    # Email settings
    resend_api_key: str | None = Field(
        default=None,
        alias="RESEND_API_KEY",
        description="API key for Resend provider; notifications are disabled when unset",
    )
    from_email: str = f"{BRAND_NAME} <no-reply@consultation-portal.local>"
    frontend_url: str = "http://localhost:3000"

    # Network
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins_raw: str = Field(default="*", alias="CORS_ORIGINS")

    # Runtime
    environment: Literal["development", "production", "testing"] = "development"
    log_level: str = "INFO"
    is_testing: bool = False  # Set to True when running tests

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,  # allows SECRET_KEY to match secret_key
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @staticmethod
    def _split_list(raw: str) -> list[str]:
        raw = (raw or "").strip()
        if raw.startswith("["):
            try:
                items = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Invalid JSON list in settings value: %s", raw)
                return []
            return [str(item).strip() for item in items if str(item).strip()]
        return [token.strip() for token in raw.split(",") if token.strip()]

    @property
    def allowed_email_domains(self) -> list[str]:
        """Allow-listed email domains, lowercased, without a leading '@'."""
        return [d.lower().lstrip("@") for d in self._split_list(self.allowed_email_domains_raw)]

    @property
    def cors_origins(self) -> list[str]:
        return self._split_list(self.cors_origins_raw) or ["*"]

    @property
    def notifications_enabled(self) -> bool:
        """Email delivery is only attempted when provider credentials are configured."""
        return bool((self.resend_api_key or "").strip())

    def get_database_url(self) -> str:
        return self.database_url


settings = Settings()
