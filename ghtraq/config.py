"""App settings, read once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ghtraq.errors import ConfigError

load_dotenv()

DEFAULT_TRAQ_BASE_URL = "https://q.trap.jp/api/v3/webhooks"


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return -1


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    github_secret: str = os.getenv("GITHUB_SECRET", "")
    traq_secret: str = os.getenv("TRAQ_SECRET", "")
    traq_webhook_id: str = os.getenv("TRAQ_WEBHOOK_ID", "")
    traq_base_url: str = os.getenv("TRAQ_BASE_URL", DEFAULT_TRAQ_BASE_URL)
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = _int_env("PORT", "8080")
    http_timeout_seconds: int = _int_env("HTTP_TIMEOUT_SECONDS", "15")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def traq_webhook_url(self) -> str:
        return f"{self.traq_base_url.rstrip('/')}/{self.traq_webhook_id}"

    def validate(self) -> "Settings":
        """Raise ``ConfigError`` unless every required value is usable."""
        missing = [
            name
            for name in ("github_secret", "traq_secret", "traq_webhook_id")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigError(
                "missing required settings: " + ", ".join(n.upper() for n in missing)
            )
        if self.port <= 0:
            raise ConfigError("PORT must be a positive integer")
        if self.http_timeout_seconds <= 0:
            raise ConfigError("HTTP_TIMEOUT_SECONDS must be a positive integer")
        return self


settings = Settings()
