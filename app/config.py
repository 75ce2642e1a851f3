"""Clicks Connector: Central Configuration via Pydantic Settings."""

import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Shorten.REST API ──
    shorten_base_url: str = "https://api.shorten.rest"
    shorten_clicks_path: str = "/clicks"
    shorten_timeout_seconds: float = 5.0

    # ── Host contract ──
    auth_help_url: str = "https://docs.shorten.rest/#section/Authentication"
    credential_property_key: str = "dscc.key"

    # ── Property store ──
    database_url: str = ""

    # ── App ──
    log_level: str = "INFO"

    @property
    def effective_database_url(self) -> str:
        """Return the configured URL if set, otherwise fall back to SQLite."""
        if self.database_url:
            return self.database_url
        # Vercel has a read-only filesystem; use /tmp for SQLite
        if os.environ.get("VERCEL"):
            return "sqlite:////tmp/clicks_connector.db"
        return "sqlite:///./clicks_connector.db"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
