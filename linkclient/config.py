"""Centralised settings for the Infinity Link client.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Mock data server
    # ------------------------------------------------------------------
    mock_server_url: str = field(
        default_factory=lambda: os.environ.get(
            "NEW_MOCK_SERVER_URL", "https://mock-server-firebase.onrender.com"
        )
    )

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("FETCH_TIMEOUT", "30.0"))
    )
    probe_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PROBE_TIMEOUT", "10.0"))
    )
    fetch_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_MAX_ATTEMPTS", "3"))
    )
    retry_delay_step: float = field(
        default_factory=lambda: float(os.environ.get("RETRY_DELAY_STEP", "2.0"))
    )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    id_token: str = field(
        default_factory=lambda: os.environ.get("FIREBASE_ID_TOKEN", "")
    )
    fastapi_api_key: str = field(
        default_factory=lambda: os.environ.get("FASTAPI_API_KEY", "")
    )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING")
    )

    @property
    def base_url(self) -> str:
        """Mock server URL without a trailing slash."""
        return self.mock_server_url.rstrip("/")


# Module-level singleton — import this everywhere:
#   from linkclient.config import settings
settings = Settings()
