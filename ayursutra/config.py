from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """
    Settings read from the environment (and from `.env`, if present).
    Values are read when the dataclass is instantiated.
    """
    project_name: str = field(default_factory=lambda: os.getenv("AYURSUTRA_PROJECT_NAME", "AyurSutra API"))
    api_version: str = field(default_factory=lambda: os.getenv("AYURSUTRA_API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("AYURSUTRA_LOG_LEVEL", "INFO"))
    log_file: str | None = field(default_factory=lambda: os.getenv("AYURSUTRA_LOG_FILE") or None)
    host: str = field(default_factory=lambda: os.getenv("AYURSUTRA_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("AYURSUTRA_PORT", "3001")))

    # Dashboard origins allowed to call the API from a browser
    cors_origins: list[str] = field(
        default_factory=lambda: _csv(
            os.getenv(
                "AYURSUTRA_CORS_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8501,http://127.0.0.1:8501",
            )
        )
    )

    # Base URL the Streamlit dashboard uses to reach the API
    api_base: str = field(default_factory=lambda: os.getenv("AYURSUTRA_API_BASE", "http://127.0.0.1:3001"))


settings = Settings()
