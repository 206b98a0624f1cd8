from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the Synergy planner backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("SYNERGY_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("SYNERGY_DB_PATH") or (self.data_root / "synergy.db")
        ).expanduser()

        # ---- Oracle (OpenAI-compatible chat completions endpoint) ----
        self.oracle_base_url: str = os.environ.get(
            "SYNERGY_ORACLE_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai"
        )
        self.oracle_api_key: str | None = os.environ.get("SYNERGY_ORACLE_API_KEY")
        self.oracle_model: str = os.environ.get("SYNERGY_ORACLE_MODEL", "gemini-2.5-flash")
        self.oracle_timeout: float = float(os.environ.get("SYNERGY_ORACLE_TIMEOUT") or "30")
        self.oracle_temperature: float = float(os.environ.get("SYNERGY_ORACLE_TEMPERATURE") or "0.2")

        # ---- Food photo preprocessing ----
        self.image_max_dimension: int = int(os.environ.get("SYNERGY_IMAGE_MAX_DIMENSION") or "800")
        self.image_quality: int = int(os.environ.get("SYNERGY_IMAGE_QUALITY") or "70")
        self.max_image_bytes: int = int(os.environ.get("SYNERGY_MAX_IMAGE_BYTES") or "10000000")

        default_theme = (os.environ.get("SYNERGY_DEFAULT_THEME") or "dark").strip().lower()
        self.default_theme: str = default_theme if default_theme in {"light", "dark"} else "dark"

        self.host: str = os.environ.get("SYNERGY_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port_raw: str = os.environ.get("SYNERGY_PORT") or os.environ.get("PORT") or "5000"

        cors = os.environ.get("SYNERGY_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
