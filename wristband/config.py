from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

WINDOW_CHOICES = ("1h", "6h", "24h", "7d")
_TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """Centralized configuration for the wristband vitals service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("WRISTBAND_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("WRISTBAND_DB_PATH") or (self.data_root / "wristband.db")
        ).expanduser()

        # Analytics view re-fetches on this cadence; the live view only advertises its own.
        self.refresh_interval_sec: float = float(
            os.environ.get("WRISTBAND_REFRESH_INTERVAL_SEC", "30")
        )
        self.live_refresh_sec: int = int(
            os.environ.get("WRISTBAND_LIVE_REFRESH_SEC", "10")
        )
        self.default_window: str = os.environ.get("WRISTBAND_DEFAULT_WINDOW", "24h")
        if self.default_window not in WINDOW_CHOICES:
            raise ValueError(
                f"WRISTBAND_DEFAULT_WINDOW must be one of {', '.join(WINDOW_CHOICES)}; "
                f"got {self.default_window!r}"
            )
        self.display_tz: Optional[str] = os.environ.get("WRISTBAND_DISPLAY_TZ") or None

        # Set to 200 to reproduce the legacy "200 + Error body" behaviour on write failures.
        self.write_error_status: int = int(
            os.environ.get("WRISTBAND_WRITE_ERROR_STATUS", "503")
        )
        self.csv_escape: bool = (
            os.environ.get("WRISTBAND_CSV_ESCAPE") or "1"
        ).strip().lower() in _TRUTHY

        self.api_url: str = os.environ.get("WRISTBAND_API_URL", "http://127.0.0.1:8000")
        self.http_timeout: float = float(os.environ.get("WRISTBAND_HTTP_TIMEOUT", "10"))

        cors = os.environ.get("WRISTBAND_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
