from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_BUNDLED_CATALOG = Path(__file__).resolve().parent / "data" / "listings.csv"


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET") or "ebeveyn-secret-change-in-production"
    catalog_path: Path = Path(os.getenv("CATALOG_PATH") or _BUNDLED_CATALOG)
    catalog_api_url: str = os.getenv("CATALOG_API_URL", "")
    catalog_api_key: str = os.getenv("CATALOG_API_KEY", "")
    catalog_timeout: float = float(os.getenv("CATALOG_TIMEOUT") or "10.0")


DEFAULT_APP_CONFIG = AppConfig()
