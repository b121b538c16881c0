# retail_dashboard/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .constants import DATA_DIR, DB_FILE_NAME, INSIGHTS_PROVIDER_NONE, GEMINI_MODEL

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = BASE_DIR / DATA_DIR
DB_PATH = Path(os.environ["RETAIL_DASHBOARD_DB"]) if os.environ.get("RETAIL_DASHBOARD_DB") else DATA_PATH / DB_FILE_NAME


@dataclass(frozen=True)
class AppConfig:
    db_path: Path
    insights_provider: str = INSIGHTS_PROVIDER_NONE
    gemini_api_key: str | None = None
    gemini_model: str = GEMINI_MODEL
    log_level: int = logging.INFO
    log_file: str | None = None


def load_config(env: dict | None = None) -> AppConfig:
    """
    Build the runtime configuration from environment variables.

      RETAIL_DASHBOARD_DB         database file (default: <package>/data/retail.db)
      RETAIL_DASHBOARD_INSIGHTS   "none" | "gemini"
      GEMINI_API_KEY / API_KEY    key for the Gemini provider
      RETAIL_DASHBOARD_LOG_LEVEL  DEBUG/INFO/WARNING...
      RETAIL_DASHBOARD_LOG_FILE   optional log file path
    """
    env = os.environ if env is None else env
    db = env.get("RETAIL_DASHBOARD_DB")
    level_name = (env.get("RETAIL_DASHBOARD_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    return AppConfig(
        db_path=Path(db) if db else DATA_PATH / DB_FILE_NAME,
        insights_provider=(env.get("RETAIL_DASHBOARD_INSIGHTS") or INSIGHTS_PROVIDER_NONE).strip().lower(),
        gemini_api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
        gemini_model=env.get("RETAIL_DASHBOARD_GEMINI_MODEL") or GEMINI_MODEL,
        log_level=level,
        log_file=env.get("RETAIL_DASHBOARD_LOG_FILE") or None,
    )
