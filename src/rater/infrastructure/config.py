"""Runtime settings, read from the environment.

Rating tables are configuration too, but they live in JSON (see
``rater/data/rate_tables.json``); this module only decides where to find
them and how the service runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

DEFAULT_TABLES_PATH = Path(__file__).resolve().parents[1] / "data" / "rate_tables.json"


@dataclass
class Settings:
    processing_delay: float = 0.8
    tables_path: Path = field(default_factory=lambda: DEFAULT_TABLES_PATH)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Overlay ``RATER_*`` environment variables on the defaults."""
    env = os.environ if env is None else env
    defaults = Settings()
    return Settings(
        processing_delay=float(env.get("RATER_PROCESSING_DELAY", defaults.processing_delay)),
        tables_path=Path(env["RATER_TABLES_PATH"]) if env.get("RATER_TABLES_PATH") else defaults.tables_path,
        log_level=env.get("RATER_LOG_LEVEL", defaults.log_level).upper(),
        host=env.get("RATER_HOST", defaults.host),
        port=int(env.get("RATER_PORT", defaults.port)),
    )
