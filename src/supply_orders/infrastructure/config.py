"""Runtime settings read from the environment.

Values are read on every call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "WARNING"
    log_json: bool = False


def load_settings() -> Settings:
    data_dir = os.getenv("SUPPLY_ORDERS_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        log_level=os.getenv("SUPPLY_ORDERS_LOG_LEVEL", "WARNING").upper(),
        log_json=os.getenv("SUPPLY_ORDERS_LOG_JSON", "").strip().lower() in _TRUTHY,
    )
