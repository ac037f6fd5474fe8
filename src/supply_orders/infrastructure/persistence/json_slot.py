"""A named JSON file holding one persisted value.

Reads fail open and writes fail silently: a missing, unreadable or
corrupt file reads as ``None``, and a failed write is logged and
swallowed.  The in-memory state of the caller stays authoritative.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonSlot:

    def __init__(self, directory: Path, key: str) -> None:
        self._key = key
        self._file_path = directory / f"{key}.json"

    @property
    def key(self) -> str:
        return self._key

    @property
    def file_path(self) -> Path:
        return self._file_path

    def exists(self) -> bool:
        return self._file_path.exists()

    def read(self) -> Any | None:
        if not self._file_path.exists():
            return None
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable slot %s: %s", self._key, exc)
            return None

    def write(self, value: Any) -> bool:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(value, ensure_ascii=False, indent=2) + "\n",
                encoding="utf-8",
            )
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not write slot %s: %s", self._key, exc)
            return False
        return True

    def remove(self) -> None:
        try:
            self._file_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove slot %s: %s", self._key, exc)
