"""
JSON document store.

One document per section (``stock_<section>.json``) holding the full stock
list, plus a single ``transactions.json`` holding the transaction log.
Every write rewrites the whole document; there is no locking, so two
requests touching the same section at once can lose an update.
"""

import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog

from core.config import Settings
from core.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StoreResult:
    ok: bool
    error: Optional[str] = None


def utc_timestamp() -> str:
    # ISO-8601 with millisecond precision and a trailing Z, e.g. 2024-05-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _read_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json(path: str, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


class JsonStore:
    def __init__(self, settings: Settings):
        self.settings = settings

    def init(self) -> None:
        """Create the data/upload directories and any missing empty documents."""
        os.makedirs(self.settings.upload_dir, exist_ok=True)
        os.makedirs(self.settings.data_dir, exist_ok=True)

        for section in self.settings.sections:
            path = self.settings.stock_path(section)
            if not os.path.exists(path):
                _write_json(path, [])

        if not os.path.exists(self.settings.log_path):
            _write_json(self.settings.log_path, [])

    def load(self, section: str) -> List[Dict]:
        try:
            data = _read_json(self.settings.stock_path(section))
        except (OSError, ValueError):
            logger.error("Error reading stock data", section=section, exc_info=True)
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.error("Stock document is not a list of items", section=section)
            return []
        return data

    def save(self, section: str, collection: List[Dict]) -> StoreResult:
        try:
            _write_json(self.settings.stock_path(section), collection)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving stock data", section=section, exc_info=True)
            return StoreResult(ok=False, error=str(e))
        return StoreResult(ok=True)

    def load_log(self, strict: bool = False) -> List[Dict]:
        """Return the full transaction log.

        With ``strict`` a read failure raises PersistenceError instead of
        degrading to an empty list.
        """
        try:
            data = _read_json(self.settings.log_path)
            if not isinstance(data, list):
                raise ValueError("transaction log is not a list")
        except (OSError, ValueError) as e:
            logger.error("Error reading transaction logs", exc_info=True)
            if strict:
                raise PersistenceError("Failed to read transaction logs") from e
            return []
        return data

    def append_log(self, entry: Dict) -> StoreResult:
        try:
            transactions = _read_json(self.settings.log_path)
            transactions.append({**entry, "timestamp": utc_timestamp()})
            _write_json(self.settings.log_path, transactions)
        except (OSError, TypeError, ValueError, AttributeError) as e:
            logger.error("Error logging transaction", entry=entry, exc_info=True)
            return StoreResult(ok=False, error=str(e))
        return StoreResult(ok=True)
