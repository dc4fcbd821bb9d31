"""A JSON file holding one collection (a list of objects).

Reads and writes always cover the whole file.  Every instance pointing at
the same path shares one lock, so two read-modify-write sequences in the
same process cannot interleave; nothing protects against other processes.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from backoffice.domain.exceptions import DataUnavailableError

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


class JsonCollectionFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Cannot read %s: %s", self._file_path, exc)
            raise DataUnavailableError(
                f"Cannot load data from {self._file_path.name}"
            ) from exc
        if not isinstance(records, list):
            logger.error("%s does not contain a JSON array", self._file_path)
            raise DataUnavailableError(
                f"Cannot load data from {self._file_path.name}"
            )
        return records

    def persist(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    @contextmanager
    def updating(self) -> Iterator[list[dict]]:
        """Load the records, let the caller modify them, write them back."""
        with self._lock:
            records = self.load()
            yield records
            self.persist(records)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def record_id(raw: dict) -> str:
    return str(raw["id"])


def json_number(value) -> int | float:
    """Decimal -> the plain JSON number the files use (``12``, ``12.5``)."""
    return int(value) if value == value.to_integral_value() else float(value)
