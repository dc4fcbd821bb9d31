"""Settings read from the environment.

- ``BACKOFFICE_DATA_DIR``: directory holding the JSON collections
- ``BACKOFFICE_CACHE_TTL``: seconds a loaded snapshot stays valid
- ``BACKOFFICE_LOG_LEVEL``: default log level
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from backoffice.domain.exceptions import ValidationError

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    cache_ttl_seconds: float = 300.0
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        raw_ttl = env.get("BACKOFFICE_CACHE_TTL", "").strip()
        try:
            ttl = float(raw_ttl) if raw_ttl else 300.0
        except ValueError:
            raise ValidationError(
                f"BACKOFFICE_CACHE_TTL must be a number of seconds, got {raw_ttl!r}"
            ) from None

        data_dir = env.get("BACKOFFICE_DATA_DIR", "").strip()
        return Settings(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            cache_ttl_seconds=ttl,
            log_level=env.get("BACKOFFICE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        )
