"""JSON file backed key-value storage."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bitesnaps.services.store import KeyValueStorage

logger = logging.getLogger(__name__)


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores every key in a single JSON object on local disk."""

    path: Path

    @classmethod
    def create(cls, path: str) -> "JsonFileStorage":
        """Create storage rooted at a file path."""
        return cls(path=Path(path).expanduser())

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and rewrite the file."""
        values = self._load()
        values[key] = value
        self._write(values)

    def clear(self) -> None:
        """Remove the storage file."""
        self.path.unlink(missing_ok=True)

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Storage file is corrupted, starting empty: %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file has unexpected shape: %s", self.path)
            return {}
        return {
            str(key): value for key, value in data.items() if isinstance(value, str)
        }

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values), encoding="utf-8")
        os.replace(tmp_path, self.path)
