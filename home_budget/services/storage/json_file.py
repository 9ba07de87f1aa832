"""
JSON File Storage Implementation

DESIGN DECISION: The local store is a single JSON object on disk mapping
storage keys to text blobs, the file-system counterpart of browser local
storage. Each write rewrites the whole file atomically (temp file in the
same directory, fsync, then rename), so a crash mid-write leaves the
previous file intact.

TRADEOFFS:
- Every set_item rewrites every key (fine for a household budget)
- No file locking; one process is the only writer
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from home_budget.services.storage.interface import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


class JsonFileKeyValueStorage(KeyValueStorage):
    """Key-value storage persisted to one JSON file."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Cannot read storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Storage file {self._path} must contain a JSON object, "
                f"got {type(data).__name__}"
            )
        for key, value in data.items():
            if not isinstance(value, str):
                raise StorageReadError(
                    f"Storage file {self._path} holds a non-text value under {key!r}: "
                    f"{type(value).__name__}"
                )
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        target = self._path.resolve()
        tmp_path = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent, text=True
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageWriteError(f"Cannot write storage file {target}: {e}")

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageWriteError(f"Value for {key} must be text, got {type(value).__name__}")
        try:
            data = self._read_all()
        except StorageReadError as e:
            # Never overwrite a file we could not read
            raise StorageWriteError(str(e))
        data[key] = value
        self._write_all(data)
