"""
In-Memory Storage Implementation

Dictionary-backed KeyValueStorage. Used by the tests and as a scratch
backend when nothing should touch the disk. Keeps per-key write counters so
callers can check that unchanged data is not rewritten.
"""

from collections import Counter
from typing import Optional

from home_budget.services.storage.interface import (
    KeyValueStorage,
    StorageWriteError,
)


class InMemoryKeyValueStorage(KeyValueStorage):
    """
    Key-value storage held in a dict.

    Set quota_bytes to simulate a full store: writes that would push the
    total size over the quota raise StorageWriteError and leave the previous
    value in place.
    """

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._data: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes
        self.write_counts: Counter = Counter()

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageWriteError(f"Value for {key} must be text, got {type(value).__name__}")

        if self._quota_bytes is not None:
            size = sum(
                len(k.encode("utf-8")) + len(v.encode("utf-8"))
                for k, v in self._data.items()
                if k != key
            )
            size += len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if size > self._quota_bytes:
                raise StorageWriteError(
                    f"Quota exceeded writing {key}: {size} > {self._quota_bytes} bytes"
                )

        self._data[key] = value
        self.write_counts[key] += 1
