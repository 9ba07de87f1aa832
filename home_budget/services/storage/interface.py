"""
Abstract Storage Interface

DESIGN DECISION: Everything the budget persists goes through one small
key-value port: get and set a text blob by key. This mirrors the browser
local storage the data historically lived in and allows us to:
1. Keep the record store and ledger free of file-system code
2. Use in-memory storage for testing
3. Swap the JSON file for another local backend later

The interface is intentionally tiny. There are no transactions, no
locking and no retries; a single UI instance is the only writer.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for the local key-value store.

    Values are structured text (JSON); the store never interprets them.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if the key was never written

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backend could not be read."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written (I/O failure, quota, serialization)."""
    pass
