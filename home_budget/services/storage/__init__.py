"""
Storage Services Package

Provides the key-value storage port and its implementations: a JSON file on
disk for the application and an in-memory store for tests.
"""

from home_budget.services.storage.interface import (
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from home_budget.services.storage.json_file import JsonFileKeyValueStorage
from home_budget.services.storage.memory import InMemoryKeyValueStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]
