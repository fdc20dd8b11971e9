"""
Services Package

External resources the tracker talks to. Only local storage for now.
"""

from expense_tracker.services.storage import (
    CorruptStorageError,
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)

__all__ = [
    "CorruptStorageError",
    "ExpenseStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
]
