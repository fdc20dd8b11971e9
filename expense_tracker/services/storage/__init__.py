"""
Storage Services Package

Provides the abstract interface and concrete implementations for the
expense backing store. The JSON file is the production backend; the
in-memory backend is used by tests.
"""

from expense_tracker.services.storage.interface import (
    CorruptStorageError,
    ExpenseStorageInterface,
    StorageError,
)
from expense_tracker.services.storage.json_file import JsonFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "CorruptStorageError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
