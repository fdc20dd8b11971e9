"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the backing store.
This allows us to:
1. Use a real JSON file in production
2. Use in-memory storage for testing
3. Keep the ledger logic decoupled from the filesystem

Backends only move text. Serializing and parsing the expense collection
is the ledger store's job, so every backend shares one file format.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the expense backing store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the backing store has been created."""
        pass

    @abstractmethod
    def read_text(self) -> Optional[str]:
        """
        Read the whole serialized collection.

        Returns:
            The stored text, or None if the store does not exist

        Raises:
            StorageError: If the store exists but cannot be read
        """
        pass

    @abstractmethod
    def write_text(self, text: str) -> None:
        """
        Replace the whole serialized collection.

        Raises:
            StorageError: If the write fails
        """
        pass

    def create_empty(self, text: str = "[]") -> None:
        """Create the store holding an empty collection."""
        self.write_text(text)

    @abstractmethod
    def describe(self) -> str:
        """Short location description for log lines and error messages."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStorageError(StorageError):
    """The backing store does not hold a valid expense collection."""
    pass
