"""
In-Memory Storage Implementation

Stands in for the backing file in tests. The serialized text is kept as a
plain string and every write is counted, so tests can check both the
exact bytes that would hit disk and whether a command wrote at all.
"""

from typing import Optional

from expense_tracker.services.storage.interface import ExpenseStorageInterface


class InMemoryStorage(ExpenseStorageInterface):
    """Backing store held in memory."""

    def __init__(self, initial: Optional[str] = None):
        """
        Args:
            initial: Starting content. None means the store does not
                     exist yet.
        """
        self._text = initial
        self.write_count = 0

    def exists(self) -> bool:
        return self._text is not None

    def read_text(self) -> Optional[str]:
        return self._text

    def write_text(self, text: str) -> None:
        self._text = text
        self.write_count += 1

    def describe(self) -> str:
        return "<memory>"
