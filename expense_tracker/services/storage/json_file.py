"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON file is the only backend because:
1. Users can read and hand-edit their data
2. No database setup required
3. The whole collection is small enough to rewrite on every change

TRADEOFFS:
- No locking: two invocations racing on one file lose updates
  (last writer wins)
- Whole-file rewrite on every save

Writes go to a temporary sibling file that is renamed over the target,
so an interrupted save leaves either the old or the new content.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)


class JsonFileStorage(ExpenseStorageInterface):
    """Backing store kept in one file on the local filesystem."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def read_text(self) -> Optional[str]:
        """Read the file, or return None if it does not exist."""
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

    def write_text(self, text: str) -> None:
        """Atomically replace the file contents."""
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=directory,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

    def describe(self) -> str:
        return str(self._path)
