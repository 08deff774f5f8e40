"""
Storage backend for version control.

Persists the files of a committed snapshot to disk and loads them back to
seed a new engine. Only (name, content) pairs are stored; revision chains
and pending changes live in memory.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Tuple

from loguru import logger

from .errors import CorruptedStoreError, StorageError
from .snapshot import Snapshot

STORE_FORMAT_VERSION = 1


class SnapshotStorage:
    """
    JSON file storage for a committed snapshot.

    Document layout:
        {
          "format_version": 1,
          "saved_at": "2025-01-26T14:00:00+00:00",
          "files": [{"name": "...", "content": "..."}, ...]
        }
    """

    def __init__(
        self,
        path: Path = Path(".localvcs/snapshot.json"),
        indent: Optional[int] = 2,
    ):
        """
        Initialize storage.

        Args:
            path: Location of the snapshot document
            indent: JSON indentation, None for compact output
        """
        self.path = Path(path)
        self.indent = indent

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, snapshot: Snapshot) -> None:
        """
        Save the files of a snapshot.

        Writes atomically; a failed save leaves any previous document intact.

        Raises:
            StorageError: If the document cannot be written
        """
        document = {
            "format_version": STORE_FORMAT_VERSION,
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "files": [
                {"name": name, "content": content} for name, content in snapshot.files()
            ],
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._atomic_write() as f:
                json.dump(document, f, indent=self.indent)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save snapshot to {self.path}: {e}")
            raise StorageError(f"Could not save snapshot: {e}") from e

        logger.debug(f"Saved {len(snapshot)} files to {self.path}")

    def load(self) -> List[Tuple[str, str]]:
        """
        Load stored (name, content) pairs.

        Returns:
            Stored files sorted by name; empty if nothing was saved yet

        Raises:
            StorageError: If the document cannot be read
            CorruptedStoreError: If the document is malformed
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self.path}: {e}")
            raise CorruptedStoreError(f"Invalid JSON in {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Snapshot {self.path} is not valid UTF-8: {e}")
            raise CorruptedStoreError(f"Invalid UTF-8 in {self.path}: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read snapshot from {self.path}: {e}")
            raise StorageError(f"Could not read snapshot: {e}") from e

        files = self._parse_document(document)
        logger.debug(f"Loaded {len(files)} files from {self.path}")
        return files

    def load_snapshot(self) -> Snapshot:
        """Load stored files as a snapshot of fresh revision chains."""
        return Snapshot.from_files(self.load())

    def _parse_document(self, document: object) -> List[Tuple[str, str]]:
        if not isinstance(document, dict):
            raise CorruptedStoreError(f"Expected a JSON object in {self.path}")

        version: Optional[object] = document.get("format_version")
        if version != STORE_FORMAT_VERSION:
            raise CorruptedStoreError(
                f"Unsupported format version {version!r} in {self.path}"
            )

        entries = document.get("files")
        if not isinstance(entries, list):
            raise CorruptedStoreError(f"Missing 'files' list in {self.path}")

        files: List[Tuple[str, str]] = []
        for entry in entries:
            if (
                not isinstance(entry, dict)
                or not isinstance(entry.get("name"), str)
                or not isinstance(entry.get("content"), str)
            ):
                raise CorruptedStoreError(
                    f"Invalid file entry in {self.path}: {entry!r}"
                )
            files.append((entry["name"], entry["content"]))

        return sorted(files)

    @contextmanager
    def _atomic_write(self) -> Iterator[TextIO]:
        """
        Context manager for atomic file write operations (overwrite mode).

        Yields:
            File object for writing
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                yield f

            os.replace(temp_path, self.path)

        except Exception:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise
