"""
Local version control engine.

Stages file edits, publishes them as a new snapshot on commit, and reverts
either the pending edits or the last commit.
"""

import threading
from typing import Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from ..logging import performance_monitor, track_vcs_operation
from .changes import (
    AddFile,
    Change,
    ChangeFile,
    DeleteFile,
    PendingChangeLog,
    RenameFile,
    describe_change,
)
from .diff import SnapshotDiff, compute_diff
from .entity import Revision, revision_chain
from .errors import VersionControlError
from .snapshot import Snapshot
from .storage import SnapshotStorage


class LocalVcs:
    """
    In-memory version control over a set of named files.

    Staged edits are invisible to every query until ``commit`` is called.
    Committed snapshots form a stack whose bottom entry, created at
    construction, is never removed.

    Example:
        >>> vcs = LocalVcs()
        >>> vcs.add_file("file", "content")
        >>> vcs.has_file("file")
        False
        >>> vcs.commit()
        True
        >>> vcs.get_file_revision("file").content
        'content'
    """

    def __init__(self, initial: Optional[Snapshot] = None):
        """
        Initialize the engine.

        Args:
            initial: Snapshot to start from (default: empty)
        """
        if initial is None:
            initial = Snapshot.empty()
        self._history: List[Snapshot] = [initial]
        self._pending = PendingChangeLog()
        self._lock = threading.RLock()
        self._log = logger.bind(component="engine")

    @classmethod
    def from_files(cls, files: Iterable[Tuple[str, str]]) -> "LocalVcs":
        """Create an engine whose initial snapshot holds the given files."""
        return cls(Snapshot.from_files(files))

    @classmethod
    def from_storage(cls, storage: SnapshotStorage) -> "LocalVcs":
        """
        Create an engine seeded from a backing store.

        Raises:
            StorageError: If the store cannot be loaded
        """
        snapshot = storage.load_snapshot()
        logger.info(f"Loaded {len(snapshot)} files from {storage.path}")
        return cls(snapshot)

    # Staging

    def add_file(self, name: str, content: str) -> None:
        """Stage a new file."""
        self._stage(AddFile(name, content))

    def change_file(self, name: str, content: str) -> None:
        """Stage new content for a file."""
        self._stage(ChangeFile(name, content))

    def rename_file(self, old_name: str, new_name: str) -> None:
        """Stage a rename."""
        self._stage(RenameFile(old_name, new_name))

    def delete_file(self, name: str) -> None:
        """Stage removal of a file."""
        self._stage(DeleteFile(name))

    def _stage(self, change: Change) -> None:
        with self._lock:
            self._pending.append(change)
        self._log.debug("Staged change", **describe_change(change))

    # Transactions

    @track_vcs_operation("commit")
    @performance_monitor(threshold_ms=500)
    def commit(self) -> bool:
        """
        Replay pending changes onto the current snapshot and publish the result.

        A commit with nothing staged is elided.

        Returns:
            True if a new snapshot was published
        """
        with self._lock:
            if self._pending.is_empty():
                self._log.debug("Nothing to commit")
                return False

            changes = self._pending.changes()
            snapshot = self._history[-1].apply(changes)
            self._history.append(snapshot)
            self._pending.clear()

        self._log.info(
            f"Committed {len(changes)} changes",
            changes=len(changes),
            files=len(snapshot),
            depth=len(self._history),
        )
        return True

    @track_vcs_operation("revert")
    def revert(self) -> None:
        """
        Discard pending changes, or undo the last commit if there are none.

        Does nothing when there is neither pending work nor a commit to undo.
        """
        with self._lock:
            if not self._pending.is_empty():
                dropped = self._pending.clear()
                self._log.info(f"Discarded {dropped} pending changes")
                return

            if len(self._history) > 1:
                self._history.pop()
                self._log.warning("Reverted last commit", depth=len(self._history))
                return

        self._log.debug("Nothing to revert")

    # Queries

    @property
    def current_snapshot(self) -> Snapshot:
        """The most recently committed snapshot."""
        return self._history[-1]

    @property
    def history_depth(self) -> int:
        """Number of snapshots in the history stack, including the initial one."""
        return len(self._history)

    def snapshots(self) -> Iterator[Snapshot]:
        """Iterate over committed snapshots, newest first."""
        return reversed(list(self._history))

    def has_file(self, name: str) -> bool:
        return name in self.current_snapshot

    def get_file_revision(self, name: str) -> Optional[Revision]:
        """Get the current revision of a file, or None if absent."""
        entity = self.current_snapshot.resolve(name)
        return entity.to_revision() if entity is not None else None

    def get_file_revisions(self, name: str) -> List[Revision]:
        """
        Get the full history of a file, newest first.

        History follows the file across renames. A file deleted and added
        again starts a new history.
        """
        return revision_chain(self.current_snapshot.resolve(name))

    def is_clean(self) -> bool:
        """Check that nothing is staged."""
        return self._pending.is_empty()

    def pending_changes(self) -> Tuple[Change, ...]:
        """Get staged changes in order."""
        return self._pending.changes()

    def list_files(self) -> List[str]:
        return self.current_snapshot.names()

    def export_files(self) -> List[Tuple[str, str]]:
        """Get (name, content) pairs of the current snapshot."""
        return self.current_snapshot.files()

    def diff(self, steps_back: int = 1) -> SnapshotDiff:
        """
        Diff the current snapshot against an older one.

        Args:
            steps_back: How many commits back to compare against

        Raises:
            VersionControlError: If the history is not that deep
        """
        history = self._history
        if steps_back < 0 or steps_back >= len(history):
            raise VersionControlError(
                f"Cannot diff {steps_back} commits back, "
                f"history depth is {len(history)}"
            )
        return compute_diff(history[-1 - steps_back], history[-1])

    # Persistence

    def save(self, storage: SnapshotStorage) -> None:
        """
        Persist the current snapshot.

        A failed save raises StorageError and leaves the engine unchanged.
        """
        storage.save(self.current_snapshot)
        self._log.info(f"Saved {len(self.current_snapshot)} files to {storage.path}")
