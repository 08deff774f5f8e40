"""
Version control engine for named files.

Provides staging, commit and revert over immutable snapshots, with revision
history that follows files across renames.
"""

from .entity import (
    Entity,
    Revision,
    create_entity,
    create_entity_id,
    revision_chain,
)

from .changes import (
    AddFile,
    Change,
    ChangeFile,
    ChangeType,
    DeleteFile,
    PendingChangeLog,
    RenameFile,
)

from .snapshot import Snapshot

from .diff import (
    DiffType,
    FileChange,
    SnapshotDiff,
    compute_diff,
)

from .errors import (
    VersionControlError,
    StorageError,
    CorruptedStoreError,
)

from .storage import SnapshotStorage

from .local_vcs import LocalVcs

__all__ = [
    # Entity
    "Entity",
    "Revision",
    "create_entity",
    "create_entity_id",
    "revision_chain",
    # Changes
    "AddFile",
    "Change",
    "ChangeFile",
    "ChangeType",
    "DeleteFile",
    "PendingChangeLog",
    "RenameFile",
    # Snapshot
    "Snapshot",
    # Diff
    "DiffType",
    "FileChange",
    "SnapshotDiff",
    "compute_diff",
    # Errors
    "VersionControlError",
    "StorageError",
    "CorruptedStoreError",
    # Storage
    "SnapshotStorage",
    # Engine
    "LocalVcs",
]
