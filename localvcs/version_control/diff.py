"""
Diff computation for comparing snapshots.

Files are matched by entity identifier, so a rename shows up as a rename
rather than as a removal plus an addition.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .entity import Entity, Revision
from .snapshot import Snapshot


class DiffType(str, Enum):
    """Type of change in a diff."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    RENAMED = "renamed"


@dataclass
class FileChange:
    """Represents a change to a single file between two snapshots."""

    change_type: DiffType
    old_revision: Optional[Revision]
    new_revision: Optional[Revision]
    content_changed: bool = False

    def summary(self) -> str:
        """Get a one-line summary of this change."""
        if self.change_type == DiffType.ADDED:
            assert self.new_revision is not None
            return f"+ {self.new_revision.name}"
        elif self.change_type == DiffType.REMOVED:
            assert self.old_revision is not None
            return f"- {self.old_revision.name}"
        elif self.change_type == DiffType.MODIFIED:
            assert self.new_revision is not None
            return f"M {self.new_revision.name}"
        else:
            assert self.old_revision is not None and self.new_revision is not None
            suffix = " (modified)" if self.content_changed else ""
            return f"R {self.old_revision.name} -> {self.new_revision.name}{suffix}"


@dataclass
class SnapshotDiff:
    """Complete diff between two snapshots."""

    file_changes: List[FileChange]

    def has_changes(self) -> bool:
        """Check if there are any changes."""
        return len(self.file_changes) > 0

    def count_by_type(self) -> Dict[str, int]:
        """Count changes by type."""
        counts = {change_type.value: 0 for change_type in DiffType}
        for change in self.file_changes:
            counts[change.change_type.value] += 1
        return counts

    def summary(self) -> str:
        """Generate a summary of the diff."""
        if not self.has_changes():
            return "No changes"

        counts = self.count_by_type()
        return ", ".join(
            f"{count} files {change_type}"
            for change_type, count in counts.items()
            if count > 0
        )

    def format(self) -> str:
        """Format diff for display."""
        lines = [f"Summary: {self.summary()}"]
        if self.file_changes:
            lines.append("-" * 60)
            lines.extend(change.summary() for change in self.file_changes)
        return "\n".join(lines)


def compute_diff(old: Snapshot, new: Snapshot) -> SnapshotDiff:
    """
    Compute diff between two snapshots.

    Args:
        old: Older snapshot
        new: Newer snapshot

    Returns:
        SnapshotDiff with changes ordered by file name
    """
    old_by_id: Dict[str, Entity] = {e.entity_id: e for e in old.entities().values()}
    new_by_id: Dict[str, Entity] = {e.entity_id: e for e in new.entities().values()}

    file_changes: List[FileChange] = []

    for entity_id, new_entity in new_by_id.items():
        old_entity = old_by_id.get(entity_id)
        if old_entity is None:
            file_changes.append(
                FileChange(DiffType.ADDED, None, new_entity.to_revision())
            )
        elif old_entity is new_entity:
            continue
        elif old_entity.name != new_entity.name:
            file_changes.append(
                FileChange(
                    DiffType.RENAMED,
                    old_entity.to_revision(),
                    new_entity.to_revision(),
                    content_changed=old_entity.content != new_entity.content,
                )
            )
        elif old_entity.content != new_entity.content:
            file_changes.append(
                FileChange(
                    DiffType.MODIFIED,
                    old_entity.to_revision(),
                    new_entity.to_revision(),
                    content_changed=True,
                )
            )

    for entity_id, old_entity in old_by_id.items():
        if entity_id not in new_by_id:
            file_changes.append(
                FileChange(DiffType.REMOVED, old_entity.to_revision(), None)
            )

    file_changes.sort(key=_sort_key)
    return SnapshotDiff(file_changes=file_changes)


def _sort_key(change: FileChange) -> str:
    revision = change.new_revision or change.old_revision
    assert revision is not None
    return revision.name
