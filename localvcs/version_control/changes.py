"""
Staged changes and the pending change log.

Changes are recorded in order and have no visible effect until they are
replayed onto a snapshot by a commit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    MutableMapping,
    Optional,
    Set,
    Tuple,
    Union,
)

from .entity import Entity, create_entity


class ChangeType(str, Enum):
    """Kind of a staged change."""

    ADD = "add"
    CHANGE = "change"
    RENAME = "rename"
    DELETE = "delete"


class Working:
    """
    Mutable name -> Entity mapping used while replaying a commit.

    Tracks which entities were created during the replay so that several
    changes to one file collapse into a single new version.
    """

    def __init__(self, entities: MutableMapping[str, Entity]):
        self.entities = entities
        self._fresh: Set[Entity] = set()

    def get(self, name: str) -> Optional[Entity]:
        return self.entities.get(name)

    def put(self, name: str, entity: Entity) -> None:
        self.entities[name] = entity
        self._fresh.add(entity)

    def pop(self, name: str) -> Optional[Entity]:
        return self.entities.pop(name, None)

    def next_version(self, entity: Entity, **fields: Any) -> Entity:
        """Build the next version, amending entities created by this replay."""
        if entity in self._fresh:
            return entity.amend(**fields)
        return entity.evolve(**fields)


@dataclass(frozen=True)
class AddFile:
    """Stage a new file. Overwrites whatever currently has the name."""

    name: str
    content: str

    @property
    def change_type(self) -> ChangeType:
        return ChangeType.ADD

    def apply(self, working: Working) -> None:
        working.put(self.name, create_entity(self.name, self.content))


@dataclass(frozen=True)
class ChangeFile:
    """Stage new content for an existing file."""

    name: str
    content: str

    @property
    def change_type(self) -> ChangeType:
        return ChangeType.CHANGE

    def apply(self, working: Working) -> None:
        entity = working.get(self.name)
        if entity is None:
            return
        working.put(self.name, working.next_version(entity, content=self.content))


@dataclass(frozen=True)
class RenameFile:
    """Stage a rename, keeping the file's identity and content."""

    old_name: str
    new_name: str

    @property
    def change_type(self) -> ChangeType:
        return ChangeType.RENAME

    def apply(self, working: Working) -> None:
        entity = working.pop(self.old_name)
        if entity is None:
            return
        working.put(self.new_name, working.next_version(entity, name=self.new_name))


@dataclass(frozen=True)
class DeleteFile:
    """Stage removal of a file."""

    name: str

    @property
    def change_type(self) -> ChangeType:
        return ChangeType.DELETE

    def apply(self, working: Working) -> None:
        working.pop(self.name)


Change = Union[AddFile, ChangeFile, RenameFile, DeleteFile]


def describe_change(change: Change) -> Dict[str, Any]:
    """Convert a change to a dictionary for logging."""
    data: Dict[str, Any] = {"type": change.change_type.value}
    if isinstance(change, RenameFile):
        data["old_name"] = change.old_name
        data["new_name"] = change.new_name
    else:
        data["name"] = change.name
    return data


class PendingChangeLog:
    """
    Ordered list of staged, uncommitted changes.

    Staging never validates names; unresolved references are no-ops when
    the log is replayed.
    """

    def __init__(self) -> None:
        self._changes: List[Change] = []

    def append(self, change: Change) -> None:
        self._changes.append(change)

    def clear(self) -> int:
        """Drop all staged changes. Returns how many were dropped."""
        dropped = len(self._changes)
        self._changes = []
        return dropped

    def is_empty(self) -> bool:
        return not self._changes

    def changes(self) -> Tuple[Change, ...]:
        """Get a snapshot of the staged changes in order."""
        return tuple(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[Change]:
        return iter(tuple(self._changes))
