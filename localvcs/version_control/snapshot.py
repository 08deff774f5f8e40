"""
Snapshot of committed file state.

A snapshot maps each current file name to the entity version bearing that
name. Snapshots are never modified; applying changes yields a new one.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from .changes import Change, Working
from .entity import Entity, create_entity


class Snapshot:
    """
    Immutable name -> Entity mapping for one committed point in time.

    Example:
        >>> from localvcs.version_control import AddFile
        >>> snapshot = Snapshot.empty()
        >>> snapshot = snapshot.apply([AddFile("file", "content")])
        >>> snapshot.resolve("file").content
        'content'
    """

    __slots__ = ("_entities",)

    def __init__(self, entities: Optional[Mapping[str, Entity]] = None):
        self._entities: Mapping[str, Entity] = MappingProxyType(dict(entities or {}))

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @classmethod
    def from_files(cls, files: Iterable[Tuple[str, str]]) -> "Snapshot":
        """
        Build a snapshot where every file starts a new revision chain.

        Args:
            files: (name, content) pairs, later duplicates win
        """
        return cls({name: create_entity(name, content) for name, content in files})

    def resolve(self, name: str) -> Optional[Entity]:
        """Look up the entity currently bearing ``name``."""
        return self._entities.get(name)

    def apply(self, changes: Iterable[Change]) -> "Snapshot":
        """
        Replay staged changes in order and return the resulting snapshot.

        Each surviving file gains at most one new version, reflecting the
        final effect of all changes touching it.
        """
        working = Working(dict(self._entities))
        for change in changes:
            change.apply(working)
        return Snapshot(working.entities)

    def names(self) -> List[str]:
        """Get all file names, sorted."""
        return sorted(self._entities)

    def files(self) -> List[Tuple[str, str]]:
        """Get (name, content) pairs for all files, sorted by name."""
        return [(name, self._entities[name].content) for name in self.names()]

    def entities(self) -> Mapping[str, Entity]:
        """Read-only view of the underlying mapping."""
        return self._entities

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"Snapshot(files={self.names()!r})"
