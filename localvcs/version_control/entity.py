"""
Entity representation for version control.

An Entity is one immutable version of a tracked file. Versions sharing an
``entity_id`` are linked backwards through ``previous`` and together form
the file's revision chain.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional
import uuid


@dataclass(frozen=True)
class Revision:
    """
    Read-only view of a single file version handed out to callers.

    Attributes:
        name: Name the file had in this version
        content: File content in this version
    """

    name: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert revision to dictionary for serialization."""
        return {"name": self.name, "content": self.content}


@dataclass(frozen=True, eq=False)
class Entity:
    """
    One version of a tracked file.

    Entities compare by identity: two versions with equal fields are still
    distinct points in history.

    Attributes:
        entity_id: Identifier shared by every version of the same logical file
        name: Name of the file at the moment this version was produced
        content: Content at that moment
        previous: Prior version with the same entity_id, or None
    """

    entity_id: str
    name: str
    content: str
    previous: Optional["Entity"] = None

    def evolve(
        self, name: Optional[str] = None, content: Optional[str] = None
    ) -> "Entity":
        """
        Produce the next version of this entity.

        The new version keeps the identifier and links back to ``self``.
        """
        return Entity(
            entity_id=self.entity_id,
            name=self.name if name is None else name,
            content=self.content if content is None else content,
            previous=self,
        )

    def amend(
        self, name: Optional[str] = None, content: Optional[str] = None
    ) -> "Entity":
        """
        Replace this version without growing the chain.

        Used while replaying changes on a version created by the same commit.
        """
        return Entity(
            entity_id=self.entity_id,
            name=self.name if name is None else name,
            content=self.content if content is None else content,
            previous=self.previous,
        )

    def to_revision(self) -> Revision:
        """Project this version to a caller-facing revision."""
        return Revision(name=self.name, content=self.content)

    def versions(self) -> Iterator["Entity"]:
        """Iterate over this version and all its predecessors, newest first."""
        current: Optional[Entity] = self
        while current is not None:
            yield current
            current = current.previous

    def chain(self) -> List[Revision]:
        """Get the full revision chain ending at this version, newest first."""
        return revision_chain(self)

    def __repr__(self) -> str:
        return (
            f"Entity(entity_id={self.entity_id!r}, name={self.name!r}, "
            f"has_previous={self.previous is not None})"
        )


def revision_chain(entity: Optional[Entity]) -> List[Revision]:
    """
    Walk the ``previous`` links of an entity.

    Args:
        entity: Head version, or None

    Returns:
        Revisions newest first; empty if entity is None
    """
    if entity is None:
        return []
    return [version.to_revision() for version in entity.versions()]


def create_entity_id() -> str:
    """Generate a unique entity ID."""
    return uuid.uuid4().hex[:16]


def create_entity(name: str, content: str) -> Entity:
    """Create the first version of a new logical file."""
    return Entity(entity_id=create_entity_id(), name=name, content=content)
