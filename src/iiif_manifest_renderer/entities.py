"""Capability interfaces for the content-management system.

The manifest renderer never talks to storage directly. Each storage backend
provides adapters implementing these interfaces, and the renderer reads
entities, attachments and related media only through them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class EntityRef:
    """Reference to another entity, as held by an entity reference field."""

    entity_type: str
    entity_id: str


@dataclass
class Attachment:
    """A file or image attached to an entity field.

    Attributes:
        file_url: Public URL the file is served from
        mime_type: MIME type of the file
        uri: Storage URI, resolvable to a local path by a FileLocator
        properties: Stored field properties (e.g. image width/height)
    """

    file_url: str
    mime_type: str
    uri: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)


class Entity(ABC):
    """A content entity (node, media, taxonomy term)."""

    @property
    @abstractmethod
    def id(self) -> str:
        pass

    @property
    @abstractmethod
    def entity_type(self) -> str:
        pass

    @property
    @abstractmethod
    def bundle(self) -> str | None:
        pass

    @property
    @abstractmethod
    def label(self) -> str | None:
        pass

    @abstractmethod
    def has_field(self, name: str) -> bool:
        """Whether the entity's type defines the field."""
        pass

    @abstractmethod
    def get_field_value(self, name: str) -> Any:
        """First raw value of the field's first item, or None when empty."""
        pass

    @abstractmethod
    def get_reference_target(self, name: str) -> EntityRef | None:
        """Target of an entity reference field, or None for other fields."""
        pass

    @abstractmethod
    def get_attachments(self, name: str) -> list[Attachment]:
        """Files held by a file or image field, in delta order."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_type}/{self.id})"


class Row(ABC):
    """A result row of the view."""

    @abstractmethod
    def get_entity(self, field_name: str) -> Entity | None:
        """The entity carrying ``field_name`` for this row."""
        pass


class EntityResolver(ABC):
    """Loads entities by route path or by reference."""

    @abstractmethod
    def resolve_path(self, content_path: str) -> Entity | None:
        """Entity a content path (e.g. "/node/1") routes to, or None."""
        pass

    @abstractmethod
    def load(self, ref: EntityRef) -> Entity | None:
        """Referenced entity, or None when it does not exist."""
        pass


class TranscriptSource(ABC):
    """Finds the media that belong to an entity."""

    @abstractmethod
    def get_media(self, entity: Entity) -> list[Entity]:
        pass


class FileLocator(ABC):
    """Maps storage URIs to local filesystem paths."""

    @abstractmethod
    def realpath(self, uri: str) -> Path | None:
        pass
