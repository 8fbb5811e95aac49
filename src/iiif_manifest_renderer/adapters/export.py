"""Collaborator adapters backed by a content export file."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from iiif_manifest_renderer.entities import (
    Attachment,
    Entity,
    EntityRef,
    EntityResolver,
    FileLocator,
    Row,
    TranscriptSource,
)
from iiif_manifest_renderer.exceptions import ExportError
from schemas.export import ContentExport
from schemas.export import ExportEntity as ExportEntityRecord
from schemas.export import ExportFile, ExportRow as ExportRowRecord

logger = logging.getLogger(__name__)

MEDIA_OF_FIELD = "field_media_of"
DEFAULT_TARGET_TYPE = "taxonomy_term"
ROUTE_PATTERN = re.compile(r"^/(?P<entity_type>node|media)/(?P<id>[^/]+)/?$")


def load_export(path: Path) -> ContentExport:
    """Load and validate an export file.

    Raises:
        ExportError: If the file is unreadable, not JSON, or invalid
    """
    try:
        data = json.loads(Path(path).read_text())
    except OSError as e:
        raise ExportError(f"Cannot read export file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ExportError(f"Export file {path} is not valid JSON: {e}") from e

    try:
        return ContentExport.model_validate(data)
    except PydanticValidationError as e:
        raise ExportError(f"Export file {path} failed validation: {e}") from e


class ExportEntity(Entity):
    """Entity backed by an export record."""

    def __init__(self, record: ExportEntityRecord):
        self.record = record

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def entity_type(self) -> str:
        return self.record.entity_type

    @property
    def bundle(self) -> str | None:
        return self.record.bundle

    @property
    def label(self) -> str | None:
        return self.record.label

    def has_field(self, name: str) -> bool:
        return name in self.record.fields or name in self.record.files

    def get_field_value(self, name: str) -> Any:
        items = self.record.fields.get(name) or []
        if not items or not items[0]:
            return None
        return next(iter(items[0].values()))

    def get_reference_target(self, name: str) -> EntityRef | None:
        items = self.record.fields.get(name) or []
        if not items or not items[0].get("target_id"):
            return None
        item = items[0]
        return EntityRef(
            entity_type=str(item.get("target_type") or DEFAULT_TARGET_TYPE),
            entity_id=str(item["target_id"]),
        )

    def get_attachments(self, name: str) -> list[Attachment]:
        return [self._attachment(f) for f in self.record.files.get(name, [])]

    def _attachment(self, file: ExportFile) -> Attachment:
        properties = {
            k: v for k, v in (("width", file.width), ("height", file.height))
            if v is not None
        }
        return Attachment(
            file_url=file.url,
            mime_type=file.mime_type,
            uri=file.uri,
            properties=properties,
        )


class ExportRepository(EntityResolver, TranscriptSource):
    """Entity lookups over an export.

    Resolves ``/node/{id}`` and ``/media/{id}`` paths, loads referenced
    entities, and finds media through their ``field_media_of`` reference.
    """

    def __init__(self, export: ContentExport):
        self.export = export
        self._entities = {
            key: ExportEntity(record) for key, record in export.index().items()
        }

    def get(self, entity_type: str, entity_id: str) -> ExportEntity | None:
        return self._entities.get(f"{entity_type}/{entity_id}")

    def resolve_path(self, content_path: str) -> Entity | None:
        match = ROUTE_PATTERN.match(content_path)
        if match is None:
            logger.debug(f"Path {content_path!r} does not route to an entity")
            return None
        return self.get(match["entity_type"], match["id"])

    def load(self, ref: EntityRef) -> Entity | None:
        return self.get(ref.entity_type, ref.entity_id)

    def get_media(self, entity: Entity) -> list[Entity]:
        media: list[Entity] = []
        for candidate in self._entities.values():
            if candidate.entity_type != "media":
                continue
            for item in candidate.record.fields.get(MEDIA_OF_FIELD, []):
                target_type = item.get("target_type") or "node"
                if (
                    str(item.get("target_id")) == entity.id
                    and target_type == entity.entity_type
                ):
                    media.append(candidate)
                    break
        return media

    def rows(self) -> list[Row]:
        """Result rows of the export, in order."""
        return [ExportRow(record, self) for record in self.export.rows]


class ExportRow(Row):
    """Result row pointing at an export entity.

    The row's base entity carries every tile field unless the row lists a
    relationship for that field.
    """

    def __init__(self, record: ExportRowRecord, repository: ExportRepository):
        self.record = record
        self.repository = repository

    def get_entity(self, field_name: str) -> Entity | None:
        related = self.record.relationships.get(field_name)
        if related:
            entity_type, _, entity_id = related.partition("/")
            return self.repository.get(entity_type, entity_id)
        return self.repository.get(self.record.entity_type, self.record.id)


class SchemeFileLocator(FileLocator):
    """Maps ``scheme://path`` URIs to files under per-scheme directories.

    Example:
        locator = SchemeFileLocator({"public": "/var/www/files"})
        locator.realpath("public://2024/page1.tif")
        # Path("/var/www/files/2024/page1.tif")
    """

    def __init__(self, roots: dict[str, str]):
        self.roots = {scheme: Path(root) for scheme, root in roots.items()}

    def realpath(self, uri: str) -> Path | None:
        scheme, sep, target = uri.partition("://")
        if not sep or scheme not in self.roots:
            return None

        root = self.roots[scheme].resolve()
        path = (root / target).resolve()
        if not path.is_relative_to(root):
            logger.warning(f"Refusing path outside {scheme}:// root: {uri}")
            return None
        return path
