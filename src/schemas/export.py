"""Content export schemas.

An export is a JSON snapshot of the content a manifest view would query:
entities with their field values and file attachments, the ordered result
rows, and the fields configured on the view. It stands in for the
content-management system when manifests are rendered from the command line
or in tests.

Example:
    {
        "file_roots": {"public": "/var/www/files"},
        "view_fields": [
            {"name": "field_media_image", "label": "Image", "formatter": "image"}
        ],
        "entities": [
            {"entity_type": "node", "id": "1", "label": "Letter",
             "fields": {"field_creator": [{"value": "Jane Doe"}]}},
            {"entity_type": "media", "id": "5", "bundle": "image",
             "fields": {"field_media_of": [{"target_id": "1",
                                            "target_type": "node"}]},
             "files": {"field_media_image": [
                 {"url": "https://example.org/files/page1.tif",
                  "uri": "public://page1.tif", "mime_type": "image/tiff"}]}}
        ],
        "rows": [{"entity_type": "media", "id": "5"}]
    }
"""

from typing import Any

from pydantic import BaseModel


class ExportFile(BaseModel):
    """A file or image attached to an entity field.

    Attributes:
        url: Public URL of the file
        uri: Storage URI (e.g. "public://2024-01/page1.tif")
        mime_type: MIME type of the file
        width: Stored image width, when the CMS recorded one
        height: Stored image height, when the CMS recorded one
    """

    url: str
    uri: str | None = None
    mime_type: str = "application/octet-stream"
    width: int | None = None
    height: int | None = None

    model_config = {"extra": "allow"}


class ExportEntity(BaseModel):
    """An entity (node, media, taxonomy term) in the export.

    Field values are lists of items, each item a mapping of property names
    to raw values, e.g. ``[{"value": "Jane"}]`` or ``[{"target_id": "7"}]``.
    """

    entity_type: str
    id: str
    bundle: str | None = None
    label: str | None = None
    fields: dict[str, list[dict[str, Any]]] = {}
    files: dict[str, list[ExportFile]] = {}


class ExportRow(BaseModel):
    """A result row of the view, pointing at its base entity.

    Attributes:
        entity_type: Type of the row's base entity
        id: Id of the row's base entity
        relationships: Optional per-field entity override, mapping a tile
            field name to "{entity_type}/{id}" of the entity that carries it
    """

    entity_type: str
    id: str
    relationships: dict[str, str] = {}


class ViewField(BaseModel):
    """A field handler configured on the view."""

    name: str
    label: str | None = None
    formatter: str | None = None


class ContentExport(BaseModel):
    """Root of an export file."""

    version: str = "1.0"
    file_roots: dict[str, str] = {}
    view_fields: list[ViewField] = []
    entities: list[ExportEntity] = []
    rows: list[ExportRow] = []

    model_config = {"extra": "allow"}

    def entity_key(self, entity: ExportEntity) -> str:
        return f"{entity.entity_type}/{entity.id}"

    def index(self) -> dict[str, ExportEntity]:
        """Map "{entity_type}/{id}" to entity, keeping export order."""
        return {self.entity_key(e): e for e in self.entities}
