"""Descriptive metadata for the manifest."""

import logging
from collections.abc import Mapping

from iiif_manifest_renderer.entities import Entity, EntityResolver
from schemas.iiif import MetadataEntry, language_map

logger = logging.getLogger(__name__)

NAME_FIELD = "name"


class MetadataMapper:
    """Maps entity fields to manifest metadata entries.

    Entries follow the order of the configured mappings. Reference fields
    (e.g. a taxonomy term) show the referenced entity's name instead of the
    raw target id. Absent and empty fields produce no entry.
    """

    def __init__(self, resolver: EntityResolver, language: str = "en"):
        self.resolver = resolver
        self.language = language

    def build_metadata(
        self,
        entity: Entity | None,
        mappings: Mapping[str, str],
    ) -> list[MetadataEntry]:
        """Build metadata entries for an entity.

        Args:
            entity: The entity described by the manifest
            mappings: Display label to field name, in display order

        Returns:
            One MetadataEntry per mapping with a non-empty value
        """
        if entity is None:
            return []

        metadata: list[MetadataEntry] = []

        for label, field_name in mappings.items():
            if not entity.has_field(field_name):
                continue

            value = self._field_display_value(entity, field_name)
            if not value:
                continue

            metadata.append(
                MetadataEntry(
                    label=language_map(label, self.language),
                    value=language_map(str(value), self.language),
                )
            )

        return metadata

    def _field_display_value(self, entity: Entity, field_name: str):
        target = entity.get_reference_target(field_name)
        if target is None:
            return entity.get_field_value(field_name)

        referenced = self.resolver.load(target)
        if referenced is None:
            logger.warning(
                f"{field_name} on {entity!r} references missing "
                f"{target.entity_type}/{target.entity_id}"
            )
            return None

        return referenced.get_field_value(NAME_FIELD)
