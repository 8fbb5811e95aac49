"""Manifest Assembler for rendering view results as a IIIF manifest.

Turns the ordered result rows of a manifest view into a IIIF Presentation
3.0 manifest. The view is expected to live at a path such as
``/node/1/manifest.json``; the path without its last segment identifies the
object being described and is the base of every canvas id.
"""

import json
import logging
from collections import Counter
from collections.abc import Iterable
from urllib.parse import urlsplit, urlunsplit

from iiif_manifest_renderer.builders import (
    CanvasBuilder,
    MetadataMapper,
    TranscriptAnnotator,
)
from iiif_manifest_renderer.clients import ImageInfoClient
from iiif_manifest_renderer.config import ManifestSettings
from iiif_manifest_renderer.dimensions import DimensionResolver, LocalImageInspector
from iiif_manifest_renderer.entities import (
    Entity,
    EntityResolver,
    FileLocator,
    Row,
    TranscriptSource,
)
from schemas.iiif import Canvas, Manifest, RequiredStatement, language_map

logger = logging.getLogger(__name__)


def split_request_url(request_url: str) -> tuple[str, str]:
    """Split a manifest request URL into (base id, content path).

    The query string and the last path segment are dropped:
    ``https://x/node/1/manifest.json?a=b`` gives
    ``("https://x/node/1", "/node/1")``.
    """
    parts = urlsplit(request_url)
    content_path = parts.path.rsplit("/", 1)[0]
    base_id = urlunsplit((parts.scheme, parts.netloc, content_path, "", ""))
    return base_id, content_path


class ManifestAssembler:
    """Assemble a IIIF manifest from view result rows.

    The ManifestAssembler:
    1. Returns nothing when no image server is configured
    2. Resolves the described entity from the request path
    3. Maps its fields to descriptive metadata
    4. For each row, tile field and attachment:
       a. Resolves the image dimensions
       b. Builds a canvas, annotated with the entity's transcripts
    5. Returns the Manifest

    Example:
        assembler = ManifestAssembler(settings, resolver, transcript_source)
        data = assembler.render("https://x/node/1/manifest.json", rows)
    """

    def __init__(
        self,
        settings: ManifestSettings,
        resolver: EntityResolver,
        transcript_source: TranscriptSource,
        file_locator: FileLocator | None = None,
        info_client: ImageInfoClient | None = None,
        inspector: LocalImageInspector | None = None,
    ):
        """Initialize the assembler.

        Args:
            settings: Renderer settings
            resolver: Resolves the request path and entity references
            transcript_source: Finds extracted-text media
            file_locator: Maps file URIs to local paths for TIFF fallback
            info_client: Optional image info client for dependency injection.
                         If not provided, one is created per build from settings.
            inspector: Optional local image inspector
        """
        self.settings = settings
        self.resolver = resolver
        self.transcript_source = transcript_source
        self.file_locator = file_locator
        self._info_client = info_client
        self.inspector = inspector
        self.metadata_mapper = MetadataMapper(resolver, language=settings.language)
        self.canvas_builder = CanvasBuilder(
            TranscriptAnnotator(
                transcript_source,
                bundle=settings.transcript_bundle,
                text_field=settings.transcript_field,
                language=settings.language,
            )
        )

    def build(
        self,
        request_url: str,
        rows: Iterable[Row],
        view_title: str | None = None,
    ) -> Manifest | None:
        """Build the manifest for a request.

        Args:
            request_url: Full URL the manifest was requested from
            rows: View result rows, in display order
            view_title: Title configured on the view, if any

        Returns:
            The Manifest, or None when no image server is configured
        """
        if not self.settings.image_server_configured:
            logger.info("No IIIF server configured, rendering empty manifest")
            return None

        base_id, content_path = split_request_url(request_url)
        entity = self._resolve_entity(content_path)
        language = self.settings.language

        manifest = Manifest(
            id=request_url,
            label=language_map(self._label(entity, view_title), language),
            required_statement=RequiredStatement(
                label=language_map(self.settings.attribution_label, language),
                value=language_map(self.settings.attribution, language),
            ),
            metadata=self.metadata_mapper.build_metadata(
                entity, self.settings.metadata_mappings
            ),
        )

        if self._info_client is not None:
            manifest.items = self._build_canvases(
                rows, base_id, entity, self._info_client
            )
        else:
            with ImageInfoClient(self.settings.probe_config()) as info_client:
                manifest.items = self._build_canvases(
                    rows, base_id, entity, info_client
                )

        logger.info(
            f"Rendered manifest {request_url} with {len(manifest.items)} canvases"
        )
        return manifest

    def render(
        self,
        request_url: str,
        rows: Iterable[Row],
        view_title: str | None = None,
    ) -> dict:
        """Build the manifest as JSON-ready data; empty dict when disabled."""
        manifest = self.build(request_url, rows, view_title)
        if manifest is None:
            return {}
        return manifest.to_json_dict()

    def render_json(
        self,
        request_url: str,
        rows: Iterable[Row],
        view_title: str | None = None,
        indent: int | None = None,
    ) -> str:
        """Build the manifest serialized as a JSON string."""
        return json.dumps(self.render(request_url, rows, view_title), indent=indent)

    def _resolve_entity(self, content_path: str) -> Entity | None:
        entity = self.resolver.resolve_path(content_path)
        if entity is None:
            logger.warning(f"No entity found for path {content_path!r}")
        return entity

    def _label(self, entity: Entity | None, view_title: str | None) -> str:
        if view_title:
            return view_title
        if entity is not None and entity.label:
            return entity.label
        return self.settings.default_label

    def _build_canvases(
        self,
        rows: Iterable[Row],
        base_id: str,
        entity: Entity | None,
        info_client: ImageInfoClient,
    ) -> list[Canvas]:
        """Build canvases for every attachment of every row, in order."""
        dimension_resolver = DimensionResolver(
            info_client, self.file_locator, self.inspector
        )
        canvases: list[Canvas] = []
        seen: Counter[str] = Counter()

        for row in rows:
            for field_name in self.settings.tile_fields:
                row_entity = row.get_entity(field_name)
                if row_entity is None or not row_entity.has_field(field_name):
                    continue

                for attachment in row_entity.get_attachments(field_name):
                    seen[row_entity.id] += 1
                    canvas_id = self._canvas_id(base_id, row_entity, seen[row_entity.id])
                    width, height = dimension_resolver.resolve(attachment)
                    canvases.append(
                        self.canvas_builder.build(
                            entity, attachment, width, height, canvas_id
                        )
                    )

        return canvases

    def _canvas_id(self, base_id: str, row_entity: Entity, occurrence: int) -> str:
        """Canvas id for the n-th attachment (1-based) of an entity."""
        canvas_id = f"{base_id}/item/{row_entity.id}"
        if occurrence > 1:
            canvas_id = f"{canvas_id}/{occurrence}"
        return canvas_id
