"""Transcript annotations.

Text extracted from an object (OCR output, hand-corrected transcriptions) is
stored on separate media of a dedicated bundle. Each non-empty text becomes a
commenting annotation so viewers can show it next to the image.
"""

import logging

from iiif_manifest_renderer.entities import Entity, TranscriptSource
from schemas.iiif import Annotation, TextualBody

logger = logging.getLogger(__name__)


class TranscriptAnnotator:
    """Builds commenting annotations from an entity's extracted-text media.

    Example:
        annotator = TranscriptAnnotator(transcript_source)
        annotations = annotator.get_transcripts(entity, canvas_id)
    """

    def __init__(
        self,
        transcript_source: TranscriptSource,
        bundle: str = "extracted_text",
        text_field: str = "field_edited_text",
        language: str = "en",
    ):
        self.transcript_source = transcript_source
        self.bundle = bundle
        self.text_field = text_field
        self.language = language

    def find_transcripts(self, entity: Entity) -> list[str]:
        """Non-empty transcript texts of the entity, in media order."""
        transcripts: list[str] = []

        for medium in self.transcript_source.get_media(entity):
            if medium.bundle != self.bundle:
                continue
            text = medium.get_field_value(self.text_field)
            if text:
                transcripts.append(str(text))

        return transcripts

    def get_transcripts(self, entity: Entity | None, canvas_id: str) -> list[Annotation]:
        """Commenting annotations targeting ``canvas_id``.

        Every annotation shares the id ``{canvas_id}/annopage-2/anno-1``;
        consumers of existing manifests rely on that id.

        Args:
            entity: The entity whose media are searched; None yields nothing
            canvas_id: Id of the canvas the annotations target

        Returns:
            One annotation per transcript, empty when there are none
        """
        if entity is None:
            return []

        annotations = [
            Annotation(
                id=f"{canvas_id}/annopage-2/anno-1",
                motivation="commenting",
                body=TextualBody(language=self.language, value=text),
                target=canvas_id,
            )
            for text in self.find_transcripts(entity)
        ]

        if annotations:
            logger.debug(f"Found {len(annotations)} transcripts for {entity!r}")
        return annotations
