"""Canvas construction."""

import logging

from iiif_manifest_renderer.entities import Attachment, Entity
from schemas.iiif import Annotation, AnnotationPage, Canvas, ImageBody

from .transcripts import TranscriptAnnotator

logger = logging.getLogger(__name__)


class CanvasBuilder:
    """Builds one canvas per attachment.

    The canvas holds a single painting annotation showing the attachment.
    When the governing entity has transcripts, they are added as a second,
    commenting annotation page.
    """

    def __init__(self, annotator: TranscriptAnnotator | None = None):
        self.annotator = annotator

    def build(
        self,
        entity: Entity | None,
        attachment: Attachment,
        width: int,
        height: int,
        canvas_id: str,
    ) -> Canvas:
        """Build the canvas for an attachment.

        Args:
            entity: Entity whose transcripts annotate the canvas
            attachment: The file painted onto the canvas
            width: Resolved image width (0 if unknown)
            height: Resolved image height (0 if unknown)
            canvas_id: Id of the new canvas

        Returns:
            The Canvas
        """
        # IIIF repeats the image dimensions on the canvas and the body.
        painting = Annotation(
            id=f"{canvas_id}/annopage-1/anno-1",
            motivation="painting",
            body=ImageBody(
                id=attachment.file_url,
                format=attachment.mime_type,
                height=height,
                width=width,
            ),
            target=canvas_id,
        )
        canvas = Canvas(
            id=canvas_id,
            height=height,
            width=width,
            items=[
                AnnotationPage(id=f"{canvas_id}/annopage-1", items=[painting]),
            ],
        )

        if self.annotator is not None:
            transcripts = self.annotator.get_transcripts(entity, canvas_id)
            if transcripts:
                canvas.annotations = [
                    AnnotationPage(id=f"{canvas_id}/annopage-2", items=transcripts),
                ]

        logger.debug(f"Built canvas {canvas_id} ({width}x{height})")
        return canvas
