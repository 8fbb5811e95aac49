"""Builders for the parts of a IIIF manifest."""

from .canvas import CanvasBuilder
from .metadata import MetadataMapper
from .transcripts import TranscriptAnnotator

__all__ = [
    "CanvasBuilder",
    "MetadataMapper",
    "TranscriptAnnotator",
]
