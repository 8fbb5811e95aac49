"""Schema definitions for IIIF Manifest Renderer."""

from .export import ContentExport, ExportEntity, ExportFile, ExportRow, ViewField
from .iiif import (
    PRESENTATION_CONTEXT,
    Annotation,
    AnnotationPage,
    Canvas,
    ImageBody,
    LanguageMap,
    Manifest,
    MetadataEntry,
    RequiredStatement,
    TextualBody,
    language_map,
)
from .image_info import ImageInfo

__all__ = [
    "PRESENTATION_CONTEXT",
    "Annotation",
    "AnnotationPage",
    "Canvas",
    "ContentExport",
    "ExportEntity",
    "ExportFile",
    "ExportRow",
    "ImageBody",
    "ImageInfo",
    "LanguageMap",
    "Manifest",
    "MetadataEntry",
    "RequiredStatement",
    "TextualBody",
    "ViewField",
    "language_map",
]
