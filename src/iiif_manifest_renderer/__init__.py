"""Render IIIF Presentation 3.0 manifests from content-management results."""

from .assembler import ManifestAssembler
from .config import ManifestSettings, load_settings

__all__ = [
    "ManifestAssembler",
    "ManifestSettings",
    "load_settings",
]
