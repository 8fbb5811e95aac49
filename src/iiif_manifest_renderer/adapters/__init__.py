"""Storage adapters implementing the collaborator interfaces."""

from .export import (
    ExportEntity,
    ExportRepository,
    ExportRow,
    SchemeFileLocator,
    load_export,
)

__all__ = [
    "ExportEntity",
    "ExportRepository",
    "ExportRow",
    "SchemeFileLocator",
    "load_export",
]
