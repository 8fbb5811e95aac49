"""Tile source field options.

A manifest view must be told which of its fields hold the page images. Only
file and image fields make sense, recognised either by the well-known media
field names or by the formatter the view renders them with.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from schemas.export import ViewField

logger = logging.getLogger(__name__)

DEFAULT_FILE_FIELDS = (
    "field_media_file",
    "field_media_image",
)

FILE_FORMATTERS = (
    # Image formatters.
    "image",
    "image_url",
    # File formatters.
    "file_default",
    "file_url_plain",
)


def is_tile_source(view_field: ViewField) -> bool:
    """Whether a view field can supply images for canvases."""
    if view_field.name in DEFAULT_FILE_FIELDS:
        return True
    return bool(view_field.formatter) and view_field.formatter in FILE_FORMATTERS


def tile_field_options(view_fields: Iterable[ViewField]) -> dict[str, str]:
    """Selectable tile source fields, as {field name: admin label}.

    Args:
        view_fields: Field handlers configured on the view, in view order

    Returns:
        Options in view order; empty when the view has no file fields
    """
    options = {
        f.name: f.label or f.name for f in view_fields if is_tile_source(f)
    }

    if not options:
        logger.error(
            "No image or file fields were found in the View. "
            "You will need to add a field to this View"
        )

    return options


def normalize_tile_fields(value: Any) -> list[str]:
    """Selected tile field names, in order.

    Accepts a list of names, a single name, or the checkbox-style mapping
    stored by the view settings form, where unchecked boxes map to 0.

    Raises:
        ValueError: For any other type
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Mapping):
        return [str(name) for name, selected in value.items() if selected]
    if isinstance(value, (list, tuple)):
        return [str(name) for name in value if name]
    raise ValueError(f"Unsupported tile field selection: {value!r}")
