"""Renderer settings.

Settings mirror what a site administrator configures for a manifest view:
the image server address, the fields that hold page images, and the fixed
descriptive text. They are read from a JSON file and may be overridden from
the command line.

Example settings.json:
    {
        "iiif_server": "https://iiif.example.org/iiif/2",
        "tile_fields": ["field_media_image"],
        "probe_timeout": 5
    }
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PositiveFloat, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import SettingsError
from .options import normalize_tile_fields

DEFAULT_LABEL = "IIIF Manifest"
DEFAULT_ATTRIBUTION_LABEL = "Attribution"
DEFAULT_ATTRIBUTION = (
    "These materials are made available for research and educational "
    "purposes.  It is the responsibility of the researcher to determine the "
    "copyright status of materials in the Vassar College Digital Library"
)
DEFAULT_METADATA_MAPPINGS = {
    "Creator": "field_creator",
    "Library": "field_digital_library",
}


class ManifestSettings(BaseModel):
    """Configuration consumed by the manifest assembler.

    Attributes:
        iiif_server: Image server base URL; None disables manifest output
        tile_fields: Fields whose attachments become canvases, in order.
            Accepts a list or a checkbox-style mapping {name: name | 0}.
        metadata_mappings: Display label to field name, in display order
        attribution_label: Label of the required statement
        attribution: Text of the required statement
        default_label: Manifest label when neither view nor entity has a title
        language: Language code used for every language map
        transcript_bundle: Media bundle holding extracted text
        transcript_field: Field of that bundle holding the text
        probe_timeout: Seconds to wait for the image server
        headers: Extra headers sent with probe requests
    """

    iiif_server: str | None = None
    tile_fields: list[str] = []
    metadata_mappings: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_METADATA_MAPPINGS)
    )
    attribution_label: str = DEFAULT_ATTRIBUTION_LABEL
    attribution: str = DEFAULT_ATTRIBUTION
    default_label: str = DEFAULT_LABEL
    language: str = "en"
    transcript_bundle: str = "extracted_text"
    transcript_field: str = "field_edited_text"
    probe_timeout: PositiveFloat = 10.0
    headers: dict[str, str] = {}

    @field_validator("tile_fields", mode="before")
    @classmethod
    def _select_tile_fields(cls, value: Any) -> list[str]:
        return normalize_tile_fields(value)

    @field_validator("iiif_server")
    @classmethod
    def _blank_server_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def image_server_configured(self) -> bool:
        return self.iiif_server is not None

    def probe_config(self) -> dict[str, Any]:
        """Client config for the image info client."""
        return {
            "base_url": self.iiif_server,
            "timeout": self.probe_timeout,
            "headers": self.headers,
        }


def load_settings(path: Path | None = None, **overrides: Any) -> ManifestSettings:
    """Load settings from a JSON file and apply overrides.

    Overrides whose value is None are ignored, so argparse defaults can be
    passed straight through.

    Args:
        path: Optional settings file
        **overrides: Setting values taking precedence over the file

    Returns:
        The validated settings

    Raises:
        SettingsError: If the file is unreadable, not JSON, or invalid
    """
    data: dict[str, Any] = {}

    if path is not None:
        try:
            data = json.loads(Path(path).read_text())
        except OSError as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SettingsError(f"Settings file {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a JSON object")

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ManifestSettings.model_validate(data)
    except PydanticValidationError as e:
        raise SettingsError(
            "Invalid manifest settings",
            errors=[str(err) for err in e.errors()],
        ) from e
