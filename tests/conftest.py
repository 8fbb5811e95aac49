"""Pytest fixtures for IIIF Manifest Renderer tests."""

import json
from unittest.mock import MagicMock

import pytest

from iiif_manifest_renderer.adapters import ExportRepository
from iiif_manifest_renderer.clients import ImageInfoClient
from iiif_manifest_renderer.config import ManifestSettings
from schemas.export import ContentExport

IIIF_SERVER = "https://iiif.example.org/iiif/2/"
MANIFEST_URL = "https://repo.example.org/node/1/manifest.json"


def make_info_response(width: int = 640, height: int = 480) -> MagicMock:
    """Create a mock info.json response."""
    response = MagicMock()
    response.is_success = True
    response.json.return_value = {
        "@context": "http://iiif.io/api/image/2/context.json",
        "@id": "https://iiif.example.org/iiif/2/x",
        "protocol": "http://iiif.io/api/image",
        "width": width,
        "height": height,
    }
    return response


def make_error_response(status_code: int = 500) -> MagicMock:
    """Create a mock non-2xx response."""
    response = MagicMock()
    response.is_success = False
    response.status_code = status_code
    response.url = "https://iiif.example.org/iiif/2/x"
    return response


def make_info_client(*responses, side_effect=None) -> ImageInfoClient:
    """ImageInfoClient whose httpx client returns ``responses`` in order."""
    client = ImageInfoClient({"base_url": IIIF_SERVER})
    mock_http_client = MagicMock()
    if side_effect is not None:
        mock_http_client.request.side_effect = side_effect
    elif len(responses) == 1:
        mock_http_client.request.return_value = responses[0]
    else:
        mock_http_client.request.side_effect = list(responses)
    client._client = mock_http_client
    return client


@pytest.fixture
def sample_export_data(tmp_path):
    """Export with a book node, two page media, a term and a transcript.

    This matches the structure written by the content export with node 1
    as the object described by the manifest.
    """
    return {
        "version": "1.0",
        "file_roots": {"public": str(tmp_path / "files")},
        "view_fields": [
            {"name": "title", "label": "Title", "formatter": "string"},
            {"name": "field_media_image", "label": "Image", "formatter": "image"},
            {"name": "field_media_file", "label": "File", "formatter": "file_default"},
        ],
        "entities": [
            {
                "entity_type": "node",
                "id": "1",
                "bundle": "islandora_object",
                "label": "Letter to the Editor",
                "fields": {
                    "field_creator": [{"value": "Jane Doe"}],
                    "field_digital_library": [
                        {"target_id": "7", "target_type": "taxonomy_term"}
                    ],
                },
            },
            {
                "entity_type": "taxonomy_term",
                "id": "7",
                "bundle": "library",
                "label": "Special Collections",
                "fields": {"name": [{"value": "Special Collections"}]},
            },
            {
                "entity_type": "media",
                "id": "10",
                "bundle": "image",
                "label": "Page 1",
                "fields": {
                    "field_media_of": [{"target_id": "1", "target_type": "node"}]
                },
                "files": {
                    "field_media_image": [
                        {
                            "url": "https://repo.example.org/files/page1.jpg",
                            "uri": "public://page1.jpg",
                            "mime_type": "image/jpeg",
                            "width": 1000,
                            "height": 1500,
                        }
                    ]
                },
            },
            {
                "entity_type": "media",
                "id": "11",
                "bundle": "file",
                "label": "Page 2",
                "fields": {
                    "field_media_of": [{"target_id": "1", "target_type": "node"}]
                },
                "files": {
                    "field_media_file": [
                        {
                            "url": "https://repo.example.org/files/page2.tif",
                            "uri": "public://page2.tif",
                            "mime_type": "image/tiff",
                        }
                    ]
                },
            },
            {
                "entity_type": "media",
                "id": "12",
                "bundle": "extracted_text",
                "label": "OCR",
                "fields": {
                    "field_media_of": [{"target_id": "1", "target_type": "node"}],
                    "field_edited_text": [{"value": "Dear Sir, ..."}],
                },
            },
        ],
        "rows": [
            {"entity_type": "media", "id": "10"},
            {"entity_type": "media", "id": "11"},
        ],
    }


@pytest.fixture
def sample_export(sample_export_data):
    """Validated ContentExport for the sample data."""
    return ContentExport.model_validate(sample_export_data)


@pytest.fixture
def repository(sample_export):
    """ExportRepository over the sample export."""
    return ExportRepository(sample_export)


@pytest.fixture
def settings():
    """Settings with an image server and both media file fields."""
    return ManifestSettings(
        iiif_server=IIIF_SERVER,
        tile_fields=["field_media_image", "field_media_file"],
    )


@pytest.fixture
def sample_export_file(tmp_path, sample_export_data):
    """Write the sample export to disk."""
    export_path = tmp_path / "export.json"
    export_path.write_text(json.dumps(sample_export_data, indent=2))
    return export_path
