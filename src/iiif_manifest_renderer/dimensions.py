"""Image dimension resolution.

Canvases need the intrinsic width and height of the image they display. The
dimensions are looked up from the cheapest reliable source available:

1. The image server's info endpoint (remote probe)
2. The width/height stored on the attachment by the CMS
3. A local header read, for TIFFs only
4. (0, 0) when nothing worked

Failures at any tier are logged and fall through to the next one; dimension
resolution never raises.
"""

import logging
from pathlib import Path
from typing import Any

from PIL import Image, TiffImagePlugin, UnidentifiedImageError

from iiif_manifest_renderer.clients import ImageInfoClient, ProbeOk
from iiif_manifest_renderer.entities import Attachment, FileLocator

logger = logging.getLogger(__name__)

TIFF_MIME_TYPE = "image/tiff"

Dimensions = tuple[int, int]


def as_dimension(value: Any) -> int:
    """Coerce a stored width/height to a non-negative int, 0 if unusable."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


class LocalImageInspector:
    """Reads image dimensions from local files.

    Pillow only parses the image header on open, so this is cheap even for
    very large TIFFs. Images over Pillow's decompression-bomb limit are
    still measured; nothing is decoded here.
    """

    def read_size(self, path: Path) -> Dimensions | None:
        """Return (width, height) of the image at ``path``, or None.

        Args:
            path: Local filesystem path of the image

        Returns:
            The dimensions, or None if the file is missing or not an image
        """
        try:
            with Image.open(path) as img:
                width, height = img.size
        except FileNotFoundError:
            logger.warning(f"Local image not found: {path}")
            return None
        except Image.DecompressionBombError:
            return self._read_large_tiff(path)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not read image header from {path}: {e}")
            return None

        return int(width), int(height)

    def _read_large_tiff(self, path: Path) -> Dimensions | None:
        """Read the header of a TIFF that Image.open refuses as too large."""
        try:
            with TiffImagePlugin.TiffImageFile(str(path)) as img:
                width, height = img.size
        except (SyntaxError, OSError) as e:
            logger.warning(f"Could not read image header from {path}: {e}")
            return None

        logger.debug(f"Read oversized image header from {path}: {width}x{height}")
        return int(width), int(height)


class DimensionResolver:
    """Resolve an attachment's width and height through the tiers above.

    Example:
        with ImageInfoClient({"base_url": iiif_server}) as client:
            resolver = DimensionResolver(client, file_locator)
            width, height = resolver.resolve(attachment)
    """

    def __init__(
        self,
        info_client: ImageInfoClient | None,
        file_locator: FileLocator | None = None,
        inspector: LocalImageInspector | None = None,
    ):
        """Initialize the resolver.

        Args:
            info_client: Client for the image server, or None to skip probing
            file_locator: Maps attachment URIs to local paths for TIFF reads
            inspector: Local header reader (default: LocalImageInspector)
        """
        self.info_client = info_client
        self.file_locator = file_locator
        self.inspector = inspector or LocalImageInspector()

    def resolve(self, attachment: Attachment) -> Dimensions:
        """Return (width, height) for an attachment; (0, 0) when unknown."""
        probed = self._probe(attachment)
        if probed is not None:
            return probed

        width = as_dimension(attachment.properties.get("width"))
        height = as_dimension(attachment.properties.get("height"))

        if (not width or not height) and attachment.mime_type == TIFF_MIME_TYPE:
            local = self._read_local(attachment)
            if local is not None:
                width, height = local

        if not width or not height:
            logger.debug(
                f"Incomplete dimensions for {attachment.file_url}: {width}x{height}"
            )
        return width, height

    def _probe(self, attachment: Attachment) -> Dimensions | None:
        if self.info_client is None:
            return None

        result = self.info_client.probe(attachment.file_url)
        if isinstance(result, ProbeOk) and result.width and result.height:
            return result.width, result.height

        return None

    def _read_local(self, attachment: Attachment) -> Dimensions | None:
        if self.file_locator is None or not attachment.uri:
            return None

        path = self.file_locator.realpath(attachment.uri)
        if path is None:
            logger.debug(f"No local path for {attachment.uri}")
            return None

        return self.inspector.read_size(path)
