"""IIIF Image API client for fetching image dimensions."""

import logging
from dataclasses import dataclass
from urllib.parse import quote_plus

from pydantic import ValidationError as PydanticValidationError

from schemas.image_info import ImageInfo

from .client import Client
from .exceptions import APIError, ClientError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeOk:
    """The image server reported the image's dimensions."""

    width: int
    height: int


@dataclass(frozen=True)
class ProbeFailed:
    """The image server could not be used; reason is for logging only."""

    reason: str


ProbeResult = ProbeOk | ProbeFailed


class ImageInfoClient(Client):
    """Client for an image server's info endpoint.

    The image server identifies images by their URL-encoded public file URL,
    so visiting ``{base_url}/{urlencode(file_url)}`` resolves to the image's
    info.json.

    Example:
        config = {"base_url": "https://iiif.example.org/iiif/2", "timeout": 5}
        with ImageInfoClient(config) as client:
            result = client.probe("https://example.org/files/page1.tif")
    """

    def probe_url(self, file_url: str) -> str:
        """Build the info URL for a public file URL."""
        return f"{self.base_url.rstrip('/')}/{quote_plus(file_url)}"

    def fetch(self, file_url: str) -> ImageInfo:
        """Fetch and validate the info document for an image.

        Args:
            file_url: Public URL of the image file

        Returns:
            The validated ImageInfo

        Raises:
            ValidationError: If the body is not JSON or lacks width/height
            APIError: If the server returns a non-2xx response
            ConnectionError: If the connection fails or times out
        """
        response = self.get(self.probe_url(file_url))

        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError(f"Info response for {file_url} is not JSON") from e

        try:
            return ImageInfo.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Info response for {file_url} failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e

    def probe(self, file_url: str) -> ProbeResult:
        """Ask the image server for an image's dimensions without raising.

        Args:
            file_url: Public URL of the image file

        Returns:
            ProbeOk with the dimensions, or ProbeFailed describing why not
        """
        try:
            info = self.fetch(file_url)
        except APIError as e:
            if e.is_server_error:
                reason = f"image server error: {e.message}"
            elif e.is_client_error:
                reason = f"image not available: {e.message}"
            else:
                reason = e.message
            logger.warning(f"Image info probe failed for {file_url}: {reason}")
            return ProbeFailed(reason)
        except ClientError as e:
            logger.warning(f"Image info probe failed for {file_url}: {e.message}")
            return ProbeFailed(e.message)

        return ProbeOk(width=info.width, height=info.height)
