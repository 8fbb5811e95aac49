"""Network clients for external data sources."""

from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    NotFoundError,
    ValidationError,
)
from .image_info_client import ImageInfoClient, ProbeFailed, ProbeOk, ProbeResult

__all__ = [
    "Client",
    "ImageInfoClient",
    "ProbeResult",
    "ProbeOk",
    "ProbeFailed",
    "ClientError",
    "ConnectionError",
    "APIError",
    "NotFoundError",
    "ValidationError",
]
