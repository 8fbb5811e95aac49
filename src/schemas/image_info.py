"""IIIF Image API info.json schema.

Image servers answer the info request with a large JSON document (tiles,
sizes, profiles, services). Only the intrinsic dimensions are needed to lay
out a canvas, everything else is kept as extra data.
"""

from pydantic import BaseModel, NonNegativeInt


class ImageInfo(BaseModel):
    """Response of an image server's info endpoint.

    Attributes:
        width: Full-size image width in pixels
        height: Full-size image height in pixels
    """

    width: NonNegativeInt
    height: NonNegativeInt

    model_config = {"extra": "allow"}
