"""Identify snapshot bytes with Pillow (format and size only)."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from .request import OutputFormat

# Pillow's format names for each snapshot format
_PIL_FORMATS = {
    OutputFormat.JPEG: "JPEG",
    OutputFormat.PNG: "PNG",
    OutputFormat.TIFF: "TIFF",
}


@dataclass(frozen=True)
class ImageInfo:
    format: str
    width: int
    height: int

    def matches(self, output_format: OutputFormat) -> bool:
        return self.format == _PIL_FORMATS[output_format]


def describe_image(data: bytes) -> ImageInfo:
    """Return format and dimensions of ``data``.

    Raises ValueError if Pillow cannot identify the bytes as an image.
    """

    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            return ImageInfo(format=image.format or "", width=width, height=height)
    except UnidentifiedImageError as exc:
        raise ValueError("snapshot bytes are not a recognised image") from exc
