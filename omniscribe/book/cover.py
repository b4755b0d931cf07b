"""
Cover image decoding.

The cover is produced by a separate generation step and stored on the
project as a data URL (``data:image/png;base64,...``) or bare base64.
Exporters that can show it call ``decode_cover_image``; a missing or
broken cover never fails an export.
"""

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image as PILImage, UnidentifiedImageError

logger = logging.getLogger(__name__)

# PIL format name -> (media type, file extension)
SUPPORTED_FORMATS = {
    "PNG": ("image/png", "png"),
    "JPEG": ("image/jpeg", "jpg"),
    "GIF": ("image/gif", "gif"),
}


@dataclass
class CoverImage:
    """Decoded cover image bytes plus what the packagers need to embed it."""
    data: bytes
    media_type: str
    extension: str
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        """Height divided by width."""
        return self.height / self.width if self.width else 1.0

    def stream(self) -> io.BytesIO:
        return io.BytesIO(self.data)


def decode_cover_image(payload: Optional[str]) -> Optional[CoverImage]:
    """
    Decode a cover payload.

    Returns None (after logging) when there is no cover, when the payload
    is not base64 or when the image is not PNG, JPEG or GIF.
    """
    if not payload:
        return None

    encoded = payload
    if encoded.startswith("data:"):
        # Extract base64 part from data URI
        encoded = encoded.split(",", 1)[1] if "," in encoded else ""

    try:
        image_data = base64.b64decode(encoded, validate=False)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Cover image is not valid base64, skipping: {e}")
        return None

    try:
        with PILImage.open(io.BytesIO(image_data)) as pil_image:
            fmt = pil_image.format
            width, height = pil_image.size
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Cover image could not be read, skipping: {e}")
        return None

    if fmt not in SUPPORTED_FORMATS:
        logger.warning(f"Cover image format {fmt} is not supported, skipping")
        return None

    media_type, extension = SUPPORTED_FORMATS[fmt]
    return CoverImage(
        data=image_data,
        media_type=media_type,
        extension=extension,
        width=width,
        height=height,
    )
