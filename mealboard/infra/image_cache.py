"""Data-URL decoding and the per-render image cache."""
import base64
import binascii
import io
import logging
import re
from typing import Dict, NamedTuple, Optional

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from mealboard.utilities.errors import AssetDecodeError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('PNG', 'JPEG')
_MIME_PATTERN = re.compile(r'^data:(.*?);', re.IGNORECASE)


class DataUrlPayload(NamedTuple):
    data: bytes
    mime_type: str


class DecodedImage(NamedTuple):
    reader: ImageReader
    width: int
    height: int
    format: str


def data_url_to_bytes(data_url: str) -> Optional[DataUrlPayload]:
    """Bytes of a base64 data URL; None when the string is not one."""
    if not data_url or not isinstance(data_url, str):
        return None
    meta, sep, body = data_url.partition(',')
    if not sep or ';base64' not in meta.lower():
        return None
    try:
        data = base64.b64decode(body.strip())
    except (binascii.Error, ValueError) as e:
        raise AssetDecodeError(f"Image payload is not valid base64: {e}") from e
    match = _MIME_PATTERN.match(meta + ';')
    return DataUrlPayload(data, match.group(1) if match else 'application/octet-stream')


def decode_image(data: bytes, mime_type: str = '') -> DecodedImage:
    """Open PNG/JPEG bytes with Pillow and wrap them for ReportLab."""
    if not data:
        raise AssetDecodeError("Image payload is empty", mime_type)
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise AssetDecodeError(f"Unable to decode image ({mime_type or 'unknown type'}): {e}", mime_type) from e
    if image.format not in SUPPORTED_FORMATS:
        raise AssetDecodeError(f"Unsupported image format {image.format!r}; expected PNG or JPEG", mime_type)
    width, height = image.size
    return DecodedImage(ImageReader(image), width, height, image.format)


class ImageCache:
    """Decoded images for one render, keyed by the encoded payload string.

    A payload used by several cards is decoded once. Create a fresh cache per
    render; instances are not shared between calls.
    """

    def __init__(self):
        self._entries: Dict[str, Optional[DecodedImage]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self._entries)

    def __contains__(self, payload: str):
        return payload in self._entries

    def get(self, payload: str) -> Optional[DecodedImage]:
        """Decoded image, or None when the payload is not a base64 data URL.

        Raises AssetDecodeError when the bytes are not a supported raster.
        """
        if payload in self._entries:
            self.hits += 1
            logger.debug("Image cache hit (%d bytes of payload)", len(payload))
            return self._entries[payload]
        self.misses += 1
        decoded_url = data_url_to_bytes(payload)
        entry = decode_image(decoded_url.data, decoded_url.mime_type) if decoded_url else None
        if entry is None:
            logger.debug("Image payload is not a base64 data URL; using placeholder")
        else:
            logger.debug("Decoded %s image %dx%d", entry.format, entry.width, entry.height)
        self._entries[payload] = entry
        return entry


__all__ = ['DataUrlPayload', 'DecodedImage', 'ImageCache', 'data_url_to_bytes', 'decode_image']
