"""HEIF decoding and EXIF extraction, backed by pyheif."""

import logging
import struct

import pyheif
from PIL import Image

from heic2jpg.errors import NoExifError

logger = logging.getLogger(__name__)

EXIF_HEADER = b"Exif\x00\x00"
TIFF_HEADERS = (b"MM\x00\x2a", b"II\x2a\x00")


def _normalize_exif(data):
    """
    Returns the EXIF block in the form an APP1 segment expects.

    HEIF prefixes the payload with a 4-byte offset to the TIFF header, while a
    JPEG APP1 segment must start with ``Exif\\0\\0`` followed by the TIFF
    header. Depending on the libheif version the offset may already be gone.
    """
    if data.startswith(EXIF_HEADER):
        return data
    if data.startswith(TIFF_HEADERS):
        return EXIF_HEADER + data
    if len(data) >= 4:
        (offset,) = struct.unpack(">I", data[:4])
        payload = data[4:]
        if payload.startswith(EXIF_HEADER):
            return payload
        if payload[offset:].startswith(TIFF_HEADERS):
            return EXIF_HEADER + payload[offset:]
    # Unknown layout, hand it over untouched.
    return data


def extract_exif(fp):
    """
    Extracts the raw EXIF block of a HEIF container without decoding pixels.

    Args:
        fp: Readable, seekable binary file object.

    Returns:
        bytes: The EXIF payload, starting with ``Exif\\0\\0``.

    Raises:
        NoExifError: If the container carries no EXIF metadata block.
    """
    fp.seek(0)
    heif_file = pyheif.open(fp)
    for metadata in heif_file.metadata or []:
        if metadata["type"] == "Exif":
            return _normalize_exif(bytes(metadata["data"]))
    raise NoExifError("no exif metadata block")


def decode(fp):
    """Decodes the primary image of a HEIF container into a Pillow image."""
    fp.seek(0)
    heif_file = pyheif.read(fp)
    logger.debug(f"Decoded {heif_file.size[0]}x{heif_file.size[1]} {heif_file.mode} image")
    return Image.frombytes(
        heif_file.mode,
        heif_file.size,
        heif_file.data,
        "raw",
        heif_file.mode,
        heif_file.stride,
    )
