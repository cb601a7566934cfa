"""Test helpers: a decoder double standing in for pyheif, and sample data."""

import io
import struct

import numpy as np
from PIL import Image

from heic2jpg.errors import NoExifError

BROKEN = b"broken"


def make_exif():
    """Builds a 40-byte EXIF block holding one IFD0 entry, Make='Camera!'."""
    tiff = b"MM\x00\x2a" + struct.pack(">I", 8)
    ifd = struct.pack(">H", 1) + struct.pack(">HHII", 0x010F, 2, 8, 26) + struct.pack(">I", 0)
    return b"Exif\x00\x00" + tiff + ifd + b"Camera!\x00"


def make_image(size=(4, 4), seed=0):
    width, height = size
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


def plain_jpeg(image, **options):
    buffer = io.BytesIO()
    image.save(buffer, "JPEG", **options)
    return buffer.getvalue()


class FakeDecoder:
    """
    Decoder test double.

    Any source whose content starts with ``BROKEN`` fails to decode. Calls are
    recorded so tests can check the handle is read from the start each time.
    """

    def __init__(self, exif=None, image=None, exif_error=None):
        self.exif = exif
        self.image = image if image is not None else make_image()
        self.exif_error = exif_error
        self.calls = []

    def extract_exif(self, fp):
        fp.seek(0)
        self.calls.append(("extract_exif", fp.tell()))
        if self.exif_error is not None:
            raise self.exif_error
        if self.exif is None:
            raise NoExifError("no exif metadata block")
        return self.exif

    def decode(self, fp):
        fp.seek(0)
        self.calls.append(("decode", fp.tell()))
        if fp.read().startswith(BROKEN):
            raise ValueError("not a HEIF container")
        return self.image
