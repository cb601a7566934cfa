"""JPEG header splicing.

A generic JPEG encoder always starts its stream with the SOI marker. To place
an APP1 (EXIF) segment right after SOI we write our own SOI and APP1 first,
then hand the encoder a writer that swallows its SOI.
"""

import io
import logging
import struct

from heic2jpg.errors import ExifTooLargeError

logger = logging.getLogger(__name__)

SOI = b"\xFF\xD8"
APP1 = b"\xFF\xE1"

# The APP1 length field is 16 bits and counts itself.
MAX_EXIF_SIZE = 0xFFFF - 2


class SkipWriter(io.RawIOBase):
    """Forwards writes to ``sink`` after dropping the first ``skip`` bytes.

    The skipped prefix may span any number of ``write`` calls. Every call
    reports the full length as accepted, so callers never see a short write
    while the prefix is being discarded.
    """

    def __init__(self, sink, skip):
        super().__init__()
        self.sink = sink
        self.skip = skip

    def writable(self):
        return True

    def write(self, data):
        if self.skip <= 0:
            return self.sink.write(data)

        data = memoryview(data).cast("B")
        if len(data) < self.skip:
            self.skip -= len(data)
            return len(data)

        written = self.sink.write(data[self.skip:])
        if written is None:
            # Non-blocking raw sinks return None when nothing was accepted.
            return None
        written += self.skip
        self.skip = 0
        return written

    def flush(self):
        super().flush()
        # The sink may already be closed when this wrapper is collected.
        if hasattr(self.sink, "flush") and not getattr(self.sink, "closed", False):
            self.sink.flush()


def app1_segment(exif):
    """Builds the APP1 marker, length field and payload for an EXIF blob.

    Args:
        exif (bytes): Raw EXIF payload, passed through unchanged.

    Returns:
        bytes: ``FF E1``, big-endian ``len(exif) + 2``, then ``exif``.

    Raises:
        ExifTooLargeError: If the payload does not fit the 16-bit length.
    """
    if len(exif) > MAX_EXIF_SIZE:
        raise ExifTooLargeError(
            f"exif payload is {len(exif)} bytes, limit is {MAX_EXIF_SIZE}"
        )
    return APP1 + struct.pack(">H", len(exif) + 2) + bytes(exif)


def exif_writer(sink, exif=None):
    """Writes SOI (and APP1 when ``exif`` is non-empty) straight to ``sink``.

    Returns a :class:`SkipWriter` that drops the encoder's own SOI, so the
    rest of the encoded stream lands directly after the spliced header.
    """
    header = SOI
    if exif:
        header += app1_segment(exif)
        logger.debug(f"Splicing {len(exif)} bytes of EXIF")
    sink.write(header)
    return SkipWriter(sink, len(SOI))
