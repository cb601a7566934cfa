"""Single-file HEIC to JPEG conversion with EXIF preserved."""

import logging
import os

from heic2jpg import heif
from heic2jpg.errors import (
    DecodeError,
    EncodeError,
    ExifExtractError,
    NoExifError,
    OpenError,
)
from heic2jpg.writer import exif_writer

logger = logging.getLogger(__name__)

TARGET_EXT = "jpg"
JPEG_MODES = ("RGB", "L")


def target_path(path):
    """Returns ``path`` with everything after the last '.' of its name replaced by 'jpg'."""
    head, name = os.path.split(path)
    stem, dot, _ = name.rpartition(".")
    if not dot:
        stem = name
    return os.path.join(head, f"{stem}.{TARGET_EXT}")


def convert(source, dest, decoder=heif, quality=None):
    """
    Re-encodes one HEIF image as JPEG, carrying its EXIF block across.

    Args:
        source: Readable, seekable binary file object holding the HEIF image.
        dest: Writable binary file object receiving the JPEG stream.
        decoder: Object providing ``extract_exif(fp)`` and ``decode(fp)``.
        quality (int): JPEG quality, or None for the encoder default.

    Neither file object is closed here.
    """
    try:
        exif = decoder.extract_exif(source)
    except NoExifError:
        exif = b""
    except Exception as e:
        raise ExifExtractError("extract exif failed") from e

    try:
        image = decoder.decode(source)
    except Exception as e:
        raise DecodeError("decode failed") from e

    try:
        writer = exif_writer(dest, exif)
    except OSError as e:
        raise EncodeError("write header failed") from e

    options = {} if quality is None else {"quality": quality}
    try:
        # JPEG has no alpha channel.
        if image.mode not in JPEG_MODES:
            image = image.convert("RGB")
        image.save(writer, "JPEG", **options)
    except Exception as e:
        raise EncodeError("encode failed") from e


def convert_file(path, decoder=heif, quality=None):
    """
    Converts ``path`` to a sibling ``.jpg`` file.

    A failed conversion removes the partially written output.

    Returns:
        str: The path of the written JPEG.
    """
    out_path = target_path(path)
    if os.path.abspath(out_path) == os.path.abspath(path):
        raise OpenError("source already has the target extension", path)

    try:
        source = open(path, "rb")
    except OSError as e:
        raise OpenError("open failed", path) from e

    with source:
        try:
            dest = open(out_path, "wb")
        except OSError as e:
            raise OpenError("open failed", out_path) from e
        try:
            with dest:
                convert(source, dest, decoder=decoder, quality=quality)
        except (ExifExtractError, DecodeError, EncodeError) as e:
            e.path = path
            _remove_partial(out_path)
            raise

    logger.info(f"Converted: {path}")
    return out_path


def _remove_partial(out_path):
    try:
        os.remove(out_path)
    except OSError as e:
        logger.warning(f"Could not remove partial output {out_path}: {e}")
