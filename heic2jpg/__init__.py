"""Convert HEIC images to JPEG while preserving EXIF metadata."""

from heic2jpg.convert import convert, convert_file, target_path
from heic2jpg.errors import (
    DecodeError,
    EncodeError,
    ExifExtractError,
    ExifTooLargeError,
    Heic2JpgError,
    NoExifError,
    OpenError,
    StatError,
    WalkError,
)
from heic2jpg.writer import SkipWriter, exif_writer

__version__ = "0.1.0"
