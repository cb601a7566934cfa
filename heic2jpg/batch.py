"""Resolves command line paths to HEIC files and converts them in order."""

import logging
import os
import stat
from dataclasses import dataclass, field

from heic2jpg import heif
from heic2jpg.convert import convert_file
from heic2jpg.errors import Heic2JpgError, StatError, WalkError

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".heic"


@dataclass
class BatchResult:
    """Source paths that were converted, and those that failed inside a directory walk."""

    converted: list = field(default_factory=list)
    failed: list = field(default_factory=list)


def iter_sources(root, suffix=SOURCE_SUFFIX):
    """
    Yields every file under ``root`` whose name ends with ``suffix``.

    The match is case-sensitive. Directories are visited depth-first in
    lexical order; a directory that cannot be listed is logged and skipped.
    """

    def on_error(e):
        err = WalkError("walk failed", e.filename)
        err.__cause__ = e
        logger.warning(str(err))

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(suffix):
                yield os.path.join(dirpath, name)


def run(paths, decoder=heif, quality=None, suffix=SOURCE_SUFFIX):
    """
    Converts every path given on the command line.

    Files are converted directly and any failure aborts the run. Directories
    are walked; a file inside them that fails to convert is logged and
    skipped.

    Returns:
        BatchResult: Converted and failed source paths.
    """
    result = BatchResult()
    for path in paths:
        try:
            st = os.stat(path)
        except OSError as e:
            raise StatError("stat failed", path) from e

        if not stat.S_ISDIR(st.st_mode):
            convert_file(path, decoder=decoder, quality=quality)
            result.converted.append(path)
            continue

        for source in iter_sources(path, suffix):
            try:
                convert_file(source, decoder=decoder, quality=quality)
            except Heic2JpgError as e:
                logger.warning(f"Conversion failed ({e.stage}): {e}")
                result.failed.append(source)
            else:
                result.converted.append(source)
    return result
