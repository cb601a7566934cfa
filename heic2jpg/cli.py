"""Command line entry point: ``heic2jpg PATH [PATH ...]``."""

import argparse
import logging

from heic2jpg.batch import run
from heic2jpg.errors import Heic2JpgError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def quality_type(value):
    quality = int(value)
    if not 1 <= quality <= 95:
        raise argparse.ArgumentTypeError(f"quality must be between 1 and 95, got {quality}")
    return quality


def build_parser():
    parser = argparse.ArgumentParser(
        prog="heic2jpg",
        description="Convert HEIC images to JPEG, keeping their EXIF metadata.",
    )
    parser.add_argument("paths", nargs="+", help="HEIC files or directories to convert recursively.")
    parser.add_argument("-q", "--quality", type=quality_type, default=None,
                        help="JPEG quality (1-95). Defaults to the encoder's own setting.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        result = run(args.paths, quality=args.quality)
    except Heic2JpgError as e:
        logger.error(str(e))
        return 1

    logger.debug(f"{len(result.converted)} converted, {len(result.failed)} failed")
    return 0
