"""Exception hierarchy for heic2jpg.

Every failure carries a ``stage`` tag naming the step that failed and, when
one exists, the path being processed. The underlying library error is chained
through ``__cause__``.
"""


class Heic2JpgError(Exception):
    """Base exception for all conversion failures."""

    stage = "convert"

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path

    def __str__(self):
        message = super().__str__()
        if self.path is not None:
            message = f"{message}, path: {self.path}"
        if self.__cause__ is not None:
            message = f"{message}: {self.__cause__}"
        return message


class StatError(Heic2JpgError):
    stage = "stat"


class OpenError(Heic2JpgError):
    stage = "open"


class ExifExtractError(Heic2JpgError):
    stage = "exif"


class DecodeError(Heic2JpgError):
    stage = "decode"


class EncodeError(Heic2JpgError):
    stage = "encode"


class ExifTooLargeError(EncodeError):
    """The EXIF blob does not fit in a single APP1 segment."""


class WalkError(Heic2JpgError):
    stage = "walk"


class NoExifError(Exception):
    """The container holds no EXIF block.

    Not a failure: conversion proceeds without an APP1 segment.
    """
