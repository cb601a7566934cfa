"""Pytest fixtures shared across the suite."""

import pytest

from tests.helpers import FakeDecoder, make_exif, make_image


@pytest.fixture
def exif():
    return make_exif()


@pytest.fixture
def image():
    return make_image()


@pytest.fixture
def decoder(exif, image):
    return FakeDecoder(exif=exif, image=image)
