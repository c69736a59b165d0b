"""
Pytest configuration and shared fixtures for Ayra tests.

This module provides shared test fixtures used across multiple test modules:
encoded test images, resource factories and a scriptable fake edit backend.
"""

from io import BytesIO

import pytest
from PIL import Image

from AY_Libs.ImageEditingLib.image_models import ImageResource


def make_png_bytes(size=(40, 20), color=(200, 100, 50, 255), mode="RGBA"):
    """Encode a solid-color image as PNG bytes."""
    image = Image.new(mode, size, color)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def make_resource(name="photo.png", size=(40, 20), color=(200, 100, 50, 255)):
    return ImageResource(data=make_png_bytes(size, color), mime_type="image/png", name=name)


class FakeBackend:
    """
    Stand-in for the generative edit backend.

    Records every call and answers with a fresh PNG (or whatever `result`
    is set to). Set `fail_with` to an exception to make calls fail.
    """

    def __init__(self):
        self.calls = []
        self.result = None
        self.fail_with = None

    def _answer(self, method, image, instruction):
        self.calls.append((method, image, instruction))
        if self.fail_with is not None:
            raise self.fail_with
        if self.result is not None:
            return self.result
        return make_png_bytes(size=(32, 32), color=(10, 20, 30, 255))

    def edit_image(self, image, instruction):
        return self._answer("edit_image", image, instruction)

    def filter_image(self, image, prompt):
        return self._answer("filter_image", image, prompt)

    def adjust_image(self, image, prompt):
        return self._answer("adjust_image", image, prompt)

    def remove_background(self, image):
        return self._answer("remove_background", image, None)


@pytest.fixture
def png_bytes():
    """Factory fixture producing encoded PNG bytes."""
    return make_png_bytes


@pytest.fixture
def resource_factory():
    """Factory fixture producing distinct ImageResources."""
    counter = {"n": 0}

    def factory(name=None, size=(40, 20), color=(200, 100, 50, 255)):
        counter["n"] += 1
        return make_resource(name or f"photo-{counter['n']}.png", size, color)

    return factory


@pytest.fixture
def fake_backend():
    return FakeBackend()
