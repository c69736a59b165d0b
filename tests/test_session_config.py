"""
Tests for SessionConfig and the edit backend boundary.
"""

import base64
import unittest

from AY_Libs.errors import BackendFailure, InvalidDataUrl
from AY_Libs.ImageEditingLib.image_models import ImageResource
from AY_Libs.SessionLib.edit_backend import coerce_result, identify_mime_type
from AY_Libs.SessionLib.session_config import SessionConfig

from conftest import make_png_bytes


class TestSessionConfig(unittest.TestCase):
    """Test configuration defaults and serialization."""

    def test_defaults(self):
        config = SessionConfig()

        self.assertTrue(config.face_protected_default)
        self.assertEqual(config.output_format, "PNG")
        self.assertEqual(config.download_prefix, "edited-")
        self.assertEqual(config.default_pixel_ratio, 1.0)
        self.assertFalse(config.library_is_bounded)

    def test_round_trip(self):
        config = SessionConfig(face_protected_default=False, max_library_size=3)

        restored = SessionConfig.from_dict(config.to_dict())

        self.assertEqual(restored, config)

    def test_from_dict_ignores_unknown_keys(self):
        config = SessionConfig.from_dict({"download_prefix": "final-", "theme": "dark"})

        self.assertEqual(config.download_prefix, "final-")

    def test_output_mime_type(self):
        self.assertEqual(SessionConfig().output_mime_type, "image/png")
        self.assertEqual(SessionConfig(output_format="WEBP").output_mime_type, "image/webp")

    def test_bounded_library(self):
        self.assertTrue(SessionConfig(max_library_size=5).library_is_bounded)


class TestCoerceResult(unittest.TestCase):
    """Test normalization of backend results."""

    def setUp(self):
        self.png = make_png_bytes(size=(8, 8))

    def test_bytes(self):
        resource = coerce_result(self.png, "edited-1.png")

        self.assertEqual(resource.data, self.png)
        self.assertEqual(resource.mime_type, "image/png")
        self.assertEqual(resource.name, "edited-1.png")

    def test_resource_is_rewrapped(self):
        returned = ImageResource(data=self.png, name="backend-name.png")

        resource = coerce_result(returned, "filtered-2.png")

        self.assertIsNot(resource, returned)
        self.assertEqual(resource.name, "filtered-2.png")

    def test_data_url(self):
        url = "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")

        resource = coerce_result(url, "adjusted-3.png")

        self.assertEqual(resource.data, self.png)

    def test_malformed_data_url(self):
        with self.assertRaises(InvalidDataUrl):
            coerce_result("not a data url", "x.png")

    def test_none(self):
        with self.assertRaises(BackendFailure):
            coerce_result(None, "x.png")

    def test_unsupported_type(self):
        with self.assertRaises(BackendFailure):
            coerce_result(42, "x.png")

    def test_empty_bytes(self):
        with self.assertRaises(BackendFailure):
            coerce_result(b"", "x.png")

    def test_not_an_image(self):
        with self.assertRaises(BackendFailure):
            identify_mime_type(b"plain text")


if __name__ == "__main__":
    unittest.main()
