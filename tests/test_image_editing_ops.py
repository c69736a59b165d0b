"""
Unit tests for image_editing_ops module.

Tests resource intake, data URL decoding, resource naming and saving
images to disk.
"""

import base64
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from AY_Libs.errors import EmptyPayload, InvalidDataUrl
from AY_Libs.ImageEditingLib.image_editing_ops import (
    ResourceNamer,
    data_url_to_resource,
    encode_image,
    guess_mime_type,
    mime_type_for_format,
    resource_from_bytes,
    resource_from_file,
    save_resource,
)
from AY_Libs.ImageEditingLib.image_models import ImageResource, describe_resource


class TestResourceNamer:
    """Tests for ResourceNamer."""

    def test_name_format(self):
        """Should build '<prefix>-<ms>.png' from the clock."""
        namer = ResourceNamer(clock=lambda: 1712345678.5)

        assert namer.next_name("edited") == "edited-1712345678500.png"

    def test_same_millisecond_still_unique(self):
        namer = ResourceNamer(clock=lambda: 5.0)

        names = [namer.next_name("cropped") for _ in range(5)]

        assert len(set(names)) == 5

    def test_clock_going_backwards(self):
        """Stamps never decrease even if the wall clock does."""
        times = iter([10.0, 9.0, 11.0])
        namer = ResourceNamer(clock=lambda: next(times))

        stamps = [namer.next_stamp() for _ in range(3)]

        assert stamps == [10000, 10001, 11000]


class TestIntake:
    """Tests for wrapping uploads."""

    def test_resource_from_bytes(self, png_bytes):
        data = png_bytes()

        resource = resource_from_bytes(data, "portrait.png")

        assert resource.data == data
        assert resource.name == "portrait.png"
        assert resource.mime_type == "image/png"

    def test_mime_type_guessed_from_suffix(self):
        assert resource_from_bytes(b"x", "me.JPG").mime_type == "image/jpeg"
        assert guess_mime_type("scan.webp") == "image/webp"
        assert guess_mime_type("noext") == "image/png"

    def test_mime_type_for_output_format(self):
        assert mime_type_for_format("PNG") == "image/png"
        assert mime_type_for_format("WEBP") == "image/webp"

    def test_explicit_mime_type_wins(self):
        resource = resource_from_bytes(b"x", "me.png", mime_type="image/heic")

        assert resource.mime_type == "image/heic"

    def test_no_content_validation(self):
        """Intake accepts any non-empty payload."""
        resource = resource_from_bytes(b"not really an image", "notes.png")

        assert resource.size_bytes == 19

    def test_empty_payload(self):
        with pytest.raises(EmptyPayload, match="empty.png"):
            resource_from_bytes(b"", "empty.png")

    def test_resource_from_file(self, png_bytes):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "holiday.jpeg"
            path.write_bytes(png_bytes())

            resource = resource_from_file(path)

        assert resource.name == "holiday.jpeg"
        assert resource.mime_type == "image/jpeg"

    def test_resources_compare_by_identity(self):
        a = resource_from_bytes(b"same", "a.png")
        b = resource_from_bytes(b"same", "a.png")

        assert a != b
        assert len({a, b}) == 2

    def test_describe_resource(self):
        assert describe_resource(None) == "<none>"
        assert describe_resource(ImageResource(data=b"abc", name="x.png")) == "x.png (3 bytes)"


class TestDataUrlToResource:
    """Tests for decoding backend data URLs."""

    def test_decodes_payload_and_mime(self, png_bytes):
        data = png_bytes()
        url = "data:image/webp;base64," + base64.b64encode(data).decode("ascii")

        resource = data_url_to_resource(url, "edited-1.png")

        assert resource.data == data
        assert resource.mime_type == "image/webp"
        assert resource.name == "edited-1.png"

    def test_missing_comma(self):
        with pytest.raises(InvalidDataUrl, match="Invalid data URL"):
            data_url_to_resource("data:image/png;base64", "x.png")

    def test_missing_mime(self):
        with pytest.raises(InvalidDataUrl, match="Could not parse MIME type"):
            data_url_to_resource("data:base64,AAAA", "x.png")

    def test_bad_base64(self):
        with pytest.raises(InvalidDataUrl):
            data_url_to_resource("data:image/png;base64,@@@@", "x.png")

    def test_empty_payload(self):
        with pytest.raises(InvalidDataUrl, match="empty"):
            data_url_to_resource("data:image/png;base64,", "x.png")


class TestEncodeImage:
    def test_encodes_with_format(self):
        mock_image = Mock()

        encode_image(mock_image, "PNG")

        _, kwargs = mock_image.save.call_args
        assert kwargs["format"] == "PNG"


class TestSaveResource:
    """Tests for save_resource function."""

    def test_writes_bytes_untouched(self):
        resource = ImageResource(data=b"\x89PNG-bytes", name="cropped-1.png")

        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_resource(resource, Path(tmpdir))

            assert path.name == "edited-cropped-1.png"
            assert path.read_bytes() == b"\x89PNG-bytes"

    def test_custom_prefix(self):
        resource = ImageResource(data=b"x", name="photo.png")

        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_resource(resource, Path(tmpdir), prefix="final-")

            assert path.name == "final-photo.png"

    def test_raises_error_for_nonexistent_directory(self):
        resource = ImageResource(data=b"x")

        with pytest.raises(OSError, match="Output directory does not exist"):
            save_resource(resource, Path("/nonexistent/directory/path"))

    def test_raises_error_when_path_is_file(self):
        resource = ImageResource(data=b"x")

        with tempfile.NamedTemporaryFile() as tmp:
            with pytest.raises(OSError, match="not a directory"):
                save_resource(resource, Path(tmp.name))
