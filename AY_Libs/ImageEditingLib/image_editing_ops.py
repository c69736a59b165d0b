"""
Core image resource operations for Ayra.

This module turns user files and backend payloads into ImageResources, encodes
rasters, names new resources and exports the current image to disk.

Classes:
    ResourceNamer: Produces unique, timestamped resource names within a session

Functions:
    guess_mime_type: Map a file name to a supported image MIME type
    mime_type_for_format: MIME type produced by a Pillow output format
    resource_from_bytes: Wrap an uploaded payload as an ImageResource
    resource_from_file: Read a file from disk as an ImageResource
    data_url_to_resource: Decode a base64 data URL into an ImageResource
    encode_image: Encode a PIL image losslessly into bytes
    save_resource: Write a resource to an output directory
"""

import base64
import binascii
import re
import time
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Optional

from AY_Libs.constants import (
    DEFAULT_MIME_TYPE,
    DEFAULT_OUTPUT_FORMAT,
    DOWNLOAD_PREFIX,
    RESOURCE_NAME_EXTENSION,
    SUPPORTED_IMAGE_TYPES,
)
from AY_Libs.errors import EmptyPayload, InvalidDataUrl
from AY_Libs.ImageEditingLib.image_models import ImageResource

DATA_URL_HEADER_PATTERN = re.compile(r":(.*?);")


class ResourceNamer:
    """
    Names resources as '<prefix>-<milliseconds>.png'.

    The millisecond stamp comes from the wall clock but never repeats or goes
    backwards within one namer, so two resources created in the same
    millisecond still get distinct names.

    Example:
        >>> namer = ResourceNamer(clock=lambda: 1700000000.0)
        >>> namer.next_name("cropped")
        'cropped-1700000000000.png'
        >>> namer.next_name("cropped")
        'cropped-1700000000001.png'
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last_stamp = -1

    def next_stamp(self) -> int:
        stamp = int(self._clock() * 1000)
        if stamp <= self._last_stamp:
            stamp = self._last_stamp + 1
        self._last_stamp = stamp
        return stamp

    def next_name(self, prefix: str) -> str:
        return f"{prefix}-{self.next_stamp()}{RESOURCE_NAME_EXTENSION}"


def guess_mime_type(name: str) -> str:
    """
    Map a file name to an image MIME type.

    Args:
        name: File name or path

    Returns:
        The MIME type for a known image suffix, otherwise the default PNG type
    """
    return SUPPORTED_IMAGE_TYPES.get(Path(name).suffix.lower(), DEFAULT_MIME_TYPE)


def mime_type_for_format(save_format: str) -> str:
    """MIME type of images encoded with a Pillow format name ('PNG' -> 'image/png')."""
    return f"image/{save_format.lower()}"


def resource_from_bytes(data: bytes, name: str, mime_type: Optional[str] = None) -> ImageResource:
    """
    Wrap an uploaded payload as an ImageResource.

    Intake performs no validation beyond requiring a non-empty payload.

    Args:
        data: Raw file bytes
        name: Display name of the file
        mime_type: Content type; guessed from the name when omitted

    Returns:
        A new ImageResource

    Raises:
        EmptyPayload: If data is empty
    """
    if not data:
        raise EmptyPayload(f"The file '{name}' is empty.")
    return ImageResource(data=bytes(data), mime_type=mime_type or guess_mime_type(name), name=name)


def resource_from_file(path: Path) -> ImageResource:
    path = Path(path)
    return resource_from_bytes(path.read_bytes(), path.name)


def data_url_to_resource(data_url: str, name: str) -> ImageResource:
    """
    Decode a 'data:<mime>;base64,<payload>' URL into an ImageResource.

    Args:
        data_url: The data URL returned by the edit backend
        name: Name for the new resource

    Returns:
        A new ImageResource carrying the decoded bytes

    Raises:
        InvalidDataUrl: If the URL has no payload, no MIME type or bad base64
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        raise InvalidDataUrl("Invalid data URL")

    mime_match = DATA_URL_HEADER_PATTERN.search(header)
    if not mime_match or not mime_match.group(1):
        raise InvalidDataUrl("Could not parse MIME type from data URL")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataUrl(f"Could not decode data URL payload: {e}")

    if not data:
        raise InvalidDataUrl("Data URL payload is empty")

    return ImageResource(data=data, mime_type=mime_match.group(1), name=name)


def encode_image(image: Any, save_format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """Encode a PIL image into bytes (PNG by default)."""
    buffer = BytesIO()
    image.save(buffer, format=save_format)
    return buffer.getvalue()


def save_resource(resource: ImageResource, output_dir: Path, prefix: str = DOWNLOAD_PREFIX) -> Path:
    """
    Save a resource's bytes to disk, untouched.

    The file is named with the prefix added to the resource name.

    Args:
        resource: The ImageResource to save
        output_dir: Directory path where the file should be written
        prefix: File name prefix (default 'edited-')

    Returns:
        Path of the written file

    Raises:
        OSError: If directory cannot be accessed or file cannot be written
    """
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    save_path = output_dir / f"{prefix}{Path(resource.name).name}"
    save_path.write_bytes(resource.data)
    return save_path
