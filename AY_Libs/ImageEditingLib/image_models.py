"""
Image editing data models for Ayra.

This module defines the core data structures shared by the history ledger,
the display handle manager and the crop compositor.

Classes:
    ImageResource: Immutable named binary blob holding one version of the photo
    CropSelection: Display-space crop rectangle plus the scale metadata needed to map it
    CropPlan: Source-space rectangle and output raster size derived from a selection
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from AY_Libs.constants import DEFAULT_MIME_TYPE
from AY_Libs.pillow_compat import Image

# (left, upper, right, lower) in source pixels
SourceBox = Tuple[float, float, float, float]


@dataclass(frozen=True, eq=False)
class ImageResource:
    """One immutable version of the photo.

    Equality and hashing are by identity: two resources holding the same bytes
    are still different history entries.

    Attributes:
        data: Encoded image bytes
        mime_type: Content type tag (e.g. 'image/png')
        name: Display name, also used when exporting
    """
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE
    name: str = "image.png"

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def open_image(self) -> 'Image.Image':
        """Decode the bytes with Pillow. The caller owns the returned image."""
        return Image.open(BytesIO(self.data))

    def __repr__(self) -> str:
        return f"ImageResource(name={self.name!r}, mime_type={self.mime_type!r}, size_bytes={self.size_bytes})"


@dataclass(frozen=True)
class CropSelection:
    """A completed crop selection, in display-space pixels.

    Attributes:
        x, y, width, height: Selection rectangle as drawn over the displayed image
        natural_width, natural_height: Source image size in pixels
        displayed_width, displayed_height: Size the image was displayed at
        pixel_ratio: Physical-to-logical pixel ratio of the display at selection time,
            or None if it was not captured
    """
    x: float
    y: float
    width: float
    height: float
    natural_width: int
    natural_height: int
    displayed_width: float
    displayed_height: float
    pixel_ratio: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def scale_x(self) -> float:
        return self.natural_width / self.displayed_width

    @property
    def scale_y(self) -> float:
        return self.natural_height / self.displayed_height


@dataclass(frozen=True)
class CropPlan:
    """Geometry of a crop, resolved to source pixels and the output raster."""
    source_box: SourceBox
    output_size: Tuple[int, int]
    pixel_ratio: float

    @property
    def source_rect(self) -> Tuple[float, float, float, float]:
        """The source box as (x, y, width, height)."""
        left, upper, right, lower = self.source_box
        return (left, upper, right - left, lower - upper)


def describe_resource(resource: Optional[ImageResource]) -> str:
    if resource is None:
        return "<none>"
    return f"{resource.name} ({resource.size_bytes} bytes)"
