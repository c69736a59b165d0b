"""
Crop compositor for Ayra.

Maps a selection drawn over the displayed (scaled) image back onto the
source pixels and renders it into a new raster at full device resolution.

Geometry, for a selection (x, y, width, height) and pixel ratio r:

    sx = natural_width / displayed_width
    sy = natural_height / displayed_height
    source rect  = (x * sx, y * sy, width * sx, height * sy)
    output size  = (int(width * r), int(height * r))

The source rect is resampled (Lanczos) onto the whole output raster, which is
then encoded as PNG. The compositor never touches the edit history; the
caller appends the returned resource.

Classes:
    CropCompositor: Renders crops through scoped display handles

Functions:
    plan_crop: Resolve a selection into source and output geometry
    render_crop: Resample a decoded source image according to a plan
    fit_selection_to_aspect: Shrink a selection to an aspect ratio preset
"""

from dataclasses import replace
from typing import Any, Optional
import logging

from AY_Libs.constants import (
    CROP_ASPECTS,
    CROP_BOUNDS_TOLERANCE,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PIXEL_RATIO,
    PREFIX_CROPPED,
)
from AY_Libs.errors import InvalidCropGeometry, NoImageLoaded, NoSelection, RenderUnavailable
from AY_Libs.ImageEditingLib.image_models import CropPlan, CropSelection, ImageResource
from AY_Libs.ImageEditingLib.image_editing_ops import ResourceNamer, encode_image, mime_type_for_format
from AY_Libs.DisplayLib.handle_manager import ResourceLifetimeManager
from AY_Libs.pillow_compat import (
    DecompressionBombError,
    ImageOps,
    LANCZOS,
    UnidentifiedImageError,
)

logger = logging.getLogger(__name__)

NO_SELECTION_MESSAGE = "Please select an area to crop."
RENDER_FAILED_MESSAGE = "Could not process the crop."


def plan_crop(selection: Optional[CropSelection], pixel_ratio: Optional[float] = None) -> CropPlan:
    """
    Resolve a display-space selection into source and output geometry.

    Args:
        selection: The completed selection, or None if nothing was selected
        pixel_ratio: Device pixel ratio; defaults to the one captured with the
            selection, then to 1.0

    Returns:
        A CropPlan with the source box clamped to the image bounds

    Raises:
        NoSelection: If there is no selection or it has no area
        InvalidCropGeometry: If the selection cannot be mapped onto the source
        RenderUnavailable: If the output raster would have a side under one pixel
    """
    if selection is None or selection.is_empty:
        raise NoSelection(NO_SELECTION_MESSAGE)

    if selection.displayed_width <= 0 or selection.displayed_height <= 0:
        raise InvalidCropGeometry("The image has no displayed size to crop against.")

    if selection.natural_width <= 0 or selection.natural_height <= 0:
        raise InvalidCropGeometry("The image has no pixels to crop.")

    ratio = pixel_ratio if pixel_ratio is not None else selection.pixel_ratio
    if ratio is None:
        ratio = DEFAULT_PIXEL_RATIO
    if ratio < DEFAULT_PIXEL_RATIO:
        raise InvalidCropGeometry(f"Pixel ratio must be at least 1, got {ratio}.")

    tolerance = CROP_BOUNDS_TOLERANCE
    if (
        selection.x < -tolerance
        or selection.y < -tolerance
        or selection.x + selection.width > selection.displayed_width + tolerance
        or selection.y + selection.height > selection.displayed_height + tolerance
    ):
        raise InvalidCropGeometry("The crop selection lies outside the image.")

    sx = selection.scale_x
    sy = selection.scale_y
    left = min(max(selection.x * sx, 0.0), selection.natural_width)
    upper = min(max(selection.y * sy, 0.0), selection.natural_height)
    right = min(max((selection.x + selection.width) * sx, 0.0), selection.natural_width)
    lower = min(max((selection.y + selection.height) * sy, 0.0), selection.natural_height)

    if right <= left or lower <= upper:
        raise InvalidCropGeometry("The crop selection lies outside the image.")

    output_size = (int(selection.width * ratio), int(selection.height * ratio))
    if output_size[0] < 1 or output_size[1] < 1:
        raise RenderUnavailable(RENDER_FAILED_MESSAGE)

    return CropPlan(source_box=(left, upper, right, lower), output_size=output_size, pixel_ratio=ratio)


def render_crop(source: Any, plan: CropPlan) -> Any:
    """
    Resample the plan's source box of a decoded image onto the output raster.

    Args:
        source: A PIL Image (EXIF orientation is applied first, as displayed)
        plan: Geometry from plan_crop

    Returns:
        A new PIL Image of exactly plan.output_size
    """
    image = ImageOps.exif_transpose(source)
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    return image.resize(plan.output_size, resample=LANCZOS, box=plan.source_box)


def fit_selection_to_aspect(selection: CropSelection, aspect: Optional[float]) -> CropSelection:
    """
    Shrink a selection about its origin so width / height equals aspect.

    The result stays inside the displayed image. A None aspect ('Free')
    returns the selection unchanged.
    """
    if aspect is None or selection.is_empty:
        return selection
    if aspect <= 0:
        raise ValueError(f"aspect must be positive, got {aspect}")

    max_width = selection.displayed_width - selection.x
    max_height = selection.displayed_height - selection.y
    width = min(selection.width, max_width)
    height = width / aspect
    if height > max_height:
        height = max_height
        width = height * aspect
    return replace(selection, width=width, height=height)


def aspect_for_preset(name: str) -> Optional[float]:
    if name not in CROP_ASPECTS:
        available = ", ".join(CROP_ASPECTS)
        raise KeyError(f"Unknown aspect preset '{name}'. Available presets: {available}")
    return CROP_ASPECTS[name]


class CropCompositor:
    """
    Produces cropped ImageResources.

    Source pixels are read through a handle scoped to the crop, so the decoded
    source is released whether rendering succeeds or fails.
    """

    def __init__(
        self,
        manager: Optional[ResourceLifetimeManager] = None,
        namer: Optional[ResourceNamer] = None,
        save_format: str = DEFAULT_OUTPUT_FORMAT,
    ):
        self.manager = manager or ResourceLifetimeManager()
        self.namer = namer or ResourceNamer()
        self.save_format = save_format

    def crop(
        self,
        resource: Optional[ImageResource],
        selection: Optional[CropSelection],
        pixel_ratio: Optional[float] = None,
    ) -> ImageResource:
        """
        Crop a resource to a selection.

        Args:
            resource: The current image
            selection: The completed display-space selection
            pixel_ratio: Device pixel ratio override

        Returns:
            A new PNG ImageResource named 'cropped-<ms>.png'

        Raises:
            NoImageLoaded: If resource is None
            NoSelection: If the selection is missing, empty or unmappable
            RenderUnavailable: If the source cannot be decoded or the raster allocated
        """
        if resource is None:
            raise NoImageLoaded("No image loaded to crop.")

        plan = plan_crop(selection, pixel_ratio)

        try:
            with self.manager.scoped(resource) as handle:
                output = render_crop(handle.surface.image, plan)
            data = encode_image(output, self.save_format)
        except (RenderUnavailable, UnidentifiedImageError, DecompressionBombError,
                MemoryError, OSError, ValueError) as e:
            logger.warning(f"Crop of {resource.name} failed: {e}")
            raise RenderUnavailable(RENDER_FAILED_MESSAGE) from e

        cropped = ImageResource(
            data=data,
            mime_type=mime_type_for_format(self.save_format),
            name=self.namer.next_name(PREFIX_CROPPED),
        )
        logger.info(
            f"Cropped {resource.name} box={plan.source_box} -> {cropped.name} "
            f"{plan.output_size[0]}x{plan.output_size[1]}"
        )
        return cropped
