"""
ImageEditingLib - Image resources and local image operations

This module provides the immutable image resource model, intake and export
helpers, and the crop compositor for the Ayra retouch core.
"""

from AY_Libs.ImageEditingLib.image_models import CropPlan, CropSelection, ImageResource
from AY_Libs.ImageEditingLib.image_editing_ops import (
    ResourceNamer,
    guess_mime_type,
    mime_type_for_format,
    resource_from_bytes,
    resource_from_file,
    data_url_to_resource,
    encode_image,
    save_resource,
)
from AY_Libs.ImageEditingLib.crop_compositor import (
    CropCompositor,
    plan_crop,
    render_crop,
    fit_selection_to_aspect,
    aspect_for_preset,
)

__all__ = [
    "CropPlan",
    "CropSelection",
    "ImageResource",
    "ResourceNamer",
    "guess_mime_type",
    "mime_type_for_format",
    "resource_from_bytes",
    "resource_from_file",
    "data_url_to_resource",
    "encode_image",
    "save_resource",
    "CropCompositor",
    "plan_crop",
    "render_crop",
    "fit_selection_to_aspect",
    "aspect_for_preset",
]
