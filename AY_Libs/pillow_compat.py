"""
Single import point for Pillow (which provides the `PIL` namespace).

Modules in AY_Libs import `Image`, `ImageOps` and the resampling filter from
here so that the Pillow API differences (the `Image.Resampling` enum
introduced in Pillow 9.1) are resolved in one place.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageOps = import_module("PIL.ImageOps")

UnidentifiedImageError = _pil_image.UnidentifiedImageError
DecompressionBombError = _pil_image.DecompressionBombError

# Highest quality filter for downscale and upscale alike
_resampling = getattr(_pil_image, "Resampling", None)
LANCZOS = _resampling.LANCZOS if _resampling is not None else _pil_image.LANCZOS
