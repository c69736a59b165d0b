"""
PyQt5 rendering surfaces for display handles.

A Qt front end builds its ResourceLifetimeManager with `create_qt_manager` so
each handle carries a lazily decoded QImage ready to be turned into a QPixmap,
and reads the device pixel ratio for the crop compositor from the primary
screen.
"""

from typing import Optional

from PyQt5.QtGui import QGuiApplication, QImage

from AY_Libs.constants import DEFAULT_PIXEL_RATIO
from AY_Libs.errors import RenderUnavailable
from AY_Libs.ImageEditingLib.image_models import ImageResource
from AY_Libs.DisplayLib.handle_manager import LazySurface, ResourceLifetimeManager


def decode_qimage(resource: ImageResource) -> QImage:
    image = QImage.fromData(resource.data)
    if image.isNull():
        raise RenderUnavailable(f"Could not decode {resource.name} for display.")
    return image


def qimage_surface(resource: ImageResource) -> LazySurface:
    # QImage has no close(); dropping the last reference frees it.
    return LazySurface(resource, decode_qimage)


def create_qt_manager() -> ResourceLifetimeManager:
    return ResourceLifetimeManager(factory=qimage_surface)


def device_pixel_ratio(app: Optional[QGuiApplication] = None) -> float:
    """
    Physical-to-logical pixel ratio of the primary screen.

    Falls back to 1.0 when no Qt application or screen is available.
    """
    app = app or QGuiApplication.instance()
    if app is None:
        return DEFAULT_PIXEL_RATIO
    screen = app.primaryScreen()
    if screen is None:
        return DEFAULT_PIXEL_RATIO
    return max(DEFAULT_PIXEL_RATIO, float(screen.devicePixelRatio()))
